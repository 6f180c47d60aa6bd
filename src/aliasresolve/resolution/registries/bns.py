"""Bitcoin Name System (Stacks) resolver."""

from __future__ import annotations

import logging
import re
from typing import ClassVar
from urllib.parse import quote

from aliasresolve.core.addresses import chain_matches
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)

ZONEFILE_BITCOIN = re.compile(r"bitcoin[=:]([a-zA-Z0-9]+)", re.IGNORECASE)
ZONEFILE_ETHEREUM = re.compile(r"ethereum[=:](0x[a-fA-F0-9]{40})", re.IGNORECASE)


class BnsResolver:
    """
    Resolves ``name.namespace`` BNS names through the Stacks API.

    The owner's STX address is always reported; Bitcoin and Ethereum
    addresses are read from the name's zonefile when present.
    """

    name: ClassVar[str] = "Bitcoin Name System (BNS)"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.BNS
    OWNER_CONFIDENCE: ClassVar[float] = 0.88
    ZONEFILE_CONFIDENCE: ClassVar[float] = 0.85

    def __init__(self, fetcher: HttpFetcher, stacks_api_url: str) -> None:
        self._fetcher = fetcher
        self.stacks_api_url = stacks_api_url.rstrip("/")

    def can_resolve(self, alias: str) -> bool:
        alias = alias.strip().lower()
        return "." in alias and not alias.endswith((".eth", ".crypto"))

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        name = alias.strip().lower()
        try:
            data = await self._fetcher.get_json(f"{self.stacks_api_url}/v1/names/{quote(name)}")
        except Exception as e:
            logger.warning(f"BNS lookup for {name} failed: {e}")
            return []
        if not data:
            return []

        results = []
        zonefile = data.get("zonefile") or ""

        # The STX owner is also reported for bitcoin requests
        if data.get("address") and (chain_matches(chain, "stacks") or chain_matches(chain, "bitcoin")):
            results.append(
                ResolvedCandidate(
                    source_type=self.SOURCE_TYPE,
                    currency="stacks",
                    address=data["address"],
                    raw_data={
                        "name": name,
                        "namespace": data.get("namespace"),
                        "zonefile": zonefile,
                        "status": data.get("status"),
                    },
                    confidence=self.OWNER_CONFIDENCE,
                )
            )

        for pattern, currency in ((ZONEFILE_BITCOIN, "bitcoin"), (ZONEFILE_ETHEREUM, "ethereum")):
            match = pattern.search(zonefile)
            if match and chain_matches(chain, currency):
                results.append(
                    ResolvedCandidate(
                        source_type=self.SOURCE_TYPE,
                        currency=currency,
                        address=match.group(1),
                        raw_data={"name": name, "zonefile": zonefile},
                        confidence=self.ZONEFILE_CONFIDENCE,
                    )
                )
        return results
