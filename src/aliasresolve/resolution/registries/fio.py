"""FIO Protocol resolver for ``handle@domain`` addresses."""

from __future__ import annotations

import logging
import re
from typing import ClassVar

from aliasresolve.core.addresses import chain_matches, normalize_chain
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)

FIO_ADDRESS = re.compile(r"^[a-z0-9._-]+@[a-z0-9]+$", re.IGNORECASE)


class FioResolver:
    """
    Looks up public addresses mapped to a FIO handle.

    FIO domains carry no dot (``alice@edge``), which keeps them apart from
    email-style identity aliases.
    """

    name: ClassVar[str] = "FIO Protocol"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.FIO
    CONFIDENCE: ClassVar[float] = 0.85

    def __init__(self, fetcher: HttpFetcher, api_url: str) -> None:
        self._fetcher = fetcher
        self.api_url = api_url.rstrip("/")

    def can_resolve(self, alias: str) -> bool:
        return bool(FIO_ADDRESS.match(alias.strip()))

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        fio_address = alias.strip().lower()
        try:
            data = await self._fetcher.post_json(
                f"{self.api_url}/v1/chain/get_pub_addresses",
                {"fio_address": fio_address, "limit": 100, "offset": 0},
            )
        except Exception as e:
            logger.warning(f"FIO lookup for {fio_address} failed: {e}")
            return []
        if not data:
            return []

        results = []
        for entry in data.get("public_addresses") or []:
            address = entry.get("public_address")
            chain_code = entry.get("chain_code") or ""
            currency = normalize_chain(chain_code)
            if not address or not chain_code or not chain_matches(chain, currency):
                continue
            results.append(
                ResolvedCandidate(
                    source_type=self.SOURCE_TYPE,
                    currency=currency,
                    address=address,
                    raw_data={
                        "fio_address": fio_address,
                        "chain_code": chain_code,
                        "token_code": entry.get("token_code"),
                    },
                    confidence=self.CONFIDENCE,
                )
            )
        return results
