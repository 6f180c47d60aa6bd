"""Ethereum Name Service resolver backed by an HTTP resolution gateway."""

from __future__ import annotations

import logging
from typing import ClassVar
from urllib.parse import quote

from aliasresolve.core.addresses import chain_matches, validate_ethereum_address
from aliasresolve.core.exceptions import ResolverNotImplementedError
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)


class EnsResolver:
    """
    Resolves ``.eth`` names.

    On-chain ENS resolution needs namehash and contract calls, so lookups go
    through a gateway that performs them. Without a configured gateway this
    resolver raises ``ResolverNotImplementedError`` so callers see why a
    ``.eth`` name produced nothing.
    """

    name: ClassVar[str] = "ENS"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.ENS
    CONFIDENCE: ClassVar[float] = 0.95

    def __init__(
        self,
        fetcher: HttpFetcher,
        gateway_url: str | None,
        rpc_url: str | None = None,
    ) -> None:
        self._fetcher = fetcher
        self.gateway_url = gateway_url.rstrip("/") if gateway_url else None
        self.rpc_url = rpc_url

    def can_resolve(self, alias: str) -> bool:
        return alias.strip().lower().endswith(".eth")

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        if not chain_matches(chain, "ethereum"):
            return []

        name = alias.strip().lower()
        if self.gateway_url is None:
            raise ResolverNotImplementedError(
                f"no ENS gateway is configured to resolve {name}",
                source=self.SOURCE_TYPE.value,
            )

        try:
            data = await self._fetcher.get_json(f"{self.gateway_url}/{quote(name)}")
        except Exception as e:
            logger.warning(f"ENS lookup for {name} failed: {e}")
            return []

        if not data or not data.get("address"):
            logger.debug(f"No ENS address for {name}")
            return []

        address = data["address"]
        if not validate_ethereum_address(address):
            logger.warning(f"ENS gateway returned invalid address {address!r} for {name}")
            return []

        text_records = {
            key: data[key]
            for key in ("avatar", "displayName", "email", "url", "description")
            if data.get(key)
        }
        return [
            ResolvedCandidate(
                source_type=self.SOURCE_TYPE,
                currency="ethereum",
                address=address,
                raw_data={
                    "ens_name": name,
                    "text_records": text_records,
                    "gateway": self.gateway_url,
                    "rpc_url": self.rpc_url,
                },
                confidence=self.CONFIDENCE,
            )
        ]
