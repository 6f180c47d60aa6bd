"""Unstoppable Domains resolver using the resolution API."""

from __future__ import annotations

import logging
from typing import ClassVar
from urllib.parse import quote

from aliasresolve.core.addresses import chain_matches
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)

UD_API_URL = "https://api.unstoppabledomains.com/resolve/domains"

UD_SUFFIXES = (
    ".crypto", ".nft", ".blockchain", ".dao", ".wallet",
    ".x", ".888", ".zil", ".bitcoin", ".coin", ".binanceus",
)

# Record key -> currency
RECORD_CURRENCIES: dict[str, str] = {
    "crypto.BTC.address": "bitcoin",
    "crypto.ETH.address": "ethereum",
    "crypto.USDT.version.ERC20.address": "ethereum",
    "crypto.USDC.version.ERC20.address": "ethereum",
    "crypto.ADA.address": "cardano",
    "crypto.SOL.address": "solana",
    "crypto.MATIC.address": "polygon",
    "crypto.MATIC.version.MATIC.address": "polygon",
    "crypto.AVAX.version.C.address": "avalanche",
    "crypto.DOT.address": "polkadot",
    "crypto.LTC.address": "litecoin",
    "crypto.DOGE.address": "dogecoin",
    "crypto.XRP.address": "ripple",
}


class UnstoppableDomainsResolver:
    """
    Unstoppable Domains resolver.

    API Documentation: https://docs.unstoppabledomains.com/resolution/
    """

    name: ClassVar[str] = "Unstoppable Domains"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.UNSTOPPABLE_DOMAINS
    CONFIDENCE: ClassVar[float] = 0.92

    def __init__(self, fetcher: HttpFetcher, api_key: str | None = None) -> None:
        self._fetcher = fetcher
        self.api_key = api_key

    def can_resolve(self, alias: str) -> bool:
        return alias.strip().lower().endswith(UD_SUFFIXES)

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        domain = alias.strip().lower()
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        try:
            data = await self._fetcher.get_json(f"{UD_API_URL}/{quote(domain)}", headers=headers)
        except Exception as e:
            logger.warning(f"Unstoppable Domains lookup for {domain} failed: {e}")
            return []

        if not data:
            return []

        records = data.get("records") or {}
        meta = data.get("meta") or {}
        results = []
        for record_key, currency in RECORD_CURRENCIES.items():
            address = records.get(record_key)
            if not isinstance(address, str) or not address.strip():
                continue
            if not chain_matches(chain, currency):
                continue
            results.append(
                ResolvedCandidate(
                    source_type=self.SOURCE_TYPE,
                    currency=currency,
                    address=address.strip(),
                    raw_data={
                        "domain": domain,
                        "record_key": record_key,
                        "blockchain": meta.get("blockchain"),
                        "owner": meta.get("owner"),
                    },
                    confidence=self.CONFIDENCE,
                )
            )

        if not results and records:
            logger.debug(f"{domain} has records but none for a supported currency")
        return results
