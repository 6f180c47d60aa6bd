"""Generic ``.well-known`` JSON document resolver."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from aliasresolve.core.addresses import chain_matches, normalize_chain
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)

COMMON_TLDS = (".com", ".org", ".net", ".io", ".dev", ".app", ".xyz")
ENDPOINTS = (
    "/.well-known/crypto.json",
    "/.well-known/payment.json",
    "/.well-known/wallet.json",
)


class WellKnownResolver:
    """
    Tries each well-known document in turn and stops at the first that
    yields addresses. Documents may use an ``addresses`` map or top-level
    ``bitcoin``/``ethereum`` fields.
    """

    name: ClassVar[str] = "DNS + .well-known"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.WELL_KNOWN
    CONFIDENCE: ClassVar[float] = 0.82

    def __init__(self, fetcher: HttpFetcher) -> None:
        self._fetcher = fetcher

    def can_resolve(self, alias: str) -> bool:
        alias = alias.strip().lower()
        return "@" not in alias and alias.endswith(COMMON_TLDS)

    def _extract(self, domain: str, endpoint: str, data: dict[str, Any], chain: str) -> list[ResolvedCandidate]:
        pairs: list[tuple[str, Any]] = []
        addresses = data.get("addresses")
        if isinstance(addresses, dict):
            pairs.extend(addresses.items())
        pairs.extend((currency, data.get(currency)) for currency in ("bitcoin", "ethereum"))

        results = []
        for currency, address in pairs:
            if not isinstance(address, str) or not address:
                continue
            currency = normalize_chain(currency)
            if not chain_matches(chain, currency):
                continue
            results.append(
                ResolvedCandidate(
                    source_type=self.SOURCE_TYPE,
                    currency=currency,
                    address=address,
                    raw_data={"domain": domain, "endpoint": endpoint},
                    confidence=self.CONFIDENCE,
                )
            )
        return results

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        domain = alias.strip().lower()
        for endpoint in ENDPOINTS:
            try:
                data = await self._fetcher.get_json(f"https://{domain}{endpoint}")
            except Exception as e:
                logger.debug(f"{endpoint} on {domain} unavailable: {e}")
                continue
            if not isinstance(data, dict):
                continue
            results = self._extract(domain, endpoint, data, chain)
            if results:
                return results
        return []
