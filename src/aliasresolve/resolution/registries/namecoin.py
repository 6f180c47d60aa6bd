"""Namecoin (``.bit``) resolver via a public explorer API."""

from __future__ import annotations

import json
import logging
from typing import ClassVar
from urllib.parse import quote

from aliasresolve.core.addresses import chain_matches
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)

VALUE_KEYS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("bitcoin", ("bitcoin", "btc")),
    ("ethereum", ("ethereum", "eth")),
)


class NamecoinResolver:
    """Reads the ``d/<label>`` name value and extracts bitcoin/ethereum addresses."""

    name: ClassVar[str] = "Namecoin (.bit)"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.NAMECOIN
    CONFIDENCE: ClassVar[float] = 0.85

    def __init__(self, fetcher: HttpFetcher, api_url: str) -> None:
        self._fetcher = fetcher
        self.api_url = api_url.rstrip("/")

    def can_resolve(self, alias: str) -> bool:
        return alias.strip().lower().endswith(".bit")

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        domain = alias.strip().lower()
        label = domain.removesuffix(".bit")
        try:
            data = await self._fetcher.get_json(f"{self.api_url}/name/{quote(f'd/{label}', safe='')}.json")
        except Exception as e:
            logger.warning(f"Namecoin lookup for {domain} failed: {e}")
            return []
        if not data or not data.get("value"):
            return []

        value = data["value"]
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError:
                logger.debug(f"Namecoin value for {domain} is not JSON")
                return []
        if not isinstance(value, dict):
            return []

        results = []
        for currency, keys in VALUE_KEYS:
            address = next((value[key] for key in keys if isinstance(value.get(key), str)), None)
            if address and chain_matches(chain, currency):
                results.append(
                    ResolvedCandidate(
                        source_type=self.SOURCE_TYPE,
                        currency=currency,
                        address=address,
                        raw_data={"domain": domain, "name_data": value},
                        confidence=self.CONFIDENCE,
                    )
                )
        return results
