"""Cardano Name Service resolver for ``$handle`` and ``.ada`` names."""

from __future__ import annotations

import logging
from typing import ClassVar

from aliasresolve.core.addresses import chain_matches
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)

ADA_HANDLE_POLICY = "f0ff48bbb7bbe9d59a40f1ce90e9e9d0ff5002ec48f232b49ca0fb9a"


def handle_asset_name(handle: str) -> str:
    """ADA Handle asset names are the hex-encoded UTF-8 handle."""
    return handle.encode("utf-8").hex()


class CardanoNameServiceResolver:
    """Looks up the address currently holding an ADA Handle NFT via Koios."""

    name: ClassVar[str] = "Cardano Name Service (CNS)"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.CARDANO_NAME_SERVICE
    CONFIDENCE: ClassVar[float] = 0.88

    def __init__(self, fetcher: HttpFetcher, koios_url: str) -> None:
        self._fetcher = fetcher
        self.koios_url = koios_url.rstrip("/")

    def can_resolve(self, alias: str) -> bool:
        alias = alias.strip()
        return alias.startswith("$") or alias.lower().endswith(".ada")

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        if not chain_matches(chain, "cardano"):
            return []

        alias = alias.strip()
        handle = alias[1:] if alias.startswith("$") else alias[: -len(".ada")]
        asset_name = handle_asset_name(handle)
        try:
            data = await self._fetcher.get_json(
                f"{self.koios_url}/asset_address_list",
                params={"_asset_policy": ADA_HANDLE_POLICY, "_asset_name": asset_name},
            )
        except Exception as e:
            logger.warning(f"CNS lookup for {alias} failed: {e}")
            return []

        if not isinstance(data, list) or not data:
            return []
        address = data[0].get("payment_address")
        if not address:
            return []

        return [
            ResolvedCandidate(
                source_type=self.SOURCE_TYPE,
                currency="cardano",
                address=address,
                raw_data={
                    "handle": alias,
                    "policy_id": ADA_HANDLE_POLICY,
                    "asset_name": asset_name,
                },
                confidence=self.CONFIDENCE,
            )
        ]
