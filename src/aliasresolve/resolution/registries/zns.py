"""Zilliqa Name Service resolver (``.zil``) over Zilliqa JSON-RPC."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from aliasresolve.core.addresses import chain_matches, normalize_chain
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)

ZNS_REGISTRY = "0x9611c53BE6d1b32058b2747bdeCECed7e1216793"


class ZnsResolver:
    """
    Resolves ``.zil`` names in two RPC calls.

    The registry's ``records`` map gives the resolver contract for a label;
    that contract's state holds the owner address and per-currency records.
    """

    name: ClassVar[str] = "Zilliqa Name Service (ZNS)"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.ZNS
    CONFIDENCE: ClassVar[float] = 0.90

    def __init__(self, fetcher: HttpFetcher, api_url: str) -> None:
        self._fetcher = fetcher
        self.api_url = api_url

    def can_resolve(self, alias: str) -> bool:
        return alias.strip().lower().endswith(".zil")

    async def _rpc(self, method: str, params: list[Any]) -> Any:
        data = await self._fetcher.post_json(
            self.api_url,
            {"id": "1", "jsonrpc": "2.0", "method": method, "params": params},
        )
        if not data:
            return None
        return data.get("result")

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        domain = alias.strip().lower()
        label = domain.removesuffix(".zil")
        try:
            registry = await self._rpc("GetSmartContractSubState", [ZNS_REGISTRY, "records", [label]])
            records = (registry or {}).get("records") or {}
            arguments = (records.get(label) or {}).get("arguments") or []
            resolver_address = arguments[1] if len(arguments) > 1 else None
            if not resolver_address:
                logger.debug(f"No ZNS resolver for {domain}")
                return []
            state = await self._rpc("GetSmartContractState", [resolver_address]) or {}
        except Exception as e:
            logger.warning(f"ZNS lookup for {domain} failed: {e}")
            return []

        results = []
        if state.get("address") and chain_matches(chain, "zilliqa"):
            results.append(
                ResolvedCandidate(
                    source_type=self.SOURCE_TYPE,
                    currency="zilliqa",
                    address=state["address"],
                    raw_data={"domain": domain, "resolver": resolver_address},
                    confidence=self.CONFIDENCE,
                )
            )

        for currency, address in (state.get("crypto") or {}).items():
            currency = normalize_chain(currency)
            if isinstance(address, str) and address and chain_matches(chain, currency):
                results.append(
                    ResolvedCandidate(
                        source_type=self.SOURCE_TYPE,
                        currency=currency,
                        address=address,
                        raw_data={"domain": domain, "resolver": resolver_address},
                        confidence=self.CONFIDENCE,
                    )
                )
        return results
