"""Lightning Address (LNURL-pay) resolver."""

from __future__ import annotations

import json
import logging
from typing import Any, ClassVar
from urllib.parse import quote

from aliasresolve.core.addresses import LNURL_PATTERN, USER_AT_DOMAIN_PATTERN, chain_matches
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)


def _metadata_identifier(metadata: Any, default: str) -> str:
    """Pull ``text/identifier`` out of LNURL-pay metadata (a JSON-encoded list of pairs)."""
    if not isinstance(metadata, str):
        return default
    try:
        entries = json.loads(metadata)
    except json.JSONDecodeError:
        return default
    for entry in entries if isinstance(entries, list) else []:
        if isinstance(entry, list) and len(entry) >= 2 and entry[0] == "text/identifier":
            return entry[1]
    return default


class LightningAddressResolver:
    """
    Resolves Lightning addresses via ``/.well-known/lnurlp/<user>``.

    Bech32 ``lnurl...`` strings are recognised but not decoded, so they
    resolve to nothing.
    """

    name: ClassVar[str] = "Lightning Network"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.LIGHTNING_ADDRESS
    CONFIDENCE: ClassVar[float] = 0.80

    def __init__(self, fetcher: HttpFetcher) -> None:
        self._fetcher = fetcher

    def can_resolve(self, alias: str) -> bool:
        alias = alias.strip()
        return bool(USER_AT_DOMAIN_PATTERN.match(alias) or LNURL_PATTERN.match(alias))

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        if not (chain_matches(chain, "lightning") or chain_matches(chain, "bitcoin")):
            return []

        alias = alias.strip()
        if alias.lower().startswith("lnurl"):
            logger.debug("LNURL bech32 decoding is not supported")
            return []

        username, _, domain = alias.partition("@")
        if not username or not domain:
            return []

        try:
            data = await self._fetcher.get_json(
                f"https://{domain.lower()}/.well-known/lnurlp/{quote(username)}"
            )
        except Exception as e:
            logger.warning(f"LNURL-pay lookup for {alias} failed: {e}")
            return []

        if not data or not data.get("callback"):
            return []

        return [
            ResolvedCandidate(
                source_type=self.SOURCE_TYPE,
                currency="lightning",
                address=alias,
                raw_data={
                    "callback": data["callback"],
                    "min_sendable": data.get("minSendable"),
                    "max_sendable": data.get("maxSendable"),
                    "metadata": data.get("metadata"),
                    "identifier": _metadata_identifier(data.get("metadata"), alias),
                    "tag": data.get("tag"),
                },
                confidence=self.CONFIDENCE,
            )
        ]
