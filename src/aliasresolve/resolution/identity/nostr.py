"""Nostr NIP-05 identifier resolver."""

from __future__ import annotations

import logging
from typing import ClassVar

from aliasresolve.core.addresses import USER_AT_DOMAIN_PATTERN, chain_matches
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)


class NostrResolver:
    """
    Resolves ``user@domain`` through ``/.well-known/nostr.json``.

    Emits the user's public key and, when the document advertises one, a
    Lightning address (``lud16``/``lud06``).
    """

    name: ClassVar[str] = "Nostr NIP-05"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.NOSTR_NIP05
    PUBKEY_CONFIDENCE: ClassVar[float] = 0.80
    LIGHTNING_CONFIDENCE: ClassVar[float] = 0.78

    def __init__(self, fetcher: HttpFetcher) -> None:
        self._fetcher = fetcher

    def can_resolve(self, alias: str) -> bool:
        return bool(USER_AT_DOMAIN_PATTERN.match(alias.strip()))

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        username, _, domain = alias.strip().partition("@")
        domain = domain.lower()
        try:
            data = await self._fetcher.get_json(
                f"https://{domain}/.well-known/nostr.json",
                params={"name": username},
            )
        except Exception as e:
            logger.warning(f"NIP-05 lookup for {alias} failed: {e}")
            return []

        names = (data or {}).get("names") or {}
        pubkey = names.get(username)
        if not pubkey:
            return []

        results = []
        if chain_matches(chain, "nostr"):
            relays = (data.get("relays") or {}).get(pubkey, [])
            results.append(
                ResolvedCandidate(
                    source_type=self.SOURCE_TYPE,
                    currency="nostr",
                    address=pubkey,
                    raw_data={
                        "identifier": alias,
                        "domain": domain,
                        "username": username,
                        "relays": relays,
                    },
                    confidence=self.PUBKEY_CONFIDENCE,
                )
            )

        ln_address = data.get("lud16") or data.get("lud06")
        if ln_address and (chain_matches(chain, "lightning") or chain_matches(chain, "bitcoin")):
            results.append(
                ResolvedCandidate(
                    source_type=self.SOURCE_TYPE,
                    currency="lightning",
                    address=ln_address,
                    raw_data={"identifier": alias, "nostr_pubkey": pubkey},
                    confidence=self.LIGHTNING_CONFIDENCE,
                )
            )
        return results
