"""PayString (PayID) resolver."""

from __future__ import annotations

import logging
import re
from typing import ClassVar

from aliasresolve.core.addresses import chain_matches, normalize_chain
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)

# $domain/user (legacy PayID) and user$domain (PayString)
PAYID_PATH_FORM = re.compile(r"^\$([a-z0-9.-]+)/([a-z0-9._-]+)$", re.IGNORECASE)
PAYSTRING_FORM = re.compile(r"^([a-z0-9._-]+)\$([a-z0-9.-]+\.[a-z]{2,})$", re.IGNORECASE)

NETWORK_ACCEPT: dict[str, str] = {
    "bitcoin": "application/btc-mainnet+json",
    "ethereum": "application/eth-mainnet+json",
    "ripple": "application/xrpl-mainnet+json",
}


def parse_paystring(alias: str) -> tuple[str, str] | None:
    """Split a PayString into ``(user, domain)``."""
    alias = alias.strip()
    if match := PAYID_PATH_FORM.match(alias):
        return match.group(2), match.group(1).lower()
    if match := PAYSTRING_FORM.match(alias):
        return match.group(1), match.group(2).lower()
    return None


class PayStringResolver:
    """Fetches ``https://<domain>/<user>`` with a network-specific Accept header."""

    name: ClassVar[str] = "PayString/PayID"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.PAYSTRING
    CONFIDENCE: ClassVar[float] = 0.80

    def __init__(self, fetcher: HttpFetcher) -> None:
        self._fetcher = fetcher

    def can_resolve(self, alias: str) -> bool:
        return parse_paystring(alias) is not None

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        parsed = parse_paystring(alias)
        if parsed is None:
            return []
        user, domain = parsed
        accept = NETWORK_ACCEPT.get(normalize_chain(chain), "application/payid+json")
        try:
            data = await self._fetcher.get_json(
                f"https://{domain}/{user}",
                headers={"Accept": accept, "PayID-Version": "1.0"},
            )
        except Exception as e:
            logger.warning(f"PayString lookup for {alias} failed: {e}")
            return []
        if not data:
            return []

        results = []
        for entry in data.get("addresses") or []:
            environment = (entry.get("environment") or "MAINNET").upper()
            details = entry.get("addressDetails") or {}
            address = details.get("address")
            network = entry.get("paymentNetwork") or ""
            currency = normalize_chain(network)
            if environment != "MAINNET" or not address or not network:
                continue
            if not chain_matches(chain, currency):
                continue
            results.append(
                ResolvedCandidate(
                    source_type=self.SOURCE_TYPE,
                    currency=currency,
                    address=address,
                    raw_data={
                        "pay_id": data.get("payId") or alias,
                        "payment_network": network,
                        "tag": details.get("tag"),
                    },
                    confidence=self.CONFIDENCE,
                )
            )
        return results
