"""DNS TXT resolver for ``bitcoin=``/``ethereum=`` style records and OpenAlias."""

from __future__ import annotations

import logging
import re
from typing import ClassVar

from aliasresolve.core.addresses import chain_matches, validate_address
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.dns.doh import DohClient
from aliasresolve.resolution.dns.openalias import openalias_entries

logger = logging.getLogger(__name__)

# (pattern, currency); more specific prefixes come first
TXT_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"crypto:btc=([a-zA-Z0-9]+)", re.IGNORECASE), "bitcoin"),
    (re.compile(r"crypto:eth=(0x[a-fA-F0-9]{40})", re.IGNORECASE), "ethereum"),
    (re.compile(r"bitcoin=([a-zA-Z0-9]+)", re.IGNORECASE), "bitcoin"),
    (re.compile(r"(?<![a-z:])btc=([a-zA-Z0-9]+)", re.IGNORECASE), "bitcoin"),
    (re.compile(r"ethereum=(0x[a-fA-F0-9]{40})", re.IGNORECASE), "ethereum"),
    (re.compile(r"(?<![a-z:])eth=(0x[a-fA-F0-9]{40})", re.IGNORECASE), "ethereum"),
)


class DnsTxtResolver:
    """
    Resolves domains through their DNS TXT records.

    Every extracted address is checked against the address validator for
    its chain before it is emitted.
    """

    name: ClassVar[str] = "DNS TXT"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.DNS_TXT
    CONFIDENCE: ClassVar[float] = 0.75

    def __init__(self, doh: DohClient) -> None:
        self._doh = doh

    def can_resolve(self, alias: str) -> bool:
        alias = alias.strip().lower()
        return "." in alias and not alias.endswith(".eth")

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        domain = alias.strip().lower()
        try:
            lookup = await self._doh.query_txt(domain)
        except Exception as e:
            logger.warning(f"DNS TXT lookup for {domain} failed: {e}")
            return []

        if lookup is None or not lookup.records:
            logger.debug(f"No TXT records for {domain}")
            return []

        results: list[ResolvedCandidate] = []
        seen: set[tuple[str, str]] = set()

        def emit(currency: str, address: str, matched: str, record: str) -> None:
            if not chain_matches(chain, currency):
                return
            if not validate_address(address, currency):
                logger.debug(f"Ignoring invalid {currency} address {address} in TXT for {domain}")
                return
            if (currency, address) in seen:
                return
            seen.add((currency, address))
            results.append(
                ResolvedCandidate(
                    source_type=self.SOURCE_TYPE,
                    currency=currency,
                    address=address,
                    raw_data={
                        "dns_records": lookup.records,
                        "matched_pattern": matched,
                        "full_record": record,
                        "dnssec": lookup.authenticated,
                    },
                    confidence=self.CONFIDENCE,
                )
            )

        for record in lookup.records:
            for pattern, currency in TXT_PATTERNS:
                if match := pattern.search(record):
                    emit(currency, match.group(1), pattern.pattern, record)

        for entry in openalias_entries(lookup.records):
            emit(entry.chain, entry.address, f"oa1:{entry.ticker}", f"oa1:{entry.ticker}")

        logger.debug(f"DNS TXT found {len(results)} addresses for {domain}")
        return results
