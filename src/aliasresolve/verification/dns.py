"""DNS proof: OpenAlias TXT records plus the DNSSEC authenticated-data flag."""

from __future__ import annotations

import logging

from aliasresolve.core.models import ChannelCheck
from aliasresolve.resolution.dns.doh import DohClient
from aliasresolve.resolution.dns.openalias import openalias_entries
from aliasresolve.verification.matching import match_expected

logger = logging.getLogger(__name__)


class DnsProofChecker:
    """Checks that a domain's TXT records publish the expected addresses."""

    def __init__(self, doh: DohClient) -> None:
        self._doh = doh

    async def check(self, domain: str, expected: dict[str, str]) -> ChannelCheck:
        try:
            lookup = await self._doh.query_txt(domain)
        except Exception as e:
            logger.warning(f"DNS verification for {domain} failed: {e}")
            return ChannelCheck(errors=[f"DNS verification error: {e}"])

        if lookup is None:
            return ChannelCheck(errors=[f"DNS lookup failed for {domain}"])

        if not lookup.records:
            return ChannelCheck(
                dnssec=lookup.authenticated,
                errors=["No TXT records found for domain"],
            )

        published: dict[str, list[str]] = {}
        for entry in openalias_entries(lookup.records):
            published.setdefault(entry.chain, []).append(entry.address)

        match = match_expected(expected, published, "No OpenAlias TXT record found for {chain}")
        return ChannelCheck(
            verified=match.verified,
            dnssec=lookup.authenticated,
            found_addresses=match.found,
            errors=match.errors,
            warnings=match.warnings,
        )
