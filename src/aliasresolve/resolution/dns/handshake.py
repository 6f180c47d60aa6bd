"""Handshake (HNS) resolver via an HNS DNS gateway."""

from __future__ import annotations

import logging
import re
from typing import ClassVar

from aliasresolve.core.addresses import chain_matches, validate_address
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.dns.doh import DohClient

logger = logging.getLogger(__name__)

HNS_NAME = re.compile(r"^[a-z0-9-]+$")
BITCOIN_RECORD = re.compile(r"bitcoin[=:]([a-zA-Z0-9]+)", re.IGNORECASE)
ETHEREUM_RECORD = re.compile(r"ethereum[=:](0x[a-fA-F0-9]{40})", re.IGNORECASE)


class HandshakeResolver:
    """Resolves single-label Handshake names, or any name marked with a trailing ``/``."""

    name: ClassVar[str] = "Handshake (HNS)"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.HANDSHAKE
    CONFIDENCE: ClassVar[float] = 0.85

    def __init__(self, doh: DohClient) -> None:
        self._doh = doh

    def can_resolve(self, alias: str) -> bool:
        alias = alias.strip().lower()
        if alias.endswith("/") and len(alias) > 1:
            return True
        if "." in alias:
            return False
        return bool(HNS_NAME.match(alias))

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        domain = alias.strip().lower().rstrip("/")
        try:
            lookup = await self._doh.query_txt(domain)
        except Exception as e:
            logger.warning(f"Handshake lookup for {domain} failed: {e}")
            return []
        if lookup is None:
            return []

        results = []
        for record in lookup.records:
            for pattern, currency in ((BITCOIN_RECORD, "bitcoin"), (ETHEREUM_RECORD, "ethereum")):
                match = pattern.search(record)
                if not match or not chain_matches(chain, currency):
                    continue
                if not validate_address(match.group(1), currency):
                    logger.debug(f"Ignoring invalid {currency} address in HNS TXT for {domain}")
                    continue
                results.append(
                    ResolvedCandidate(
                        source_type=self.SOURCE_TYPE,
                        currency=currency,
                        address=match.group(1),
                        raw_data={
                            "domain": domain,
                            "txt_record": record,
                            "hns_gateway": self._doh.url,
                        },
                        confidence=self.CONFIDENCE,
                    )
                )
        return results
