"""WebFinger resolver for ``acct:`` and email-style identifiers."""

from __future__ import annotations

import logging
import re
from typing import Any, ClassVar

from aliasresolve.core.addresses import USER_AT_DOMAIN_PATTERN, chain_matches
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS, SourceType
from aliasresolve.resolution.http import HttpFetcher

logger = logging.getLogger(__name__)

ACCT_RESOURCE = re.compile(r"^acct:([^@]+)@(.+)$", re.IGNORECASE)
HREF_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"bitcoin:([a-zA-Z0-9]+)", re.IGNORECASE), "bitcoin"),
    (re.compile(r"ethereum:(0x[a-fA-F0-9]{40})", re.IGNORECASE), "ethereum"),
)


class WebFingerResolver:
    """Extracts payment links and address properties from a WebFinger JRD."""

    name: ClassVar[str] = "WebFinger/OpenID"
    SOURCE_TYPE: ClassVar[SourceType] = SourceType.WEBFINGER
    LINK_CONFIDENCE: ClassVar[float] = 0.80
    PROPERTY_CONFIDENCE: ClassVar[float] = 0.78

    def __init__(self, fetcher: HttpFetcher) -> None:
        self._fetcher = fetcher

    def can_resolve(self, alias: str) -> bool:
        alias = alias.strip()
        return alias.lower().startswith("acct:") or bool(USER_AT_DOMAIN_PATTERN.match(alias))

    @staticmethod
    def _resource(alias: str) -> tuple[str, str | None]:
        if alias.lower().startswith("acct:"):
            match = ACCT_RESOURCE.match(alias)
            return alias, match.group(2).lower() if match else None
        return f"acct:{alias}", alias.partition("@")[2].lower() or None

    def _candidate(self, currency: str, address: str, raw: dict[str, Any], confidence: float) -> ResolvedCandidate:
        return ResolvedCandidate(
            source_type=self.SOURCE_TYPE,
            currency=currency,
            address=address,
            raw_data=raw,
            confidence=confidence,
        )

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]:
        resource, domain = self._resource(alias.strip())
        if not domain:
            return []
        try:
            data = await self._fetcher.get_json(
                f"https://{domain}/.well-known/webfinger",
                params={"resource": resource},
            )
        except Exception as e:
            logger.warning(f"WebFinger lookup for {resource} failed: {e}")
            return []
        if not isinstance(data, dict):
            return []

        subject = data.get("subject")
        links = data.get("links")
        results = []
        for link in links if isinstance(links, list) else []:
            if not isinstance(link, dict):
                continue
            href = link.get("href")
            if link.get("rel") == "payment" and isinstance(href, str):
                for pattern, currency in HREF_PATTERNS:
                    match = pattern.search(href)
                    if match and chain_matches(chain, currency):
                        results.append(
                            self._candidate(
                                currency,
                                match.group(1),
                                {"subject": subject, "link": link},
                                self.LINK_CONFIDENCE,
                            )
                        )

            properties = link.get("properties")
            for key, value in (properties.items() if isinstance(properties, dict) else []):
                if not isinstance(value, str):
                    continue
                for currency in ("bitcoin", "ethereum"):
                    if currency in key.lower() and chain_matches(chain, currency):
                        results.append(
                            self._candidate(
                                currency,
                                value,
                                {"subject": subject, "property": key},
                                self.PROPERTY_CONFIDENCE,
                            )
                        )
        return results
