"""HTTPS proof: a ``.well-known`` document served from the domain."""

from __future__ import annotations

import json
import logging

from aliasresolve.core.addresses import normalize_chain
from aliasresolve.core.models import ChannelCheck
from aliasresolve.resolution.dns.openalias import parse_openalias
from aliasresolve.resolution.http import HttpFetcher
from aliasresolve.verification.matching import match_expected

logger = logging.getLogger(__name__)

ALIAS_JSON_PATH = "/.well-known/alias.json"
OPENALIAS_TXT_PATH = "/.well-known/openalias.txt"


class HttpsProofChecker:
    """
    Checks ``https://<domain>/.well-known/alias.json``.

    ``alias.json`` (an ``addresses`` map) is the canonical format. When it
    is absent the checker falls back to ``openalias.txt``, one
    ``oa1:<ticker> recipient_address=<addr>;`` entry per line.
    """

    def __init__(self, fetcher: HttpFetcher) -> None:
        self._fetcher = fetcher

    async def check(self, domain: str, expected: dict[str, str]) -> ChannelCheck:
        try:
            response = await self._fetcher.request("GET", f"https://{domain}{ALIAS_JSON_PATH}")
            if response.status_code == 404:
                return await self._check_openalias_txt(domain, expected)
        except Exception as e:
            logger.warning(f"HTTPS verification for {domain} failed: {e}")
            return ChannelCheck(errors=[f"HTTPS verification error: {e}"])

        if not response.is_success:
            return ChannelCheck(errors=[f"HTTPS verification failed: HTTP {response.status_code}"])

        warnings = []
        if "application/json" not in response.headers.get("content-type", ""):
            warnings.append("alias.json should be served with Content-Type: application/json")

        try:
            data = response.json()
        except json.JSONDecodeError:
            return ChannelCheck(errors=["Invalid alias.json format: body is not valid JSON"], warnings=warnings)

        addresses = data.get("addresses") if isinstance(data, dict) else None
        if not isinstance(addresses, dict):
            return ChannelCheck(
                errors=['Invalid alias.json format: missing or invalid "addresses" field'],
                warnings=warnings,
            )

        published: dict[str, list[str]] = {}
        for chain, address in addresses.items():
            if isinstance(address, str) and address:
                published.setdefault(normalize_chain(chain), []).append(address)

        match = match_expected(expected, published, "No address found for {chain} in alias.json")
        return ChannelCheck(
            verified=match.verified,
            found_addresses=match.found,
            errors=match.errors,
            warnings=warnings + match.warnings,
        )

    async def _check_openalias_txt(self, domain: str, expected: dict[str, str]) -> ChannelCheck:
        response = await self._fetcher.request("GET", f"https://{domain}{OPENALIAS_TXT_PATH}")
        if not response.is_success:
            return ChannelCheck(errors=["alias.json not found at .well-known/alias.json"])

        published: dict[str, list[str]] = {}
        for line in response.text.splitlines():
            entry = parse_openalias(line)
            if entry is not None and entry.address:
                published.setdefault(entry.chain, []).append(entry.address)

        match = match_expected(expected, published, "No address found for {chain} in openalias.txt")
        return ChannelCheck(
            verified=match.verified,
            found_addresses=match.found,
            errors=match.errors,
            warnings=["Serving openalias.txt; alias.json is the preferred format", *match.warnings],
        )
