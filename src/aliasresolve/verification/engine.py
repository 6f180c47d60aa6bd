"""Verification engine: runs the requested proof channels and scores them."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx

from aliasresolve.core.models import ChannelCheck, VerificationResult
from aliasresolve.core.types import VerificationMethod
from aliasresolve.resolution.dns.doh import DohClient
from aliasresolve.resolution.http import HttpFetcher
from aliasresolve.verification.dns import DnsProofChecker
from aliasresolve.verification.https import HttpsProofChecker
from aliasresolve.verification.scoring import calculate_trust_score

if TYPE_CHECKING:
    from aliasresolve.config import AliasResolveSettings

logger = logging.getLogger(__name__)

VERIFIER_USER_AGENT = "aliasresolve-verifier/0.1"


def normalize_domain(domain: str) -> str:
    """Bare lowercase host from user input (drops scheme and trailing slash)."""
    domain = domain.strip().lower()
    for prefix in ("https://", "http://"):
        domain = domain.removeprefix(prefix)
    return domain.split("/", 1)[0]


class VerificationEngine:
    """
    Cross-checks a claimed ``{chain: address}`` binding for a domain.

    DNS and HTTPS channels are independent: an I/O failure in one is
    reported as an error on that channel and the other still runs.
    """

    def __init__(self, dns_checker: DnsProofChecker, https_checker: HttpsProofChecker) -> None:
        self._dns = dns_checker
        self._https = https_checker

    @classmethod
    def from_settings(
        cls,
        settings: "AliasResolveSettings",
        client: httpx.AsyncClient | None = None,
    ) -> "VerificationEngine":
        doh_fetcher = HttpFetcher("verification_dns", timeout=settings.http_timeout, client=client)
        https_fetcher = HttpFetcher(
            "verification_https",
            timeout=settings.http_timeout,
            headers={"User-Agent": VERIFIER_USER_AGENT},
            client=client,
        )
        return cls(
            DnsProofChecker(DohClient(doh_fetcher, settings.verification_doh_url)),
            HttpsProofChecker(https_fetcher),
        )

    async def verify(
        self,
        domain: str,
        method: VerificationMethod | str,
        expected: dict[str, str],
    ) -> VerificationResult:
        method = VerificationMethod(method)
        domain = normalize_domain(domain)

        if not expected:
            return VerificationResult(
                method=method,
                trust_score=calculate_trust_score(False, False, False),
                errors=["No expected addresses supplied for verification"],
            )

        run_dns = method in (VerificationMethod.DNS, VerificationMethod.BOTH)
        run_https = method in (VerificationMethod.HTTPS, VerificationMethod.BOTH)

        dns_task = self._dns.check(domain, expected) if run_dns else _skipped()
        https_task = self._https.check(domain, expected) if run_https else _skipped()
        dns, https = await asyncio.gather(dns_task, https_task)

        errors = [*dns.errors, *https.errors]
        warnings = [*dns.warnings, *https.warnings]
        if dns.verified and not dns.dnssec:
            warnings.append(f"DNSSEC is not enabled for {domain}")

        if method == VerificationMethod.DNS:
            success = dns.verified
        elif method == VerificationMethod.HTTPS:
            success = https.verified
        else:
            success = dns.verified or https.verified

        result = VerificationResult(
            success=success,
            method=method,
            dns_verified=dns.verified,
            https_verified=https.verified,
            dnssec_enabled=dns.dnssec,
            trust_score=calculate_trust_score(dns.verified, https.verified, dns.dnssec),
            errors=errors,
            warnings=warnings,
        )
        logger.info(
            f"Verified {domain} via {method}: dns={result.dns_verified} "
            f"https={result.https_verified} dnssec={result.dnssec_enabled} "
            f"score={result.trust_score}"
        )
        return result


async def _skipped() -> ChannelCheck:
    return ChannelCheck()
