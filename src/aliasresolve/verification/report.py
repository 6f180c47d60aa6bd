"""Trust report: a read-only projection of an alias's stored proofs."""

from __future__ import annotations

from aliasresolve.core.models import AliasRecord, ProofStatus, TrustReport
from aliasresolve.verification.scoring import score_breakdown, trust_status


def recommendations_for(dns_verified: bool, https_verified: bool, dnssec_enabled: bool) -> list[str]:
    recommendations = []
    if not dns_verified:
        recommendations.append("Add OpenAlias TXT records to DNS")
    if dns_verified and not dnssec_enabled:
        recommendations.append("Enable DNSSEC for enhanced security")
    if not https_verified:
        recommendations.append("Host alias.json at .well-known/alias.json")
    if not (dns_verified and https_verified):
        recommendations.append("Implement both DNS and HTTPS verification for maximum trust")
    return recommendations


def build_trust_report(alias: AliasRecord) -> TrustReport:
    """Build the report from stored state without re-running any check."""
    return TrustReport(
        alias=alias.alias_string,
        trust_score=alias.trust_score,
        verification_method=alias.verification_method,
        proofs=ProofStatus(
            dns_verified=alias.dns_verified,
            https_verified=alias.https_verified,
            dnssec_enabled=alias.dnssec_enabled,
        ),
        breakdown=score_breakdown(alias.dns_verified, alias.https_verified, alias.dnssec_enabled),
        status=trust_status(alias.trust_score),
        recommendations=recommendations_for(
            alias.dns_verified, alias.https_verified, alias.dnssec_enabled
        ),
        last_verification_at=alias.last_verification_at,
    )
