"""Trust score formula.

The weights are a published contract surfaced to users as a score
breakdown; changing them breaks compatibility with stored scores.
"""

from __future__ import annotations

from aliasresolve.core.models import ScoreBreakdown
from aliasresolve.core.types import TrustStatus

BASE_SCORE = 50
DNS_BONUS = 20
DNSSEC_BONUS = 10
HTTPS_BONUS = 15
MULTI_LAYER_BONUS = 5

MIN_SCORE = 0
MAX_SCORE = 100


def score_breakdown(dns_verified: bool, https_verified: bool, dnssec_enabled: bool) -> ScoreBreakdown:
    """Per-proof contributions and their clamped total."""
    breakdown = ScoreBreakdown(
        base_score=BASE_SCORE,
        dns_bonus=DNS_BONUS if dns_verified else 0,
        dnssec_bonus=DNSSEC_BONUS if dnssec_enabled else 0,
        https_bonus=HTTPS_BONUS if https_verified else 0,
        multi_layer_bonus=MULTI_LAYER_BONUS if dns_verified and https_verified else 0,
    )
    raw = (
        breakdown.base_score
        + breakdown.dns_bonus
        + breakdown.dnssec_bonus
        + breakdown.https_bonus
        + breakdown.multi_layer_bonus
    )
    breakdown.total = max(MIN_SCORE, min(MAX_SCORE, raw))
    return breakdown


def calculate_trust_score(dns_verified: bool, https_verified: bool, dnssec_enabled: bool) -> int:
    """``50 + 20*dns + 10*dnssec + 15*https + 5*(dns and https)`` clamped to [0, 100]."""
    return score_breakdown(dns_verified, https_verified, dnssec_enabled).total


def trust_status(score: int) -> TrustStatus:
    if score >= 80:
        return TrustStatus.EXCELLENT
    if score >= 60:
        return TrustStatus.GOOD
    if score >= 40:
        return TrustStatus.FAIR
    return TrustStatus.POOR
