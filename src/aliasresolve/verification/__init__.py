"""Ownership verification and trust scoring."""

from aliasresolve.verification.dns import DnsProofChecker
from aliasresolve.verification.engine import VerificationEngine, normalize_domain
from aliasresolve.verification.https import HttpsProofChecker
from aliasresolve.verification.report import build_trust_report
from aliasresolve.verification.scoring import (
    calculate_trust_score,
    score_breakdown,
    trust_status,
)

__all__ = [
    "DnsProofChecker",
    "HttpsProofChecker",
    "VerificationEngine",
    "build_trust_report",
    "calculate_trust_score",
    "normalize_domain",
    "score_breakdown",
    "trust_status",
]
