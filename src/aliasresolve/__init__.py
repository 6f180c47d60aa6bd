"""AliasResolve - resolve human-readable aliases to payment addresses and score their trust."""

from aliasresolve.client import AliasResolveClient, resolve_alias, verify_domain
from aliasresolve.core.models import (
    ResolutionOutcome,
    ResolvedCandidate,
    TrustReport,
    VerificationResult,
)
from aliasresolve.core.types import ALL_CHAINS, SourceType, TrustStatus, VerificationMethod

__version__ = "0.1.0"

__all__ = [
    # Client
    "AliasResolveClient",
    "resolve_alias",
    "verify_domain",
    # Types
    "ALL_CHAINS",
    "SourceType",
    "TrustStatus",
    "VerificationMethod",
    # Models
    "ResolutionOutcome",
    "ResolvedCandidate",
    "TrustReport",
    "VerificationResult",
    # Version
    "__version__",
]
