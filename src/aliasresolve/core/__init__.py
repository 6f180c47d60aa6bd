"""Core types, models, and utilities."""

from .addresses import (
    chain_matches,
    normalize_chain,
    validate_address,
    validate_bitcoin_address,
    validate_ethereum_address,
    validate_lightning_address,
)
from .exceptions import (
    AlertDeliveryError,
    AliasResolveError,
    CacheError,
    DatabaseError,
    NotFoundError,
    RateLimitError,
    ResolutionError,
    ResolverNotImplementedError,
    ResolverUnavailableError,
    ValidationError,
    VerificationError,
)
from .models import (
    AliasRecord,
    ChannelCheck,
    MonitoringRule,
    ProofStatus,
    ResolutionOutcome,
    ResolvedCandidate,
    RevalidationSummary,
    ScoreBreakdown,
    TrackingResult,
    TrustReport,
    VerificationResult,
    WebhookRegistration,
)
from .types import (
    ALL_CHAINS,
    AlertChannel,
    AlertType,
    SourceType,
    TrustStatus,
    VerificationMethod,
    WebhookEvent,
)

__all__ = [
    # Types
    "ALL_CHAINS",
    "AlertChannel",
    "AlertType",
    "SourceType",
    "TrustStatus",
    "VerificationMethod",
    "WebhookEvent",
    # Models
    "AliasRecord",
    "ChannelCheck",
    "MonitoringRule",
    "ProofStatus",
    "ResolutionOutcome",
    "ResolvedCandidate",
    "RevalidationSummary",
    "ScoreBreakdown",
    "TrackingResult",
    "TrustReport",
    "VerificationResult",
    "WebhookRegistration",
    # Addresses
    "chain_matches",
    "normalize_chain",
    "validate_address",
    "validate_bitcoin_address",
    "validate_ethereum_address",
    "validate_lightning_address",
    # Exceptions
    "AlertDeliveryError",
    "AliasResolveError",
    "CacheError",
    "DatabaseError",
    "NotFoundError",
    "RateLimitError",
    "ResolutionError",
    "ResolverNotImplementedError",
    "ResolverUnavailableError",
    "ValidationError",
    "VerificationError",
]
