"""Domain models for resolution, verification and monitoring."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .types import ALL_CHAINS, SourceType, TrustStatus, VerificationMethod


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class ResolvedCandidate(BaseModel):
    """One plugin's proposed (currency, address) answer for an alias."""

    model_config = ConfigDict(frozen=True)

    source_type: SourceType = Field(..., description="Naming system that produced this answer")
    currency: str = Field(..., description="Canonical chain name")
    address: str = Field(..., description="Payment address")
    raw_data: dict[str, Any] = Field(default_factory=dict, description="Source-specific detail")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Source authority weight")


class ResolutionOutcome(BaseModel):
    """Result of resolving one alias for one chain filter."""

    alias: str
    chain: str = ALL_CHAINS
    resolved: list[ResolvedCandidate] = Field(default_factory=list)
    chosen: ResolvedCandidate | None = None
    sources_conflict: bool = False
    cached: bool = False
    error: str | None = None

    @model_validator(mode="after")
    def _chosen_requires_candidates(self) -> "ResolutionOutcome":
        if self.chosen is not None and not self.resolved:
            raise ValueError("chosen must be null when no candidates were resolved")
        if self.chosen is None and self.resolved:
            raise ValueError("chosen must be set when candidates were resolved")
        return self

    @property
    def success(self) -> bool:
        """Whether an address was chosen."""
        return self.chosen is not None


class ChannelCheck(BaseModel):
    """Outcome of one verification channel (DNS or HTTPS)."""

    verified: bool = False
    dnssec: bool = False
    found_addresses: dict[str, str] = Field(default_factory=dict)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class VerificationResult(BaseModel):
    """Transient output of one verification pass."""

    success: bool = False
    method: VerificationMethod = VerificationMethod.DNS
    dns_verified: bool = False
    https_verified: bool = False
    dnssec_enabled: bool = False
    trust_score: int = Field(default=50, ge=0, le=100)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    verified_at: datetime = Field(default_factory=utcnow)


class ScoreBreakdown(BaseModel):
    """Per-proof contribution to a trust score."""

    base_score: int = 50
    dns_bonus: int = 0
    dnssec_bonus: int = 0
    https_bonus: int = 0
    multi_layer_bonus: int = 0
    total: int = 50


class ProofStatus(BaseModel):
    """Which ownership proofs are currently recorded for an alias."""

    dns_verified: bool = False
    https_verified: bool = False
    dnssec_enabled: bool = False


class TrustReport(BaseModel):
    """Read-only projection of a stored alias's trust state."""

    alias: str
    trust_score: int = Field(..., ge=0, le=100)
    verification_method: VerificationMethod | None = None
    proofs: ProofStatus
    breakdown: ScoreBreakdown
    status: TrustStatus
    recommendations: list[str] = Field(default_factory=list)
    last_verification_at: datetime | None = None


class RevalidationSummary(BaseModel):
    """Counters for one revalidation batch."""

    processed: int = 0
    successful: int = 0
    failed: int = 0
    alerts_sent: int = 0
    alert_failures: int = 0


# Persisted state as seen by the core


class AliasRecord(BaseModel):
    """A registered alias and its latest verification state."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    alias_string: str
    current_address: str | None = None
    current_currency: str | None = None
    verification_method: VerificationMethod | None = None
    dns_verified: bool = False
    https_verified: bool = False
    dnssec_enabled: bool = False
    trust_score: int = Field(default=50, ge=0, le=100)
    last_verification_at: datetime | None = None
    owner_email: str | None = None

    @property
    def domain(self) -> str:
        """Domain part of the alias used for DNS and HTTPS proofs."""
        value = self.alias_string.strip().lower()
        if "@" in value:
            value = value.rsplit("@", 1)[1]
        return value.removeprefix("$")

    @property
    def expected_addresses(self) -> dict[str, str]:
        """The stored binding in the ``{chain: address}`` shape verification expects."""
        if not self.current_address:
            return {}
        return {(self.current_currency or "bitcoin").lower(): self.current_address}


class MonitoringRule(BaseModel):
    """Alerting rule attached to an alias."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    alias_id: UUID
    trust_threshold: int = Field(default=70, ge=0, le=100)
    alert_email: bool = True
    alert_webhook_url: str | None = None
    enabled: bool = True


class WebhookRegistration(BaseModel):
    """A callback registered for address-change notifications."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    alias_id: UUID
    callback_url: str
    secret_token: str
    active: bool = True
    last_triggered_at: datetime | None = None


class TrackingResult(BaseModel):
    """What changed when a resolution was recorded against an alias."""

    alias_id: UUID
    created: bool = False
    address_changed: bool = False
    old_address: str | None = None
    new_address: str | None = None
    currency: str | None = None
