"""Response schemas for API endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field

from aliasresolve.api.schemas.base import APIBaseSchema
from aliasresolve.core.models import RevalidationSummary, TrustReport, VerificationResult
from aliasresolve.core.types import TrustStatus, VerificationMethod


class ResolverInfo(APIBaseSchema):
    name: str
    source_type: str
    handles: list[str] = Field(default_factory=list)


class ResolversResponse(APIBaseSchema):
    resolvers: list[ResolverInfo]


class VerifyResponse(APIBaseSchema):
    """Result of one verification pass."""

    success: bool
    method: VerificationMethod
    dns_verified: bool
    https_verified: bool
    dnssec_enabled: bool
    trust_score: int
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    verified_at: datetime

    @classmethod
    def from_result(cls, result: VerificationResult) -> "VerifyResponse":
        return cls.model_validate(result.model_dump())


class ProofsResponse(APIBaseSchema):
    dns_verified: bool
    https_verified: bool
    dnssec_enabled: bool


class BreakdownResponse(APIBaseSchema):
    base_score: int
    dns_bonus: int
    dnssec_bonus: int
    https_bonus: int
    multi_layer_bonus: int


class TrustReportResponse(APIBaseSchema):
    """Trust state of a stored alias."""

    alias: str
    trust_score: int
    verification_method: VerificationMethod | None = None
    last_verified: datetime | None = None
    proofs: ProofsResponse
    breakdown: BreakdownResponse
    status: TrustStatus
    recommendations: list[str] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: TrustReport) -> "TrustReportResponse":
        return cls(
            alias=report.alias,
            trust_score=report.trust_score,
            verification_method=report.verification_method,
            last_verified=report.last_verification_at,
            proofs=ProofsResponse.model_validate(report.proofs.model_dump()),
            breakdown=BreakdownResponse.model_validate(report.breakdown.model_dump()),
            status=report.status,
            recommendations=report.recommendations,
        )


class RevalidationCounts(APIBaseSchema):
    processed: int
    successful: int
    failed: int
    alerts_sent: int
    alert_failures: int


class RevalidationResponse(APIBaseSchema):
    success: bool = True
    results: RevalidationCounts

    @classmethod
    def from_summary(cls, summary: RevalidationSummary) -> "RevalidationResponse":
        return cls(results=RevalidationCounts.model_validate(summary.model_dump()))


class WebhookRegistrationResponse(APIBaseSchema):
    success: bool = True
    webhook_id: UUID
    alias: str
    callback_url: str
    secret_token: str
    message: str = "Webhook registered. Store the secret token to verify webhook signatures."


class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    services: dict[str, Literal["up", "down", "unknown"]]
