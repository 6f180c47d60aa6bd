"""Request schemas for API endpoints."""

from __future__ import annotations

from uuid import UUID

from pydantic import Field, HttpUrl

from aliasresolve.api.schemas.base import APIBaseSchema
from aliasresolve.core.types import ALL_CHAINS, VerificationMethod


class ResolveRequest(APIBaseSchema):
    """Resolve an alias, optionally for one chain."""

    alias: str = Field(..., min_length=1, max_length=500, description="Alias to resolve")
    chain: str = Field(default=ALL_CHAINS, max_length=50, description="Chain or ticker filter")


class VerifyRequest(APIBaseSchema):
    """Verify that a domain publishes the expected addresses."""

    alias_id: UUID | None = Field(default=None, description="Alias to update with the result")
    domain: str = Field(..., min_length=1, max_length=500)
    verification_method: VerificationMethod = VerificationMethod.DNS
    expected_addresses: dict[str, str] = Field(default_factory=dict)


class TrustReportRequest(APIBaseSchema):
    """Look up a stored alias by id or by alias string."""

    alias_id: UUID | None = None
    domain: str | None = Field(default=None, max_length=500)


class RegisterWebhookRequest(APIBaseSchema):
    """Register a callback for address changes on an alias."""

    alias: str = Field(..., min_length=1, max_length=500)
    callback_url: HttpUrl
    secret: str | None = Field(default=None, min_length=16, max_length=128)
