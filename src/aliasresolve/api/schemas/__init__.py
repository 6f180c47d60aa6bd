"""API schema definitions."""

from aliasresolve.api.schemas.base import APIBaseSchema, APIError, ErrorDetail
from aliasresolve.api.schemas.requests import (
    RegisterWebhookRequest,
    ResolveRequest,
    TrustReportRequest,
    VerifyRequest,
)
from aliasresolve.api.schemas.responses import (
    BreakdownResponse,
    HealthResponse,
    ProofsResponse,
    ResolverInfo,
    ResolversResponse,
    RevalidationResponse,
    TrustReportResponse,
    VerifyResponse,
    WebhookRegistrationResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    "APIError",
    "ErrorDetail",
    # Requests
    "RegisterWebhookRequest",
    "ResolveRequest",
    "TrustReportRequest",
    "VerifyRequest",
    # Responses
    "BreakdownResponse",
    "HealthResponse",
    "ProofsResponse",
    "ResolverInfo",
    "ResolversResponse",
    "RevalidationResponse",
    "TrustReportResponse",
    "VerifyResponse",
    "WebhookRegistrationResponse",
]
