"""Ownership verification and trust report endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from aliasresolve.api.dependencies import VerifyService
from aliasresolve.api.schemas import (
    TrustReportRequest,
    TrustReportResponse,
    VerifyRequest,
    VerifyResponse,
)
from aliasresolve.core.exceptions import NotFoundError, ValidationError

router = APIRouter(tags=["verify"])


@router.post(
    "/verify",
    response_model=VerifyResponse,
    operation_id="verifyAliasOwnership",
    summary="Verify alias ownership",
    description=(
        "Check that a domain publishes the expected addresses over DNS TXT, "
        "the .well-known HTTPS document, or both, and compute a trust score."
    ),
)
async def verify_ownership(request: VerifyRequest, service: VerifyService) -> VerifyResponse:
    result = await service.verify_ownership(
        request.alias_id,
        request.domain,
        request.verification_method,
        request.expected_addresses,
    )
    return VerifyResponse.from_result(result)


@router.post(
    "/trust-report",
    response_model=TrustReportResponse,
    operation_id="getTrustReport",
    summary="Trust report for a stored alias",
    responses={400: {"description": "Neither aliasId nor domain given"}, 404: {"description": "Alias not found"}},
)
async def trust_report(request: TrustReportRequest, service: VerifyService) -> TrustReportResponse:
    try:
        report = await service.trust_report(alias_id=request.alias_id, domain=request.domain)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message) from e
    return TrustReportResponse.from_report(report)
