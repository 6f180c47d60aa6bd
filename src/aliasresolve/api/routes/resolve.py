"""Resolution endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from aliasresolve.api.dependencies import ResolveService
from aliasresolve.api.schemas import ResolveRequest, ResolverInfo, ResolversResponse
from aliasresolve.core.models import ResolutionOutcome

router = APIRouter(prefix="/resolve", tags=["resolve"])


@router.post(
    "",
    response_model=ResolutionOutcome,
    operation_id="resolveAlias",
    summary="Resolve an alias",
    description=(
        "Resolve a human-readable alias to a payment address across every naming "
        "system that recognises its format. Unresolvable aliases return 200 with "
        "an error message and no chosen address."
    ),
)
async def resolve_alias(request: ResolveRequest, service: ResolveService) -> ResolutionOutcome:
    return await service.resolve(request.alias.strip(), request.chain)


@router.get(
    "/resolvers",
    response_model=ResolversResponse,
    operation_id="getResolvers",
    summary="List resolver plugins",
)
async def list_resolvers(service: ResolveService) -> ResolversResponse:
    """Every registered plugin and the sample aliases it accepts."""
    return ResolversResponse(
        resolvers=[ResolverInfo.model_validate(info) for info in service.describe_resolvers()]
    )
