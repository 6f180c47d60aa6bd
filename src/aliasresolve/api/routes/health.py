"""Health check endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Request

from aliasresolve import __version__
from aliasresolve.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check the health status of the API and its dependencies.",
)
async def health_check(request: Request) -> HealthResponse:
    services: dict[str, Literal["up", "down", "unknown"]] = {}
    overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"

    # Database failures degrade monitoring but resolution still works
    db = getattr(request.app.state, "db", None)
    try:
        if db is not None:
            await db.ping()
            services["database"] = "up"
        else:
            services["database"] = "unknown"
    except Exception:
        services["database"] = "down"
        overall_status = "degraded"

    cache = getattr(request.app.state, "cache", None)
    try:
        if cache is not None:
            await cache.stats()
            services["cache"] = "up"
        else:
            services["cache"] = "unknown"
    except Exception:
        services["cache"] = "down"
        overall_status = "unhealthy"

    return HealthResponse(status=overall_status, version=__version__, services=services)


@router.get(
    "/ready",
    operation_id="getReady",
    summary="Readiness check",
    description="Check if the API is ready to serve traffic.",
)
async def readiness_check(request: Request) -> dict[str, bool]:
    registry = getattr(request.app.state, "registry", None)
    cache = getattr(request.app.state, "cache", None)
    return {"ready": registry is not None and len(registry) > 0 and cache is not None}
