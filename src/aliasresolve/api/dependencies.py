"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from aliasresolve.config import AliasResolveSettings
from aliasresolve.config import get_settings as _get_settings
from aliasresolve.db.store import AliasStore
from aliasresolve.monitoring.revalidation import RevalidationScheduler
from aliasresolve.services.resolution import ResolutionService
from aliasresolve.services.verification import VerificationService


def get_settings() -> AliasResolveSettings:
    """Get cached application settings."""
    return _get_settings()


async def get_alias_store(request: Request) -> AliasStore:
    """Get the persistence facade from app state."""
    return request.app.state.store


async def get_resolution_service(request: Request) -> ResolutionService:
    return request.app.state.resolution_service


async def get_verification_service(request: Request) -> VerificationService:
    return request.app.state.verification_service


async def get_revalidation_scheduler(request: Request) -> RevalidationScheduler:
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        raise HTTPException(status_code=503, detail="Revalidation is not available")
    return scheduler


# Type aliases for cleaner dependency injection
Settings = Annotated[AliasResolveSettings, Depends(get_settings)]
Store = Annotated[AliasStore, Depends(get_alias_store)]
ResolveService = Annotated[ResolutionService, Depends(get_resolution_service)]
VerifyService = Annotated[VerificationService, Depends(get_verification_service)]
Scheduler = Annotated[RevalidationScheduler, Depends(get_revalidation_scheduler)]
