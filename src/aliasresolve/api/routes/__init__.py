"""API route modules."""

from aliasresolve.api.routes.health import router as health_router
from aliasresolve.api.routes.monitoring import router as monitoring_router
from aliasresolve.api.routes.resolve import router as resolve_router
from aliasresolve.api.routes.verify import router as verify_router

__all__ = [
    "health_router",
    "monitoring_router",
    "resolve_router",
    "verify_router",
]
