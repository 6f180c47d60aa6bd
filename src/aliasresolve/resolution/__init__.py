"""Resolution layer: resolver plugins, orchestration and selection."""

from aliasresolve.resolution.conflicts import detect_conflict, select_candidate
from aliasresolve.resolution.http import (
    AsyncRateLimiter,
    HttpFetcher,
    RateLimitConfig,
)
from aliasresolve.resolution.orchestrator import (
    NO_RESOLVER_ERROR,
    NOT_FOUND_ERROR,
    OrchestratorConfig,
    ResolutionOrchestrator,
)
from aliasresolve.resolution.protocol import AliasResolver
from aliasresolve.resolution.registry import ResolverRegistry

__all__ = [
    # Plugins
    "AliasResolver",
    "AsyncRateLimiter",
    "HttpFetcher",
    "RateLimitConfig",
    # Orchestration
    "NO_RESOLVER_ERROR",
    "NOT_FOUND_ERROR",
    "OrchestratorConfig",
    "ResolutionOrchestrator",
    "detect_conflict",
    "select_candidate",
    # Registry
    "ResolverRegistry",
]
