"""FastAPI application factory."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aliasresolve import __version__
from aliasresolve.api.routes import health_router, monitoring_router, resolve_router, verify_router
from aliasresolve.cache import CacheSweeper, MemoryResultCache, RedisResultCache
from aliasresolve.config import AliasResolveSettings, get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("aliasresolve").setLevel(level.upper())
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def _create_cache(settings: AliasResolveSettings) -> MemoryResultCache | RedisResultCache:
    if settings.cache_backend == "redis" and settings.redis_url:
        cache = RedisResultCache(str(settings.redis_url), default_ttl=settings.cache_ttl)
        try:
            await cache.connect()
            await cache.stats()
            logger.info("Redis cache initialized")
            return cache
        except Exception as e:
            logger.warning(f"Failed to initialize Redis, using in-memory cache: {e}")
            await cache.close()
    return MemoryResultCache(default_ttl=settings.cache_ttl)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Builds the shared HTTP client, cache, plugin registry, database and
    services on startup and tears them down in reverse order on shutdown.
    """
    from aliasresolve.db.session import DatabaseManager
    from aliasresolve.db.store import AliasStore
    from aliasresolve.monitoring.alerts import AlertDispatcher
    from aliasresolve.monitoring.revalidation import RevalidationConfig, RevalidationScheduler
    from aliasresolve.monitoring.webhooks import WebhookNotifier
    from aliasresolve.resolution.orchestrator import OrchestratorConfig, ResolutionOrchestrator
    from aliasresolve.resolution.registry import ResolverRegistry
    from aliasresolve.services.resolution import ResolutionService
    from aliasresolve.services.verification import VerificationService
    from aliasresolve.verification.engine import VerificationEngine

    settings: AliasResolveSettings = app.state.settings
    configure_logging(settings.log_level)

    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout),
        follow_redirects=True,
    )

    logger.info("Initializing cache...")
    app.state.cache = await _create_cache(settings)
    app.state.sweeper = CacheSweeper(app.state.cache, interval=settings.cache_cleanup_interval)
    app.state.sweeper.start()

    logger.info("Initializing resolver registry...")
    app.state.registry = ResolverRegistry.from_settings(settings, client=http_client)
    orchestrator = ResolutionOrchestrator(
        app.state.registry.resolvers,
        app.state.cache,
        OrchestratorConfig(
            resolver_timeout=settings.resolver_timeout,
            cache_ttl=settings.cache_ttl,
            negative_cache_ttl=settings.negative_cache_ttl,
        ),
    )

    logger.info("Initializing database connection...")
    app.state.db = DatabaseManager.from_settings(settings)
    app.state.store = AliasStore(app.state.db.session_factory)

    app.state.resolution_service = ResolutionService(
        orchestrator,
        app.state.store,
        WebhookNotifier(app.state.store, http_client),
    )
    app.state.verification_service = VerificationService(
        VerificationEngine.from_settings(settings, client=http_client),
        app.state.store,
    )
    app.state.scheduler = RevalidationScheduler(
        app.state.store,
        app.state.verification_service,
        AlertDispatcher.from_settings(settings, http_client),
        RevalidationConfig.from_settings(settings),
        orchestrator=orchestrator,
    )

    revalidation_task: asyncio.Task | None = None
    if settings.revalidation_enabled:
        logger.info(f"Starting revalidation loop every {settings.revalidation_interval}s")
        revalidation_task = asyncio.create_task(app.state.scheduler.run_forever())

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")

    if revalidation_task is not None:
        revalidation_task.cancel()
        try:
            await revalidation_task
        except asyncio.CancelledError:
            pass

    await app.state.sweeper.stop()

    # Closes the shared HTTP client
    await app.state.registry.close_all()

    if isinstance(app.state.cache, RedisResultCache):
        await app.state.cache.close()

    await app.state.db.close()

    logger.info("Application shutdown complete")


def create_app(
    *,
    settings: AliasResolveSettings | None = None,
    title: str = "AliasResolve API",
    description: str = "Resolve aliases to payment addresses and verify who controls them",
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to run with (environment settings if omitted)
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        cors_origins: List of allowed CORS origins

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=title,
        description=description,
        version=__version__,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.settings = settings

    if cors_origins is None:
        cors_origins = [settings.dashboard_url]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(resolve_router, prefix="/api/v1")
    app.include_router(verify_router, prefix="/api/v1")
    app.include_router(monitoring_router, prefix="/api/v1")

    return app


# For uvicorn direct execution
app = create_app()
