"""Main library client for standalone usage."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from aliasresolve.cache.base import ResultCache
from aliasresolve.cache.memory import MemoryResultCache
from aliasresolve.config import AliasResolveSettings
from aliasresolve.core.models import ResolutionOutcome, VerificationResult
from aliasresolve.core.types import ALL_CHAINS, VerificationMethod
from aliasresolve.resolution.orchestrator import OrchestratorConfig, ResolutionOrchestrator
from aliasresolve.resolution.registry import ResolverRegistry
from aliasresolve.verification.engine import VerificationEngine

logger = logging.getLogger(__name__)


class AliasResolveClient:
    """
    Resolution and verification without the web server or a database.

    Usage:
        async with AliasResolveClient() as client:
            outcome = await client.resolve("vitalik.eth")
            outcome = await client.resolve("alice@example.com", "lightning")
            result = await client.verify("example.com", "both", {"bitcoin": "bc1q..."})

    Settings are loaded from environment variables or can be passed explicitly.
    Outcomes are cached in process unless another cache is supplied.
    """

    def __init__(
        self,
        settings: AliasResolveSettings | None = None,
        *,
        cache: ResultCache | None = None,
    ) -> None:
        self._settings = settings or AliasResolveSettings()
        self._cache = cache
        self._http: httpx.AsyncClient | None = None
        self._registry: ResolverRegistry | None = None
        self._orchestrator: ResolutionOrchestrator | None = None
        self._engine: VerificationEngine | None = None

    async def __aenter__(self) -> AliasResolveClient:
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _initialize(self) -> None:
        settings = self._settings
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            follow_redirects=True,
        )
        if self._cache is None:
            self._cache = MemoryResultCache(default_ttl=settings.cache_ttl)

        self._registry = ResolverRegistry.from_settings(settings, client=self._http)
        self._orchestrator = ResolutionOrchestrator(
            self._registry.resolvers,
            self._cache,
            OrchestratorConfig(
                resolver_timeout=settings.resolver_timeout,
                cache_ttl=settings.cache_ttl,
                negative_cache_ttl=settings.negative_cache_ttl,
            ),
        )
        self._engine = VerificationEngine.from_settings(settings, client=self._http)
        logger.debug(f"Client initialized with {len(self._registry)} resolvers")

    async def close(self) -> None:
        """Close all resources."""
        if self._registry:
            await self._registry.close_all()
            self._registry = None
        self._orchestrator = None
        self._engine = None
        self._http = None

    def _ensure_initialized(self) -> None:
        if self._orchestrator is None or self._engine is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with AliasResolveClient() as client:'"
            )

    async def resolve(self, alias: str, chain: str | None = ALL_CHAINS) -> ResolutionOutcome:
        """
        Resolve an alias to a payment address.

        Args:
            alias: ENS name, domain, user@domain, $handle, ...
            chain: Chain name or ticker to restrict to ("all" for any)

        Returns:
            Outcome with every candidate found and the chosen one
        """
        self._ensure_initialized()
        return await self._orchestrator.resolve(alias, chain)

    async def verify(
        self,
        domain: str,
        method: VerificationMethod | str = VerificationMethod.DNS,
        expected: dict[str, str] | None = None,
    ) -> VerificationResult:
        """Check a domain's published proofs against the expected addresses."""
        self._ensure_initialized()
        return await self._engine.verify(domain, method, expected or {})

    def describe_resolvers(self) -> list[dict[str, Any]]:
        self._ensure_initialized()
        return self._orchestrator.describe_resolvers()


# Convenience functions for one-off calls
async def resolve_alias(
    alias: str,
    chain: str | None = ALL_CHAINS,
    *,
    settings: AliasResolveSettings | None = None,
) -> ResolutionOutcome:
    """
    Resolve an alias (convenience function).

    For multiple resolutions, use AliasResolveClient so results are cached.
    """
    async with AliasResolveClient(settings) as client:
        return await client.resolve(alias, chain)


async def verify_domain(
    domain: str,
    method: VerificationMethod | str,
    expected: dict[str, str],
    *,
    settings: AliasResolveSettings | None = None,
) -> VerificationResult:
    async with AliasResolveClient(settings) as client:
        return await client.verify(domain, method, expected)
