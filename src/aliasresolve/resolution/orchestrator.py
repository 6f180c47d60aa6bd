"""Resolution orchestrator: cache, concurrent fan-out, merge and selection."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from aliasresolve.cache.base import ResultCache
from aliasresolve.core.addresses import normalize_chain
from aliasresolve.core.exceptions import ResolverNotImplementedError
from aliasresolve.core.models import ResolutionOutcome, ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS
from aliasresolve.resolution.conflicts import detect_conflict, select_candidate
from aliasresolve.resolution.protocol import AliasResolver
from aliasresolve.resolution.registry import describe_resolvers

logger = logging.getLogger(__name__)

NO_RESOLVER_ERROR = "no resolver can handle this alias format"
NOT_FOUND_ERROR = "no addresses found for this alias"


@dataclass
class OrchestratorConfig:
    """Timing and caching policy for the orchestrator."""

    # Deadline for a single plugin call (seconds)
    resolver_timeout: float = 5.0

    # TTL for outcomes with candidates (seconds)
    cache_ttl: int = 300

    # TTL for "no addresses found" outcomes (seconds)
    negative_cache_ttl: int = 60


@dataclass
class _PluginResult:
    candidates: list[ResolvedCandidate]
    not_implemented: ResolverNotImplementedError | None = None


class ResolutionOrchestrator:
    """
    Fans an alias out to every capable plugin and merges the answers.

    Per request: cache check, dispatch to plugins whose ``can_resolve``
    accepts the alias, concurrent resolution with a per-plugin deadline,
    merge in plugin order, conflict detection and selection, cache store.
    A failing or slow plugin contributes nothing and never aborts the others.
    """

    def __init__(
        self,
        resolvers: Sequence[AliasResolver],
        cache: ResultCache,
        config: OrchestratorConfig | None = None,
    ) -> None:
        self._resolvers = list(resolvers)
        self._cache = cache
        self.config = config or OrchestratorConfig()

    @property
    def resolvers(self) -> list[AliasResolver]:
        return list(self._resolvers)

    def eligible_resolvers(self, alias: str) -> list[AliasResolver]:
        """Plugins whose syntactic check accepts the alias, in priority order."""
        eligible = []
        for resolver in self._resolvers:
            try:
                if resolver.can_resolve(alias):
                    eligible.append(resolver)
            except Exception as e:
                logger.warning(f"{resolver.name} can_resolve failed for {alias!r}: {e}")
        return eligible

    def describe_resolvers(self) -> list[dict[str, Any]]:
        """Name, source type and sample coverage of every plugin."""
        return describe_resolvers(self._resolvers)

    async def resolve(self, alias: str, chain: str | None = ALL_CHAINS) -> ResolutionOutcome:
        """Resolve an alias, optionally restricted to one chain."""
        alias = alias.strip()
        chain = normalize_chain(chain)

        cached = await self._cache_get(alias, chain)
        if cached is not None:
            logger.debug(f"Serving {alias} ({chain}) from cache")
            return cached

        eligible = self.eligible_resolvers(alias)
        if not eligible:
            logger.info(f"No resolver can handle {alias!r}")
            return ResolutionOutcome(alias=alias, chain=chain, error=NO_RESOLVER_ERROR)

        logger.info(f"Resolving {alias} ({chain}) with {', '.join(r.name for r in eligible)}")
        results = await self._run_parallel(eligible, alias, chain)

        resolved = [candidate for result in results for candidate in result.candidates]

        if not resolved:
            not_implemented = next((r.not_implemented for r in results if r.not_implemented), None)
            if not_implemented is not None:
                return ResolutionOutcome(
                    alias=alias,
                    chain=chain,
                    error=f"{not_implemented.source} resolution is not implemented: {not_implemented.message}",
                )

            outcome = ResolutionOutcome(alias=alias, chain=chain, error=NOT_FOUND_ERROR)
            await self._cache_set(alias, chain, outcome, self.config.negative_cache_ttl)
            return outcome

        outcome = ResolutionOutcome(
            alias=alias,
            chain=chain,
            resolved=resolved,
            chosen=select_candidate(resolved, chain),
            sources_conflict=detect_conflict(resolved),
        )
        if outcome.sources_conflict:
            logger.info(f"Sources disagree for {alias}; chose {outcome.chosen.source_type}")

        await self._cache_set(alias, chain, outcome, self.config.cache_ttl)
        return outcome

    async def _try_resolver(
        self,
        resolver: AliasResolver,
        alias: str,
        chain: str,
    ) -> _PluginResult:
        """Run one plugin under the deadline, downgrading failures to no result."""
        try:
            async with asyncio.timeout(self.config.resolver_timeout):
                candidates = await resolver.resolve(alias, chain)
        except ResolverNotImplementedError as e:
            logger.info(f"{resolver.name} cannot resolve {alias}: {e.message}")
            return _PluginResult(candidates=[], not_implemented=e)
        except TimeoutError:
            logger.warning(f"{resolver.name} timed out resolving {alias}")
            return _PluginResult(candidates=[])
        except Exception as e:
            logger.exception(f"{resolver.name} failed resolving {alias}: {e}")
            return _PluginResult(candidates=[])
        return _PluginResult(candidates=list(candidates or []))

    async def _run_parallel(
        self,
        resolvers: list[AliasResolver],
        alias: str,
        chain: str,
    ) -> list[_PluginResult]:
        """Run all resolvers concurrently; results keep plugin order."""
        tasks = [self._try_resolver(resolver, alias, chain) for resolver in resolvers]
        return await asyncio.gather(*tasks)

    async def _cache_get(self, alias: str, chain: str) -> ResolutionOutcome | None:
        try:
            payload = await self._cache.get(alias, chain)
        except Exception as e:
            logger.warning(f"Cache read failed for {alias}: {e}")
            return None
        if payload is None:
            return None
        try:
            outcome = ResolutionOutcome.model_validate(payload)
        except ValueError as e:
            logger.warning(f"Ignoring malformed cache entry for {alias}: {e}")
            return None
        return outcome.model_copy(update={"cached": True})

    async def _cache_set(self, alias: str, chain: str, outcome: ResolutionOutcome, ttl: int) -> None:
        payload: dict[str, Any] = outcome.model_dump(mode="json")
        try:
            await self._cache.set(alias, payload, chain=chain, ttl=ttl)
        except Exception as e:
            logger.warning(f"Cache write failed for {alias}: {e}")

    async def invalidate(self, alias: str, chain: str | None = ALL_CHAINS) -> bool:
        """Drop a cached outcome so the next request re-dispatches."""
        return await self._cache.clear(alias.strip(), normalize_chain(chain))
