"""Resolution service: orchestrated lookup plus best-effort tracking."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from aliasresolve.core.models import ResolutionOutcome
from aliasresolve.core.types import ALL_CHAINS

if TYPE_CHECKING:
    from aliasresolve.db.store import AliasStore
    from aliasresolve.monitoring.webhooks import WebhookNotifier
    from aliasresolve.resolution.orchestrator import ResolutionOrchestrator

logger = logging.getLogger(__name__)


class ResolutionService:
    """
    Resolves aliases and records what was found.

    Flow per request:
    1. Resolve through the orchestrator (cache, plugins, selection)
    2. Append the request to the lookup log
    3. Track the chosen address against the stored alias
    4. Notify registered webhooks when the address changed

    Steps 2-4 are best effort: their failures are logged and never change
    the outcome returned to the caller.
    """

    def __init__(
        self,
        orchestrator: "ResolutionOrchestrator",
        store: "AliasStore | None" = None,
        notifier: "WebhookNotifier | None" = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._store = store
        self._notifier = notifier

    def describe_resolvers(self) -> list[dict[str, Any]]:
        return self._orchestrator.describe_resolvers()

    async def resolve(self, alias: str, chain: str | None = ALL_CHAINS) -> ResolutionOutcome:
        start = time.monotonic()
        outcome = await self._orchestrator.resolve(alias, chain)

        if self._store is not None:
            await self._log_lookup(outcome)
            if outcome.chosen is not None and not outcome.cached:
                await self._track(outcome)

        duration = time.monotonic() - start
        logger.info(
            f"Resolved {alias} ({outcome.chain}) in {duration:.2f}s: "
            f"{outcome.chosen.address if outcome.chosen else outcome.error}"
        )
        return outcome

    async def _log_lookup(self, outcome: ResolutionOutcome) -> None:
        try:
            await self._store.log_lookup(outcome)
        except Exception:
            logger.exception(f"Failed to log lookup for {outcome.alias}")

    async def _track(self, outcome: ResolutionOutcome) -> None:
        try:
            tracking = await self._store.track_resolution(
                outcome.alias, outcome.chosen, outcome.resolved
            )
        except Exception:
            logger.exception(f"Failed to track resolution for {outcome.alias}")
            return

        if not tracking.address_changed or self._notifier is None:
            return

        try:
            await self._notifier.notify_address_change(
                tracking.alias_id,
                outcome.alias,
                tracking.old_address,
                tracking.new_address,
                tracking.currency,
            )
        except Exception:
            logger.exception(f"Failed to notify webhooks for {outcome.alias}")
