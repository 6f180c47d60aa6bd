"""Periodic re-verification of stored aliases with alerting on regressions."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from aliasresolve.core.addresses import normalize_chain
from aliasresolve.core.models import AliasRecord, RevalidationSummary, VerificationResult
from aliasresolve.core.types import VerificationMethod
from aliasresolve.monitoring.alerts import AlertDispatcher, AlertEvent

if TYPE_CHECKING:
    from aliasresolve.config import AliasResolveSettings
    from aliasresolve.db.store import AliasStore
    from aliasresolve.resolution.orchestrator import ResolutionOrchestrator
    from aliasresolve.services.verification import VerificationService

logger = logging.getLogger(__name__)


@dataclass
class RevalidationConfig:
    """Batch sizing and alert sensitivity for revalidation runs."""

    batch_size: int = 50
    max_age_hours: int = 24
    concurrency: int = 1
    score_drop: int = 20
    interval: float = 3600.0

    @classmethod
    def from_settings(cls, settings: "AliasResolveSettings") -> "RevalidationConfig":
        return cls(
            batch_size=settings.revalidation_batch_size,
            max_age_hours=settings.revalidation_max_age_hours,
            concurrency=settings.revalidation_concurrency,
            score_drop=settings.alert_score_drop,
            interval=settings.revalidation_interval,
        )


def should_alert(
    old_score: int,
    new_score: int,
    address_changed: bool,
    drop_threshold: int = 20,
) -> bool:
    """Whether a verification pass is a regression worth alerting on."""
    return old_score - new_score >= drop_threshold or new_score == 0 or address_changed


class RevalidationScheduler:
    """
    Re-verifies aliases whose proofs are missing or stale.

    Per-alias failures are counted and logged; they never abort the batch.
    Alert delivery failures are counted separately from verification
    failures.
    """

    def __init__(
        self,
        store: "AliasStore",
        verification_service: "VerificationService",
        alerts: AlertDispatcher,
        config: RevalidationConfig | None = None,
        orchestrator: "ResolutionOrchestrator | None" = None,
    ) -> None:
        self._store = store
        self._verification = verification_service
        self._alerts = alerts
        self.config = config or RevalidationConfig()
        self._orchestrator = orchestrator

    async def run_once(self) -> RevalidationSummary:
        """Revalidate one batch of due aliases."""
        aliases = await self._store.list_due_for_revalidation(
            limit=self.config.batch_size,
            max_age=timedelta(hours=self.config.max_age_hours),
        )
        logger.info(f"Found {len(aliases)} aliases to revalidate")

        summary = RevalidationSummary()
        semaphore = asyncio.Semaphore(self.config.concurrency)

        async def process(alias: AliasRecord) -> None:
            async with semaphore:
                await self._revalidate(alias, summary)

        await asyncio.gather(*(process(alias) for alias in aliases))

        logger.info(
            f"Revalidation complete: processed={summary.processed} "
            f"successful={summary.successful} failed={summary.failed} "
            f"alerts_sent={summary.alerts_sent} alert_failures={summary.alert_failures}"
        )
        return summary

    async def run_forever(self, interval: float | None = None) -> None:
        """Run batches until cancelled."""
        interval = interval if interval is not None else self.config.interval
        while True:
            try:
                await self.run_once()
            except Exception:
                logger.exception("Revalidation run failed")
            await asyncio.sleep(interval)

    async def _revalidate(self, alias: AliasRecord, summary: RevalidationSummary) -> None:
        summary.processed += 1

        new_address = await self._current_address(alias)
        address_changed = bool(
            new_address and alias.current_address and new_address != alias.current_address
        )

        try:
            result = await self._verification.verify_ownership(
                alias.id,
                alias.domain,
                alias.verification_method or VerificationMethod.DNS,
                alias.expected_addresses,
            )
        except Exception:
            logger.exception(f"Verification failed for {alias.alias_string}")
            summary.failed += 1
            return

        summary.successful += 1
        logger.info(f"Verified {alias.alias_string}: trust score {result.trust_score}")

        if not should_alert(
            alias.trust_score,
            result.trust_score,
            address_changed,
            self.config.score_drop,
        ):
            return

        await self._send_alerts(alias, result, new_address if address_changed else None, summary)

    async def _current_address(self, alias: AliasRecord) -> str | None:
        """Re-resolve the alias for its stored currency; None when unknown."""
        if self._orchestrator is None or not alias.current_address:
            return None
        try:
            outcome = await self._orchestrator.resolve(
                alias.alias_string,
                alias.current_currency or "all",
            )
        except Exception:
            logger.exception(f"Re-resolution failed for {alias.alias_string}")
            return None
        chosen = outcome.chosen
        if chosen is None:
            return None
        if alias.current_currency and normalize_chain(chosen.currency) != normalize_chain(
            alias.current_currency
        ):
            logger.info(
                f"Re-resolution of {alias.alias_string} returned {chosen.currency}, "
                f"not {alias.current_currency}; address left unchanged"
            )
            return None
        return chosen.address

    async def _send_alerts(
        self,
        alias: AliasRecord,
        result: VerificationResult,
        new_address: str | None,
        summary: RevalidationSummary,
    ) -> None:
        try:
            rules = await self._store.list_enabled_rules(alias.id)
        except Exception:
            logger.exception(f"Could not load monitoring rules for {alias.alias_string}")
            return

        event = AlertEvent.from_verification(alias, result, new_address)
        for rule in rules:
            if result.trust_score >= rule.trust_threshold:
                continue

            try:
                report = await self._alerts.dispatch(rule, event, alias.owner_email)
            except Exception:
                logger.exception(f"Alert dispatch failed for rule {rule.id} on {alias.alias_string}")
                summary.alert_failures += 1
                continue
            summary.alerts_sent += len(report.delivered)
            summary.alert_failures += report.failures

            try:
                await self._store.record_alert(
                    alias.id,
                    event.alert_type,
                    event.message(),
                    rule_id=rule.id,
                    severity="critical" if result.trust_score == 0 else "warning",
                    metadata={
                        "previous_score": event.previous_score,
                        "current_score": event.current_score,
                        "old_address": event.old_address,
                        "new_address": event.new_address,
                        "errors": event.errors,
                    },
                    email_sent=report.email_sent,
                    webhook_sent=report.webhook_sent,
                )
            except Exception:
                logger.exception(f"Could not record alert for {alias.alias_string}")

            logger.info(
                f"Alert for {alias.alias_string} (score {event.previous_score} -> "
                f"{event.current_score}): {len(report.delivered)} delivered, "
                f"{report.failures} failed"
            )
