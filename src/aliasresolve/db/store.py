"""
Persistence facade used by the services and the revalidation scheduler.

Every call runs in its own session and transaction, and returns pydantic
records so callers never hold ORM objects past the session that loaded them.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from aliasresolve.core.exceptions import NotFoundError
from aliasresolve.core.models import (
    AliasRecord,
    MonitoringRule,
    ResolutionOutcome,
    ResolvedCandidate,
    TrackingResult,
    VerificationResult,
    WebhookRegistration,
    utcnow,
)
from aliasresolve.core.types import AlertType
from aliasresolve.db.models.alias import AliasModel, LookupModel
from aliasresolve.db.models.monitoring import AlertModel, MonitoringRuleModel, WebhookModel
from aliasresolve.db.repositories.alias import (
    AliasHistoryRepository,
    AliasRepository,
    LookupRepository,
)
from aliasresolve.db.repositories.monitoring import (
    AlertRepository,
    MonitoringRuleRepository,
    WebhookRepository,
)
from aliasresolve.db.session import transaction

logger = logging.getLogger(__name__)


def _webhook_record(model: WebhookModel) -> WebhookRegistration:
    return WebhookRegistration(
        id=model.id,
        alias_id=model.alias_id,
        callback_url=model.callback_url,
        secret_token=model.secret_token,
        active=model.is_active,
        last_triggered_at=model.last_triggered_at,
    )


class AliasStore:
    """Alias, monitoring and lookup persistence over an async session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    def _session(self):
        return transaction(self._session_factory)

    # Aliases

    async def get_alias(self, alias_id: UUID) -> AliasRecord | None:
        async with self._session() as session:
            model = await AliasRepository(session).get(alias_id)
            return AliasRecord.model_validate(model) if model else None

    async def get_alias_by_string(self, alias_string: str) -> AliasRecord | None:
        async with self._session() as session:
            model = await AliasRepository(session).get_by_alias_string(alias_string)
            return AliasRecord.model_validate(model) if model else None

    async def register_alias(
        self,
        alias_string: str,
        *,
        owner_email: str | None = None,
        verification_method: str | None = None,
    ) -> AliasRecord:
        """Create an alias row, or return the existing one for the same string."""
        async with self._session() as session:
            repo = AliasRepository(session)
            existing = await repo.get_by_alias_string(alias_string)
            if existing:
                return AliasRecord.model_validate(existing)
            model = await repo.create(
                AliasModel(
                    alias_string=alias_string.strip(),
                    owner_email=owner_email,
                    verification_method=verification_method,
                )
            )
            logger.info(f"Registered alias {model.alias_string}")
            return AliasRecord.model_validate(model)

    async def list_due_for_revalidation(
        self,
        limit: int = 50,
        max_age: timedelta = timedelta(hours=24),
    ) -> list[AliasRecord]:
        """Aliases never verified, or last verified longer than ``max_age`` ago."""
        cutoff = utcnow() - max_age
        async with self._session() as session:
            models = await AliasRepository(session).list_due_for_revalidation(cutoff, limit=limit)
            return [AliasRecord.model_validate(m) for m in models]

    async def save_verification(self, alias_id: UUID, result: VerificationResult) -> AliasRecord:
        """Write the proof flags and trust score of a verification pass."""
        async with self._session() as session:
            repo = AliasRepository(session)
            model = await repo.get(alias_id)
            if model is None:
                raise NotFoundError(f"Alias {alias_id} not found")

            model.verification_method = result.method.value
            model.dns_verified = result.dns_verified
            model.https_verified = result.https_verified
            model.dnssec_enabled = result.dnssec_enabled
            model.trust_score = result.trust_score
            model.last_verification_at = result.verified_at
            await repo.update(model)
            return AliasRecord.model_validate(model)

    # Resolution tracking

    async def log_lookup(self, outcome: ResolutionOutcome) -> None:
        """Append a row to the lookup log for one resolve request."""
        chosen = outcome.chosen
        entry = LookupModel(
            alias=outcome.alias,
            chain=outcome.chain,
            resolved_address=chosen.address if chosen else None,
            alias_type=chosen.source_type.value if chosen else None,
            confidence=chosen.confidence if chosen else None,
            proof_metadata={
                "sources": sorted({c.source_type.value for c in outcome.resolved}),
                "sources_conflict": outcome.sources_conflict,
                "cached": outcome.cached,
            },
            error_message=outcome.error,
        )
        async with self._session() as session:
            await LookupRepository(session).create(entry)

    async def track_resolution(
        self,
        alias_string: str,
        chosen: ResolvedCandidate,
        candidates: list[ResolvedCandidate] | None = None,
    ) -> TrackingResult:
        """
        Record a successful resolution against the alias it belongs to.

        Creates the alias on first sight, appends every candidate to the
        history, and moves the current binding to ``chosen``. An address
        change is reported only when the alias already had an address for
        the same currency.
        """
        now = utcnow()
        async with self._session() as session:
            alias_repo = AliasRepository(session)
            history_repo = AliasHistoryRepository(session)

            model = await alias_repo.get_by_alias_string(alias_string)
            created = model is None
            if model is None:
                model = await alias_repo.create(AliasModel(alias_string=alias_string.strip()))

            old_address = model.current_address
            same_currency = (model.current_currency or chosen.currency) == chosen.currency
            address_changed = (
                not created
                and old_address is not None
                and same_currency
                and old_address != chosen.address
            )

            for candidate in candidates or [chosen]:
                await history_repo.record(
                    model.id,
                    source_type=candidate.source_type.value,
                    currency=candidate.currency,
                    address=candidate.address,
                    confidence=candidate.confidence,
                    raw_data=candidate.raw_data or None,
                    resolved_at=now,
                )

            model.current_address = chosen.address
            model.current_currency = chosen.currency
            model.current_source = chosen.source_type.value
            model.last_resolved_at = now
            await alias_repo.update(model)

            if address_changed:
                logger.info(
                    f"Address changed for {model.alias_string}: "
                    f"{old_address} -> {chosen.address}"
                )

            return TrackingResult(
                alias_id=model.id,
                created=created,
                address_changed=address_changed,
                old_address=old_address,
                new_address=chosen.address,
                currency=chosen.currency,
            )

    # Monitoring

    async def add_monitoring_rule(
        self,
        alias_id: UUID,
        *,
        trust_threshold: int = 70,
        alert_email: bool = True,
        alert_webhook_url: str | None = None,
    ) -> MonitoringRule:
        async with self._session() as session:
            model = await MonitoringRuleRepository(session).create(
                MonitoringRuleModel(
                    alias_id=alias_id,
                    trust_threshold=trust_threshold,
                    alert_email=alert_email,
                    alert_webhook_url=alert_webhook_url,
                )
            )
            return MonitoringRule.model_validate(model)

    async def list_enabled_rules(self, alias_id: UUID) -> list[MonitoringRule]:
        async with self._session() as session:
            models = await MonitoringRuleRepository(session).list_enabled(alias_id)
            return [MonitoringRule.model_validate(m) for m in models]

    async def record_alert(
        self,
        alias_id: UUID,
        alert_type: AlertType,
        message: str,
        *,
        rule_id: UUID | None = None,
        severity: str = "warning",
        metadata: dict[str, Any] | None = None,
        email_sent: bool = False,
        webhook_sent: bool = False,
    ) -> UUID:
        """Store a raised alert and the channels that delivered it."""
        async with self._session() as session:
            model = await AlertRepository(session).create(
                AlertModel(
                    alias_id=alias_id,
                    rule_id=rule_id,
                    alert_type=alert_type.value,
                    severity=severity,
                    message=message,
                    metadata_=metadata,
                    email_sent=email_sent,
                    webhook_sent=webhook_sent,
                )
            )
            return model.id

    # Webhooks

    async def register_webhook(
        self,
        alias_id: UUID,
        callback_url: str,
        secret_token: str,
    ) -> WebhookRegistration:
        async with self._session() as session:
            model = await WebhookRepository(session).create(
                WebhookModel(
                    alias_id=alias_id,
                    callback_url=callback_url,
                    secret_token=secret_token,
                )
            )
            return _webhook_record(model)

    async def list_active_webhooks(self, alias_id: UUID) -> list[WebhookRegistration]:
        async with self._session() as session:
            models = await WebhookRepository(session).list_active(alias_id)
            return [_webhook_record(m) for m in models]

    async def mark_webhook_triggered(
        self,
        webhook_id: UUID,
        triggered_at: datetime | None = None,
    ) -> None:
        async with self._session() as session:
            repo = WebhookRepository(session)
            model = await repo.get(webhook_id)
            if model is None:
                return
            model.last_triggered_at = triggered_at or utcnow()
            await repo.update(model)
