"""Monitoring rule, webhook and alert repositories."""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select

from aliasresolve.db.models.monitoring import AlertModel, MonitoringRuleModel, WebhookModel
from aliasresolve.db.repositories.base import BaseRepository


class MonitoringRuleRepository(BaseRepository[MonitoringRuleModel]):
    """Repository for alert rules."""

    model = MonitoringRuleModel

    async def list_enabled(self, alias_id: UUID) -> Sequence[MonitoringRuleModel]:
        """Enabled rules for an alias, oldest first."""
        stmt = (
            select(MonitoringRuleModel)
            .where(
                MonitoringRuleModel.alias_id == alias_id,
                MonitoringRuleModel.enabled.is_(True),
            )
            .order_by(MonitoringRuleModel.created_at)
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()


class WebhookRepository(BaseRepository[WebhookModel]):
    """Repository for address-change webhooks."""

    model = WebhookModel

    async def list_active(self, alias_id: UUID) -> Sequence[WebhookModel]:
        stmt = select(WebhookModel).where(
            WebhookModel.alias_id == alias_id,
            WebhookModel.is_active.is_(True),
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()


class AlertRepository(BaseRepository[AlertModel]):
    """Repository for raised alerts."""

    model = AlertModel

