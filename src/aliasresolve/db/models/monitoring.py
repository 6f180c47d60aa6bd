"""Monitoring database models: rules, webhook registrations and alerts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from aliasresolve.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from aliasresolve.db.models.alias import AliasModel


class MonitoringRuleModel(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Alert rule for an alias; fires when the trust score falls below the threshold."""

    __tablename__ = "monitoring_rules"

    alias_id: Mapped[UUID] = mapped_column(
        ForeignKey("aliases.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    trust_threshold: Mapped[int] = mapped_column(Integer, default=70, server_default="70")
    alert_email: Mapped[bool] = mapped_column(default=True, server_default="true")
    alert_webhook_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    enabled: Mapped[bool] = mapped_column(default=True, server_default="true")

    alias: Mapped["AliasModel"] = relationship("AliasModel", back_populates="rules")

    __table_args__ = (
        CheckConstraint(
            "trust_threshold >= 0 AND trust_threshold <= 100",
            name="valid_trust_threshold",
        ),
    )

    def __repr__(self) -> str:
        return f"<MonitoringRuleModel(alias_id={self.alias_id}, threshold={self.trust_threshold})>"


class WebhookModel(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Callback registered for address-change notifications."""

    __tablename__ = "webhooks"

    alias_id: Mapped[UUID] = mapped_column(
        ForeignKey("aliases.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    callback_url: Mapped[str] = mapped_column(String(2000), nullable=False)
    secret_token: Mapped[str] = mapped_column(String(128), nullable=False)
    is_active: Mapped[bool] = mapped_column(default=True, server_default="true")
    last_triggered_at: Mapped[datetime | None] = mapped_column(nullable=True)

    alias: Mapped["AliasModel"] = relationship("AliasModel", back_populates="webhooks")

    def __repr__(self) -> str:
        return f"<WebhookModel(alias_id={self.alias_id}, url='{self.callback_url}')>"


class AlertModel(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """A raised alert and which channels delivered it."""

    __tablename__ = "alerts"

    alias_id: Mapped[UUID] = mapped_column(
        ForeignKey("aliases.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rule_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("monitoring_rules.id", ondelete="SET NULL"),
        nullable=True,
    )
    alert_type: Mapped[str] = mapped_column(String(50), nullable=False)
    severity: Mapped[str] = mapped_column(String(20), nullable=False, default="warning")
    message: Mapped[str] = mapped_column(Text, nullable=False)
    metadata_: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSONB, nullable=True)
    email_sent: Mapped[bool] = mapped_column(default=False, server_default="false")
    webhook_sent: Mapped[bool] = mapped_column(default=False, server_default="false")
    resolved: Mapped[bool] = mapped_column(default=False, server_default="false")
    resolved_at: Mapped[datetime | None] = mapped_column(nullable=True)

    alias: Mapped["AliasModel"] = relationship("AliasModel", back_populates="alerts")

    def __repr__(self) -> str:
        return f"<AlertModel(alias_id={self.alias_id}, type={self.alert_type})>"
