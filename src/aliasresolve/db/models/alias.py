"""Alias database models: the alias record and its resolution history."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import CheckConstraint, Float, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from aliasresolve.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from aliasresolve.db.models.monitoring import AlertModel, MonitoringRuleModel, WebhookModel


class AliasModel(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    A registered alias and its current binding and proof state.

    Rows are created by registration or on first successful resolution.
    The proof columns (dns_verified, https_verified, dnssec_enabled,
    trust_score, last_verification_at) are only written by verification.
    """

    __tablename__ = "aliases"

    alias_string: Mapped[str] = mapped_column(String(500), nullable=False, unique=True)
    current_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    current_currency: Mapped[str | None] = mapped_column(String(50), nullable=True)
    current_source: Mapped[str | None] = mapped_column(String(50), nullable=True)
    last_resolved_at: Mapped[datetime | None] = mapped_column(nullable=True)

    verification_method: Mapped[str | None] = mapped_column(String(10), nullable=True)
    dns_verified: Mapped[bool] = mapped_column(default=False, server_default="false")
    https_verified: Mapped[bool] = mapped_column(default=False, server_default="false")
    dnssec_enabled: Mapped[bool] = mapped_column(default=False, server_default="false")
    trust_score: Mapped[int] = mapped_column(Integer, default=50, server_default="50")
    last_verification_at: Mapped[datetime | None] = mapped_column(nullable=True, index=True)

    owner_email: Mapped[str | None] = mapped_column(
        String(320),
        nullable=True,
        comment="Recipient for monitoring alert emails",
    )

    history: Mapped[list["AliasHistoryModel"]] = relationship(
        "AliasHistoryModel",
        back_populates="alias",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="AliasHistoryModel.resolved_at",
    )
    rules: Mapped[list["MonitoringRuleModel"]] = relationship(
        "MonitoringRuleModel",
        back_populates="alias",
        lazy="select",
        cascade="all, delete-orphan",
    )
    webhooks: Mapped[list["WebhookModel"]] = relationship(
        "WebhookModel",
        back_populates="alias",
        lazy="select",
        cascade="all, delete-orphan",
    )
    alerts: Mapped[list["AlertModel"]] = relationship(
        "AlertModel",
        back_populates="alias",
        lazy="select",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("trust_score >= 0 AND trust_score <= 100", name="valid_trust_score"),
        CheckConstraint(
            "verification_method IS NULL OR verification_method IN ('dns', 'https', 'both')",
            name="valid_verification_method",
        ),
    )

    def __repr__(self) -> str:
        return f"<AliasModel(id={self.id}, alias='{self.alias_string}', score={self.trust_score})>"


class AliasHistoryModel(Base, UUIDPrimaryKeyMixin):
    """One resolved (currency, address) observed for an alias."""

    __tablename__ = "alias_history"

    alias_id: Mapped[UUID] = mapped_column(
        ForeignKey("aliases.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    source_type: Mapped[str] = mapped_column(String(50), nullable=False)
    currency: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    confidence: Mapped[float | None] = mapped_column(Float, nullable=True)
    raw_data: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    resolved_at: Mapped[datetime] = mapped_column(nullable=False)

    alias: Mapped["AliasModel"] = relationship("AliasModel", back_populates="history")

    def __repr__(self) -> str:
        return f"<AliasHistoryModel(alias_id={self.alias_id}, {self.currency}={self.address})>"


class LookupModel(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Best-effort log row written for every resolve request."""

    __tablename__ = "lookups"

    alias: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    chain: Mapped[str] = mapped_column(String(50), nullable=False)
    resolved_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    alias_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    confidence: Mapped[float | None] = mapped_column(Float, nullable=True)
    proof_metadata: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    error_message: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    __table_args__ = (Index("ix_lookups_created_at", "created_at"),)

    def __repr__(self) -> str:
        return f"<LookupModel(alias='{self.alias}', chain={self.chain})>"
