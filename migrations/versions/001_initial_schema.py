"""Initial schema for aliasresolve.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("gen_random_uuid()"),
        primary_key=True,
    )


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    if nullable:
        return sa.Column(name, sa.DateTime(timezone=True), nullable=True)
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def _alias_fk(ondelete: str = "CASCADE") -> sa.Column:
    return sa.Column(
        "alias_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("aliases.id", ondelete=ondelete),
        nullable=False,
    )


def upgrade() -> None:
    # gen_random_uuid() lives in pgcrypto before PostgreSQL 13
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    op.create_table(
        "aliases",
        _id(),
        sa.Column("alias_string", sa.String(500), nullable=False),
        sa.Column("current_address", sa.String(500), nullable=True),
        sa.Column("current_currency", sa.String(50), nullable=True),
        sa.Column("current_source", sa.String(50), nullable=True),
        _timestamp("last_resolved_at", nullable=True),
        sa.Column("verification_method", sa.String(10), nullable=True),
        sa.Column("dns_verified", sa.Boolean, server_default="false", nullable=False),
        sa.Column("https_verified", sa.Boolean, server_default="false", nullable=False),
        sa.Column("dnssec_enabled", sa.Boolean, server_default="false", nullable=False),
        sa.Column("trust_score", sa.Integer, server_default="50", nullable=False),
        _timestamp("last_verification_at", nullable=True),
        sa.Column("owner_email", sa.String(320), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("alias_string", name="uq_aliases_alias_string"),
        sa.CheckConstraint(
            "trust_score >= 0 AND trust_score <= 100",
            name="ck_aliases_valid_trust_score",
        ),
        sa.CheckConstraint(
            "verification_method IS NULL OR verification_method IN ('dns', 'https', 'both')",
            name="ck_aliases_valid_verification_method",
        ),
    )
    op.create_index(
        "ix_aliases_last_verification_at", "aliases", ["last_verification_at"]
    )
    op.create_index(
        "ix_aliases_alias_string_lower", "aliases", [sa.text("lower(alias_string)")]
    )

    op.create_table(
        "alias_history",
        _id(),
        _alias_fk(),
        sa.Column("source_type", sa.String(50), nullable=False),
        sa.Column("currency", sa.String(50), nullable=False),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("confidence", sa.Float, nullable=True),
        sa.Column("raw_data", postgresql.JSONB, nullable=True),
        _timestamp("resolved_at"),
    )
    op.create_index("ix_alias_history_alias_id", "alias_history", ["alias_id"])

    op.create_table(
        "lookups",
        _id(),
        sa.Column("alias", sa.String(500), nullable=False),
        sa.Column("chain", sa.String(50), nullable=False),
        sa.Column("resolved_address", sa.String(500), nullable=True),
        sa.Column("alias_type", sa.String(50), nullable=True),
        sa.Column("confidence", sa.Float, nullable=True),
        sa.Column("proof_metadata", postgresql.JSONB, nullable=True),
        sa.Column("error_message", sa.String(1000), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_lookups_alias", "lookups", ["alias"])
    op.create_index("ix_lookups_created_at", "lookups", ["created_at"])

    op.create_table(
        "monitoring_rules",
        _id(),
        _alias_fk(),
        sa.Column("trust_threshold", sa.Integer, server_default="70", nullable=False),
        sa.Column("alert_email", sa.Boolean, server_default="true", nullable=False),
        sa.Column("alert_webhook_url", sa.String(2000), nullable=True),
        sa.Column("enabled", sa.Boolean, server_default="true", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.CheckConstraint(
            "trust_threshold >= 0 AND trust_threshold <= 100",
            name="ck_monitoring_rules_valid_trust_threshold",
        ),
    )
    op.create_index("ix_monitoring_rules_alias_id", "monitoring_rules", ["alias_id"])

    op.create_table(
        "webhooks",
        _id(),
        _alias_fk(),
        sa.Column("callback_url", sa.String(2000), nullable=False),
        sa.Column("secret_token", sa.String(128), nullable=False),
        sa.Column("is_active", sa.Boolean, server_default="true", nullable=False),
        _timestamp("last_triggered_at", nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_webhooks_alias_id", "webhooks", ["alias_id"])

    op.create_table(
        "alerts",
        _id(),
        _alias_fk(),
        sa.Column(
            "rule_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("monitoring_rules.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("alert_type", sa.String(50), nullable=False),
        sa.Column("severity", sa.String(20), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("metadata", postgresql.JSONB, nullable=True),
        sa.Column("email_sent", sa.Boolean, server_default="false", nullable=False),
        sa.Column("webhook_sent", sa.Boolean, server_default="false", nullable=False),
        sa.Column("resolved", sa.Boolean, server_default="false", nullable=False),
        _timestamp("resolved_at", nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_alerts_alias_id", "alerts", ["alias_id"])


def downgrade() -> None:
    op.drop_table("alerts")
    op.drop_table("webhooks")
    op.drop_table("monitoring_rules")
    op.drop_table("lookups")
    op.drop_table("alias_history")
    op.drop_table("aliases")
