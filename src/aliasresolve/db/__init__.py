"""Database layer."""

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, create_engine, create_session_factory
from .models import (
    AlertModel,
    AliasHistoryModel,
    AliasModel,
    LookupModel,
    MonitoringRuleModel,
    WebhookModel,
)
from .session import DatabaseManager
from .store import AliasStore

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "create_engine",
    "create_session_factory",
    # Models
    "AlertModel",
    "AliasHistoryModel",
    "AliasModel",
    "LookupModel",
    "MonitoringRuleModel",
    "WebhookModel",
    # Session
    "DatabaseManager",
    # Store
    "AliasStore",
]
