"""Repository implementations."""

from .alias import AliasHistoryRepository, AliasRepository, LookupRepository
from .base import BaseRepository
from .monitoring import AlertRepository, MonitoringRuleRepository, WebhookRepository

__all__ = [
    "AlertRepository",
    "AliasHistoryRepository",
    "AliasRepository",
    "BaseRepository",
    "LookupRepository",
    "MonitoringRuleRepository",
    "WebhookRepository",
]
