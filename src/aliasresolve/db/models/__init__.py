"""Database models."""

from .alias import AliasHistoryModel, AliasModel, LookupModel
from .monitoring import AlertModel, MonitoringRuleModel, WebhookModel

__all__ = [
    "AlertModel",
    "AliasHistoryModel",
    "AliasModel",
    "LookupModel",
    "MonitoringRuleModel",
    "WebhookModel",
]
