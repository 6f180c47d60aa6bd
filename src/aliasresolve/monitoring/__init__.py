"""Revalidation, alerting and webhook notification."""

from aliasresolve.monitoring.alerts import (
    AlertDispatcher,
    AlertEvent,
    EmailAlerter,
    WebhookAlerter,
)
from aliasresolve.monitoring.revalidation import (
    RevalidationConfig,
    RevalidationScheduler,
    should_alert,
)
from aliasresolve.monitoring.signing import sign_payload
from aliasresolve.monitoring.webhooks import WebhookNotifier, generate_secret_token

__all__ = [
    "AlertDispatcher",
    "AlertEvent",
    "EmailAlerter",
    "RevalidationConfig",
    "RevalidationScheduler",
    "WebhookAlerter",
    "WebhookNotifier",
    "generate_secret_token",
    "should_alert",
    "sign_payload",
]
