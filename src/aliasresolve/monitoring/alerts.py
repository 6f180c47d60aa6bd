"""Alert delivery over email (Resend) and signed webhooks."""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

import httpx

from aliasresolve.core.exceptions import AlertDeliveryError
from aliasresolve.core.models import AliasRecord, MonitoringRule, VerificationResult, utcnow
from aliasresolve.core.types import AlertChannel, AlertType, WebhookEvent
from aliasresolve.monitoring.signing import encode_body, signed_headers

if TYPE_CHECKING:
    from aliasresolve.config import AliasResolveSettings

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"

ALERT_TITLES = {
    AlertType.ADDRESS_CHANGED: "Address Change Detected",
    AlertType.TRUST_SCORE_DROP: "Trust Score Decreased",
    AlertType.VERIFICATION_FAILED: "Verification Status Update",
}


@dataclass
class AlertEvent:
    """Everything an alert channel needs to describe one regression."""

    alias_id: UUID
    alias: str
    previous_score: int
    current_score: int
    old_address: str | None = None
    new_address: str | None = None
    currency: str | None = None
    dns_verified: bool = False
    https_verified: bool = False
    dnssec_enabled: bool = False
    errors: list[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=utcnow)

    @classmethod
    def from_verification(
        cls,
        alias: AliasRecord,
        result: VerificationResult,
        new_address: str | None = None,
    ) -> "AlertEvent":
        return cls(
            alias_id=alias.id,
            alias=alias.alias_string,
            previous_score=alias.trust_score,
            current_score=result.trust_score,
            old_address=alias.current_address,
            new_address=new_address or alias.current_address,
            currency=alias.current_currency,
            dns_verified=result.dns_verified,
            https_verified=result.https_verified,
            dnssec_enabled=result.dnssec_enabled,
            errors=list(result.errors),
        )

    @property
    def address_changed(self) -> bool:
        return bool(self.old_address and self.new_address and self.old_address != self.new_address)

    @property
    def alert_type(self) -> AlertType:
        if self.address_changed:
            return AlertType.ADDRESS_CHANGED
        if self.current_score < self.previous_score:
            return AlertType.TRUST_SCORE_DROP
        return AlertType.VERIFICATION_FAILED

    @property
    def title(self) -> str:
        return ALERT_TITLES[self.alert_type]

    def message(self) -> str:
        if self.address_changed:
            return f"Address for {self.alias} changed from {self.old_address} to {self.new_address}"
        return f"Trust score for {self.alias} went from {self.previous_score} to {self.current_score}"


def _score_class(score: int) -> str:
    if score >= 70:
        return "trust-high"
    if score >= 40:
        return "trust-medium"
    return "trust-low"


def _mark(flag: bool) -> str:
    return "yes" if flag else "no"


def render_alert_email(event: AlertEvent, dashboard_url: str) -> str:
    """HTML body for an alert email."""
    alias = html.escape(event.alias)
    sections: list[str] = []

    if event.address_changed:
        sections.append(
            '<div class="alert-box"><strong>Address Change Detected</strong>'
            "<p>The resolved address for this alias has changed.</p></div>"
        )
    if event.current_score < event.previous_score:
        sections.append(
            '<div class="alert-box"><strong>Trust Score Decreased</strong>'
            f"<p>The trust score has dropped from {event.previous_score} "
            f"to {event.current_score}.</p></div>"
        )

    if event.address_changed:
        address_rows = (
            f'<div class="label">Previous Address</div>'
            f'<div class="value">{html.escape(event.old_address or "")}</div>'
            f'<div class="label">New Address</div>'
            f'<div class="value">{html.escape(event.new_address or "")}</div>'
        )
    else:
        address_rows = (
            f'<div class="label">Current Address</div>'
            f'<div class="value">{html.escape(event.new_address or "Not resolved")}</div>'
        )

    score = f'<span class="{_score_class(event.current_score)}">{event.current_score}</span>'
    if event.previous_score != event.current_score:
        score = (
            f'<span class="{_score_class(event.previous_score)}">{event.previous_score}</span>'
            f" &rarr; {score}"
        )

    return (
        "<!DOCTYPE html><html><body>"
        f"<h1>{event.title}</h1><p>Alias Monitoring Alert for {alias}</p>"
        f"{''.join(sections)}"
        f'<div class="label">Alias</div><div class="value">{alias}</div>'
        f"{address_rows}"
        f'<div class="label">Trust Score</div><div class="value">{score}</div>'
        '<div class="label">Verification Status</div><div class="value">'
        f"DNS TXT: {_mark(event.dns_verified)}<br>"
        f"HTTPS JSON: {_mark(event.https_verified)}<br>"
        f"DNSSEC: {_mark(event.dnssec_enabled)}</div>"
        f'<p><a href="{html.escape(dashboard_url)}/dashboard/aliases">View in Dashboard</a></p>'
        "<p>This is an automated alert from your AliasResolve monitoring system.</p>"
        "</body></html>"
    )


class EmailAlerter:
    """Sends alert emails through the Resend HTTP API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str | None,
        sender: str,
        dashboard_url: str,
        api_url: str = RESEND_API_URL,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._sender = sender
        self._dashboard_url = dashboard_url.rstrip("/")
        self._api_url = api_url

    async def send(self, to: str, event: AlertEvent) -> None:
        if not self._api_key:
            raise AlertDeliveryError("Email delivery is not configured", channel=AlertChannel.EMAIL)

        payload = {
            "from": self._sender,
            "to": [to],
            "subject": f"{event.title}: {event.alias}",
            "html": render_alert_email(event, self._dashboard_url),
        }
        try:
            response = await self._client.post(
                self._api_url,
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AlertDeliveryError(f"Email delivery failed: {e}", channel=AlertChannel.EMAIL) from e

        if not response.is_success:
            raise AlertDeliveryError(
                f"Email provider returned HTTP {response.status_code}",
                channel=AlertChannel.EMAIL,
                status_code=response.status_code,
            )
        logger.info(f"Alert email sent for {event.alias} to {to}")


class WebhookAlerter:
    """Posts HMAC-signed alert payloads to a monitoring rule's webhook URL."""

    def __init__(self, client: httpx.AsyncClient, signing_secret: str | None) -> None:
        self._client = client
        self._secret = signing_secret

    @staticmethod
    def payload(event: AlertEvent) -> dict:
        webhook_event = (
            WebhookEvent.ADDRESS_CHANGED if event.address_changed else WebhookEvent.TRUST_SCORE_DROP
        )
        return {
            "event": webhook_event.value,
            "alias": event.alias,
            "previous_score": event.previous_score,
            "current_score": event.current_score,
            "old_address": event.old_address,
            "new_address": event.new_address,
            "currency": event.currency,
            "errors": event.errors,
            "timestamp": event.timestamp.isoformat(),
        }

    async def send(self, url: str, event: AlertEvent) -> None:
        if not self._secret:
            raise AlertDeliveryError(
                "Webhook signing secret is not configured",
                channel=AlertChannel.WEBHOOK,
            )

        payload = self.payload(event)
        body = encode_body(payload)
        try:
            response = await self._client.post(
                url,
                content=body,
                headers=signed_headers(body, self._secret, payload["event"]),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AlertDeliveryError(
                f"Webhook delivery failed: {e}", channel=AlertChannel.WEBHOOK
            ) from e

        if not response.is_success:
            raise AlertDeliveryError(
                f"Webhook returned HTTP {response.status_code}",
                channel=AlertChannel.WEBHOOK,
                status_code=response.status_code,
            )
        logger.info(f"Alert webhook delivered for {event.alias} to {url}")


@dataclass
class DispatchReport:
    """Per-channel delivery counts for one rule."""

    delivered: list[AlertChannel] = field(default_factory=list)
    failures: int = 0

    @property
    def email_sent(self) -> bool:
        return AlertChannel.EMAIL in self.delivered

    @property
    def webhook_sent(self) -> bool:
        return AlertChannel.WEBHOOK in self.delivered


class AlertDispatcher:
    """
    Fans an alert out to the channels a monitoring rule enables.

    Channels are attempted independently; a failure on one is logged and
    counted and never prevents the other.
    """

    def __init__(self, email: EmailAlerter, webhook: WebhookAlerter) -> None:
        self._email = email
        self._webhook = webhook

    @classmethod
    def from_settings(
        cls,
        settings: "AliasResolveSettings",
        client: httpx.AsyncClient,
    ) -> "AlertDispatcher":
        return cls(
            EmailAlerter(
                client,
                api_key=settings.resend_api_key,
                sender=settings.alert_email_from,
                dashboard_url=settings.dashboard_url,
            ),
            WebhookAlerter(client, settings.webhook_signing_secret),
        )

    async def dispatch(
        self,
        rule: MonitoringRule,
        event: AlertEvent,
        owner_email: str | None,
    ) -> DispatchReport:
        report = DispatchReport()

        if rule.alert_email:
            if owner_email:
                await self._attempt(report, AlertChannel.EMAIL, self._email.send(owner_email, event))
            else:
                logger.warning(f"Rule {rule.id} wants email alerts but {event.alias} has no owner email")

        if rule.alert_webhook_url:
            await self._attempt(
                report,
                AlertChannel.WEBHOOK,
                self._webhook.send(rule.alert_webhook_url, event),
            )

        return report

    async def _attempt(self, report: DispatchReport, channel: AlertChannel, delivery) -> None:
        try:
            await delivery
        except AlertDeliveryError as e:
            logger.warning(f"Alert delivery over {channel} failed: {e}")
            report.failures += 1
        except Exception:
            logger.exception(f"Unexpected error delivering alert over {channel}")
            report.failures += 1
        else:
            report.delivered.append(channel)
