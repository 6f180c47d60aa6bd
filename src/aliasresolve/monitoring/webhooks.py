"""Address-change notifications to registered webhooks."""

from __future__ import annotations

import asyncio
import logging
import secrets
from typing import TYPE_CHECKING, Any
from uuid import UUID

import httpx

from aliasresolve.core.models import WebhookRegistration, utcnow
from aliasresolve.core.types import WebhookEvent
from aliasresolve.monitoring.signing import encode_body, signed_headers

if TYPE_CHECKING:
    from aliasresolve.db.store import AliasStore

logger = logging.getLogger(__name__)


def generate_secret_token() -> str:
    """Random 32-byte hex secret handed to the webhook owner at registration."""
    return secrets.token_hex(32)


class WebhookNotifier:
    """
    Delivers ``alias.address.changed`` events.

    Each registration gets its own payload signed with its own secret token.
    Deliveries run concurrently; one failing endpoint does not affect the
    others.
    """

    def __init__(self, store: "AliasStore", client: httpx.AsyncClient) -> None:
        self._store = store
        self._client = client

    async def notify_address_change(
        self,
        alias_id: UUID,
        alias: str,
        old_address: str | None,
        new_address: str,
        currency: str | None,
    ) -> dict[str, Any]:
        webhooks = await self._store.list_active_webhooks(alias_id)
        if not webhooks:
            logger.debug(f"No active webhooks for {alias}")
            return {"total": 0, "successful": 0, "failed": 0, "results": []}

        logger.info(f"Triggering {len(webhooks)} webhooks for {alias}")
        results = await asyncio.gather(
            *(
                self._deliver(webhook, alias, old_address, new_address, currency)
                for webhook in webhooks
            )
        )

        successful = sum(1 for r in results if r["success"])
        summary = {
            "total": len(webhooks),
            "successful": successful,
            "failed": len(webhooks) - successful,
            "results": results,
        }
        logger.info(
            f"Webhook delivery for {alias}: {summary['successful']}/{summary['total']} succeeded"
        )
        return summary

    async def _deliver(
        self,
        webhook: WebhookRegistration,
        alias: str,
        old_address: str | None,
        new_address: str,
        currency: str | None,
    ) -> dict[str, Any]:
        payload = {
            "event": WebhookEvent.ADDRESS_CHANGED.value,
            "alias": alias,
            "old_address": old_address,
            "new_address": new_address,
            "currency": currency,
            "timestamp": utcnow().isoformat(),
            "webhook_id": str(webhook.id),
        }
        body = encode_body(payload)
        headers = signed_headers(body, webhook.secret_token, WebhookEvent.ADDRESS_CHANGED.value)

        try:
            response = await self._client.post(webhook.callback_url, content=body, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Webhook {webhook.id} delivery failed: {e}")
            return {"webhook_id": str(webhook.id), "status": 0, "success": False, "error": str(e)}

        logger.debug(f"Webhook {webhook.id} responded with {response.status_code}")
        try:
            await self._store.mark_webhook_triggered(webhook.id)
        except Exception:
            logger.exception(f"Failed to mark webhook {webhook.id} as triggered")

        return {
            "webhook_id": str(webhook.id),
            "status": response.status_code,
            "success": response.is_success,
        }
