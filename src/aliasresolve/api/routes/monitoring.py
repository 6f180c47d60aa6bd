"""Revalidation and webhook registration endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from aliasresolve.api.dependencies import Scheduler, Store
from aliasresolve.api.schemas import (
    RegisterWebhookRequest,
    RevalidationResponse,
    WebhookRegistrationResponse,
)
from aliasresolve.monitoring.webhooks import generate_secret_token

router = APIRouter(tags=["monitoring"])


@router.post(
    "/revalidation/run",
    response_model=RevalidationResponse,
    operation_id="runRevalidation",
    summary="Revalidate stale aliases now",
)
async def run_revalidation(scheduler: Scheduler) -> RevalidationResponse:
    """Run one revalidation batch and report its counters."""
    summary = await scheduler.run_once()
    return RevalidationResponse.from_summary(summary)


@router.post(
    "/webhooks",
    response_model=WebhookRegistrationResponse,
    status_code=201,
    operation_id="registerWebhook",
    summary="Register an address-change webhook",
)
async def register_webhook(
    request: RegisterWebhookRequest,
    store: Store,
) -> WebhookRegistrationResponse:
    """
    Register a callback for an alias, creating the alias if needed.

    The returned secret token signs every delivery; it is only shown once.
    """
    alias = await store.register_alias(request.alias)
    secret = request.secret or generate_secret_token()
    webhook = await store.register_webhook(alias.id, str(request.callback_url), secret)
    return WebhookRegistrationResponse(
        webhook_id=webhook.id,
        alias=alias.alias_string,
        callback_url=webhook.callback_url,
        secret_token=secret,
    )
