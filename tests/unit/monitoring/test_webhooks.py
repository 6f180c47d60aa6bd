"""Tests for address-change webhook notifications."""

from __future__ import annotations

import json

import httpx
import pytest
from factories import BTC_BECH32, BTC_LEGACY, make_alias_record
from fakes import FakeStore
from httpx import Response

from aliasresolve.monitoring.signing import EVENT_HEADER, SIGNATURE_HEADER, sign_payload
from aliasresolve.monitoring.webhooks import WebhookNotifier, generate_secret_token

HOOK_A = "https://a.test/hook"
HOOK_B = "https://b.test/hook"


@pytest.fixture
def alias(fake_store: FakeStore):
    return fake_store.add_alias(make_alias_record())


@pytest.fixture
def notifier(fake_store: FakeStore, http_client) -> WebhookNotifier:
    return WebhookNotifier(fake_store, http_client)


async def notify(notifier: WebhookNotifier, alias) -> dict:
    return await notifier.notify_address_change(
        alias.id, alias.alias_string, BTC_BECH32, BTC_LEGACY, "bitcoin"
    )


class TestGenerateSecretToken:
    def test_token_shape(self):
        """Tokens are 64 hex characters and unique."""
        token = generate_secret_token()
        assert len(token) == 64
        int(token, 16)
        assert generate_secret_token() != token


class TestWebhookNotifier:
    """Tests for WebhookNotifier."""

    async def test_no_webhooks(self, notifier, alias):
        """Nothing registered means nothing sent."""
        assert await notify(notifier, alias) == {"total": 0, "successful": 0, "failed": 0, "results": []}

    async def test_signed_per_registration(self, notifier, fake_store, alias, respx_mock):
        """Each webhook gets a payload signed with its own secret."""
        hook = fake_store.add_webhook(alias.id, HOOK_A, secret="a" * 64)
        route = respx_mock.post(HOOK_A).mock(return_value=Response(200))

        summary = await notify(notifier, alias)

        assert summary["total"] == 1
        assert summary["successful"] == 1
        request = route.calls.last.request
        assert request.headers[SIGNATURE_HEADER] == sign_payload(request.content, "a" * 64)
        assert request.headers[EVENT_HEADER] == "alias.address.changed"
        payload = json.loads(request.content)
        assert payload["event"] == "alias.address.changed"
        assert payload["old_address"] == BTC_BECH32
        assert payload["new_address"] == BTC_LEGACY
        assert payload["webhook_id"] == str(hook.id)
        assert fake_store.triggered == [hook.id]

    async def test_partial_failure(self, notifier, fake_store, alias, respx_mock):
        """One failing endpoint does not affect the others."""
        fake_store.add_webhook(alias.id, HOOK_A)
        fake_store.add_webhook(alias.id, HOOK_B)
        respx_mock.post(HOOK_A).mock(side_effect=httpx.ConnectError("refused"))
        respx_mock.post(HOOK_B).mock(return_value=Response(200))

        summary = await notify(notifier, alias)

        assert summary["total"] == 2
        assert summary["successful"] == 1
        assert summary["failed"] == 1
        statuses = sorted(r["status"] for r in summary["results"])
        assert statuses == [0, 200]

    async def test_error_status_is_failure(self, notifier, fake_store, alias, respx_mock):
        """A non-2xx answer counts as failed but marks the hook triggered."""
        hook = fake_store.add_webhook(alias.id, HOOK_A)
        respx_mock.post(HOOK_A).mock(return_value=Response(500))

        summary = await notify(notifier, alias)

        assert summary["failed"] == 1
        assert summary["results"][0]["status"] == 500
        assert fake_store.triggered == [hook.id]

    async def test_inactive_webhooks_skipped(self, notifier, fake_store, alias, respx_mock):
        """Deactivated registrations are not notified."""
        hook = fake_store.add_webhook(alias.id, HOOK_A)
        fake_store.webhooks[0] = hook.model_copy(update={"active": False})

        summary = await notify(notifier, alias)

        assert summary["total"] == 0
        assert not respx_mock.calls

    async def test_malformed_callback_url(self, notifier, fake_store, alias, respx_mock):
        """An unparseable callback URL fails alone."""
        fake_store.add_webhook(alias.id, "http://[::1/hook")
        fake_store.add_webhook(alias.id, HOOK_B)
        respx_mock.post(HOOK_B).mock(return_value=Response(200))

        summary = await notify(notifier, alias)

        assert summary["successful"] == 1
        assert summary["failed"] == 1
        assert sorted(r["status"] for r in summary["results"]) == [0, 200]
