"""Tests for the WebFinger resolver."""

from __future__ import annotations

import pytest
from factories import BTC_BECH32, ETH_ADDRESS
from fakes import mock_json_response

from aliasresolve.resolution.identity.webfinger import WebFingerResolver

WEBFINGER_URL = "https://example.com/.well-known/webfinger"


@pytest.fixture
def resolver(make_fetcher) -> WebFingerResolver:
    return WebFingerResolver(make_fetcher("webfinger"))


@pytest.fixture
def jrd() -> dict:
    return {
        "subject": "acct:alice@example.com",
        "links": [
            {"rel": "payment", "href": f"bitcoin:{BTC_BECH32}"},
            {"rel": "self", "href": "https://example.com/users/alice"},
            {"rel": "http://example.com/rel/wallet", "properties": {"ethereum_address": ETH_ADDRESS}},
        ],
    }


class TestWebFingerResolver:
    """Tests for WebFingerResolver."""

    @pytest.mark.parametrize("alias", ["acct:alice@example.com", "alice@example.com"])
    def test_can_resolve(self, resolver: WebFingerResolver, alias: str):
        """acct: URIs and email-style identifiers are accepted."""
        assert resolver.can_resolve(alias)

    async def test_links_and_properties(self, resolver: WebFingerResolver, respx_mock, jrd):
        """Payment links and address properties become candidates."""
        route = respx_mock.get(WEBFINGER_URL).mock(return_value=mock_json_response(jrd))

        results = await resolver.resolve("alice@example.com")

        assert route.calls.last.request.url.params["resource"] == "acct:alice@example.com"
        assert [(r.currency, r.address, r.confidence) for r in results] == [
            ("bitcoin", BTC_BECH32, 0.80),
            ("ethereum", ETH_ADDRESS, 0.78),
        ]
        assert results[1].raw_data["property"] == "ethereum_address"

    async def test_acct_resource_passed_through(self, resolver: WebFingerResolver, respx_mock, jrd):
        """acct: aliases are queried as-is."""
        route = respx_mock.get(WEBFINGER_URL).mock(return_value=mock_json_response(jrd))

        await resolver.resolve("acct:alice@Example.com")
        assert route.calls.last.request.url.params["resource"] == "acct:alice@Example.com"

    async def test_chain_filter(self, resolver: WebFingerResolver, respx_mock, jrd):
        """Only the requested chain is returned."""
        respx_mock.get(WEBFINGER_URL).mock(return_value=mock_json_response(jrd))

        results = await resolver.resolve("alice@example.com", "ethereum")
        assert [r.currency for r in results] == ["ethereum"]

    async def test_not_found(self, resolver: WebFingerResolver, respx_mock):
        """A 404 JRD yields nothing."""
        respx_mock.get(WEBFINGER_URL).mock(return_value=mock_json_response({}, status_code=404))

        assert await resolver.resolve("alice@example.com") == []

    async def test_malformed_links_skipped(self, resolver: WebFingerResolver, respx_mock):
        """Non-object links and odd field types are ignored, not raised."""
        jrd = {
            "subject": "acct:alice@example.com",
            "links": [
                "bitcoin:not-a-link-object",
                None,
                {"rel": "payment", "href": 42},
                {"rel": "wallet", "properties": ["bitcoin_address"]},
                {"rel": "payment", "href": f"bitcoin:{BTC_BECH32}"},
            ],
        }
        respx_mock.get(WEBFINGER_URL).mock(return_value=mock_json_response(jrd))

        results = await resolver.resolve("alice@example.com")
        assert [(r.currency, r.address) for r in results] == [("bitcoin", BTC_BECH32)]

    async def test_non_object_document(self, resolver: WebFingerResolver, respx_mock):
        """A JSON array body yields nothing."""
        respx_mock.get(WEBFINGER_URL).mock(return_value=mock_json_response(["acct:alice@example.com"]))

        assert await resolver.resolve("alice@example.com") == []
