"""Tests for the Namecoin resolver."""

from __future__ import annotations

import json

import pytest
from factories import BTC_LEGACY, ETH_ADDRESS
from fakes import mock_json_response

from aliasresolve.resolution.registries.namecoin import NamecoinResolver

NAMECOIN = "https://namecoin.test"


@pytest.fixture
def resolver(make_fetcher) -> NamecoinResolver:
    return NamecoinResolver(make_fetcher("namecoin"), NAMECOIN)


def name_route(respx_mock, body: dict, status_code: int = 200):
    return respx_mock.get(url__startswith=f"{NAMECOIN}/name/").mock(
        return_value=mock_json_response(body, status_code=status_code)
    )


class TestNamecoinResolver:
    """Tests for NamecoinResolver."""

    def test_can_resolve(self, resolver: NamecoinResolver):
        """Only .bit names are accepted."""
        assert resolver.can_resolve("example.bit")
        assert not resolver.can_resolve("example.com")

    async def test_json_string_value(self, resolver: NamecoinResolver, respx_mock):
        """Name values stored as JSON strings are decoded."""
        route = name_route(
            respx_mock,
            {"name": "d/example", "value": json.dumps({"btc": BTC_LEGACY, "eth": ETH_ADDRESS})},
        )

        results = await resolver.resolve("Example.bit")

        assert b"d%2Fexample.json" in route.calls.last.request.url.raw_path
        assert [(r.currency, r.address) for r in results] == [
            ("bitcoin", BTC_LEGACY),
            ("ethereum", ETH_ADDRESS),
        ]
        assert results[0].confidence == 0.85

    async def test_object_value(self, resolver: NamecoinResolver, respx_mock):
        """Object values are read directly; long keys win over tickers."""
        name_route(respx_mock, {"value": {"bitcoin": BTC_LEGACY, "btc": "ignored"}})

        results = await resolver.resolve("example.bit", "bitcoin")
        assert [r.address for r in results] == [BTC_LEGACY]

    async def test_non_json_value(self, resolver: NamecoinResolver, respx_mock):
        """Free-form values carry no addresses."""
        name_route(respx_mock, {"value": "just some text"})

        assert await resolver.resolve("example.bit") == []

    async def test_unknown_name(self, resolver: NamecoinResolver, respx_mock):
        """Missing names yield nothing."""
        name_route(respx_mock, {}, status_code=404)

        assert await resolver.resolve("nobody.bit") == []
