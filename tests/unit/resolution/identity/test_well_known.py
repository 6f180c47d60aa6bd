"""Tests for the .well-known document resolver."""

from __future__ import annotations

import httpx
import pytest
from factories import BTC_BECH32, ETH_ADDRESS
from fakes import mock_json_response

from aliasresolve.resolution.identity.well_known import WellKnownResolver

BASE = "https://example.com/.well-known"


@pytest.fixture
def resolver(make_fetcher) -> WellKnownResolver:
    return WellKnownResolver(make_fetcher("well_known"))


class TestWellKnownResolver:
    """Tests for WellKnownResolver."""

    @pytest.mark.parametrize(
        "alias,expected",
        [("example.com", True), ("pay.example.io", True), ("alice@example.com", False), ("example.bit", False)],
    )
    def test_can_resolve(self, resolver: WellKnownResolver, alias: str, expected: bool):
        """Common-TLD domains without a user part are accepted."""
        assert resolver.can_resolve(alias) is expected

    async def test_addresses_map(self, resolver: WellKnownResolver, respx_mock):
        """An addresses map is read with ticker normalization."""
        respx_mock.get(f"{BASE}/crypto.json").mock(
            return_value=mock_json_response({"addresses": {"BTC": BTC_BECH32, "eth": ETH_ADDRESS}})
        )

        results = await resolver.resolve("example.com")

        assert [(r.currency, r.address) for r in results] == [
            ("bitcoin", BTC_BECH32),
            ("ethereum", ETH_ADDRESS),
        ]
        assert results[0].confidence == 0.82
        assert results[0].raw_data["endpoint"] == "/.well-known/crypto.json"

    async def test_falls_through_to_next_endpoint(self, resolver: WellKnownResolver, respx_mock):
        """Missing or empty documents move on to the next endpoint."""
        respx_mock.get(f"{BASE}/crypto.json").mock(return_value=mock_json_response({}, status_code=404))
        respx_mock.get(f"{BASE}/payment.json").mock(side_effect=httpx.ConnectError("refused"))
        wallet = respx_mock.get(f"{BASE}/wallet.json").mock(
            return_value=mock_json_response({"bitcoin": BTC_BECH32})
        )

        results = await resolver.resolve("example.com")

        assert wallet.called
        assert [r.raw_data["endpoint"] for r in results] == ["/.well-known/wallet.json"]

    async def test_stops_at_first_hit(self, resolver: WellKnownResolver, respx_mock):
        """Later endpoints are not fetched once one yields addresses."""
        respx_mock.get(f"{BASE}/crypto.json").mock(
            return_value=mock_json_response({"ethereum": ETH_ADDRESS})
        )
        payment = respx_mock.get(f"{BASE}/payment.json").mock(return_value=mock_json_response({}))

        await resolver.resolve("example.com")
        assert not payment.called

    async def test_nothing_found(self, resolver: WellKnownResolver, respx_mock):
        """No document with addresses yields nothing."""
        respx_mock.get(url__startswith=BASE).mock(return_value=mock_json_response({}, status_code=404))

        assert await resolver.resolve("example.com") == []
