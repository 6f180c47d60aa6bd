"""Tests for the Zilliqa Name Service resolver."""

from __future__ import annotations

import json

import pytest
from factories import BTC_BECH32
from fakes import mock_json_response

from aliasresolve.resolution.registries.zns import ZNS_REGISTRY, ZnsResolver

ZILLIQA = "https://zilliqa.test"
RESOLVER_CONTRACT = "0x" + "ab" * 20
ZIL_ADDRESS = "zil1qqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqq"


@pytest.fixture
def resolver(make_fetcher) -> ZnsResolver:
    return ZnsResolver(make_fetcher("zns"), ZILLIQA)


def registry_answer(label: str, resolver_address: str | None) -> dict:
    arguments = ["0xowner", resolver_address] if resolver_address else []
    return {"result": {"records": {label: {"arguments": arguments}}}}


class TestZnsResolver:
    """Tests for ZnsResolver."""

    def test_can_resolve(self, resolver: ZnsResolver):
        """Only .zil names are accepted."""
        assert resolver.can_resolve("Alice.zil")
        assert not resolver.can_resolve("alice.eth")

    async def test_resolve(self, resolver: ZnsResolver, respx_mock):
        """Registry then resolver contract state give the records."""
        route = respx_mock.post(ZILLIQA).mock(
            side_effect=[
                mock_json_response(registry_answer("alice", RESOLVER_CONTRACT)),
                mock_json_response(
                    {"result": {"address": ZIL_ADDRESS, "crypto": {"BTC": BTC_BECH32, "ETH": ""}}}
                ),
            ]
        )

        results = await resolver.resolve("alice.zil")

        first = json.loads(route.calls[0].request.content)
        assert first["method"] == "GetSmartContractSubState"
        assert first["params"] == [ZNS_REGISTRY, "records", ["alice"]]
        second = json.loads(route.calls[1].request.content)
        assert second["params"] == [RESOLVER_CONTRACT]

        assert [(r.currency, r.address) for r in results] == [
            ("zilliqa", ZIL_ADDRESS),
            ("bitcoin", BTC_BECH32),
        ]
        assert results[0].raw_data["resolver"] == RESOLVER_CONTRACT

    async def test_unregistered(self, resolver: ZnsResolver, respx_mock):
        """A label without a resolver contract yields nothing."""
        route = respx_mock.post(ZILLIQA).mock(
            return_value=mock_json_response(registry_answer("nobody", None))
        )

        assert await resolver.resolve("nobody.zil") == []
        assert route.call_count == 1

    async def test_chain_filter(self, resolver: ZnsResolver, respx_mock):
        """Only the requested chain is reported."""
        respx_mock.post(ZILLIQA).mock(
            side_effect=[
                mock_json_response(registry_answer("alice", RESOLVER_CONTRACT)),
                mock_json_response({"result": {"address": ZIL_ADDRESS, "crypto": {"BTC": BTC_BECH32}}}),
            ]
        )

        results = await resolver.resolve("alice.zil", "bitcoin")
        assert [r.address for r in results] == [BTC_BECH32]
