"""Tests for the DNS TXT resolver."""

from __future__ import annotations

import httpx
import pytest
from factories import BTC_BECH32, BTC_LEGACY, ETH_ADDRESS
from fakes import doh_answer, mock_json_response

from aliasresolve.core.types import SourceType
from aliasresolve.resolution.dns.doh import DohClient
from aliasresolve.resolution.dns.txt import DnsTxtResolver

DOH_URL = "https://doh.test/dns-query"


@pytest.fixture
def resolver(make_fetcher) -> DnsTxtResolver:
    return DnsTxtResolver(DohClient(make_fetcher("dns_txt"), DOH_URL))


def answer(respx_mock, *records: str, ad: bool = False):
    return respx_mock.get(DOH_URL).mock(return_value=mock_json_response(doh_answer(*records, ad=ad)))


class TestCanResolve:
    """Tests for DnsTxtResolver.can_resolve."""

    @pytest.mark.parametrize("alias", ["example.com", "Pay.Example.org", "brad.crypto"])
    def test_dotted_names(self, resolver: DnsTxtResolver, alias: str):
        """Any dotted name is a candidate domain."""
        assert resolver.can_resolve(alias)

    @pytest.mark.parametrize("alias", ["vitalik.eth", "welcome", "$alice"])
    def test_rejected(self, resolver: DnsTxtResolver, alias: str):
        """ENS names and single labels are not DNS domains here."""
        assert not resolver.can_resolve(alias)


class TestResolve:
    """Tests for DnsTxtResolver.resolve."""

    async def test_key_value_records(self, resolver: DnsTxtResolver, respx_mock):
        """bitcoin= and ethereum= records become candidates."""
        answer(respx_mock, f"bitcoin={BTC_BECH32}", f"ethereum={ETH_ADDRESS}", ad=True)

        results = await resolver.resolve("example.com")

        assert [(r.currency, r.address) for r in results] == [
            ("bitcoin", BTC_BECH32),
            ("ethereum", ETH_ADDRESS),
        ]
        assert all(r.source_type == SourceType.DNS_TXT for r in results)
        assert all(r.confidence == 0.75 for r in results)
        assert results[0].raw_data["dnssec"] is True
        assert results[0].raw_data["full_record"] == f"bitcoin={BTC_BECH32}"

    async def test_crypto_prefix_not_duplicated(self, resolver: DnsTxtResolver, respx_mock):
        """crypto:btc= is matched once, not again by the btc= pattern."""
        answer(respx_mock, f"crypto:btc={BTC_LEGACY}")

        results = await resolver.resolve("example.com")
        assert len(results) == 1
        assert results[0].address == BTC_LEGACY

    async def test_openalias(self, resolver: DnsTxtResolver, respx_mock):
        """OpenAlias records are understood."""
        answer(respx_mock, f"oa1:btc recipient_address={BTC_BECH32}; recipient_name=Alice;")

        results = await resolver.resolve("example.com")
        assert [(r.currency, r.address) for r in results] == [("bitcoin", BTC_BECH32)]
        assert results[0].raw_data["matched_pattern"] == "oa1:btc"

    async def test_invalid_address_dropped(self, resolver: DnsTxtResolver, respx_mock):
        """Addresses failing validation are never emitted."""
        answer(respx_mock, "bitcoin=notanaddress")

        assert await resolver.resolve("example.com") == []

    async def test_chain_filter(self, resolver: DnsTxtResolver, respx_mock):
        """Only the requested chain is returned."""
        answer(respx_mock, f"bitcoin={BTC_BECH32}", f"eth={ETH_ADDRESS}")

        results = await resolver.resolve("example.com", "eth")
        assert [r.currency for r in results] == ["ethereum"]

    async def test_no_records(self, resolver: DnsTxtResolver, respx_mock):
        """No TXT records means no candidates."""
        answer(respx_mock)

        assert await resolver.resolve("example.com") == []

    async def test_network_failure(self, resolver: DnsTxtResolver, respx_mock):
        """Transport errors become an empty result."""
        respx_mock.get(DOH_URL).mock(side_effect=httpx.ConnectError("refused"))

        assert await resolver.resolve("example.com") == []
