"""Tests for the HTTPS ownership proof."""

from __future__ import annotations

import httpx
import pytest
from factories import BTC_BECH32, BTC_LEGACY, ETH_ADDRESS
from httpx import Response

from aliasresolve.verification.https import HttpsProofChecker

ALIAS_JSON = "https://example.com/.well-known/alias.json"
OPENALIAS_TXT = "https://example.com/.well-known/openalias.txt"


@pytest.fixture
def checker(make_fetcher) -> HttpsProofChecker:
    return HttpsProofChecker(make_fetcher("verification_https"))


class TestAliasJson:
    """Tests for the alias.json document."""

    async def test_verified(self, checker: HttpsProofChecker, respx_mock):
        """A matching addresses map verifies."""
        respx_mock.get(ALIAS_JSON).mock(
            return_value=Response(200, json={"addresses": {"BTC": BTC_BECH32, "ethereum": ETH_ADDRESS}})
        )

        check = await checker.check("example.com", {"bitcoin": BTC_BECH32})

        assert check.verified
        assert check.found_addresses == {"bitcoin": BTC_BECH32}
        assert check.warnings == []

    async def test_wrong_content_type_warns(self, checker: HttpsProofChecker, respx_mock):
        """A non-JSON content type is a warning only."""
        respx_mock.get(ALIAS_JSON).mock(
            return_value=Response(
                200,
                content=f'{{"addresses": {{"bitcoin": "{BTC_BECH32}"}}}}'.encode(),
                headers={"content-type": "text/plain"},
            )
        )

        check = await checker.check("example.com", {"bitcoin": BTC_BECH32})

        assert check.verified
        assert check.warnings == ["alias.json should be served with Content-Type: application/json"]

    async def test_mismatch(self, checker: HttpsProofChecker, respx_mock):
        """A different address fails verification."""
        respx_mock.get(ALIAS_JSON).mock(
            return_value=Response(200, json={"addresses": {"bitcoin": BTC_LEGACY}})
        )

        check = await checker.check("example.com", {"bitcoin": BTC_BECH32})

        assert not check.verified
        assert check.errors

    async def test_missing_addresses_field(self, checker: HttpsProofChecker, respx_mock):
        """Documents without an addresses map are malformed."""
        respx_mock.get(ALIAS_JSON).mock(return_value=Response(200, json={"bitcoin": BTC_BECH32}))

        check = await checker.check("example.com", {"bitcoin": BTC_BECH32})
        assert check.errors == ['Invalid alias.json format: missing or invalid "addresses" field']

    async def test_invalid_json(self, checker: HttpsProofChecker, respx_mock):
        """Unparseable bodies are malformed."""
        respx_mock.get(ALIAS_JSON).mock(
            return_value=Response(200, content=b"{not json", headers={"content-type": "application/json"})
        )

        check = await checker.check("example.com", {"bitcoin": BTC_BECH32})
        assert check.errors == ["Invalid alias.json format: body is not valid JSON"]

    async def test_server_error(self, checker: HttpsProofChecker, respx_mock):
        """Non-404 error statuses fail the channel."""
        respx_mock.get(ALIAS_JSON).mock(return_value=Response(500))

        check = await checker.check("example.com", {"bitcoin": BTC_BECH32})
        assert check.errors == ["HTTPS verification failed: HTTP 500"]

    async def test_connection_error(self, checker: HttpsProofChecker, respx_mock):
        """Transport failures are reported, not raised."""
        respx_mock.get(ALIAS_JSON).mock(side_effect=httpx.ConnectError("refused"))

        check = await checker.check("example.com", {"bitcoin": BTC_BECH32})
        assert check.errors[0].startswith("HTTPS verification error:")


class TestOpenAliasTxtFallback:
    """Tests for the openalias.txt fallback."""

    async def test_fallback_verifies(self, checker: HttpsProofChecker, respx_mock):
        """Without alias.json the text file is checked."""
        respx_mock.get(ALIAS_JSON).mock(return_value=Response(404))
        respx_mock.get(OPENALIAS_TXT).mock(
            return_value=Response(
                200,
                text=f"# comment\noa1:btc recipient_address={BTC_BECH32}; recipient_name=Example;\n",
            )
        )

        check = await checker.check("example.com", {"bitcoin": BTC_BECH32})

        assert check.verified
        assert check.warnings[0] == "Serving openalias.txt; alias.json is the preferred format"

    async def test_neither_document(self, checker: HttpsProofChecker, respx_mock):
        """Missing both documents is reported as alias.json not found."""
        respx_mock.get(ALIAS_JSON).mock(return_value=Response(404))
        respx_mock.get(OPENALIAS_TXT).mock(return_value=Response(404))

        check = await checker.check("example.com", {"bitcoin": BTC_BECH32})

        assert not check.verified
        assert check.errors == ["alias.json not found at .well-known/alias.json"]
