"""Tests for the verification engine."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from factories import BTC_BECH32

from aliasresolve.core.models import ChannelCheck
from aliasresolve.core.types import VerificationMethod
from aliasresolve.verification.engine import VerificationEngine, normalize_domain

EXPECTED = {"bitcoin": BTC_BECH32}


def engine_with(dns: ChannelCheck | Exception, https: ChannelCheck | Exception):
    dns_checker = AsyncMock()
    https_checker = AsyncMock()
    dns_checker.check.side_effect = [dns]
    https_checker.check.side_effect = [https]
    return VerificationEngine(dns_checker, https_checker), dns_checker, https_checker


class TestNormalizeDomain:
    """Tests for normalize_domain."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Example.COM", "example.com"),
            ("https://example.com/", "example.com"),
            ("http://example.com/path", "example.com"),
            ("  example.com  ", "example.com"),
        ],
    )
    def test_normalize(self, value: str, expected: str):
        """Scheme, path and casing are stripped."""
        assert normalize_domain(value) == expected


class TestVerificationEngine:
    """Tests for VerificationEngine.verify."""

    async def test_dns_only(self):
        """DNS method runs only the DNS channel."""
        engine, dns, https = engine_with(ChannelCheck(verified=True, dnssec=True), ChannelCheck())

        result = await engine.verify("https://Example.com/", VerificationMethod.DNS, EXPECTED)

        dns.check.assert_awaited_once_with("example.com", EXPECTED)
        https.check.assert_not_awaited()
        assert result.success
        assert result.dns_verified and result.dnssec_enabled
        assert result.trust_score == 80
        assert result.warnings == []

    async def test_https_only(self):
        """HTTPS method runs only the HTTPS channel."""
        engine, dns, https = engine_with(ChannelCheck(), ChannelCheck(verified=True))

        result = await engine.verify("example.com", "https", EXPECTED)

        dns.check.assert_not_awaited()
        assert result.success
        assert result.method == VerificationMethod.HTTPS
        assert result.trust_score == 65

    async def test_both_full_marks(self):
        """Both channels verified with DNSSEC score 100."""
        engine, _, _ = engine_with(
            ChannelCheck(verified=True, dnssec=True),
            ChannelCheck(verified=True),
        )

        result = await engine.verify("example.com", VerificationMethod.BOTH, EXPECTED)

        assert result.success
        assert result.trust_score == 100

    async def test_both_succeeds_with_one_channel(self):
        """BOTH succeeds when either channel verifies."""
        engine, _, _ = engine_with(
            ChannelCheck(errors=["No TXT records found for domain"]),
            ChannelCheck(verified=True),
        )

        result = await engine.verify("example.com", VerificationMethod.BOTH, EXPECTED)

        assert result.success
        assert result.errors == ["No TXT records found for domain"]
        assert result.trust_score == 65

    async def test_dnssec_warning(self):
        """Verified DNS without DNSSEC warns."""
        engine, _, _ = engine_with(ChannelCheck(verified=True), ChannelCheck())

        result = await engine.verify("example.com", VerificationMethod.DNS, EXPECTED)

        assert result.trust_score == 70
        assert result.warnings == ["DNSSEC is not enabled for example.com"]

    async def test_failed_verification(self):
        """Nothing verified keeps the base score and reports errors."""
        engine, _, _ = engine_with(ChannelCheck(errors=["DNS lookup failed for example.com"]), ChannelCheck())

        result = await engine.verify("example.com", VerificationMethod.DNS, EXPECTED)

        assert not result.success
        assert result.trust_score == 50
        assert result.errors == ["DNS lookup failed for example.com"]

    async def test_no_expected_addresses(self):
        """Nothing to compare against is an error without any lookups."""
        engine, dns, https = engine_with(ChannelCheck(), ChannelCheck())

        result = await engine.verify("example.com", VerificationMethod.BOTH, {})

        assert not result.success
        assert result.errors == ["No expected addresses supplied for verification"]
        dns.check.assert_not_awaited()
        https.check.assert_not_awaited()

    async def test_invalid_method(self):
        """Unknown methods are rejected."""
        engine, _, _ = engine_with(ChannelCheck(), ChannelCheck())
        with pytest.raises(ValueError):
            await engine.verify("example.com", "carrier-pigeon", EXPECTED)

    def test_from_settings(self, test_settings):
        """The engine is built from settings."""
        engine = VerificationEngine.from_settings(test_settings)
        assert engine._dns._doh.url == "https://verify-doh.test/resolve"
