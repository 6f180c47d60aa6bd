"""Tests for the trust score formula."""

from __future__ import annotations

import pytest

from aliasresolve.core.types import TrustStatus
from aliasresolve.verification.scoring import calculate_trust_score, score_breakdown, trust_status


class TestCalculateTrustScore:
    """Tests for calculate_trust_score."""

    @pytest.mark.parametrize(
        "dns,https,dnssec,expected",
        [
            (False, False, False, 50),
            (True, False, False, 70),
            (True, False, True, 80),
            (False, True, False, 65),
            (True, True, False, 90),
            (True, True, True, 100),
            (False, False, True, 60),
        ],
    )
    def test_formula(self, dns: bool, https: bool, dnssec: bool, expected: int):
        """Each proof contributes its published weight."""
        assert calculate_trust_score(dns, https, dnssec) == expected

    def test_breakdown_parts(self):
        """The breakdown itemises every bonus."""
        breakdown = score_breakdown(True, True, True)

        assert breakdown.base_score == 50
        assert breakdown.dns_bonus == 20
        assert breakdown.dnssec_bonus == 10
        assert breakdown.https_bonus == 15
        assert breakdown.multi_layer_bonus == 5
        assert breakdown.total == 100

    def test_multi_layer_needs_both(self):
        """The multi-layer bonus requires DNS and HTTPS together."""
        assert score_breakdown(True, False, True).multi_layer_bonus == 0


class TestTrustStatus:
    """Tests for trust_status buckets."""

    @pytest.mark.parametrize(
        "score,status",
        [
            (100, TrustStatus.EXCELLENT),
            (80, TrustStatus.EXCELLENT),
            (79, TrustStatus.GOOD),
            (60, TrustStatus.GOOD),
            (59, TrustStatus.FAIR),
            (40, TrustStatus.FAIR),
            (39, TrustStatus.POOR),
            (0, TrustStatus.POOR),
        ],
    )
    def test_buckets(self, score: int, status: TrustStatus):
        """Scores map to status buckets at 80, 60 and 40."""
        assert trust_status(score) == status
