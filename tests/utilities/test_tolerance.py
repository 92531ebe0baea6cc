"""Tests for fit classification."""

import pytest

from sizewise.utilities.tolerance import FitDirection, MatchPrecision, classify_deviation


class TestMatchPrecision:
    def test_precision_ordering(self):
        assert MatchPrecision.HIGH < MatchPrecision.MEDIUM < MatchPrecision.LOW

    def test_medium_is_two_tenths_mm(self):
        assert MatchPrecision.MEDIUM.value == pytest.approx(0.2)


class TestClassifyDeviation:
    def test_zero_is_exact(self):
        assert classify_deviation(0.0) is FitDirection.EXACT

    def test_inside_band_is_exact(self):
        assert classify_deviation(0.15) is FitDirection.EXACT
        assert classify_deviation(-0.15) is FitDirection.EXACT

    def test_band_boundary_inclusive(self):
        assert classify_deviation(0.5, MatchPrecision.LOW) is FitDirection.EXACT

    def test_positive_outside_band_is_over(self):
        assert classify_deviation(0.3) is FitDirection.OVER

    def test_negative_outside_band_is_under(self):
        assert classify_deviation(-0.3) is FitDirection.UNDER

    def test_high_precision_narrows_band(self):
        assert classify_deviation(0.15, MatchPrecision.HIGH) is FitDirection.OVER
        assert classify_deviation(0.15, MatchPrecision.MEDIUM) is FitDirection.EXACT

    def test_low_precision_widens_band(self):
        assert classify_deviation(-0.4, MatchPrecision.MEDIUM) is FitDirection.UNDER
        assert classify_deviation(-0.4, MatchPrecision.LOW) is FitDirection.EXACT
