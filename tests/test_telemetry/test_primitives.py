"""Tests for mission_command/telemetry/primitives.py."""

from __future__ import annotations

import math

import pytest

from mission_command.telemetry.primitives import (
    clamp,
    count_sign_flips,
    is_finite,
    linear_regression_slope,
    normalize,
    round_half_up,
)


class TestIsFinite:
    @pytest.mark.parametrize("value", [None, math.nan, math.inf, -math.inf])
    def test_rejects_missing_and_non_finite(self, value):
        assert is_finite(value) is False

    @pytest.mark.parametrize("value", [0, 0.0, -3.5, 1e9])
    def test_accepts_real_numbers(self, value):
        assert is_finite(value) is True


class TestLinearRegressionSlope:
    def test_unit_slope(self):
        assert linear_regression_slope([1.0, 2.0, 3.0, 4.0]) == pytest.approx(1.0)

    def test_negative_slope(self):
        assert linear_regression_slope([10.0, 8.0, 6.0]) == pytest.approx(-2.0)

    def test_flat_series(self):
        assert linear_regression_slope([5.0, 5.0, 5.0]) == pytest.approx(0.0)

    def test_fewer_than_two_points_is_zero(self):
        assert linear_regression_slope([]) == 0.0
        assert linear_regression_slope([42.0]) == 0.0


class TestCountSignFlips:
    def test_alternating(self):
        assert count_sign_flips([1.0, -1.0, 1.0, -1.0]) == 3

    def test_zero_counts_as_non_negative(self):
        assert count_sign_flips([0.0, 1.0, 0.0]) == 0
        assert count_sign_flips([0.0, -1.0]) == 1

    def test_short_sequences(self):
        assert count_sign_flips([]) == 0
        assert count_sign_flips([-2.0]) == 0


class TestNormalize:
    def test_midpoint(self):
        assert normalize(0.5, 0.0, 1.0) == pytest.approx(50.0)

    def test_clamped_above_and_below(self):
        assert normalize(2.0, 0.0, 1.0) == 100.0
        assert normalize(-1.0, 0.0, 1.0) == 0.0

    def test_degenerate_range_returns_50(self):
        assert normalize(123.0, 5.0, 5.0) == 50.0


class TestClamp:
    def test_bounds(self):
        assert clamp(-5, 0, 100) == 0
        assert clamp(150, 0, 100) == 100
        assert clamp(42, 0, 100) == 42


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(52.5, 53), (2.5, 3), (-2.5, -2), (2.4999, 2), (54.6, 55), (0.0, 0)],
    )
    def test_half_goes_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_differs_from_bankers_rounding(self):
        assert round(2.5) == 2
        assert round_half_up(2.5) == 3
