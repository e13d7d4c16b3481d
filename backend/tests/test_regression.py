"""
Tests for core/regression.py — least-squares fit and correlation.
"""

import math
import os
import sys
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.errors import DegenerateInputError
from core.regression import RegressionFit, fit


class TestFit:
    """Tests for fit."""

    def test_perfect_line(self):
        result = fit([1, 2, 3, 4], [2, 4, 6, 8])
        assert isinstance(result, RegressionFit)
        assert result.slope == pytest.approx(2)
        assert result.intercept == pytest.approx(0)
        assert result.correlation == pytest.approx(1)
        assert result.n == 4

    def test_negative_relationship(self):
        result = fit([0, 1, 2], [10, 7, 4])
        assert result.slope == pytest.approx(-3)
        assert result.intercept == pytest.approx(10)
        assert result.correlation == pytest.approx(-1)

    def test_noisy_correlation_between_bounds(self):
        result = fit([1, 2, 3, 4, 5], [2, 1, 4, 3, 6])
        assert -1 <= result.correlation <= 1
        assert result.slope == pytest.approx(1.0)

    def test_correlation_is_clamped(self):
        xs = [0.1 * i for i in range(50)]
        ys = [3 * x + 1 for x in xs]
        assert -1 <= fit(xs, ys).correlation <= 1

    def test_zero_variance_x_raises(self):
        with pytest.raises(DegenerateInputError):
            fit([3, 3, 3], [1, 2, 3])

    def test_constant_fractional_x_raises(self):
        with pytest.raises(DegenerateInputError):
            fit([0.1, 0.1, 0.1], [1, 2, 3])

    def test_single_point_raises(self):
        with pytest.raises(DegenerateInputError):
            fit([1], [1])

    def test_zero_variance_y_gives_nan_correlation(self):
        result = fit([1, 2, 3], [5, 5, 5])
        assert result.slope == 0
        assert result.intercept == pytest.approx(5)
        assert math.isnan(result.correlation)
        assert result.to_dict()["correlation"] is None

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            fit([1, 2, 3], [1, 2])


class TestTrendLine:
    """Tests for RegressionFit helpers."""

    def test_predict(self):
        assert fit([1, 2, 3, 4], [3, 5, 7, 9]).predict(10) == pytest.approx(21)

    def test_trend_line_endpoints(self):
        line = fit([1, 2, 3, 4], [2, 4, 6, 8]).trend_line(1, 4)
        assert line[0] == {"x": 1.0, "y": pytest.approx(2)}
        assert line[1]["y"] == pytest.approx(8)


class TestExtremeInputs:
    """Finite inputs whose sums of squares leave float range."""

    def test_underflowing_x_spread_raises(self):
        with pytest.raises(DegenerateInputError):
            fit([0.0, 1e-170, 2e-170], [1, 2, 3])

    def test_overflowing_x_spread_raises(self):
        with pytest.raises(DegenerateInputError):
            fit([-1e200, 0.0, 1e200], [1, 2, 3])

    def test_large_values_keep_perfect_correlation(self):
        result = fit([0, 1e100, 2e100], [0, 1e110, 2e110])
        assert result.correlation == pytest.approx(1)
        assert result.slope == pytest.approx(1e10)
