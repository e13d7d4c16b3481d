"""
Tests for core/stats.py — quantiles, box-plot summaries, percentile rank.
"""

import os
import sys
import random
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.errors import EmptySampleError
from core.stats import (
    DistributionSummary,
    percentile_band,
    percentile_rank,
    quantile,
    summarize,
)

SAMPLE = [10, 20, 30, 40, 50]


class TestQuantile:
    """Linear interpolation at rank p*(n-1)."""

    def test_exact_order_statistic(self):
        assert quantile(SAMPLE, 0.25) == 20

    def test_interpolates_between_order_statistics(self):
        # rank 0.25 * 3 = 0.75 → 1 + 0.75 * (2 - 1)
        assert quantile([1, 2, 3, 4], 0.25) == pytest.approx(1.75)

    def test_ignores_input_order(self):
        assert quantile([50, 10, 40, 20, 30], 0.75) == 40

    def test_extremes_are_min_and_max(self):
        assert quantile(SAMPLE, 0.0) == 10
        assert quantile(SAMPLE, 1.0) == 50

    def test_rejects_probability_out_of_range(self):
        with pytest.raises(ValueError):
            quantile(SAMPLE, 1.5)

    def test_empty_raises(self):
        with pytest.raises(EmptySampleError):
            quantile([], 0.5)


class TestSummarize:
    """Tests for summarize."""

    def test_worked_example(self):
        s = summarize(SAMPLE)
        assert isinstance(s, DistributionSummary)
        assert s.q1 == 20
        assert s.median == 30
        assert s.q3 == 40
        assert s.iqr == 20
        assert s.lower_whisker == 10
        assert s.upper_whisker == 50
        assert s.mean == 30
        assert s.count == 5

    def test_median_uses_same_rule_as_quartiles(self):
        s = summarize([1, 2, 3, 4])
        assert s.median == pytest.approx(quantile([1, 2, 3, 4], 0.5))
        assert s.median == pytest.approx(2.5)

    def test_quartiles_match_quantile(self):
        sample = [7, 1, 12, 3, 3, 9, 20]
        s = summarize(sample)
        assert s.q1 == pytest.approx(quantile(sample, 0.25))
        assert s.median == pytest.approx(quantile(sample, 0.5))
        assert s.q3 == pytest.approx(quantile(sample, 0.75))

    def test_whiskers_clip_to_outlier_bounds(self):
        s = summarize([1, 2, 3, 4, 100])
        # q1 = 2, q3 = 4, iqr = 2 → upper fence 7, below the 100 outlier
        assert s.upper_whisker == pytest.approx(7)
        assert s.lower_whisker == 1
        assert s.max == 100

    def test_all_equal_sample(self):
        s = summarize([0.1, 0.1, 0.1])
        assert s.iqr == 0
        assert s.lower_whisker == s.upper_whisker == s.mean == 0.1
        assert percentile_rank([0.1, 0.1, 0.1], 0.1) == 0

    def test_single_value(self):
        s = summarize([42])
        assert (s.min, s.q1, s.median, s.q3, s.max) == (42, 42, 42, 42, 42)

    def test_empty_raises(self):
        with pytest.raises(EmptySampleError):
            summarize([])

    def test_ordering_holds_for_random_samples(self):
        rng = random.Random(7)
        for _ in range(200):
            sample = [rng.uniform(-500, 500) for _ in range(rng.randint(1, 30))]
            s = summarize(sample)
            assert s.lower_whisker <= s.q1 <= s.median <= s.q3 <= s.upper_whisker

    def test_to_dict_has_all_fields(self):
        d = summarize(SAMPLE).to_dict()
        for key in ("min", "max", "q1", "median", "q3", "mean", "iqr",
                    "lower_whisker", "upper_whisker"):
            assert key in d


class TestPercentileRank:
    """Strictly-below percentile rank."""

    def test_worked_example(self):
        assert percentile_rank(SAMPLE, 25) == pytest.approx(40)

    def test_ties_are_not_counted(self):
        assert percentile_rank(SAMPLE, 30) == pytest.approx(40)

    def test_bounds(self):
        assert percentile_rank(SAMPLE, 0) == 0
        assert percentile_rank(SAMPLE, 1000) == 100

    def test_monotonic_in_value(self):
        rng = random.Random(3)
        sample = [rng.randint(0, 50) for _ in range(40)]
        ranks = [percentile_rank(sample, v) for v in range(-5, 60)]
        assert ranks == sorted(ranks)

    def test_empty_raises(self):
        with pytest.raises(EmptySampleError):
            percentile_rank([], 10)


class TestPercentileBand:
    """Tests for percentile_band."""

    @pytest.mark.parametrize("pct,band", [
        (0, "low"), (24.9, "low"), (25, "below_average"),
        (50, "above_average"), (74.9, "above_average"), (75, "high"), (100, "high"),
    ])
    def test_bands(self, pct, band):
        assert percentile_band(pct) == band
