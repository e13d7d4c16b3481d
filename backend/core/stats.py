"""
stats.py — Distribution statistics for a numeric sample.

Computes:
- Linear-interpolation quantiles (rank p*(n-1), the R-7 convention)
- Box-plot summaries (min/max/quartiles/median/mean/IQR/whiskers)
- Percentile rank of a value (strictly-below count, scipy.stats.percentileofscore)
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable

import numpy as np
from scipy import stats as sp_stats

from core.errors import EmptySampleError

WHISKER_FACTOR = 1.5


@dataclass(frozen=True)
class DistributionSummary:
    count: int
    min: float
    max: float
    q1: float
    median: float
    q3: float
    mean: float
    iqr: float
    lower_whisker: float
    upper_whisker: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _as_array(sample: Iterable[float]) -> np.ndarray:
    arr = np.asarray(list(sample), dtype=float)
    if arr.size == 0:
        raise EmptySampleError()
    return arr


def _quantiles(arr: np.ndarray, probs):
    """Linear interpolation between order statistics at rank p*(n-1)."""
    return np.quantile(arr, probs, method="linear")


def quantile(sample: Iterable[float], p: float) -> float:
    """Quantile by linear interpolation between order statistics at rank p*(n-1)."""
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Quantile probability must be in [0, 1], got {p}.")
    arr = _as_array(sample)
    return float(_quantiles(arr, p))


def summarize(sample: Iterable[float]) -> DistributionSummary:
    """
    Box-plot summary of a non-empty sample.

    q1, median and q3 all come from the same quantile rule. Whiskers are
    1.5 IQR beyond the quartiles, clipped to the observed min/max.
    Raises EmptySampleError for an empty sample.
    """
    arr = _as_array(sample)
    lo = float(arr.min())
    hi = float(arr.max())
    q1, median, q3 = (float(v) for v in _quantiles(arr, [0.25, 0.5, 0.75]))
    iqr = q3 - q1
    # Exact for a constant sample.
    mean = lo if lo == hi else float(arr.mean())

    return DistributionSummary(
        count=int(arr.size),
        min=lo,
        max=hi,
        q1=q1,
        median=median,
        q3=q3,
        mean=mean,
        iqr=iqr,
        lower_whisker=max(lo, q1 - WHISKER_FACTOR * iqr),
        upper_whisker=min(hi, q3 + WHISKER_FACTOR * iqr),
    )


def percentile_rank(sample: Iterable[float], value: float) -> float:
    """
    Share of the sample strictly below ``value``, in percent.
    Elements equal to ``value`` are not counted.
    Raises EmptySampleError for an empty sample.
    """
    arr = _as_array(sample)
    return float(sp_stats.percentileofscore(arr, value, kind="strict"))


def percentile_band(percentile: float) -> str:
    """Coarse band used to phrase where a visitor sits in the distribution."""
    if percentile < 25:
        return "low"
    if percentile < 50:
        return "below_average"
    if percentile < 75:
        return "above_average"
    return "high"
