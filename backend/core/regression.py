"""
regression.py — Ordinary least squares fit of one numeric series on another.

Used for the income vs. discretionary spending trend line and its
correlation label.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List

import numpy as np

from core.errors import DegenerateInputError


@dataclass(frozen=True)
class RegressionFit:
    slope: float
    intercept: float
    correlation: float
    n: int

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept

    def trend_line(self, x_min: float, x_max: float) -> List[Dict[str, float]]:
        """End points of the fitted line over [x_min, x_max]."""
        return [
            {"x": float(x_min), "y": self.predict(x_min)},
            {"x": float(x_max), "y": self.predict(x_max)},
        ]

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        if np.isnan(self.correlation):
            out["correlation"] = None
        return out


def fit(xs: Iterable[float], ys: Iterable[float]) -> RegressionFit:
    """
    Least-squares slope/intercept and Pearson correlation.

    Raises DegenerateInputError when xs has zero variance (including fewer
    than two points) or a spread whose sum of squares leaves float range.
    Correlation is NaN when ys has zero variance and is otherwise clamped
    to [-1, 1].
    """
    x = np.asarray(list(xs), dtype=float)
    y = np.asarray(list(ys), dtype=float)
    if x.size != y.size:
        raise ValueError(f"xs and ys differ in length ({x.size} vs {y.size}).")
    if x.size < 2 or np.ptp(x) == 0:
        raise DegenerateInputError()

    dx = x - x.mean()
    dy = y - y.mean()
    sxx = float(np.sum(dx * dx))
    sxy = float(np.sum(dx * dy))
    syy = float(np.sum(dy * dy))

    # Distinct but extreme xs can underflow sxx to 0 or overflow it to inf.
    if sxx == 0 or not np.isfinite(sxx):
        raise DegenerateInputError()

    slope = sxy / sxx
    intercept = float(y.mean()) - slope * float(x.mean())

    if np.ptp(y) == 0 or syy == 0:
        correlation = float("nan")
    else:
        correlation = float(np.clip(sxy / (np.sqrt(sxx) * np.sqrt(syy)), -1.0, 1.0))

    return RegressionFit(slope=slope, intercept=intercept, correlation=correlation, n=int(x.size))
