"""
filters.py — Composable record filters and the dashboard filter selection.

Predicates:
- Equals: categorical equality, or pass-through when no value is selected
- Between: half-open numeric range [lower, upper) with unbounded ends

apply_filters ANDs every predicate and always returns a new DataFrame.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

INCOME_FIELD = "disposable_income"

# Bracket label → (lower inclusive, upper exclusive). Boundaries are shared so
# every finite income lands in exactly one bracket.
INCOME_BRACKETS: Dict[str, Tuple[float, float]] = {
    "0-75": (-math.inf, 75.0),
    "75-150": (75.0, 150.0),
    "150+": (150.0, math.inf),
}

NO_FILTER = "all"


# ── Predicates ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Equals:
    field: str
    value: Optional[str] = None

    def mask(self, records: pd.DataFrame) -> pd.Series:
        if self.value is None:
            return pd.Series(True, index=records.index)
        if self.field not in records.columns:
            return pd.Series(False, index=records.index)
        return records[self.field] == self.value


@dataclass(frozen=True)
class Between:
    field: str
    lower: float = -math.inf
    upper: float = math.inf

    def contains(self, value: float) -> bool:
        return self.lower <= value < self.upper

    def mask(self, records: pd.DataFrame) -> pd.Series:
        if self.field not in records.columns:
            return pd.Series(False, index=records.index)
        values = records[self.field]
        return (values >= self.lower) & (values < self.upper)


def apply_filters(records: pd.DataFrame, predicates: Iterable) -> pd.DataFrame:
    """
    Keep the records matching every predicate.
    No predicates returns an unchanged copy; an empty result is valid.
    """
    predicates = list(predicates)
    if not predicates or records.empty:
        return records.copy()

    keep = pd.Series(True, index=records.index)
    for predicate in predicates:
        keep &= predicate.mask(records)
    return records[keep].copy()


# ── Dashboard Selection ─────────────────────────────────────────────

@dataclass(frozen=True)
class SpendingFilters:
    gender: Optional[str] = None
    income_bracket: Optional[str] = None
    year_in_school: Optional[str] = None
    major: Optional[str] = None

    def predicates(self) -> List:
        preds: List = []
        if self.gender:
            preds.append(Equals("gender", self.gender))
        if self.income_bracket:
            lower, upper = INCOME_BRACKETS[self.income_bracket]
            preds.append(Between(INCOME_FIELD, lower, upper))
        if self.year_in_school:
            preds.append(Equals("year_in_school", self.year_in_school))
        if self.major:
            preds.append(Equals("major", self.major))
        return preds

    def is_empty(self) -> bool:
        return not any(asdict(self).values())

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)


def _selection(raw: dict, *keys: str) -> Optional[str]:
    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value and value.lower() != NO_FILTER:
            return value
    return None


def normalize_filters(raw: Optional[dict]) -> SpendingFilters:
    """
    Build a SpendingFilters from a loose mapping (form values, JSON body).
    Missing, empty and "all" mean no filter. An unknown income bracket
    raises ValueError.
    """
    raw = raw or {}
    bracket = _selection(raw, "income_bracket", "income")
    if bracket is not None and bracket not in INCOME_BRACKETS:
        raise ValueError(
            f"Unknown income bracket '{bracket}'. Expected one of: {list(INCOME_BRACKETS)}"
        )
    return SpendingFilters(
        gender=_selection(raw, "gender"),
        income_bracket=bracket,
        year_in_school=_selection(raw, "year_in_school", "year"),
        major=_selection(raw, "major"),
    )


def filter_records(records: pd.DataFrame, filters: Optional[SpendingFilters]) -> pd.DataFrame:
    """Apply a dashboard selection; None selects everything."""
    if filters is None:
        return records.copy()
    return apply_filters(records, filters.predicates())


# ── Income Tiers ────────────────────────────────────────────────────

INCOME_TIERS = ["Low Income", "Medium Income", "High Income"]


def income_tier_thresholds(values: pd.Series) -> Optional[Tuple[float, float]]:
    """Split points one third of the observed range in from each end."""
    if values.empty:
        return None
    lo, hi = float(values.min()), float(values.max())
    span = hi - lo
    return lo + span / 3, hi - span / 3


def assign_income_tiers(values: pd.Series) -> pd.Series:
    """Label each value Low / Medium / High relative to the sample's own range."""
    thresholds = income_tier_thresholds(values)
    if thresholds is None:
        return pd.Series([], index=values.index, dtype=object)
    low, high = thresholds
    low_tier, medium_tier, high_tier = INCOME_TIERS

    def _tier(v: float) -> str:
        if v < low:
            return low_tier
        if v > high:
            return high_tier
        return medium_tier

    return values.apply(_tier).astype(object)
