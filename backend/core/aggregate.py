"""
aggregate.py — Group-by means and comparisons over a RecordSet.

Computes:
- Per-group means of arbitrary numeric fields (absent groups stay absent)
- Optional per-group "total" as the mean of per-record sums
- Each category's share of a group's total
- Overall column means
- A visitor's amounts against the averages
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd


def _safe_float(val) -> Optional[float]:
    """Convert to float or return None."""
    try:
        v = float(val)
        return None if np.isnan(v) or np.isinf(v) else v
    except (TypeError, ValueError):
        return None


# ── Group Means ─────────────────────────────────────────────────────

def group_means(
    records: pd.DataFrame,
    group_field: str,
    value_fields: Sequence[str],
    include_total: bool = False,
    order: Optional[Sequence[str]] = None,
) -> Dict[str, Dict[str, float]]:
    """
    Mean of each value field per distinct value of ``group_field``.

    Partitioning is exact string equality. Groups with no records do not
    appear in the result. With ``include_total`` each group also gets
    "total", the mean of the per-record sum of the value fields.
    ``order`` fixes the key order; unlisted groups follow in first-seen order.
    """
    fields = list(value_fields)
    if records.empty or group_field not in records.columns:
        return {}

    frame = records[[group_field] + fields].copy()
    if include_total:
        frame["total"] = frame[fields].sum(axis=1)
        fields = fields + ["total"]

    means = frame.groupby(group_field, sort=False)[fields].mean()

    result: Dict[str, Dict[str, float]] = {}
    keys = list(means.index)
    if order is not None:
        keys = [k for k in order if k in means.index] + [k for k in keys if k not in order]
    for key in keys:
        row = means.loc[key]
        result[str(key)] = {field: float(row[field]) for field in fields}
    return result


def category_shares(
    means: Mapping[str, Mapping[str, float]],
    fields: Sequence[str],
) -> Dict[str, Dict[str, Optional[float]]]:
    """
    Each field's percentage of the group's summed fields.
    A group whose fields sum to 0 has no shares (None), not 0%.
    """
    shares: Dict[str, Dict[str, Optional[float]]] = {}
    for group, values in means.items():
        total = sum(values[f] for f in fields)
        if total == 0:
            shares[group] = {f: None for f in fields}
        else:
            shares[group] = {f: values[f] / total * 100 for f in fields}
    return shares


def column_means(records: pd.DataFrame, fields: Sequence[str]) -> Dict[str, Optional[float]]:
    """Overall mean of each field; None for every field when there are no records."""
    if records.empty:
        return {f: None for f in fields}
    return {f: _safe_float(records[f].mean()) for f in fields}


# ── Comparisons ─────────────────────────────────────────────────────

def compare_to_averages(
    user_values: Mapping[str, float],
    averages: Mapping[str, Optional[float]],
) -> Dict[str, Any]:
    """
    Compare a visitor's amounts with the averages, field by field.

    Returns the per-field comparisons and the one with the largest absolute
    difference (the first such field wins a tie).
    """
    comparisons: List[Dict[str, Any]] = []
    for field, amount in user_values.items():
        average = averages.get(field) or 0.0
        comparisons.append({
            "category": field,
            "user_amount": float(amount),
            "average_amount": float(average),
            "difference": float(amount) - float(average),
            "multiplier": float(amount) / float(average) if average else None,
        })

    biggest = None
    for entry in comparisons:
        if biggest is None or abs(entry["difference"]) > abs(biggest["difference"]):
            biggest = entry

    return {"comparisons": comparisons, "biggest_difference": biggest}
