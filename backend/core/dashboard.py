"""
dashboard.py — View payloads for each chart, computed from explicit inputs.

Every function takes the cleaned RecordSet plus the current selection and
returns a JSON-safe dict. Nothing is cached between calls; each request
recomputes from the records it is given.

Views:
- Group comparison (gender / major / year of study bar and line charts)
- Income vs. discretionary spending scatter with trend line
- Discretionary spending box plot with the visitor's position
- Radar comparison of the visitor against the subset average
- Summary of the visitor's biggest difference from the average
"""

from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from core.aggregate import category_shares, column_means, compare_to_averages, group_means
from core.errors import DegenerateInputError, EmptySampleError
from core.fields import (
    DISCRETIONARY_FIELDS,
    GROUP_DIMENSIONS,
    SPENDING_FIELDS,
    field_for,
    label_for,
)
from core.filters import (
    SpendingFilters,
    assign_income_tiers,
    filter_records,
    income_tier_thresholds,
)
from core.narrative import (
    narrate_biggest_difference,
    narrate_discretionary_total,
    narrate_percentile,
    narrate_percentile_band,
)
from core.radar import axis_points, project, shared_max
from core.rank import rank_all, rank_of
from core.regression import fit
from core.stats import percentile_band, percentile_rank, summarize
from core.user_input import UserInput


def _sanitize(obj):
    """Recursively coerce numpy/pandas scalars to JSON-safe Python types."""
    if isinstance(obj, dict):
        return {k: _sanitize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_sanitize(v) for v in obj]
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (np.floating, float)):
        v = float(obj)
        return None if (np.isnan(v) or np.isinf(v)) else v
    return obj


def _filters_dict(filters: Optional[SpendingFilters]) -> Dict[str, Any]:
    return filters.to_dict() if filters else SpendingFilters().to_dict()


def _selected_category(category: Optional[str]) -> Optional[str]:
    """Resolve a category selection to a discretionary field; None means all."""
    text = str(category).strip() if category is not None else ""
    if not text or text.lower() == "all":
        return None
    field = field_for(text)
    if field not in DISCRETIONARY_FIELDS:
        raise ValueError(
            f"Unknown category '{category}'. Expected one of: {DISCRETIONARY_FIELDS}"
        )
    return field


# ── Group Comparison ────────────────────────────────────────────────

def compute_group_view(
    records: pd.DataFrame,
    dimension: str,
    filters: Optional[SpendingFilters] = None,
    category: Optional[str] = None,
    normalize: bool = False,
) -> Dict[str, Any]:
    """
    Discretionary category means per gender, major or year of study.

    Groups with no records are listed under "missing_groups" rather than
    reported as $0.

    ``category`` (a field name or display label; None or "all" for every
    discretionary category) picks what is plotted. With ``normalize`` the
    plotted values are each category's percentage of the group total
    instead of dollar means. ``average_line`` is the mean of the plotted
    values. When a single category is plotted, every group also carries
    its plotted ``value`` and ``diff_from_average_pct``, the percentage it
    sits above (positive) or below (negative) that line.
    """
    if dimension not in GROUP_DIMENSIONS:
        raise ValueError(
            f"Unknown dimension '{dimension}'. Expected one of: {list(GROUP_DIMENSIONS)}"
        )
    selected = _selected_category(category)
    keys = GROUP_DIMENSIONS[dimension]
    subset = filter_records(records, filters)

    means = group_means(subset, dimension, DISCRETIONARY_FIELDS, include_total=True, order=keys)
    means = {g: m for g, m in means.items() if g in keys}
    shares = category_shares(means, DISCRETIONARY_FIELDS)
    ranks = rank_all({g: m["total"] for g, m in means.items()})
    counts = subset[dimension].value_counts() if dimension in subset.columns else {}

    source = shares if normalize else means
    plotted_fields = [selected] if selected else DISCRETIONARY_FIELDS
    plotted = [
        source[g][f] for g in means for f in plotted_fields if source[g][f] is not None
    ]
    average = float(np.mean(plotted)) if plotted else None

    groups = []
    for group, values in means.items():
        entry = {
            "group": group,
            "count": int(counts[group]),
            "means": {f: values[f] for f in DISCRETIONARY_FIELDS},
            "total": values["total"],
            "shares": shares[group],
            "rank": ranks[group],
            "value": None,
            "diff_from_average_pct": None,
        }
        if selected:
            value = source[group][selected]
            entry["value"] = value
            if value is not None and average:
                entry["diff_from_average_pct"] = (value - average) / average * 100
        groups.append(entry)

    return _sanitize({
        "dimension": dimension,
        "filters": _filters_dict(filters),
        "category": selected,
        "normalize": normalize,
        "record_count": len(subset),
        "categories": [{"field": f, "label": label_for(f)} for f in DISCRETIONARY_FIELDS],
        "groups": groups,
        "missing_groups": [k for k in keys if k not in means],
        "average_line": average,
    })


def compute_group_rank(
    records: pd.DataFrame,
    dimension: str,
    group: str,
    field: str = "total",
    filters: Optional[SpendingFilters] = None,
) -> Dict[str, Any]:
    """
    Where one group stands on a single metric.
    Raises UnknownGroupError when the group has no records in the subset.
    """
    if dimension not in GROUP_DIMENSIONS:
        raise ValueError(
            f"Unknown dimension '{dimension}'. Expected one of: {list(GROUP_DIMENSIONS)}"
        )
    if field != "total" and field not in SPENDING_FIELDS:
        raise ValueError(f"Unknown spending field '{field}'.")

    subset = filter_records(records, filters)
    value_fields = DISCRETIONARY_FIELDS if field == "total" else [field]
    means = group_means(
        subset, dimension, value_fields,
        include_total=field == "total", order=GROUP_DIMENSIONS[dimension],
    )
    per_group = {g: m[field] for g, m in means.items()}
    rank, total = rank_of(per_group, group)

    return _sanitize({
        "dimension": dimension,
        "group": group,
        "field": field,
        "value": per_group[group],
        "rank": rank,
        "total": total,
    })


# ── Income Scatter ──────────────────────────────────────────────────

def compute_income_view(
    records: pd.DataFrame,
    filters: Optional[SpendingFilters] = None,
) -> Dict[str, Any]:
    """Income vs. discretionary spending points, tiers and least-squares trend."""
    subset = filter_records(records, filters)
    result: Dict[str, Any] = {
        "filters": _filters_dict(filters),
        "record_count": len(subset),
    }

    if subset.empty:
        result.update({
            "status": "no_data",
            "points": [],
            "tier_thresholds": None,
            "fit": None,
            "trend_line": None,
            "trend_status": "no_data",
        })
        return _sanitize(result)

    incomes = subset["income"]
    spending = subset["discretionary_spending"]
    tiers = assign_income_tiers(incomes)
    low, high = income_tier_thresholds(incomes)

    result.update({
        "status": "ok",
        "points": [
            {"income": x, "discretionary_spending": y, "tier": t}
            for x, y, t in zip(incomes.tolist(), spending.tolist(), tiers.tolist())
        ],
        "tier_thresholds": {"low": low, "high": high},
    })

    try:
        line = fit(incomes, spending)
    except DegenerateInputError:
        result.update({"fit": None, "trend_line": None, "trend_status": "degenerate"})
    else:
        result.update({
            "fit": line.to_dict(),
            "trend_line": line.trend_line(float(incomes.min()), float(incomes.max())),
            "trend_status": "ok",
        })

    return _sanitize(result)


# ── Discretionary Distribution ──────────────────────────────────────

def compute_distribution_view(
    records: pd.DataFrame,
    user: UserInput,
    filters: Optional[SpendingFilters] = None,
) -> Dict[str, Any]:
    """Box-plot summary of discretionary spending and where the visitor falls."""
    subset = filter_records(records, filters)
    sample = subset["discretionary_spending"].tolist() if not subset.empty else []

    result: Dict[str, Any] = {
        "filters": _filters_dict(filters),
        "record_count": len(sample),
        "user": user.to_dict(),
    }

    try:
        summary = summarize(sample)
    except EmptySampleError:
        result.update({"status": "no_data", "summary": None, "percentile": None})
        return _sanitize(result)

    percentile = percentile_rank(sample, user.total)
    band = percentile_band(percentile)
    result.update({
        "status": "ok",
        "summary": summary.to_dict(),
        "values": sample,
        "percentile": percentile,
        "band": band,
        "messages": [
            narrate_discretionary_total(user.total, summary.mean),
            narrate_percentile(percentile),
            narrate_percentile_band(band),
        ],
    })
    return _sanitize(result)


# ── Radar Comparison ────────────────────────────────────────────────

def compute_radar_view(
    records: pd.DataFrame,
    user: UserInput,
    filters: Optional[SpendingFilters] = None,
    show_average: bool = True,
    outer_radius: float = 1.0,
) -> Dict[str, Any]:
    """
    Visitor's three discretionary categories against the subset average over
    all nine categories, on shared radar axes.
    """
    subset = filter_records(records, filters)
    result: Dict[str, Any] = {
        "filters": _filters_dict(filters),
        "record_count": len(subset),
        "axes": [
            dict(point, label=label_for(point["category"]))
            for point in axis_points(SPENDING_FIELDS, outer_radius)
        ],
    }

    if subset.empty:
        result.update({"status": "no_data", "series": []})
        return _sanitize(result)

    student = user.values()
    averages = {f: v or 0.0 for f, v in column_means(subset, SPENDING_FIELDS).items()}
    compared = [student, averages] if show_average else [student]
    max_value = shared_max(*compared)

    series = [{
        "name": "student",
        "points": [p.to_dict() for p in project(SPENDING_FIELDS, student, max_value, outer_radius)],
    }]
    if show_average:
        series.append({
            "name": "average",
            "points": [p.to_dict() for p in project(SPENDING_FIELDS, averages, max_value, outer_radius)],
        })

    result.update({"status": "ok", "max_value": max_value, "series": series})
    return _sanitize(result)


# ── Summary ─────────────────────────────────────────────────────────

def compute_spending_summary(records: pd.DataFrame, user: UserInput) -> Dict[str, Any]:
    """How the visitor's discretionary categories compare to the overall averages."""
    averages = column_means(records, DISCRETIONARY_FIELDS)
    comparison = compare_to_averages(user.values(), averages)
    return _sanitize({
        "user": user.to_dict(),
        "averages": averages,
        "comparisons": comparison["comparisons"],
        "biggest_difference": comparison["biggest_difference"],
        "message": narrate_biggest_difference(comparison["biggest_difference"]),
    })
