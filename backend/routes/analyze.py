"""
Analyze routes — chart-ready statistics for the dashboard.
"""

import logging
import os

from fastapi import APIRouter, HTTPException
import pandas as pd

from core.cleaner import clean_records
from core.dashboard import (
    compute_distribution_view,
    compute_group_rank,
    compute_group_view,
    compute_income_view,
    compute_radar_view,
    compute_spending_summary,
)
from core.errors import UnknownGroupError
from core.fields import GROUP_DIMENSIONS
from core.filters import SpendingFilters, normalize_filters
from core.user_input import resolve_user_input

router = APIRouter()
logger = logging.getLogger(__name__)

RADAR_OUTER_RADIUS = float(os.getenv("RADAR_OUTER_RADIUS", "1.0"))

FALSE_VALUES = ("false", "0", "no", "off", "")


def _df_from_payload(payload: dict) -> pd.DataFrame:
    """Extract and clean the RecordSet from a request payload."""
    data = payload.get("data")
    if not data:
        raise HTTPException(400, "No data provided.")
    records, _ = clean_records(pd.DataFrame(data))
    return records


def _filters_from_payload(payload: dict) -> SpendingFilters:
    try:
        return normalize_filters(payload.get("filters"))
    except ValueError as e:
        raise HTTPException(400, str(e))


def _check_dimension(dimension: str) -> None:
    if dimension not in GROUP_DIMENSIONS:
        raise HTTPException(
            404, f"Unknown dimension '{dimension}'. Expected one of: {list(GROUP_DIMENSIONS)}"
        )


def _flag(value, default: bool) -> bool:
    """Read a JSON or form boolean; "false", "0", "no" and "off" are false."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_VALUES
    return bool(value)


@router.post("/groups/{dimension}")
async def groups(dimension: str, payload: dict):
    """Discretionary means per gender, major or year of study."""
    _check_dimension(dimension)
    df = _df_from_payload(payload)
    filters = _filters_from_payload(payload)
    try:
        return compute_group_view(
            df,
            dimension,
            filters=filters,
            category=payload.get("category"),
            normalize=_flag(payload.get("normalize"), False),
        )
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.post("/rank/{dimension}/{group}")
async def rank(dimension: str, group: str, payload: dict):
    """Rank of one group on total (or one category's) discretionary spending."""
    _check_dimension(dimension)
    df = _df_from_payload(payload)
    filters = _filters_from_payload(payload)
    field = payload.get("field", "total")
    try:
        return compute_group_rank(df, dimension, group, field=field, filters=filters)
    except UnknownGroupError as e:
        logger.info("Rank requested for absent group: %s", e)
        raise HTTPException(404, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.post("/income")
async def income(payload: dict):
    """Income vs. discretionary spending scatter with trend line."""
    df = _df_from_payload(payload)
    return compute_income_view(df, filters=_filters_from_payload(payload))


@router.post("/distribution")
async def distribution(payload: dict):
    """Box-plot summary plus the visitor's percentile."""
    df = _df_from_payload(payload)
    user = resolve_user_input(payload)
    return compute_distribution_view(df, user, filters=_filters_from_payload(payload))


@router.post("/radar")
async def radar(payload: dict):
    """Visitor vs. subset average on the nine-category radar."""
    df = _df_from_payload(payload)
    user = resolve_user_input(payload)
    return compute_radar_view(
        df,
        user,
        filters=_filters_from_payload(payload),
        show_average=_flag(payload.get("show_average"), True),
        outer_radius=RADAR_OUTER_RADIUS,
    )


@router.post("/summary")
async def summary(payload: dict):
    """Biggest difference between the visitor and the average student."""
    df = _df_from_payload(payload)
    user = resolve_user_input(payload)
    return compute_spending_summary(df, user)
