"""
cleaner.py — Pandas cleaning pipeline that turns a parsed table into a RecordSet.

Handles:
- Whitespace trimming on categorical fields
- Gender standardization onto the enumerated labels
- Numeric coercion (missing / unparseable / non-finite → 0, never NaN)
- Derived fields (income, disposable_income, discretionary_spending)
- Cleaning report generation
"""

import logging
from typing import Dict, Tuple

import numpy as np
import pandas as pd

from core.fields import CATEGORICAL_FIELDS, DISCRETIONARY_FIELDS, NUMERIC_FIELDS

logger = logging.getLogger(__name__)


# ── Gender Standardization ──────────────────────────────────────────

GENDER_MAP = {
    "m": "Male", "male": "Male", "man": "Male",
    "f": "Female", "female": "Female", "woman": "Female",
    "non-binary": "Non-binary", "nonbinary": "Non-binary", "non binary": "Non-binary",
    "nb": "Non-binary", "enby": "Non-binary",
}


def standardize_gender(value) -> str:
    """Map gender spelling variants to the enumerated labels; keep anything else as given."""
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return ""
    cleaned = str(value).strip()
    return GENDER_MAP.get(cleaned.lower(), cleaned)


# ── Numeric Coercion ────────────────────────────────────────────────

def coerce_numeric(series: pd.Series) -> Tuple[pd.Series, int]:
    """
    Coerce a column to float64 with 0.0 for anything that is not a finite number.
    Returns (coerced, number_of_values_replaced_by_zero).
    """
    values = pd.to_numeric(series, errors="coerce").astype("float64")
    values = values.replace([np.inf, -np.inf], np.nan)
    replaced = int(values.isna().sum())
    return values.fillna(0.0), replaced


def add_derived_fields(df: pd.DataFrame) -> pd.DataFrame:
    """Attach income, disposable_income and discretionary_spending."""
    out = df.copy()
    income = out["monthly_income"] - (out["tuition"] - out["financial_aid"])
    out["income"] = income
    out["disposable_income"] = income
    out["discretionary_spending"] = out[DISCRETIONARY_FIELDS].sum(axis=1)
    return out


# ── Main Cleaning Pipeline ──────────────────────────────────────────

def clean_records(df: pd.DataFrame) -> Tuple[pd.DataFrame, Dict]:
    """
    Clean the DataFrame and return (records, cleaning_report).
    The input frame is never modified.
    """
    report: Dict = {
        "original_rows": len(df),
        "original_columns": len(df.columns),
        "steps": [],
        "warnings": [],
    }

    cleaned = df.copy()

    # ── 1. Categorical fields ──────────────────────────────────────
    for col in CATEGORICAL_FIELDS:
        if col not in cleaned.columns:
            cleaned[col] = ""
            report["warnings"].append(f"Column '{col}' missing; filled with empty values.")
            continue
        cleaned[col] = cleaned[col].fillna("").astype(str).str.strip()
    report["steps"].append("Trimmed whitespace from categorical fields.")

    original_genders = sorted(set(cleaned["gender"]) - {""})
    cleaned["gender"] = cleaned["gender"].apply(standardize_gender)
    new_genders = sorted(set(cleaned["gender"]) - {""})
    report["steps"].append(
        f"Standardized gender values: {original_genders} → {new_genders}"
    )

    # ── 2. Numeric fields ──────────────────────────────────────────
    total_replaced = 0
    for col in NUMERIC_FIELDS:
        if col not in cleaned.columns:
            cleaned[col] = 0.0
            report["warnings"].append(f"Column '{col}' missing; treated as 0.")
            continue
        cleaned[col], replaced = coerce_numeric(cleaned[col])
        if replaced:
            total_replaced += replaced
            report["warnings"].append(
                f"{replaced} values in '{col}' could not be parsed and were set to 0."
            )
    report["steps"].append("Converted numeric fields, defaulting invalid values to 0.")
    if total_replaced:
        logger.warning("Coerced %d invalid numeric values to 0", total_replaced)

    # ── 3. Derived fields ──────────────────────────────────────────
    cleaned = add_derived_fields(cleaned)
    report["steps"].append(
        "Computed income = monthly_income - (tuition - financial_aid) "
        "and discretionary_spending = entertainment + personal_care + miscellaneous."
    )

    # ── Final summary ─────────────────────────────────────────────
    cleaned = cleaned.reset_index(drop=True)
    report["cleaned_rows"] = len(cleaned)
    report["cleaned_columns"] = len(cleaned.columns)
    report["columns"] = list(cleaned.columns)

    logger.info("Cleaned %d records (%d columns)", len(cleaned), len(cleaned.columns))
    return cleaned, report


def generate_cleaning_report(report: Dict) -> str:
    """Generate a human-readable cleaning report text."""
    lines = [
        "═══ Data Cleaning Report ═══",
        f"Original: {report['original_rows']} rows × {report['original_columns']} columns",
        f"Cleaned:  {report['cleaned_rows']} rows × {report['cleaned_columns']} columns",
        "",
        "Steps performed:",
    ]
    for i, step in enumerate(report["steps"], 1):
        lines.append(f"  {i}. {step}")

    if report["warnings"]:
        lines.append("")
        lines.append("⚠ Warnings:")
        for w in report["warnings"]:
            lines.append(f"  • {w}")

    return "\n".join(lines)
