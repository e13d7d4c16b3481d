"""
parser.py — CSV and Excel ingestion for student spending tables.

Supports:
- CSV files
- Excel (.xlsx) — first non-empty sheet
- Fuzzy column name mapping onto the canonical record fields
"""

from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from core.fields import CATEGORICAL_FIELDS, NUMERIC_FIELDS

SAMPLE_DATA_DIR = Path(__file__).parent.parent / "sample_data"
SAMPLE_DATASET = SAMPLE_DATA_DIR / "student_spending.csv"

SUPPORTED_EXTENSIONS = (".csv", ".xlsx")

# Common column name variations for auto-mapping
COLUMN_ALIASES: Dict[str, List[str]] = {
    "gender": ["gender", "sex"],
    "year_in_school": ["year_in_school", "year in school", "year", "class_year", "class year"],
    "major": ["major", "field_of_study", "field of study", "program"],
    "monthly_income": ["monthly_income", "monthly income"],
    "financial_aid": ["financial_aid", "financial aid", "aid"],
    "tuition": ["tuition", "tuition_fees", "fees"],
    "books_supplies": ["books_supplies", "books & supplies", "books and supplies", "books"],
    "personal_care": ["personal_care", "personal care"],
    "health_wellness": ["health_wellness", "health & wellness", "health and wellness", "health"],
    "preferred_payment_method": ["preferred_payment_method", "payment method", "payment_method"],
}


def parse_upload(file_path: str) -> pd.DataFrame:
    """
    Parse a spending table into a DataFrame of raw strings.

    The load is all-or-nothing: either the whole table is returned or an
    exception is raised.
    """
    path = Path(file_path)
    ext = path.suffix.lower()

    if ext == ".csv":
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
    elif ext == ".xlsx":
        xls = pd.ExcelFile(file_path, engine="openpyxl")
        df = None
        for sheet_name in xls.sheet_names:
            sheet = pd.read_excel(xls, sheet_name=sheet_name, dtype=str)
            if not sheet.empty and len(sheet.columns) > 1:
                df = sheet
                break
        if df is None:
            raise ValueError("No valid sheets found in the Excel file.")
    else:
        raise ValueError(f"Unsupported file type: {ext}")

    # Drop the unnamed index column pandas writes out with to_csv().
    unnamed = [c for c in df.columns if str(c).startswith("Unnamed:") or str(c).strip() == ""]
    if unnamed:
        df = df.drop(columns=unnamed)

    mapping = suggest_column_mapping(df)
    rename_map = {src: field for field, src in mapping.items() if src and src != field}
    return df.rename(columns=rename_map)


def suggest_column_mapping(df: pd.DataFrame) -> Dict[str, Optional[str]]:
    """
    Suggest a mapping from canonical field names to actual column names.
    Returns: { field: actual_column_name_or_None }
    """
    cols_lower = {str(c).lower().strip(): c for c in df.columns}
    mapping: Dict[str, Optional[str]] = {}

    for field in NUMERIC_FIELDS + CATEGORICAL_FIELDS:
        matched = None
        for alias in [field] + COLUMN_ALIASES.get(field, []):
            if alias in cols_lower:
                matched = cols_lower[alias]
                break
        mapping[field] = matched

    return mapping


def validate_data(df: pd.DataFrame) -> List[Dict]:
    """
    Validate a parsed table and return a list of issues found.
    Coercion never fails, so nothing here is fatal except an empty table.
    """
    issues = []
    mapping = suggest_column_mapping(df)

    if len(df) == 0:
        issues.append({
            "type": "empty_data",
            "severity": "critical",
            "message": "The uploaded file contains no data rows.",
        })

    missing = [field for field in NUMERIC_FIELDS if mapping.get(field) is None and field != "age"]
    if missing:
        issues.append({
            "type": "missing_columns",
            "severity": "warning",
            "message": f"Columns not found and treated as 0: {missing}",
        })

    for field in ("gender", "year_in_school", "major"):
        if mapping.get(field) is None:
            issues.append({
                "type": "missing_column",
                "severity": "warning",
                "message": f"Column '{field}' not found; filters on it will match nothing.",
            })

    return issues
