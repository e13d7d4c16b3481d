"""
fields.py — Shared field names, display labels and enumerated group keys.

Every view reads category names from here instead of re-deriving internal
field names from display labels.
"""

from typing import Dict, List, Optional

# ── Spending Categories ─────────────────────────────────────────────

SPENDING_CATEGORIES: List[Dict[str, str]] = [
    {"field": "housing", "label": "Housing"},
    {"field": "food", "label": "Food"},
    {"field": "transportation", "label": "Transportation"},
    {"field": "books_supplies", "label": "Books & Supplies"},
    {"field": "entertainment", "label": "Entertainment"},
    {"field": "personal_care", "label": "Personal Care"},
    {"field": "technology", "label": "Technology"},
    {"field": "health_wellness", "label": "Health & Wellness"},
    {"field": "miscellaneous", "label": "Miscellaneous"},
]

SPENDING_FIELDS: List[str] = [c["field"] for c in SPENDING_CATEGORIES]

# Categories a visitor enters on the landing form.
DISCRETIONARY_FIELDS: List[str] = ["entertainment", "personal_care", "miscellaneous"]

_LABEL_BY_FIELD = {c["field"]: c["label"] for c in SPENDING_CATEGORIES}
_FIELD_BY_LABEL = {c["label"].lower(): c["field"] for c in SPENDING_CATEGORIES}


def label_for(field: str) -> str:
    """Display label for an internal field name."""
    if field in _LABEL_BY_FIELD:
        return _LABEL_BY_FIELD[field]
    return " ".join(part.capitalize() for part in field.split("_"))


def field_for(label: str) -> Optional[str]:
    """Internal field name for a display label (or the field name itself)."""
    key = str(label).strip()
    if key in _LABEL_BY_FIELD:
        return key
    return _FIELD_BY_LABEL.get(key.lower())


# ── Record Columns ──────────────────────────────────────────────────

INCOME_FIELDS: List[str] = ["monthly_income", "financial_aid", "tuition"]

NUMERIC_FIELDS: List[str] = ["age"] + INCOME_FIELDS + SPENDING_FIELDS

CATEGORICAL_FIELDS: List[str] = [
    "gender", "year_in_school", "major", "preferred_payment_method",
]

DERIVED_FIELDS: List[str] = ["income", "disposable_income", "discretionary_spending"]


# ── Group Keys ──────────────────────────────────────────────────────

GENDERS: List[str] = ["Male", "Female", "Non-binary"]

MAJORS: List[str] = [
    "Computer Science", "Engineering", "Economics", "Biology", "Psychology",
]

YEARS: List[str] = ["Freshman", "Sophomore", "Junior", "Senior"]

GROUP_DIMENSIONS: Dict[str, List[str]] = {
    "gender": GENDERS,
    "major": MAJORS,
    "year_in_school": YEARS,
}
