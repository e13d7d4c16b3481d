"""
narrative.py — Template-based text for the spending comparisons.

Transforms structured comparison data into short sentences. Uses f-string
templates only.
"""

from typing import Any, Dict, Optional

from core.fields import label_for

BAND_SENTENCES = {
    "low": "Your monthly spending is lower than most students.",
    "below_average": "Your monthly spending is below average compared to other students.",
    "above_average": "Your monthly spending is above average compared to other students.",
    "high": "Your monthly spending is higher than most students.",
}


def _money(amount: float, decimals: int = 0) -> str:
    return f"${amount:,.{decimals}f}"


# ── Distribution Narratives ─────────────────────────────────────────

def narrate_percentile_band(band: str) -> str:
    return BAND_SENTENCES[band]


def narrate_percentile(percentile: float) -> str:
    return (
        f"You spend more than approximately {percentile:.0f}% of students monthly."
    )


def narrate_discretionary_total(user_total: float, average_total: float) -> str:
    return (
        f"Your total monthly discretionary spending is {_money(user_total, 2)}. "
        f"The average student spends {_money(average_total, 2)} monthly on these "
        f"categories combined."
    )


# ── Comparison Narratives ───────────────────────────────────────────

def narrate_biggest_difference(biggest: Optional[Dict[str, Any]]) -> str:
    """Sentence about the category where the visitor differs most from the average."""
    if not biggest or not biggest.get("average_amount"):
        return "There is no average spending data available for comparison."

    category = label_for(biggest["category"])
    difference = biggest["difference"]
    direction = "more" if difference > 0 else "less"
    multiplier = biggest["multiplier"]

    message = (
        f"Your spending in {category} is {_money(abs(difference))} {direction} "
        f"than the average. The average student spends "
        f"{_money(biggest['average_amount'])} on {category}. "
    )
    if multiplier > 1:
        message += f"That is {multiplier:.1f}x more than the average spend in {category}."
    else:
        message += f"That is {multiplier:.1f}x of the average spend in {category}."
    return message
