"""
errors.py — Domain errors raised by the statistics layer.

Routes and dashboard views decide how each one surfaces:
- EmptySampleError → explicit "no data" state
- DegenerateInputError → trend line / correlation suppressed
- UnknownGroupError → caller bug, fails the request
"""

from typing import Any


class SpendingStatsError(Exception):
    """Base class for statistics-layer errors."""


class EmptySampleError(SpendingStatsError, ValueError):
    """A statistic was requested over a sample with no elements."""

    def __init__(self, message: str = "Sample is empty."):
        super().__init__(message)


class DegenerateInputError(SpendingStatsError, ValueError):
    """Regression input has zero variance in x, so the slope is undefined."""

    def __init__(self, message: str = "x values have zero variance."):
        super().__init__(message)


class UnknownGroupError(SpendingStatsError, LookupError):
    """A rank was requested for a group missing from its own mapping."""

    def __init__(self, group: Any):
        self.group = group
        super().__init__(f"Group '{group}' is not present in the ranked values.")

    def __str__(self) -> str:
        return self.args[0]
