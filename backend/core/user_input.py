"""
user_input.py — The visitor's own discretionary spending.

A UserInput arrives either as query parameters or as a previously stored
blob (the JSON the browser keeps under "userSpendingData"). Both are
optional; anything missing or malformed reads as 0.
"""

import json
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional, Union

from core.fields import DISCRETIONARY_FIELDS

# Query strings use hyphens where the stored blob uses underscores.
QUERY_KEYS = {
    "entertainment": ["entertainment"],
    "personal_care": ["personal-care", "personal_care"],
    "miscellaneous": ["miscellaneous"],
}


def _to_amount(value: Any) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(v) or math.isinf(v):
        return 0.0
    return v


@dataclass(frozen=True)
class UserInput:
    entertainment: float = 0.0
    personal_care: float = 0.0
    miscellaneous: float = 0.0

    @property
    def total(self) -> float:
        return self.entertainment + self.personal_care + self.miscellaneous

    def values(self) -> Dict[str, float]:
        """Amounts keyed by spending field, in discretionary order."""
        return {field: getattr(self, field) for field in DISCRETIONARY_FIELDS}

    def to_dict(self) -> Dict[str, float]:
        out = asdict(self)
        out["total"] = self.total
        return out

    @classmethod
    def from_query(cls, params: Optional[Mapping[str, Any]]) -> "UserInput":
        """Build from URL query parameters; absent keys default to 0."""
        if not params:
            return cls()
        amounts = {}
        for field, keys in QUERY_KEYS.items():
            raw = next((params[k] for k in keys if k in params), None)
            if isinstance(raw, (list, tuple)):
                raw = raw[0] if raw else None
            amounts[field] = _to_amount(raw)
        return cls(**amounts)

    @classmethod
    def from_blob(cls, blob: Union[str, bytes, Mapping[str, Any], None]) -> "UserInput":
        """Build from a stored blob; invalid JSON or a non-object yields zeros."""
        if blob is None:
            return cls()
        data = blob
        if isinstance(blob, (str, bytes)):
            try:
                data = json.loads(blob)
            except (TypeError, ValueError):
                return cls()
        if not isinstance(data, Mapping):
            return cls()
        return cls(**{field: _to_amount(data.get(field)) for field in DISCRETIONARY_FIELDS})

    def to_blob(self) -> str:
        return json.dumps(self.values())


def resolve_user_input(payload: Mapping[str, Any]) -> UserInput:
    """
    Pick the visitor's input from a request payload.
    Query parameters win over the stored blob, matching the page that reads
    the URL first.
    """
    query = payload.get("query")
    if query:
        return UserInput.from_query(query)
    return UserInput.from_blob(payload.get("user"))
