"""
rank.py — Ordinal rank of one group among all groups.

Rank 1 is the largest value. Equal values keep the order in which they
appear in the mapping, so the result is deterministic for a given input.
"""

from typing import Dict, Hashable, Mapping, Tuple

from core.errors import UnknownGroupError


def rank_all(values: Mapping[Hashable, float]) -> Dict[Hashable, int]:
    """1-indexed descending rank of every key."""
    ordered = sorted(values.items(), key=lambda kv: kv[1], reverse=True)
    return {key: i + 1 for i, (key, _) in enumerate(ordered)}


def rank_of(values: Mapping[Hashable, float], target: Hashable) -> Tuple[int, int]:
    """(rank, total) of ``target``; UnknownGroupError if it is not a key."""
    if target not in values:
        raise UnknownGroupError(target)
    return rank_all(values)[target], len(values)
