"""
radar.py — Polar projection of category values for radar comparisons.

Axis i of n sits at angle i * 2π/n - π/2: the first category points
straight up and the rest follow clockwise in the order supplied.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Mapping, Sequence

import numpy as np


@dataclass(frozen=True)
class PolarPoint:
    category: str
    value: float
    angle: float
    radius: float
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def axis_angles(categories: Sequence[str]) -> Dict[str, float]:
    """Angle of every axis, keyed by category."""
    n = len(categories)
    if n == 0:
        return {}
    step = 2 * np.pi / n
    return {cat: float(i * step - np.pi / 2) for i, cat in enumerate(categories)}


def project(
    categories: Sequence[str],
    values: Mapping[str, float],
    max_value: float,
    outer_radius: float = 1.0,
) -> List[PolarPoint]:
    """
    Project a series onto the radar axes.

    Only categories the series actually supplies are projected, each on its
    own axis, so a partial series keeps its own shape. ``max_value`` must be
    shared by every series drawn together; the caller computes it.
    """
    if max_value <= 0:
        raise ValueError(f"max_value must be positive, got {max_value}.")

    angles = axis_angles(categories)
    points: List[PolarPoint] = []
    for cat in categories:
        if cat not in values:
            continue
        value = float(values[cat])
        angle = angles[cat]
        radius = value / max_value * outer_radius
        points.append(PolarPoint(
            category=cat,
            value=value,
            angle=angle,
            radius=radius,
            x=float(radius * np.cos(angle)),
            y=float(radius * np.sin(angle)),
        ))
    return points


def axis_points(categories: Sequence[str], outer_radius: float = 1.0) -> List[Dict[str, float]]:
    """Outer end point of each axis spoke."""
    return [
        {
            "category": cat,
            "angle": angle,
            "x": float(outer_radius * np.cos(angle)),
            "y": float(outer_radius * np.sin(angle)),
        }
        for cat, angle in axis_angles(categories).items()
    ]


def shared_max(*series: Mapping[str, float]) -> float:
    """Largest value across all series, or 1.0 when nothing is above zero."""
    values: Iterable[float] = (float(v) for s in series for v in s.values())
    best = max(values, default=0.0)
    return best if best > 0 else 1.0
