from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np

from radar_plotter.core.ranges import DimensionRange
from radar_plotter.plotting.helpers import format_tick

DEFAULT_TICK_COUNT = 5


@dataclass(frozen=True)
class NormalizedPoint:
    series: str
    dimension: str
    ratio: float
    angle: float
    value: float
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class AxisTick:
    ratio: float
    value: float
    label: str


def axis_angle(index: int, count: int) -> float:
    """Axis 0 points straight up; later axes follow clockwise (screen y grows downwards)."""
    if count <= 0:
        raise ValueError("Axis count must be positive.")
    return index * (2.0 * math.pi / count) - math.pi / 2.0


def axis_angles(count: int) -> np.ndarray:
    if count <= 0:
        return np.zeros(0, dtype=float)
    return np.arange(count, dtype=float) * (2.0 * np.pi / count) - np.pi / 2.0


def value_ratio(value: float, rng: DimensionRange) -> float:
    """
    Position of `value` between the range bounds, clamped to [0, 1].

    Reversed axes put the maximum at the centre, so "lower is better" metrics
    still grow outwards as they improve. A collapsed range or a non-finite
    value maps to the centre.
    """
    span = rng.max - rng.min
    v = float(value)
    if not span > 0 or not math.isfinite(v) or not math.isfinite(span):
        return 0.0
    if rng.reverse:
        ratio = (rng.max - v) / span
    else:
        ratio = (v - rng.min) / span
    return float(np.clip(ratio, 0.0, 1.0))


def to_cartesian(ratio: float, angle: float, grid_radius: float = 1.0) -> tuple[float, float]:
    r = grid_radius * ratio
    return r * math.cos(angle), r * math.sin(angle)


def map_series(
    series_name: str,
    dimensions: Sequence[str],
    ranges_by_dimension: Mapping[str, DimensionRange],
    values: Mapping[str, float],
    grid_radius: float = 1.0,
) -> list[NormalizedPoint]:
    """Normalized points for one series, one per dimension in axis order."""
    angles = axis_angles(len(dimensions))
    points: list[NormalizedPoint] = []
    for dim, angle in zip(dimensions, angles.tolist()):
        rng = ranges_by_dimension.get(dim) or DimensionRange(min=0.0, max=0.0)
        value = float(values.get(dim, 0.0))
        ratio = value_ratio(value, rng)
        x, y = to_cartesian(ratio, angle, grid_radius)
        points.append(
            NormalizedPoint(
                series=series_name,
                dimension=dim,
                ratio=ratio,
                angle=angle,
                value=value,
                x=x,
                y=y,
            )
        )
    return points


def axis_ticks(rng: DimensionRange, integer_mode: bool, count: int = DEFAULT_TICK_COUNT) -> list[AxisTick]:
    """Evenly spaced ticks from the centre (ratio 0) to the grid edge (ratio 1)."""
    if rng.is_degenerate or count < 2:
        return [AxisTick(ratio=0.0, value=rng.min, label=format_tick(rng.min, integer_mode))]

    ticks: list[AxisTick] = []
    for ratio in np.linspace(0.0, 1.0, count).tolist():
        if rng.reverse:
            value = rng.max - ratio * rng.span
        else:
            value = rng.min + ratio * rng.span
        ticks.append(AxisTick(ratio=ratio, value=value, label=format_tick(value, integer_mode)))
    return ticks
