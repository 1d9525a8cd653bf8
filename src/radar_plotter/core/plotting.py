from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np
import pandas as pd

from radar_plotter.core.polar import AxisTick, NormalizedPoint, axis_angles, axis_ticks, map_series
from radar_plotter.core.ranges import DimensionRange
from radar_plotter.core.state import ChartStyle, RadarSession


@dataclass
class RadarFrame:
    """Everything a renderer needs for one pass; renderers must not re-derive ranges or ratios."""

    dimensions: list[str] = field(default_factory=list)
    series: list[str] = field(default_factory=list)
    angles: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=float))
    ranges: dict[str, DimensionRange] = field(default_factory=dict)
    points: dict[str, list[NormalizedPoint]] = field(default_factory=dict)
    ticks: dict[str, list[AxisTick]] = field(default_factory=dict)
    colors: dict[str, str] = field(default_factory=dict)
    style: ChartStyle = field(default_factory=ChartStyle)
    integer_mode: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.dimensions or not self.series

    def axis_label(self, dimension: str) -> str:
        rng = self.ranges.get(dimension)
        if rng is not None and rng.unit:
            return f"{dimension} ({rng.unit})"
        return dimension

    def ranges_table(self) -> pd.DataFrame:
        rows = [
            {
                "dimension": dim,
                "min": rng.min,
                "max": rng.max,
                "reverse": rng.reverse,
                "unit": rng.unit,
            }
            for dim, rng in ((d, self.ranges[d]) for d in self.dimensions if d in self.ranges)
        ]
        return pd.DataFrame(rows, columns=["dimension", "min", "max", "reverse", "unit"])

    def points_table(self) -> pd.DataFrame:
        rows = [
            {
                "series": p.series,
                "dimension": p.dimension,
                "value": p.value,
                "ratio": p.ratio,
                "angle_deg": float(np.degrees(p.angle)),
                "x": p.x,
                "y": p.y,
            }
            for name in self.series
            for p in self.points.get(name, [])
        ]
        return pd.DataFrame(rows, columns=["series", "dimension", "value", "ratio", "angle_deg", "x", "y"])


def prepare_radar_frame(session: RadarSession, *, tick_count: Optional[int] = None) -> RadarFrame:
    model = session.model
    integer_mode = session.scale_settings.integer_mode
    style = session.chart_style

    frame = RadarFrame(
        dimensions=list(model.dimensions),
        series=list(model.series),
        colors={name: session.colors[name] for name in model.series if name in session.colors},
        style=replace(style),
        integer_mode=integer_mode,
    )
    if not model.dimensions:
        frame.errors.append("No dimensions to plot: paste a header row and at least one data row.")
        return frame
    if not model.series:
        frame.errors.append("No series to plot.")
        return frame

    frame.angles = axis_angles(len(model.dimensions))
    for dim in model.dimensions:
        rng = session.ranges.get(dim)
        if rng is None:
            frame.errors.append(f"{dim}: no range resolved, axis collapsed to the centre.")
            rng = DimensionRange(min=0.0, max=0.0)
        frame.ranges[dim] = rng
        frame.ticks[dim] = (
            axis_ticks(rng, integer_mode) if tick_count is None else axis_ticks(rng, integer_mode, tick_count)
        )

    for name in model.series:
        frame.points[name] = map_series(
            name,
            model.dimensions,
            frame.ranges,
            model.series_values(name),
            grid_radius=style.grid_radius,
        )
    return frame
