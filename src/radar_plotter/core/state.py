from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Optional

from radar_plotter.core.colors import assign_colors, clear_color, override_color
from radar_plotter.core.ranges import (
    DimensionRange,
    apply_manual_edit,
    apply_range_override,
    resolve_all,
    resolve_auto,
)
from radar_plotter.core.series import SeriesModel, parse_series_model
from radar_plotter.utils.log import describe_text, log_event

DEFAULT_INPUT = (
    "Model\tMME\tPOPE\tMM-Vet\tVizWiz\tLLaVA-Bench\n"
    "MemVR\t1896\t86.3\t56.7\t65.2\t70.5\n"
    "LLaVA-1.5\t1500\t80.1\t40.5\t50.0\t60.2\n"
    "OPERA\t1600\t82.5\t45.0\t55.1\t62.8"
)

GRID_TYPES = ("polygon", "circle")
FONT_FAMILIES = ("sans-serif", "serif", "monospace")


@dataclass
class ScaleSettings:
    integer_mode: bool = False
    auto_scale: bool = True


@dataclass
class ChartStyle:
    title: str = "Model Performance Comparison"
    font_size: int = 12
    fill_opacity: float = 0.2
    stroke_width: float = 2.0
    show_dots: bool = True
    grid_type: str = "polygon"
    grid_radius: float = 1.0
    font_family: str = "sans-serif"


@dataclass
class RadarSession:
    """
    Host-owned state for one chart: the last good model plus the user's scale
    and color choices. Only the functions in this module write to it.
    """

    input_text: str = ""
    model: SeriesModel = field(default_factory=SeriesModel)
    ranges: dict[str, DimensionRange] = field(default_factory=dict)
    colors: dict[str, str] = field(default_factory=dict)
    scale_settings: ScaleSettings = field(default_factory=ScaleSettings)
    chart_style: ChartStyle = field(default_factory=ChartStyle)

    def clear(self) -> None:
        self.input_text = ""
        self.model = SeriesModel()
        self.ranges.clear()
        self.colors.clear()
        self.scale_settings = ScaleSettings()
        self.chart_style = ChartStyle()


def _refresh_ranges(session: RadarSession, recompute_all: bool) -> None:
    model = session.model
    integer_mode = session.scale_settings.integer_mode
    if recompute_all:
        session.ranges = resolve_all(model, integer_mode, previous=session.ranges)
        return
    ranges: dict[str, DimensionRange] = {}
    for dim in model.dimensions:
        if dim in session.ranges:
            ranges[dim] = session.ranges[dim]
        else:
            ranges[dim] = resolve_auto(dim, model.dimension_values(dim), integer_mode)
    session.ranges = ranges


def set_input_text(session: RadarSession, text: str) -> bool:
    """
    Parse pasted text into the session.

    Unparseable text leaves the previous model, ranges and colors in place
    and returns False.
    """
    model = parse_series_model(text)
    if model is None:
        log_event("session.set_input_text", f"rejected input ({describe_text(text)})")
        return False

    session.input_text = str(text)
    session.model = model
    _refresh_ranges(session, recompute_all=session.scale_settings.auto_scale)
    session.colors = assign_colors(model.series, session.colors)
    return True


def set_integer_mode(session: RadarSession, integer_mode: bool) -> None:
    # Saved manual ranges are left as they are until their next edit.
    session.scale_settings.integer_mode = bool(integer_mode)
    if session.scale_settings.auto_scale:
        _refresh_ranges(session, recompute_all=True)


def set_auto_scale(session: RadarSession, auto_scale: bool) -> None:
    session.scale_settings.auto_scale = bool(auto_scale)
    if session.scale_settings.auto_scale:
        _refresh_ranges(session, recompute_all=True)


def _require_range(session: RadarSession, dimension: str) -> DimensionRange:
    if dimension not in session.ranges:
        raise KeyError(f"Unknown dimension: {dimension}")
    return session.ranges[dimension]


def edit_range(session: RadarSession, dimension: str, field_name: str, value: Any) -> DimensionRange:
    rng = apply_manual_edit(
        _require_range(session, dimension),
        field_name,
        value,
        session.scale_settings.integer_mode,
    )
    session.ranges[dimension] = rng
    return rng


def set_range_override(
    session: RadarSession,
    dimension: str,
    *,
    min: Any = None,
    max: Any = None,
    unit: Optional[str] = None,
    reverse: Optional[bool] = None,
) -> DimensionRange:
    rng = apply_range_override(
        _require_range(session, dimension),
        integer_mode=session.scale_settings.integer_mode,
        min=min,
        max=max,
        unit=unit,
        reverse=reverse,
    )
    session.ranges[dimension] = rng
    return rng


def set_reverse(session: RadarSession, dimension: str, reverse: bool) -> DimensionRange:
    return set_range_override(session, dimension, reverse=reverse)


def set_unit(session: RadarSession, dimension: str, unit: str) -> DimensionRange:
    return set_range_override(session, dimension, unit=unit)


def set_series_color(session: RadarSession, name: str, color: str) -> None:
    if name not in session.model.series:
        raise KeyError(f"Unknown series: {name}")
    session.colors = override_color(session.colors, name, color)


def reset_series_color(session: RadarSession, name: str) -> None:
    session.colors = assign_colors(session.model.series, clear_color(session.colors, name))


def _style_number(changes: dict[str, Any], key: str) -> float:
    try:
        return float(changes[key])
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number, got {changes[key]!r}") from None


def update_chart_style(session: RadarSession, **changes: Any) -> ChartStyle:
    known = {f.name for f in fields(ChartStyle)}
    unknown = set(changes) - known
    if unknown:
        raise ValueError(f"Unknown chart style option(s): {', '.join(sorted(unknown))}")

    style = session.chart_style
    if "grid_type" in changes and changes["grid_type"] not in GRID_TYPES:
        raise ValueError(f"grid_type must be one of {GRID_TYPES}")
    if "font_family" in changes and changes["font_family"] not in FONT_FAMILIES:
        raise ValueError(f"font_family must be one of {FONT_FAMILIES}")
    if "fill_opacity" in changes and not 0.0 <= _style_number(changes, "fill_opacity") <= 1.0:
        raise ValueError("fill_opacity must be between 0 and 1.")
    for key in ("font_size", "stroke_width", "grid_radius"):
        if key in changes and not _style_number(changes, key) > 0:
            raise ValueError(f"{key} must be positive.")

    for key, value in changes.items():
        setattr(style, key, value)
    return style


def new_session(text: str = DEFAULT_INPUT, integer_mode: bool = False, auto_scale: bool = True) -> RadarSession:
    session = RadarSession(scale_settings=ScaleSettings(integer_mode=integer_mode, auto_scale=auto_scale))
    set_input_text(session, text)
    return session
