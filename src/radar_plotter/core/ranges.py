from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Optional

import numpy as np

from radar_plotter.core.series import SeriesModel
from radar_plotter.data.loaders import parse_number

PAD_LOW = 0.9
PAD_HIGH = 1.1
NICE_STEP = 10
INTEGER_TICK_STEP = 1.0
DECIMAL_TICK_STEP = 0.1

RANGE_FIELDS = ("min", "max")


@dataclass(frozen=True)
class DimensionRange:
    min: float
    max: float
    reverse: bool = False
    unit: str = ""

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        return not self.max > self.min


def tick_step(integer_mode: bool) -> float:
    return INTEGER_TICK_STEP if integer_mode else DECIMAL_TICK_STEP


def round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def resolve_auto(
    dimension: str,
    values: Iterable[float],
    integer_mode: bool,
    reverse: bool = False,
    unit: str = "",
) -> DimensionRange:
    """
    Derive a range for one dimension from the observed values.

    The padding is multiplicative (x0.9 below, x1.1 above), so a negative
    minimum moves towards zero rather than away from it. Bounds are then
    rounded outwards: to multiples of 10 in integer mode, to whole numbers
    otherwise. A negative floor is clamped to 0 when no observed value is
    negative. When every observed value is the same the range collapses to
    that value and all ratios on the axis become 0.

    `dimension` is accepted for symmetry with the session API; it does not
    affect the result.
    """
    arr = np.asarray(list(values), dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size:
        observed_min = float(np.min(arr))
        observed_max = float(np.max(arr))
    else:
        observed_min = observed_max = 0.0

    if observed_min == observed_max:
        return DimensionRange(min=observed_min, max=observed_max, reverse=bool(reverse), unit=str(unit))

    padded_min = observed_min * PAD_LOW
    padded_max = observed_max * PAD_HIGH

    if integer_mode:
        lo = math.floor(padded_min / NICE_STEP) * NICE_STEP
        hi = math.ceil(padded_max / NICE_STEP) * NICE_STEP
    else:
        lo = math.floor(padded_min)
        hi = math.ceil(padded_max)

    if lo < 0 and observed_min >= 0:
        lo = 0

    return DimensionRange(min=float(lo), max=float(hi), reverse=bool(reverse), unit=str(unit))


def resolve_all(
    model: SeriesModel,
    integer_mode: bool,
    previous: Optional[Mapping[str, DimensionRange]] = None,
) -> dict[str, DimensionRange]:
    """Auto ranges for every dimension; `reverse` and `unit` carry over from `previous`."""
    previous = previous or {}
    out: dict[str, DimensionRange] = {}
    for dim in model.dimensions:
        prev = previous.get(dim)
        out[dim] = resolve_auto(
            dim,
            model.dimension_values(dim),
            integer_mode,
            reverse=prev.reverse if prev is not None else False,
            unit=prev.unit if prev is not None else "",
        )
    return out


def apply_manual_edit(
    rng: DimensionRange,
    field: str,
    new_value: Any,
    integer_mode: bool,
) -> DimensionRange:
    """
    Set `min` or `max` directly, keeping `max > min`.

    A bound that would cross the other one is pulled back to one tick step
    (1 in integer mode, 0.1 otherwise) short of it. Unparseable input keeps
    the current bound.
    """
    if field not in RANGE_FIELDS:
        raise ValueError(f"Unknown range field: {field!r}")

    current = rng.min if field == "min" else rng.max
    value = parse_number(new_value, default=current)
    if integer_mode:
        value = round_half_up(value)

    step = tick_step(integer_mode)
    if field == "min":
        if value >= rng.max:
            value = rng.max - step
        return replace(rng, min=value)
    if value <= rng.min:
        value = rng.min + step
    return replace(rng, max=value)


def apply_range_override(
    rng: DimensionRange,
    *,
    integer_mode: bool,
    min: Any = None,
    max: Any = None,
    unit: Optional[str] = None,
    reverse: Optional[bool] = None,
) -> DimensionRange:
    """Apply a whole per-dimension override; bounds go through `apply_manual_edit`."""
    edits = [("min", min), ("max", max)]
    # Moving the whole window above the current max needs max first.
    if min is not None:
        new_min = parse_number(min, default=rng.min)
        if integer_mode:
            new_min = round_half_up(new_min)
        if new_min >= rng.max:
            edits.reverse()
    out = rng
    for field, value in edits:
        if value is not None:
            out = apply_manual_edit(out, field, value, integer_mode)
    if unit is not None:
        out = replace(out, unit=str(unit).strip())
    if reverse is not None:
        out = replace(out, reverse=bool(reverse))
    return out
