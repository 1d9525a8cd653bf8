from __future__ import annotations

from typing import Mapping, Optional, Sequence

from matplotlib import colors as mcolors

DEFAULT_PALETTE: tuple[str, ...] = (
    "#34a853",  # green
    "#ea4335",  # red
    "#4285f4",  # blue
    "#fbbc05",  # yellow
    "#8e44ad",  # purple
    "#2c3e50",  # dark blue
    "#e67e22",  # orange
)


def assign_colors(
    series_names: Sequence[str],
    existing: Optional[Mapping[str, str]] = None,
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> dict[str, str]:
    """
    Give every series without a color the palette entry at its position.

    Entries already in `existing` are never changed, so a series keeps its
    color across reparses.
    """
    if not palette:
        raise ValueError("Palette must contain at least one color.")
    out = dict(existing or {})
    for idx, name in enumerate(dict.fromkeys(series_names)):
        if name not in out:
            out[name] = palette[idx % len(palette)]
    return out


def normalize_color(color: str) -> str:
    if not mcolors.is_color_like(color):
        raise ValueError(f"Not a valid color: {color!r}")
    return mcolors.to_hex(color)


def override_color(assignment: Mapping[str, str], name: str, color: str) -> dict[str, str]:
    out = dict(assignment)
    out[str(name)] = normalize_color(color)
    return out


def clear_color(assignment: Mapping[str, str], name: str) -> dict[str, str]:
    out = dict(assignment)
    out.pop(str(name), None)
    return out
