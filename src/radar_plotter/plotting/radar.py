from __future__ import annotations

import numpy as np
from matplotlib.figure import Figure

from radar_plotter.core.plotting import RadarFrame

GRID_COLOR = "#e2e8f0"
LABEL_COLOR = "#475569"
FALLBACK_COLOR = "#1f77b4"


def polar_theta(angles: np.ndarray) -> np.ndarray:
    """Engine angles (screen coordinates, -pi/2 = up) to matplotlib theta with zero at north, clockwise."""
    return np.mod(np.asarray(angles, dtype=float) + np.pi / 2.0, 2.0 * np.pi)


def _closed(values: np.ndarray) -> np.ndarray:
    if len(values) == 0:
        return values
    return np.concatenate([values, values[:1]])


def _draw_grid(ax, theta: np.ndarray, frame: RadarFrame) -> None:
    levels = sorted({t.ratio for ticks in frame.ticks.values() for t in ticks if t.ratio > 0}) or [1.0]
    if frame.style.grid_type == "polygon":
        ax.grid(False)
        ax.spines["polar"].set_visible(False)
        for level in levels:
            ax.plot(_closed(theta), np.full(len(theta) + 1, level), color=GRID_COLOR, linewidth=0.8, zorder=0)
    else:
        ax.set_rgrids(levels, labels=[""] * len(levels), color=GRID_COLOR)
        ax.grid(True, color=GRID_COLOR)
    for t in theta:
        ax.plot([t, t], [0.0, 1.0], color=GRID_COLOR, linewidth=0.8, zorder=0)


def draw_radar(ax, frame: RadarFrame) -> None:
    """Draw a prepared frame on a matplotlib polar axes."""
    style = frame.style
    ax.clear()
    ax.set_theta_zero_location("N")
    ax.set_theta_direction(-1)
    ax.set_ylim(0.0, 1.0)
    ax.set_yticklabels([])
    if style.title:
        ax.set_title(style.title, fontsize=style.font_size + 4, fontfamily=style.font_family, pad=16)

    if frame.is_empty:
        ax.set_xticks([])
        return

    theta = polar_theta(frame.angles)
    _draw_grid(ax, theta, frame)

    ax.set_xticks(theta)
    ax.set_xticklabels(
        [frame.axis_label(d) for d in frame.dimensions],
        fontsize=style.font_size,
        fontfamily=style.font_family,
        color=LABEL_COLOR,
        fontweight="medium",
    )

    for t, dim in zip(theta, frame.dimensions):
        for tick in frame.ticks.get(dim, []):
            if tick.ratio <= 0:
                continue
            ax.text(t, tick.ratio, tick.label, fontsize=max(style.font_size - 4, 6), fontfamily=style.font_family,
                    color=LABEL_COLOR, ha="center", va="center", zorder=1)

    for name in frame.series:
        points = frame.points.get(name, [])
        if not points:
            continue
        color = frame.colors.get(name, FALLBACK_COLOR)
        r = _closed(np.array([p.ratio for p in points], dtype=float))
        th = _closed(theta[: len(points)])
        ax.plot(
            th,
            r,
            color=color,
            linewidth=style.stroke_width,
            marker="o" if style.show_dots else None,
            markersize=3,
            label=name,
            zorder=3,
        )
        ax.fill(th, r, color=color, alpha=style.fill_opacity, zorder=2)

    ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.08), ncol=min(len(frame.series), 4),
              prop={"family": style.font_family, "size": style.font_size}, frameon=False)


def create_radar_figure(frame: RadarFrame, figsize=(8, 6)) -> Figure:
    fig = Figure(figsize=figsize)
    ax = fig.add_subplot(111, projection="polar")
    draw_radar(ax, frame)
    return fig
