"""
Matplotlib rendering of Youden plots.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from youden.result import YoudenResult
from youden_report.formatting import format_percent
from youden_report.style import (
    COLOR_CIRCLE,
    COLOR_MEDIAN_AXES,
    COLOR_PRECISION_LINE,
    COLOR_TANGENT,
    LINE_WIDTH,
    group_codes,
    palette_colors,
)

CIRCLE_POINTS = 500


def circle_outline(result: YoudenResult) -> Tuple[np.ndarray, np.ndarray]:
    """Return x/y coordinates tracing the confidence circle."""

    angles = np.linspace(0.0, 2.0 * np.pi, CIRCLE_POINTS)
    xs = result.median.x + result.r * np.cos(angles)
    ys = result.median.y + result.r * np.sin(angles)
    return xs, ys


def diagonal_line(
    x_limits: Tuple[float, float],
    dm: float,
    k: float = 0.0,
) -> Tuple[np.ndarray, np.ndarray]:
    """Return the endpoints of ``y = x + dm + k`` across ``x_limits``."""

    xs = np.asarray(x_limits, dtype=float)
    return xs, xs + dm + k


def render_youden_plot(
    result: YoudenResult,
    ax: Optional[plt.Axes] = None,
) -> Tuple[plt.Figure, plt.Axes]:
    """Draw the Youden plot for ``result``.

    The figure contains the confidence circle centred on the Manhattan
    median, one scatter series per group, the 45 degree precision line, the
    two tangents parallel to it, and the vertical and horizontal lines
    through the median. The axis limits are taken from the scatter so the
    reference lines span the visible area.

    Parameters
    ----------
    result:
        Computed Youden result.
    ax:
        Optional target axes. A new figure is created when omitted.

    Returns
    -------
    Tuple[matplotlib.figure.Figure, matplotlib.axes.Axes]
        Figure and axes holding the plot.
    """

    if ax is None:
        fig, ax = plt.subplots(figsize=(10.0, 8.0))
    else:
        fig = ax.figure
    fig.patch.set_facecolor("white")
    ax.set_aspect("equal", adjustable="box")

    circle_x, circle_y = circle_outline(result)
    (circle_handle,) = ax.plot(
        circle_x,
        circle_y,
        color=COLOR_CIRCLE,
        linewidth=LINE_WIDTH,
    )

    codes, groups = group_codes(result.labels)
    for code, color in enumerate(palette_colors(len(groups))):
        mask = codes == code
        ax.scatter(
            result.data[mask, 0],
            result.data[mask, 1],
            color=[color],
            s=30,
            zorder=3,
        )

    x_limits = ax.get_xlim()
    y_limits = ax.get_ylim()

    line_x, line_y = diagonal_line(x_limits, result.dm)
    (precision_handle,) = ax.plot(
        line_x,
        line_y,
        color=COLOR_PRECISION_LINE,
        linewidth=LINE_WIDTH,
    )
    for offset in (result.k, -result.k):
        tangent_x, tangent_y = diagonal_line(x_limits, result.dm, offset)
        ax.plot(tangent_x, tangent_y, color=COLOR_TANGENT, linewidth=LINE_WIDTH)

    ax.set_xlim(x_limits)
    ax.set_ylim(y_limits)
    (median_handle,) = ax.plot(
        [result.median.x, result.median.x],
        y_limits,
        color=COLOR_MEDIAN_AXES,
        linewidth=LINE_WIDTH,
    )
    ax.plot(
        x_limits,
        [result.median.y, result.median.y],
        color=COLOR_MEDIAN_AXES,
        linewidth=LINE_WIDTH,
    )

    ax.legend(
        [circle_handle, precision_handle, median_handle],
        [
            f"{format_percent(result.confidence)}% circle",
            "Precision line",
            f"Manhattan median: {result.median}",
        ],
        loc="upper left",
        bbox_to_anchor=(1.02, 1.0),
    )
    ax.tick_params(labelsize=14)
    ax.set_title("Youden's plot", fontsize=16)
    ax.set_xlabel("First measure", fontsize=16)
    ax.set_ylabel("Second measure", fontsize=16)
    fig.tight_layout()
    return fig, ax


def save_figure(output_path: Path, fig: plt.Figure) -> Path:
    """Expand, create parent directories, and save a Matplotlib figure."""

    resolved = Path(output_path).expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(resolved, dpi=150)
    plt.close(fig)
    print(f"Wrote figure to {resolved}")
    return resolved


def write_youden_figure(result: YoudenResult, output_path: Path) -> Path:
    """Render ``result`` off-screen and save it to ``output_path``."""

    plt.switch_backend("Agg")
    fig, _ = render_youden_plot(result)
    return save_figure(output_path, fig)


__all__ = [
    "circle_outline",
    "diagonal_line",
    "render_youden_plot",
    "save_figure",
    "write_youden_figure",
]
