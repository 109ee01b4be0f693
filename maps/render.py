from __future__ import annotations

import os
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from planners.grid import OccupancyGrid  # noqa: E402
from shared.types import Node  # noqa: E402

DPI = 100


def render_grid(grid: OccupancyGrid, path: Optional[Sequence[Node]] = None, scale: int = 8):
    """
    Draw the grid (white = open, black = blocked) at ``scale`` pixels per cell.

    Path nodes are cell corners, so the image uses vertex coordinates: cell
    (x, y) spans [x, x+1] x [y, y+1] with y growing downwards.
    """
    if scale < 1:
        raise ValueError("scale must be a positive integer")
    w, h = grid.width, grid.height
    fig = plt.figure(figsize=(w * scale / DPI, h * scale / DPI), dpi=DPI)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.imshow(
        grid.cells,
        cmap="gray_r",
        vmin=0,
        vmax=1,
        interpolation="nearest",
        extent=(0, w, h, 0),
    )
    ax.set_xlim(0, w)
    ax.set_ylim(h, 0)
    ax.axis("off")

    if path:
        xs = [n.x for n in path]
        ys = [n.y for n in path]
        lw = max(1.0, scale / 4) * 72 / DPI
        ax.plot(xs, ys, color="red", linewidth=lw)
        ax.plot(
            xs,
            ys,
            linestyle="none",
            marker="D",
            markersize=max(2.0, 0.4 * scale) * 72 / DPI,
            markerfacecolor="none",
            markeredgecolor="blue",
        )
    return fig


def save_image(fig, out: str) -> str:
    """Write ``fig`` to ``out`` (format from the suffix, e.g. .png / .jpg) and close it."""
    os.makedirs(os.path.dirname(out) or ".", exist_ok=True)
    try:
        fig.savefig(out, dpi=DPI)
    finally:
        plt.close(fig)
    return out
