from __future__ import annotations

from planners.grid import OccupancyGrid
from shared.types import Node


def line_of_sight(grid: OccupancyGrid, a: Node, b: Node) -> bool:
    """
    True if the segment between vertices ``a`` and ``b`` crosses no blocked cell.

    Integer Bresenham-style walk along the dominant axis (after the Theta*
    write-up on aigamedev.com). ``f`` tracks the minor-axis error scaled by
    the major delta, so every crossing is decided exactly without floats.
    Touching a blocked cell only at a corner is allowed. Running exactly
    along a grid line is blocked only when the cells on both sides are.
    The test is symmetric in ``a`` and ``b``.
    """
    x0, y0 = a.x, a.y
    x1, y1 = b.x, b.y
    dx = x1 - x0
    dy = y1 - y0
    sx, sy = 1, 1
    if dx < 0:
        dx, sx = -dx, -1
    if dy < 0:
        dy, sy = -dy, -1
    # cell offset from the current vertex in the direction of travel
    ox = (sx - 1) // 2
    oy = (sy - 1) // 2
    blocked = grid.is_blocked
    f = 0

    if dx >= dy:
        while x0 != x1:
            f += dy
            if f >= dx:
                if blocked(x0 + ox, y0 + oy):
                    return False
                y0 += sy
                f -= dx
            if f != 0 and blocked(x0 + ox, y0 + oy):
                return False
            if dy == 0 and blocked(x0 + ox, y0) and blocked(x0 + ox, y0 - 1):
                return False
            x0 += sx
    else:
        while y0 != y1:
            f += dx
            if f >= dy:
                if blocked(x0 + ox, y0 + oy):
                    return False
                x0 += sx
                f -= dy
            if f != 0 and blocked(x0 + ox, y0 + oy):
                return False
            if dx == 0 and blocked(x0, y0 + oy) and blocked(x0 - 1, y0 + oy):
                return False
            y0 += sy
    return True
