from __future__ import annotations

from planners.errors import InvariantViolationError
from planners.grid import OccupancyGrid
from planners.visibility import line_of_sight
from shared.types import Path


def post_smooth(grid: OccupancyGrid, path: Path) -> Path:
    """
    Greedy line-of-sight shortcutting of a grid path.

    From each anchor, walk forward while the next node is still visible
    from the anchor; the last visible node becomes the next anchor. Start
    and goal are always kept.
    """
    if len(path) <= 2:
        return list(path)

    out = [path[0]]
    anchor = 0
    last = len(path) - 1
    while anchor < last:
        j = anchor + 1
        if not line_of_sight(grid, path[anchor], path[j]):
            raise InvariantViolationError(
                f"no line of sight between consecutive path nodes {path[anchor]!r} and {path[j]!r}"
            )
        while j < last and line_of_sight(grid, path[anchor], path[j + 1]):
            j += 1
        out.append(path[j])
        anchor = j
    return out
