from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from shared.types import Node


class OccupancyGrid:
    """
    Immutable occupancy matrix, row-major, True = blocked.

    Cells are indexed (x, y) by their top-left vertex. Anything off the grid
    counts as blocked, so callers never need their own bounds checks.
    """

    def __init__(self, cells) -> None:
        arr = np.array(cells, dtype=bool)
        if arr.ndim != 2:
            raise ValueError(f"grid must be 2D, got shape {arr.shape}")
        arr.flags.writeable = False
        self.cells = arr
        self.height, self.width = arr.shape
        # plain nested tuples are much faster than numpy scalar indexing
        self._rows = tuple(tuple(row) for row in arr.tolist())

    @classmethod
    def from_strings(cls, rows: Sequence[str], blocked: str = "@") -> "OccupancyGrid":
        """Build a grid from text rows, e.g. ``["..@", "..."]``."""
        widths = {len(r) for r in rows}
        if len(widths) > 1:
            raise ValueError(f"ragged rows: widths {sorted(widths)}")
        return cls([[ch in blocked for ch in r] for r in rows])

    @classmethod
    def empty(cls, width: int, height: int) -> "OccupancyGrid":
        return cls(np.zeros((height, width), dtype=bool))

    def is_open(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height and not self._rows[y][x]

    def is_blocked(self, x: int, y: int) -> bool:
        return not self.is_open(x, y)

    def contains_vertex(self, node: Node) -> bool:
        return 0 <= node.x <= self.width and 0 <= node.y <= self.height

    def blocked_cells(self) -> Iterable[Node]:
        ys, xs = np.nonzero(self.cells)
        for x, y in zip(xs.tolist(), ys.tolist()):
            yield Node(x, y)

    def __eq__(self, other) -> bool:
        if not isinstance(other, OccupancyGrid):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"OccupancyGrid(width={self.width}, height={self.height})"
