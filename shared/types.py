from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

# Lattice points sit on cell corners: vertex (x, y) is the top-left corner of
# cell (x, y). Vertices span [0, width] x [0, height].


@dataclass(frozen=True, order=True)
class Node:
    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"({self.x},{self.y})"


Pt = Tuple[int, int]
Path = List[Node]  # start first, goal last; empty = no route
