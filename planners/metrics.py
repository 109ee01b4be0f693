from __future__ import annotations

import math
from typing import Sequence, Tuple

from planners.geometry import straight_line_distance
from shared.types import Node

RAD_TO_DEG = 180.0 / math.pi
TURN_EPS_RAD = 0.001  # smaller direction changes are rounding noise, not turns


def path_length(path: Sequence[Node]) -> float:
    return sum((straight_line_distance(a, b) for a, b in zip(path, path[1:])), 0.0)


def turn_stats(path: Sequence[Node]) -> Tuple[int, float]:
    """Return (turn count, mean turn angle in radians) over the path's interior nodes."""
    turns = 0
    total = 0.0
    for n1, n2, n3 in zip(path, path[1:], path[2:]):
        v1x, v1y = n2.x - n1.x, n2.y - n1.y
        v2x, v2y = n3.x - n2.x, n3.y - n2.y
        norm = math.hypot(v1x, v1y) * math.hypot(v2x, v2y)
        if norm == 0.0:
            continue
        # clamp: rounding can push the cosine just outside [-1, 1]
        c = max(-1.0, min(1.0, (v1x * v2x + v1y * v2y) / norm))
        angle = math.acos(c)
        if angle >= TURN_EPS_RAD:
            turns += 1
            total += angle
    return turns, (total / turns if turns else 0.0)
