from __future__ import annotations

import math

from shared.types import Node

SQRT2 = math.sqrt(2.0)


def straight_line_distance(a: Node, b: Node) -> float:
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    return math.sqrt(dx * dx + dy * dy)


def octile_distance(a: Node, b: Node) -> float:
    """Exact 8-connected distance with unit cardinal and sqrt(2) diagonal moves."""
    dx, dy = abs(a.x - b.x), abs(a.y - b.y)
    return dx + dy + (SQRT2 - 2.0) * min(dx, dy)


def zero_distance(a: Node, b: Node) -> float:
    return 0.0


def edge_cost(a: Node, b: Node) -> float:
    # neighbors are one step apart on each axis at most
    return SQRT2 if (a.x != b.x and a.y != b.y) else 1.0
