from __future__ import annotations

from typing import List

from planners.grid import OccupancyGrid
from shared.types import Node


def traversable_neighbors(grid: OccupancyGrid, node: Node) -> List[Node]:
    """
    Vertices reachable in one step from ``node``, in N, E, S, W, NW, NE, SE, SW order.

    Moves run along cell edges while open/blocked is a property of whole
    cells, so each vertex looks at the four cells around it:

        +---------+---------+
        |   NW    |   NE    |
        | x-1,y-1 |  x,y-1  |
        +---------N---------+
        |   SW    |   SE    |
        |  x-1,y  |   x,y   |
        +---------+---------+

    A cardinal move needs either cell along that edge open. A diagonal move
    needs the cell it crosses open plus at least one of the two cells next
    to it, so a path may squeeze past one blocked corner but never through
    two diagonal blocked cells.

    Known quirk, kept on purpose: only the four cells around the vertex are
    consulted, never the direction the path arrived from, so around the
    inner corner of an L-shaped wall paths can hug the wall awkwardly.
    Filtering by the incoming edge would fix that but is not implemented.
    """
    x, y = node.x, node.y
    nw = grid.is_open(x - 1, y - 1)
    ne = grid.is_open(x, y - 1)
    se = grid.is_open(x, y)
    sw = grid.is_open(x - 1, y)

    out: List[Node] = []
    if nw or ne:
        out.append(Node(x, y - 1))
    if ne or se:
        out.append(Node(x + 1, y))
    if se or sw:
        out.append(Node(x, y + 1))
    if sw or nw:
        out.append(Node(x - 1, y))

    if nw and (ne or sw):
        out.append(Node(x - 1, y - 1))
    if ne and (nw or se):
        out.append(Node(x + 1, y - 1))
    if se and (ne or sw):
        out.append(Node(x + 1, y + 1))
    if sw and (nw or se):
        out.append(Node(x - 1, y + 1))
    return out
