from __future__ import annotations

from typing import Mapping

from planners.errors import BrokenChainError, InvariantViolationError
from shared.types import Node, Path


def reconstruct_path(parent: Mapping[Node, Node], start: Node, goal: Node) -> Path:
    """Follow ``parent`` back from goal to start; return the nodes start-first."""
    path: Path = []
    node = goal
    # a chain longer than the table can only be a cycle
    for _ in range(len(parent) + 1):
        if node == start:
            break
        path.append(node)
        try:
            node = parent[node]
        except KeyError:
            raise BrokenChainError(f"node {node!r} has no parent") from None
    else:
        raise BrokenChainError(f"parent chain from {goal!r} never reaches {start!r}")
    path.append(start)
    path.reverse()

    if path[0] != start:
        raise InvariantViolationError(f"first path node {path[0]!r} is not start {start!r}")
    if path[-1] != goal:
        raise InvariantViolationError(f"last path node {path[-1]!r} is not goal {goal!r}")
    return path
