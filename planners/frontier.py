from __future__ import annotations

import heapq
import itertools
from typing import Dict, List, Set, Tuple

from shared.types import Node

INF = float("inf")


class SearchState:
    """
    Score tables and open set for a single search call.

    Built fresh by every search and dropped when it returns; nothing here
    is shared between calls.

    The open set is a binary heap with lazy deletion: re-inserting a node
    pushes a new entry and marks older ones stale. Entries order by lowest
    f, then highest g, then most recently pushed, so two runs over the same
    input always pop nodes in the same order.
    """

    def __init__(self, start: Node, h_start: float) -> None:
        self.g: Dict[Node, float] = {start: 0.0}
        self.parent: Dict[Node, Node] = {start: start}
        self.open: Dict[Node, float] = {}
        self.closed: Set[Node] = set()
        self._heap: List[Tuple[float, float, int, Node]] = []
        self._live: Dict[Node, int] = {}
        self._seq = itertools.count()
        self.push(start, h_start)

    def cost(self, node: Node) -> float:
        return self.g.get(node, INF)

    def push(self, node: Node, f: float) -> None:
        seq = next(self._seq)
        self.open[node] = f
        self._live[node] = seq
        heapq.heappush(self._heap, (f, -self.g[node], -seq, node))

    def pop(self) -> Node:
        """Remove and return the open node with the lowest f (ties: higher g)."""
        while self._heap:
            _, _, neg_seq, node = heapq.heappop(self._heap)
            if self._live.get(node) == -neg_seq:
                del self._live[node]
                del self.open[node]
                return node
        raise IndexError("pop from an empty open set")

    def relax(self, node: Node, via: Node, g: float, h: float) -> bool:
        """Record ``g`` for ``node`` through ``via`` if it strictly improves; (re)open it."""
        if g >= self.cost(node):
            return False
        self.g[node] = g
        self.parent[node] = via
        self.push(node, g + h)
        return True

    def __bool__(self) -> bool:
        return bool(self.open)

    def __contains__(self, node: Node) -> bool:
        return node in self.open
