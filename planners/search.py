from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict

from planners.errors import OutOfBoundsError, UnknownAlgorithmError
from planners.frontier import INF, SearchState
from planners.geometry import edge_cost, octile_distance, straight_line_distance, zero_distance
from planners.grid import OccupancyGrid
from planners.metrics import path_length
from planners.neighbors import traversable_neighbors
from planners.reconstruct import reconstruct_path
from planners.smoothing import post_smooth
from planners.visibility import line_of_sight
from shared.types import Node, Path

Heuristic = Callable[[Node, Node], float]


class Algorithm(str, Enum):
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"
    THETA_STAR = "thetastar"
    ASTAR_PS = "astar-ps"


@dataclass(frozen=True)
class Strategy:
    heuristic: Heuristic
    any_angle: bool = False
    post_smooth: bool = False


STRATEGIES: Dict[Algorithm, Strategy] = {
    Algorithm.DIJKSTRA: Strategy(zero_distance),
    Algorithm.ASTAR: Strategy(octile_distance),
    # lattice-free costs need the Euclidean bound, octile would overestimate
    Algorithm.THETA_STAR: Strategy(straight_line_distance, any_angle=True),
    Algorithm.ASTAR_PS: Strategy(octile_distance, post_smooth=True),
}


def parse_algorithm(name) -> Algorithm:
    if isinstance(name, Algorithm):
        return name
    try:
        return Algorithm(str(name).strip().lower())
    except ValueError:
        accepted = ", ".join(f'"{a.value}"' for a in Algorithm)
        raise UnknownAlgorithmError(
            f'unknown algorithm "{name}", accepted algorithms are {accepted}'
        ) from None


@dataclass
class SearchResult:
    path: Path = field(default_factory=list)
    expanded: int = 0
    cost: float = INF

    @property
    def found(self) -> bool:
        return bool(self.path)


def _check_bounds(grid: OccupancyGrid, start: Node, goal: Node) -> None:
    for label, node in (("start", start), ("goal", goal)):
        if not grid.contains_vertex(node):
            raise OutOfBoundsError(
                f"{label} {node!r} outside vertex range [0,{grid.width}]x[0,{grid.height}]"
            )


def run_search(grid: OccupancyGrid, start: Node, goal: Node, algorithm=Algorithm.ASTAR) -> SearchResult:
    """
    Best-first search from ``start`` to ``goal`` under ``algorithm``.

    Plain variants close expanded nodes. The any-angle variant never does:
    a later line-of-sight shortcut may still lower an expanded node's cost,
    in which case it goes back on the open set.
    """
    algorithm = parse_algorithm(algorithm)
    strategy = STRATEGIES[algorithm]
    _check_bounds(grid, start, goal)

    h = strategy.heuristic
    state = SearchState(start, h(start, goal))
    expanded = 0

    while state:
        node = state.pop()
        if node == goal:
            path = reconstruct_path(state.parent, start, goal)
            if strategy.post_smooth:
                path = post_smooth(grid, path)
            # cost of the path actually returned, smoothed or not
            return SearchResult(path=path, expanded=expanded, cost=path_length(path))

        expanded += 1
        g_node = state.g[node]
        if strategy.any_angle:
            par = state.parent[node]
            g_par = state.g[par]
            for nb in traversable_neighbors(grid, node):
                # visible parent wins outright, costs are not compared
                if par != node and line_of_sight(grid, par, nb):
                    via, g_new = par, g_par + straight_line_distance(par, nb)
                else:
                    via, g_new = node, g_node + straight_line_distance(node, nb)
                state.relax(nb, via, g_new, h(nb, goal))
        else:
            state.closed.add(node)
            for nb in traversable_neighbors(grid, node):
                if nb in state.closed:
                    continue
                state.relax(nb, node, g_node + edge_cost(node, nb), h(nb, goal))

    return SearchResult(expanded=expanded)


def solve(grid: OccupancyGrid, start: Node, goal: Node, algorithm=Algorithm.ASTAR) -> Path:
    """Path from start to goal, or ``[]`` when the goal is unreachable."""
    return run_search(grid, start, goal, algorithm).path


def dijkstra(grid: OccupancyGrid, start: Node, goal: Node) -> Path:
    return solve(grid, start, goal, Algorithm.DIJKSTRA)


def astar(grid: OccupancyGrid, start: Node, goal: Node) -> Path:
    return solve(grid, start, goal, Algorithm.ASTAR)


def theta_star(grid: OccupancyGrid, start: Node, goal: Node) -> Path:
    return solve(grid, start, goal, Algorithm.THETA_STAR)


def astar_post_smoothed(grid: OccupancyGrid, start: Node, goal: Node) -> Path:
    return solve(grid, start, goal, Algorithm.ASTAR_PS)
