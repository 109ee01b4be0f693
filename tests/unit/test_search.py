import math
import random

import pytest

from planners.errors import OutOfBoundsError, UnknownAlgorithmError
from planners.grid import OccupancyGrid
from planners.metrics import path_length
from planners.search import (
    Algorithm,
    astar,
    astar_post_smoothed,
    dijkstra,
    parse_algorithm,
    run_search,
    solve,
    theta_star,
)
from planners.visibility import line_of_sight
from shared.types import Node

SQRT2 = math.sqrt(2.0)
ALL = list(Algorithm)


def _random_grid(rng, w, h, density):
    return OccupancyGrid([[rng.random() < density for _ in range(w)] for _ in range(h)])


def _adjacent(a, b):
    return max(abs(a.x - b.x), abs(a.y - b.y)) == 1


def test_start_equals_goal_returns_single_node():
    grid = OccupancyGrid.empty(3, 3)
    for algo in ALL:
        path = solve(grid, Node(1, 1), Node(1, 1), algo)
        assert path == [Node(1, 1)]
        assert path_length(path) == 0.0


def test_open_grid_interior_diagonal():
    grid = OccupancyGrid.empty(4, 4)
    s, g = Node(1, 1), Node(3, 3)
    assert path_length(dijkstra(grid, s, g)) == pytest.approx(2 * SQRT2)
    assert path_length(astar(grid, s, g)) == pytest.approx(2 * SQRT2)
    assert theta_star(grid, s, g) == [s, g]
    assert astar_post_smoothed(grid, s, g) == [s, g]


def test_open_grid_from_map_corner():
    # the corner vertex touches a single cell, so its first move is cardinal
    grid = OccupancyGrid.empty(3, 3)
    s, g = Node(0, 0), Node(2, 2)
    assert path_length(dijkstra(grid, s, g)) == pytest.approx(2 + SQRT2)
    assert path_length(astar(grid, s, g)) == pytest.approx(2 + SQRT2)
    path = theta_star(grid, s, g)
    assert path == [s, g]
    assert path_length(path) == pytest.approx(2 * SQRT2)


def test_theta_star_is_a_straight_segment_on_empty_grid():
    grid = OccupancyGrid.empty(8, 6)
    s = Node(0, 0)
    for g in [Node(7, 4), Node(3, 6), Node(8, 1), Node(5, 5)]:
        assert theta_star(grid, s, g) == [s, g]


def test_theta_star_reaches_every_vertex_in_one_segment():
    grid = OccupancyGrid.empty(8, 6)
    s = Node(0, 0)
    for y in range(grid.height + 1):
        for x in range(grid.width + 1):
            g = Node(x, y)
            expected = [s] if g == s else [s, g]
            assert theta_star(grid, s, g) == expected, g


def test_theta_star_long_diagonal_has_no_collinear_waypoints():
    # g through the (3,3) waypoint and the direct sqrt(32) differ by one ulp
    grid = OccupancyGrid.empty(8, 6)
    for g in (Node(4, 4), Node(5, 5), Node(6, 6)):
        result = run_search(grid, Node(0, 0), g, Algorithm.THETA_STAR)
        assert result.path == [Node(0, 0), g]
        assert result.cost == pytest.approx(g.x * SQRT2)


def test_cost_is_length_of_returned_path():
    grid = OccupancyGrid.empty(6, 6)
    s, g = Node(1, 1), Node(5, 3)
    smoothed = run_search(grid, s, g, Algorithm.ASTAR_PS)
    assert smoothed.path == [s, g]
    assert smoothed.cost == pytest.approx(math.hypot(4, 2))
    assert smoothed.cost < run_search(grid, s, g, Algorithm.ASTAR).cost


def test_single_blocked_cell_is_never_sliced():
    grid = OccupancyGrid.from_strings(["...", ".@.", "..."])
    s, g = Node(0, 0), Node(3, 3)
    lengths = {}
    for algo in ALL:
        path = solve(grid, s, g, algo)
        assert path[0] == s and path[-1] == g
        for a, b in zip(path, path[1:]):
            assert line_of_sight(grid, a, b)
        lengths[algo] = path_length(path)
    hs = astar(grid, s, g)
    edges = set(zip(hs, hs[1:]))
    assert (Node(1, 1), Node(2, 2)) not in edges
    assert (Node(2, 1), Node(1, 2)) not in edges
    assert lengths[Algorithm.DIJKSTRA] == pytest.approx(lengths[Algorithm.ASTAR])
    assert lengths[Algorithm.THETA_STAR] <= lengths[Algorithm.ASTAR] + 1e-9
    assert lengths[Algorithm.ASTAR_PS] <= lengths[Algorithm.ASTAR] + 1e-9


def test_diagonal_squeeze_depends_on_side_cells():
    s, g = Node(1, 1), Node(2, 2)
    # NE and SW cells of the start vertex blocked: must go around
    grid = OccupancyGrid.from_strings([".@.", "@..", "..."])
    assert astar(grid, s, g) != [s, g]
    # one side cell open: direct diagonal
    grid = OccupancyGrid.from_strings(["...", "...", ".@."])
    assert astar(grid, s, g) == [s, g]


def test_unreachable_goal_is_empty_path_not_error():
    # the four cells around vertex (2,2) are blocked
    grid = OccupancyGrid.from_strings(["....", ".@@.", ".@@.", "...."])
    for algo in ALL:
        result = run_search(grid, Node(0, 0), Node(2, 2), algo)
        assert not result.found
        assert result.path == []
        assert result.cost == math.inf
        assert result.expanded > 0


def test_out_of_bounds_start_or_goal():
    grid = OccupancyGrid.empty(3, 3)
    with pytest.raises(OutOfBoundsError):
        astar(grid, Node(-1, 0), Node(2, 2))
    with pytest.raises(ValueError):
        theta_star(grid, Node(0, 0), Node(4, 3))
    # vertices on the far edge are valid
    assert astar(grid, Node(0, 0), Node(3, 3))[-1] == Node(3, 3)


def test_parse_algorithm():
    assert parse_algorithm("ThetaStar") is Algorithm.THETA_STAR
    assert parse_algorithm(" astar-ps ") is Algorithm.ASTAR_PS
    assert parse_algorithm(Algorithm.DIJKSTRA) is Algorithm.DIJKSTRA
    with pytest.raises(UnknownAlgorithmError, match="dijkstra"):
        parse_algorithm("bfs")


def test_wall_with_gap():
    # horizontal wall on row 3 with a gap at column 3
    w, h = 6, 6
    rows = ["......"] * h
    rows[3] = ".@@.@."
    grid = OccupancyGrid.from_strings(rows)
    s, g = Node(1, 1), Node(5, 5)
    path = astar(grid, s, g)
    assert path[0] == s and path[-1] == g
    assert all(_adjacent(a, b) for a, b in zip(path, path[1:]))
    smooth = astar_post_smoothed(grid, s, g)
    assert len(smooth) <= len(path)
    assert path_length(theta_star(grid, s, g)) <= path_length(path) + 1e-9


def test_repeated_runs_are_identical():
    rng = random.Random(3)
    grid = _random_grid(rng, 12, 10, 0.25)
    s, g = Node(0, 0), Node(12, 10)
    for algo in ALL:
        first = run_search(grid, s, g, algo)
        for _ in range(3):
            again = run_search(grid, s, g, algo)
            assert again.path == first.path
            assert again.expanded == first.expanded


def test_properties_on_random_grids():
    rng = random.Random(11)
    checked = 0
    for _ in range(40):
        w, h = rng.randint(4, 10), rng.randint(4, 10)
        grid = _random_grid(rng, w, h, 0.3)
        s = Node(rng.randint(0, w), rng.randint(0, h))
        g = Node(rng.randint(0, w), rng.randint(0, h))

        uc = run_search(grid, s, g, Algorithm.DIJKSTRA)
        hs = run_search(grid, s, g, Algorithm.ASTAR)
        th = run_search(grid, s, g, Algorithm.THETA_STAR)
        ps = run_search(grid, s, g, Algorithm.ASTAR_PS)

        assert uc.found == hs.found == th.found == ps.found
        if not uc.found:
            continue
        checked += 1
        for r in (uc, hs, th, ps):
            assert r.path[0] == s and r.path[-1] == g

        assert all(_adjacent(a, b) for a, b in zip(hs.path, hs.path[1:]))
        assert path_length(uc.path) == pytest.approx(path_length(hs.path))
        for r in (uc, hs, th, ps):
            assert r.cost == pytest.approx(path_length(r.path))
        assert hs.expanded <= uc.expanded

        base = path_length(hs.path)
        assert path_length(th.path) <= base + 1e-9
        assert path_length(ps.path) <= base + 1e-9
        assert path_length(th.path) >= math.hypot(g.x - s.x, g.y - s.y) - 1e-9
        for r in (th, ps):
            for a, b in zip(r.path, r.path[1:]):
                assert line_of_sight(grid, a, b)
    assert checked >= 10
