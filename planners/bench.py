from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Iterable, List, Optional, Sequence, TypeVar

import pandas as pd

from planners.grid import OccupancyGrid
from planners.metrics import path_length, turn_stats
from planners.search import Algorithm, parse_algorithm, solve
from shared.types import Node, Path

T = TypeVar("T")


@dataclass
class ScenarioStats:
    start: Node
    goal: Node
    algorithm: str
    turns: int
    length: float
    avg_angle: float
    avg_runtime_ms: float
    optimal_length: Optional[float] = None
    path: Path = field(default_factory=list, repr=False)

    @property
    def found(self) -> bool:
        return bool(self.path)

    def row(self) -> dict:
        d = asdict(self)
        d.pop("path")
        d.pop("start")
        d.pop("goal")
        d.update(
            start_x=self.start.x,
            start_y=self.start.y,
            goal_x=self.goal.x,
            goal_y=self.goal.y,
            found=self.found,
            nodes=len(self.path),
        )
        return d


def benchmark_scenario(
    grid: OccupancyGrid,
    start: Node,
    goal: Node,
    algorithm=Algorithm.ASTAR,
    trials: int = 1,
    *,
    optimal_length: Optional[float] = None,
) -> ScenarioStats:
    """Run one start/goal pair ``trials`` times and report path metrics plus mean wall time."""
    if trials < 1:
        raise ValueError("trials must be a positive integer")
    algo = parse_algorithm(algorithm)

    path: Path = []
    total_s = 0.0
    for _ in range(trials):
        t0 = time.perf_counter()
        path = solve(grid, start, goal, algo)
        total_s += time.perf_counter() - t0

    turns, avg_angle = turn_stats(path)
    return ScenarioStats(
        start=start,
        goal=goal,
        algorithm=algo.value,
        turns=turns,
        length=path_length(path),
        avg_angle=avg_angle,
        avg_runtime_ms=1000.0 * total_s / trials,
        optimal_length=optimal_length,
        path=path,
    )


def select_evenly(items: Sequence[T], n: int) -> List[T]:
    """Pick ``n`` items spread evenly by index, first and last included."""
    if n < 1:
        raise ValueError("n must be a positive integer")
    if n >= len(items):
        return list(items)
    if n == 1:
        return [items[0]]
    step = (len(items) - 1) / (n - 1)
    return [items[int(i * step + 0.5)] for i in range(n)]


def benchmark_scenarios(
    grid: OccupancyGrid, scenarios: Iterable, algorithm=Algorithm.ASTAR, trials: int = 1
) -> List[ScenarioStats]:
    """Benchmark scenario records (anything with ``start``, ``goal``, ``optimal_length``)."""
    return [
        benchmark_scenario(grid, s.start, s.goal, algorithm, trials, optimal_length=s.optimal_length)
        for s in scenarios
    ]


def stats_frame(stats: Iterable[ScenarioStats]) -> pd.DataFrame:
    return pd.DataFrame([s.row() for s in stats])


def summarize(df: pd.DataFrame) -> dict:
    """Averages across scenarios; empty frames give zeros."""
    cols = ("turns", "length", "avg_angle", "avg_runtime_ms")
    if df.empty:
        out = {c: 0.0 for c in cols}
    else:
        out = {c: float(df[c].mean()) for c in cols}
    out["scenarios"] = int(len(df))
    return out
