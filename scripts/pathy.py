#!/usr/bin/env python3
"""Visualize and benchmark grid pathfinding algorithms on MovingAI maps."""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import yaml

from maps.movingai import load_map, load_scenarios, resolve_map_path, single_map_name
from maps.render import render_grid, save_image
from planners.bench import (
    benchmark_scenario,
    benchmark_scenarios,
    select_evenly,
    stats_frame,
    summarize,
)
from planners.metrics import RAD_TO_DEG
from planners.search import Algorithm, parse_algorithm
from shared.types import Node

DEFAULTS = {"algorithm": "astar", "trials": 1, "n": 10, "scale": 8}


def load_config(path: str | None) -> dict:
    cfg = dict(DEFAULTS)
    if not path or not os.path.exists(path):
        return cfg
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config {path} must be a mapping, got {type(data).__name__}")
    for key in DEFAULTS:
        if data.get(key) is not None:
            cfg[key] = data[key]
    return cfg


def parse_point(text: str) -> Node:
    try:
        x, y = (int(s) for s in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f'expected "X,Y", got "{text}"') from None
    return Node(x, y)


def positive_int(text: str) -> int:
    try:
        n = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f'non-int argument "{text}"') from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {n}")
    return n


def fmt_stats(s) -> str:
    return (
        f"{s.turns} turn(s), length {s.length:.1f}, avg angle {s.avg_angle:.1f} rad "
        f"({s.avg_angle * RAD_TO_DEG:.1f} deg), runtime {s.avg_runtime_ms:.0f}ms"
    )


def run_draw(args, cfg: dict) -> int:
    grid = load_map(args.map)
    save_image(render_grid(grid, scale=args.scale or cfg["scale"]), args.out)
    print(f"Wrote: {args.out}")
    return 0


def run_single(args, cfg: dict) -> int:
    grid = load_map(args.map)
    algo = parse_algorithm(args.algorithm or cfg["algorithm"])
    stats = benchmark_scenario(grid, args.start, args.goal, algo, args.trials or cfg["trials"])
    if not stats.found:
        print(f"[pathy] no path from {args.start!r} to {args.goal!r}", file=sys.stderr)
    print(f"Stats: {fmt_stats(stats)}")

    if args.out:
        save_image(render_grid(grid, stats.path, scale=args.scale or cfg["scale"]), args.out)
        print(f"Wrote: {args.out}")
    return 0


def run_multiple(args, cfg: dict) -> int:
    scenarios = load_scenarios(args.scen)
    map_name = single_map_name(scenarios)
    grid = load_map(resolve_map_path(scenarios[0]))
    algo = parse_algorithm(args.algorithm or cfg["algorithm"])
    selected = select_evenly(scenarios, args.n or cfg["n"])
    scale = args.scale or cfg["scale"]

    results = benchmark_scenarios(grid, selected, algo, args.trials or cfg["trials"])
    for s in results:
        (sx, sy), (gx, gy) = s.start, s.goal
        print(f"({sx},{sy}) -> ({gx},{gy}) stats: {fmt_stats(s)}")
        if args.out_dir:
            out = Path(args.out_dir) / f"{Path(map_name).stem}_{sx}_{sy}_{gx}_{gy}.png"
            save_image(render_grid(grid, s.path, scale=scale), str(out))

    df = stats_frame(results)
    avg = summarize(df)
    print(
        f"\nAvg stats: {avg['turns']:f} turn(s), length {avg['length']:f}, "
        f"avg angle {avg['avg_angle']:f} rad ({avg['avg_angle'] * RAD_TO_DEG:.1f} deg), "
        f"runtime {avg['avg_runtime_ms']:.0f}ms"
    )
    if args.csv_out:
        Path(args.csv_out).parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(args.csv_out, index=False)
        print(f"Wrote: {args.csv_out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    algos = [a.value for a in Algorithm]
    ap = argparse.ArgumentParser(
        prog="pathy",
        description="Visualize and benchmark grid pathfinding (dijkstra, astar, astar-ps, thetastar).",
    )
    ap.add_argument("--config", default="configs/pathy.yaml", help="YAML file with defaults")
    sub = ap.add_subparsers(dest="mode", required=True)

    d = sub.add_parser("draw", help="render a map to an image")
    d.add_argument("--map", required=True)
    d.add_argument("--out", required=True, help="output image (.png or .jpg)")
    d.add_argument("--scale", type=positive_int, help="pixels per cell")
    d.set_defaults(func=run_draw)

    s = sub.add_parser("single", help="benchmark one start/goal pair")
    s.add_argument("--map", required=True)
    s.add_argument("--start", type=parse_point, required=True, help="X,Y")
    s.add_argument("--goal", type=parse_point, required=True, help="X,Y")
    s.add_argument("--algorithm", choices=algos, type=str.lower)
    s.add_argument("--trials", type=positive_int)
    s.add_argument("--out", help="also draw the path to this image")
    s.add_argument("--scale", type=positive_int)
    s.set_defaults(func=run_single)

    m = sub.add_parser("multiple", help="benchmark N scenarios spread across a .scen file")
    m.add_argument("--scen", required=True)
    m.add_argument("--algorithm", choices=algos, type=str.lower)
    m.add_argument("--n", type=positive_int, help="number of scenarios to pick")
    m.add_argument("--trials", type=positive_int)
    m.add_argument("--out-dir", help="draw each scenario's path into this directory")
    m.add_argument("--scale", type=positive_int)
    m.add_argument("--csv-out", help="write per-scenario stats as CSV")
    m.set_defaults(func=run_multiple)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
        rc = args.func(args, cfg)
    except (ValueError, OSError, yaml.YAMLError) as e:
        print(f"[pathy] {e}", file=sys.stderr)
        return 1
    print("Success")
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
