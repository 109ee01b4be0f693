#!/usr/bin/env python3
"""Readers for the MovingAI benchmark formats (https://movingai.com/benchmarks/formats.html)."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from planners.grid import OccupancyGrid
from shared.types import Node

PathLike = Union[str, Path]

OPEN_CHARS = frozenset(".G")
BLOCKED_CHARS = frozenset("@OT")


class MapFormatError(ValueError):
    pass


class ScenarioFormatError(ValueError):
    pass


@dataclass(frozen=True)
class Scenario:
    source: str  # scenario file the record came from
    bucket: int
    map_name: str
    width: int
    height: int
    start: Node
    goal: Node
    optimal_length: float


def _header(lines: List[str], idx: int, key: str) -> int:
    line = lines[idx] if idx < len(lines) else ""
    parts = line.split()
    if len(parts) != 2 or parts[0] != key:
        raise MapFormatError(f'bad header on line {idx + 1}: "{line}" (expected "{key} N")')
    try:
        return int(parts[1])
    except ValueError:
        raise MapFormatError(f'non-int {key} "{parts[1]}" on line {idx + 1}') from None


def parse_map(text: str) -> OccupancyGrid:
    lines = text.splitlines()
    if not lines or lines[0].strip() != "type octile":
        first = lines[0] if lines else ""
        raise MapFormatError(f'bad first line "{first}"')
    height = _header(lines, 1, "height")
    width = _header(lines, 2, "width")
    if len(lines) < 4 or lines[3].strip() != "map":
        raise MapFormatError(f'bad fourth line "{lines[3] if len(lines) > 3 else ""}"')

    rows = lines[4:]
    while rows and not rows[-1].strip():
        rows.pop()
    if len(rows) != height:
        raise MapFormatError(f"height mismatch: header says {height}, found {len(rows)} rows")

    cells = []
    for i, row in enumerate(rows):
        lineno = i + 5
        row = row.rstrip("\r")
        if len(row) != width:
            raise MapFormatError(f"width mismatch on line {lineno}: expected {width}, got {len(row)}")
        out = []
        for ch in row:
            if ch in OPEN_CHARS:
                out.append(False)
            elif ch in BLOCKED_CHARS:
                out.append(True)
            else:
                raise MapFormatError(f"bad character '{ch}' on line {lineno}")
        cells.append(out)
    if height == 0 or width == 0:
        raise MapFormatError(f"empty map ({width}x{height})")
    return OccupancyGrid(cells)


def load_map(path: PathLike) -> OccupancyGrid:
    """Read a ``.map`` file; True cells in the result are blocked."""
    return parse_map(Path(path).read_text())


def _field(parts: List[str], i: int, name: str, lineno: int, conv):
    try:
        return conv(parts[i])
    except ValueError:
        raise ScenarioFormatError(f'non-numeric {name} "{parts[i]}" on line {lineno}') from None


def parse_scenarios(text: str, source: str = "") -> List[Scenario]:
    lines = text.splitlines()
    first = lines[0].strip() if lines else ""
    if first not in ("version 1", "version 1.0"):
        raise ScenarioFormatError(f'bad first line "{first}"')

    out: List[Scenario] = []
    for lineno, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        parts = line.split()
        if len(parts) != 9:
            raise ScenarioFormatError(f"expected 9 fields on line {lineno}, got {len(parts)}")
        out.append(
            Scenario(
                source=source,
                bucket=_field(parts, 0, "bucket", lineno, int),
                map_name=parts[1],
                width=_field(parts, 2, "width", lineno, int),
                height=_field(parts, 3, "height", lineno, int),
                start=Node(
                    _field(parts, 4, "start x-coordinate", lineno, int),
                    _field(parts, 5, "start y-coordinate", lineno, int),
                ),
                goal=Node(
                    _field(parts, 6, "goal x-coordinate", lineno, int),
                    _field(parts, 7, "goal y-coordinate", lineno, int),
                ),
                optimal_length=_field(parts, 8, "optimal length", lineno, float),
            )
        )
    return out


def load_scenarios(path: PathLike) -> List[Scenario]:
    return parse_scenarios(Path(path).read_text(), source=str(path))


def resolve_map_path(scenario: Scenario) -> Path:
    """Map names in a ``.scen`` file are relative to the scenario file's directory."""
    return Path(scenario.source).parent / scenario.map_name


def single_map_name(scenarios: List[Scenario]) -> str:
    if not scenarios:
        raise ScenarioFormatError("scenario file has no scenarios")
    names = {s.map_name for s in scenarios}
    if len(names) != 1:
        raise ScenarioFormatError(f"scenario file refers to multiple maps: {sorted(names)}")
    return scenarios[0].map_name
