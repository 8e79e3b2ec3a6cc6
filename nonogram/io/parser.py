from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from nonogram.core.constraints import ConstraintModel

YAML_SUFFIXES = {".yaml", ".yml"}


class PuzzleFormatError(ValueError):
    """Raised when a puzzle file cannot be turned into constraints."""


@dataclass
class Puzzle:
    rows: List[List[int]]
    columns: List[List[int]]
    name: str | None = None
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.columns)

    def to_model(self) -> ConstraintModel:
        return ConstraintModel(self.rows, self.columns)


def _parse_blocks(value: Any, where: str) -> List[int]:
    """Normalise one constraint entry into a list of positive block lengths.

    Accepts a list of integers, a whitespace separated string or a single
    integer. ``None``, an empty list and a lone ``0`` all mean "no blocks".
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: List[Any] = value.split()
    elif isinstance(value, int) and not isinstance(value, bool):
        items = [value]
    elif isinstance(value, list):
        items = value
    else:
        raise PuzzleFormatError(f"{where}: expected a list of block lengths, got {value!r}")

    blocks = []
    for item in items:
        try:
            blocks.append(int(item))
        except (TypeError, ValueError):
            raise PuzzleFormatError(f"{where}: {item!r} is not an integer") from None
    if blocks == [0]:
        return []
    if any(b <= 0 for b in blocks):
        raise PuzzleFormatError(f"{where}: block lengths must be positive, got {blocks}")
    return blocks


def _parse_dimension(value: Any, key: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise PuzzleFormatError(f"{key}: {value!r} is not an integer") from None


def parse_yaml_puzzle(text: str) -> Puzzle:
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise PuzzleFormatError("puzzle must be a mapping with 'rows' and 'columns'")
    for key in ("rows", "columns"):
        if key not in data:
            raise PuzzleFormatError(f"missing key {key!r}")
        if not isinstance(data[key], list):
            raise PuzzleFormatError(f"{key!r} must be a list")

    rows = [_parse_blocks(v, f"rows[{i}]") for i, v in enumerate(data["rows"])]
    columns = [_parse_blocks(v, f"columns[{i}]") for i, v in enumerate(data["columns"])]
    for key, given, what in (("height", len(rows), "rows"), ("width", len(columns), "columns")):
        if key in data and _parse_dimension(data[key], key) != given:
            raise PuzzleFormatError(f"{key} is {data[key]} but {given} {what} are given")

    options = data.get("options") or {}
    if not isinstance(options, dict):
        raise PuzzleFormatError("'options' must be a mapping")

    name = data.get("name")
    return Puzzle(rows=rows, columns=columns, name=str(name) if name is not None else None, options=options)


def parse_text_puzzle(text: str) -> Puzzle:
    """Parse the plain format: ``M N`` then N row lines then M column lines."""
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise PuzzleFormatError("line 1: expected 'columns rows'")
    header = lines[0].split()
    if len(header) != 2:
        raise PuzzleFormatError(f"line 1: expected 'columns rows', got {lines[0]!r}")
    try:
        width, height = (int(v) for v in header)
    except ValueError:
        raise PuzzleFormatError(f"line 1: dimensions must be integers, got {lines[0]!r}") from None
    if width < 0 or height < 0:
        raise PuzzleFormatError("line 1: dimensions must not be negative")

    body = lines[1:]
    expected = height + width
    if len(body) < expected:
        raise PuzzleFormatError(f"expected {expected} constraint lines, found {len(body)}")
    for extra, line in enumerate(body[expected:], start=expected + 2):
        if line.strip():
            raise PuzzleFormatError(f"line {extra}: unexpected content after the column constraints")

    rows = [_parse_blocks(body[i], f"line {i + 2}") for i in range(height)]
    columns = [_parse_blocks(body[height + i], f"line {height + i + 2}") for i in range(width)]
    return Puzzle(rows=rows, columns=columns)


def load_puzzle(path: str | Path) -> Puzzle:
    """Load a puzzle file; ``.yaml``/``.yml`` is read as YAML, anything else as plain text."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    if path.suffix.lower() in YAML_SUFFIXES:
        puzzle = parse_yaml_puzzle(text)
    else:
        puzzle = parse_text_puzzle(text)
    if puzzle.name is None:
        puzzle.name = path.stem
    return puzzle
