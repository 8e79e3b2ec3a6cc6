"""Puzzle constraints and the precomputed row layouts."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .layouts import enumerate_layouts, line_blocks
from .model import Blocks, Cell, Line

logger = logging.getLogger(__name__)


def min_line_length(blocks: Sequence[int]) -> int:
    """Fewest cells a block sequence occupies: its blocks plus one gap between each pair."""
    if not blocks:
        return 0
    return sum(blocks) + len(blocks) - 1


class ConstraintModel:
    """Dimensions, block sequences and row layouts of one puzzle.

    Row layouts are computed once on construction and shared read-only by
    every search branch. A row whose blocks cannot fit simply has no layouts;
    the search then ends with zero solutions.
    """

    def __init__(self, rows: Sequence[Sequence[int]], columns: Sequence[Sequence[int]]) -> None:
        self._rows: Tuple[Blocks, ...] = tuple(tuple(int(b) for b in r) for r in rows)
        self._columns: Tuple[Blocks, ...] = tuple(tuple(int(b) for b in c) for c in columns)
        self._row_patterns: Tuple[Tuple[Line, ...], ...] = tuple(
            tuple(enumerate_layouts(blocks, self.width)) for blocks in self._rows
        )

        for index, patterns in enumerate(self._row_patterns):
            if not patterns:
                logger.warning(
                    "Row %d blocks %s do not fit in %d cells", index, list(self._rows[index]), self.width
                )
            else:
                logger.debug("Row %d has %d candidate layouts", index, len(patterns))
        for index, blocks in enumerate(self._columns):
            if min_line_length(blocks) > self.height:
                logger.warning(
                    "Column %d blocks %s do not fit in %d cells", index, list(blocks), self.height
                )

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def width(self) -> int:
        return len(self._columns)

    @property
    def row_constraints(self) -> Tuple[Blocks, ...]:
        return self._rows

    @property
    def column_constraints(self) -> Tuple[Blocks, ...]:
        return self._columns

    def row_constraint(self, row: int) -> Blocks:
        return self._rows[row]

    def column_constraint(self, col: int) -> Blocks:
        return self._columns[col]

    def row_patterns(self, row: int) -> Tuple[Line, ...]:
        return self._row_patterns[row]

    def __repr__(self) -> str:
        return f"ConstraintModel(height={self.height}, width={self.width})"


def line_satisfies(line: Sequence[Cell], blocks: Sequence[int]) -> bool:
    """Check a complete line against its block sequence from scratch."""
    if any(cell == Cell.UNKNOWN for cell in line):
        return False
    return line_blocks(line) == tuple(blocks)


def grid_satisfies(model: ConstraintModel, grid: Sequence[Sequence[Cell]]) -> bool:
    """Check every row and column of ``grid`` against ``model``."""
    if len(grid) != model.height:
        return False
    if any(len(row) != model.width for row in grid):
        return False
    for r, row in enumerate(grid):
        if not line_satisfies(row, model.row_constraint(r)):
            return False
    for c in range(model.width):
        column: List[Cell] = [grid[r][c] for r in range(model.height)]
        if not line_satisfies(column, model.column_constraint(c)):
            return False
    return True
