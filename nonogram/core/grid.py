from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Sequence, Tuple

from .model import Cell, Line
from .solution import Solution


class WorkingGrid:
    """The single mutable grid a search fills in row by row."""

    def __init__(self, height: int, width: int) -> None:
        self._cells: List[List[Cell]] = [[Cell.UNKNOWN] * width for _ in range(height)]

    @property
    def height(self) -> int:
        return len(self._cells)

    def row(self, index: int) -> Line:
        return tuple(self._cells[index])

    def commit_row(self, index: int, line: Sequence[Cell]) -> Line:
        """Write ``line`` into row ``index`` and return the old contents."""
        previous = tuple(self._cells[index])
        self._cells[index][:] = line
        return previous

    def reset_row(self, index: int, previous: Sequence[Cell]) -> None:
        self._cells[index][:] = previous

    @contextmanager
    def row_lease(self, index: int, line: Sequence[Cell]) -> Iterator[None]:
        previous = self.commit_row(index, line)
        try:
            yield
        finally:
            self.reset_row(index, previous)

    def snapshot(self) -> Tuple[Line, ...]:
        return tuple(tuple(row) for row in self._cells)

    def freeze(self) -> Solution:
        return Solution(self.snapshot())
