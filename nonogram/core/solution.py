from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .model import Cell, Line, as_line


@dataclass(frozen=True)
class Solution:
    """Immutable filled/empty grid satisfying every row and column."""
    grid: Tuple[Line, ...]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Solution":
        return cls(tuple(as_line(line) for line in lines))

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def cell(self, row: int, col: int) -> Cell:
        return self.grid[row][col]

    def column(self, col: int) -> Line:
        return tuple(row[col] for row in self.grid)

    def to_lines(self) -> List[str]:
        return ["".join(cell.value for cell in row) for row in self.grid]

    def to_string(self) -> str:
        """Row-major symbols on a single line."""
        return "".join(self.to_lines())


class SolutionSink:
    """Collects solutions in discovery order.

    Every solution is counted; when ``limit`` is set only the first
    ``limit`` grids are retained.
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        self.limit = limit
        self._solutions: List[Solution] = []
        self._count = 0

    def add(self, solution: Solution) -> None:
        self._count += 1
        if self.limit is None or len(self._solutions) < self.limit:
            self._solutions.append(solution)

    def merge(self, solutions: Sequence[Solution], count: int) -> None:
        """Fold in the results of a search run elsewhere."""
        for solution in solutions:
            if self.limit is not None and len(self._solutions) >= self.limit:
                break
            self._solutions.append(solution)
        self._count += count

    @property
    def count(self) -> int:
        return self._count

    @property
    def solutions(self) -> List[Solution]:
        return list(self._solutions)

    def __iter__(self) -> Iterator[Solution]:
        return iter(self._solutions)

    def __len__(self) -> int:
        return len(self._solutions)


def ambiguous_cells(solutions: Sequence[Solution]) -> List[Tuple[int, int]]:
    """Cells whose value differs between at least two solutions."""
    if len(solutions) < 2:
        return []
    first = solutions[0]
    result = []
    for r in range(first.height):
        for c in range(first.width):
            value = first.cell(r, c)
            if any(other.cell(r, c) != value for other in solutions[1:]):
                result.append((r, c))
    return result
