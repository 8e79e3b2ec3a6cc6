from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Sequence, Tuple


class Cell(str, Enum):
    """State of a single grid cell; the value doubles as its output symbol."""
    UNKNOWN = " "
    FILLED = "#"
    EMPTY = "."


class ColumnProgress(NamedTuple):
    """How far a column has got through its block sequence.

    ``block_index`` points at the block currently being built (or equals the
    number of blocks once all are finished); ``consumed`` is how many filled
    cells of that block have been placed so far.
    """
    block_index: int = 0
    consumed: int = 0


Blocks = Tuple[int, ...]
Line = Tuple[Cell, ...]
ProgressVector = Tuple[ColumnProgress, ...]


def as_line(symbols: str | Sequence[Cell]) -> Line:
    """Build a line from a symbol string such as ``"#.#"``."""
    return tuple(Cell(s) for s in symbols)
