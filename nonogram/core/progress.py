"""Per-column block progress, kept for every committed row depth."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Sequence, Tuple

from .constraints import ConstraintModel
from .model import Cell, ColumnProgress, ProgressVector

Snapshot = Tuple[ProgressVector, ...]


class ColumnProgressTracker:
    """Stack of column progress vectors, one per row depth.

    Depth 0 is the state before any row is committed (every column at block
    0 with nothing consumed). Depth ``r + 1`` is derived from depth ``r`` and
    the layout committed at row ``r``. Vectors are immutable tuples, so a
    snapshot is a plain value copy of the stack.
    """

    def __init__(self, model: ConstraintModel) -> None:
        self._model = model
        zero = tuple(ColumnProgress() for _ in range(model.width))
        self._states: List[ProgressVector] = [zero]

    @property
    def depth(self) -> int:
        """Number of rows committed."""
        return len(self._states) - 1

    @property
    def current(self) -> ProgressVector:
        return self._states[-1]

    def state_before(self, row_index: int) -> ProgressVector:
        """Progress vector as it stands before ``row_index`` is committed."""
        return self._states[row_index]

    def push(self, row_index: int, row: Sequence[Cell]) -> ProgressVector:
        """Commit ``row`` at ``row_index`` and return the resulting vector.

        Any deeper states left over from an abandoned branch are discarded.
        """
        del self._states[row_index + 1:]
        previous = self._states[row_index]
        updated = []
        for progress, cell in zip(previous, row):
            if cell == Cell.FILLED:
                updated.append(ColumnProgress(progress.block_index, progress.consumed + 1))
            elif progress.consumed:
                # the block that was running just ended
                updated.append(ColumnProgress(progress.block_index + 1, 0))
            else:
                updated.append(progress)
        state = tuple(updated)
        self._states.append(state)
        return state

    def snapshot(self) -> Snapshot:
        return tuple(self._states)

    def restore(self, snapshot: Snapshot) -> None:
        self._states = list(snapshot)

    @contextmanager
    def lease(self, row_index: int, row: Sequence[Cell]) -> Iterator[ProgressVector]:
        """Tentatively commit ``row``; the previous state is restored on exit."""
        saved = self.snapshot()
        try:
            yield self.push(row_index, row)
        finally:
            self.restore(saved)

    def min_cells_needed(self, row_index: int, col: int) -> int:
        """Cells column ``col`` still needs from ``row_index`` on.

        Counts what is missing from the active block, the full length of every
        later block and one gap between each pair of remaining blocks. No
        trailing gap is counted after the last block.
        """
        block_index, consumed = self._states[row_index][col]
        blocks = self._model.column_constraint(col)
        if block_index >= len(blocks):
            return 0
        remaining = blocks[block_index:]
        return (remaining[0] - consumed) + sum(remaining[1:]) + len(remaining) - 1

    def columns_complete(self, row_index: int) -> bool:
        """True when every column has placed all of its blocks before ``row_index``."""
        return all(self.min_cells_needed(row_index, col) == 0 for col in range(self._model.width))
