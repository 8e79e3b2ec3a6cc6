"""Backtracking search over rows with column-progress pruning."""

from __future__ import annotations

import logging
import multiprocessing
from typing import List, Optional, Sequence, Tuple

from .constraints import ConstraintModel
from .grid import WorkingGrid
from .model import Cell, Line
from .progress import ColumnProgressTracker
from .solution import Solution, SolutionSink

logger = logging.getLogger(__name__)


def expected_row(model: ConstraintModel, tracker: ColumnProgressTracker, row_index: int) -> Optional[Line]:
    """Cells of ``row_index`` already decided by the column constraints.

    Returns ``None`` when some column can no longer be completed in the rows
    that are left, in which case no layout can be accepted at this depth.
    """
    rows_left = model.height - row_index
    expected = []
    for col, (block_index, consumed) in enumerate(tracker.state_before(row_index)):
        blocks = model.column_constraint(col)
        if block_index >= len(blocks):
            expected.append(Cell.EMPTY)
            continue
        needed = tracker.min_cells_needed(row_index, col)
        if needed > rows_left:
            return None
        if consumed:
            # a block is running: continue it until it reaches its length
            expected.append(Cell.FILLED if consumed < blocks[block_index] else Cell.EMPTY)
        elif needed == rows_left:
            expected.append(Cell.FILLED)
        else:
            expected.append(Cell.UNKNOWN)
    return tuple(expected)


def matches(pattern: Sequence[Cell], expected: Sequence[Cell]) -> bool:
    return all(e == Cell.UNKNOWN or e == p for p, e in zip(pattern, expected))


class SearchContext:
    """Everything one depth-first search mutates.

    The working grid and the column tracker are written by exactly one
    recursion chain; every tentative commit is undone before the next
    candidate is tried.
    """

    def __init__(self, model: ConstraintModel, sink: Optional[SolutionSink] = None) -> None:
        self.model = model
        self.grid = WorkingGrid(model.height, model.width)
        self.tracker = ColumnProgressTracker(model)
        self.sink = sink if sink is not None else SolutionSink()

    def candidates(self, row_index: int) -> List[Line]:
        """Layouts of ``row_index`` compatible with the committed rows, in generation order."""
        expected = expected_row(self.model, self.tracker, row_index)
        if expected is None:
            return []
        return [p for p in self.model.row_patterns(row_index) if matches(p, expected)]

    def solve(self, row_index: int = 0) -> int:
        """Count (and collect) every solution below ``row_index``."""
        if row_index == self.model.height:
            # only reachable with open columns when there are no rows at all
            if not self.tracker.columns_complete(row_index):
                return 0
            self.sink.add(self.grid.freeze())
            return 1
        candidates = self.candidates(row_index)
        if row_index == 0 and not candidates:
            logger.debug("No layout of the first row fits the column clues")
        found = 0
        for pattern in candidates:
            found += self.descend(row_index, pattern)
        return found

    def descend(self, row_index: int, pattern: Line) -> int:
        with self.grid.row_lease(row_index, pattern), self.tracker.lease(row_index, pattern):
            return self.solve(row_index + 1)


def solve(model: ConstraintModel, limit: Optional[int] = None) -> SolutionSink:
    """Find every solution of ``model``."""
    context = SearchContext(model, SolutionSink(limit))
    count = context.solve()
    logger.debug("Search finished with %d solution(s)", count)
    return context.sink


# ---------------------------------------------------------------------------
# Parallel search: one task per accepted layout of the first row
# ---------------------------------------------------------------------------

_worker_model: Optional[ConstraintModel] = None


def _init_worker(model: ConstraintModel) -> None:
    global _worker_model
    _worker_model = model


def _solve_subtree(args: Tuple[Line, Optional[int]]) -> Tuple[List[Solution], int]:
    pattern, limit = args
    context = SearchContext(_worker_model, SolutionSink(limit))
    context.descend(0, pattern)
    return context.sink.solutions, context.sink.count


def solve_parallel(model: ConstraintModel, workers: int, limit: Optional[int] = None) -> SolutionSink:
    """Like :func:`solve`, spreading the first row's subtrees over ``workers`` processes.

    Subtree results are merged in candidate order, so solutions come out in
    the same order as a sequential run.
    """
    if workers <= 1 or model.height == 0:
        return solve(model, limit)

    root = SearchContext(model, SolutionSink(limit))
    candidates = root.candidates(0)
    logger.debug("Splitting %d first-row candidates over %d workers", len(candidates), workers)
    if not candidates:
        logger.debug("No layout of the first row fits the column clues")
        return root.sink

    jobs = [(pattern, limit) for pattern in candidates]
    with multiprocessing.Pool(processes=workers, initializer=_init_worker, initargs=(model,)) as pool:
        for solutions, count in pool.imap(_solve_subtree, jobs):
            root.sink.merge(solutions, count)
    return root.sink
