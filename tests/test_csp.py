import logging
import random

import pytest

from nonogram.core.constraints import ConstraintModel, grid_satisfies
from nonogram.core.csp import SearchContext, expected_row, matches, solve, solve_parallel
from nonogram.core.model import Cell, as_line
from nonogram.core.progress import ColumnProgressTracker
from nonogram.core.solution import Solution

from .helpers import brute_force, clues_for


def strings(sink):
    return [s.to_lines() for s in sink]


def test_single_empty_cell():
    sink = solve(ConstraintModel([[]], [[]]))
    assert sink.count == 1
    assert strings(sink) == [["."]]


def test_single_full_row():
    sink = solve(ConstraintModel([[3]], [[1], [1], [1]]))
    assert sink.count == 1
    assert strings(sink) == [["###"]]


def test_two_diagonals():
    sink = solve(ConstraintModel([[1], [1]], [[1], [1]]))
    assert sink.count == 2
    assert strings(sink) == [["#.", ".#"], [".#", "#."]]


def test_row_that_cannot_fit_gives_no_solutions():
    sink = solve(ConstraintModel([[2, 2], [1]], [[1], [1], [1], [1]]))
    assert sink.count == 0
    assert list(sink) == []


def test_column_that_cannot_fit_gives_no_solutions():
    sink = solve(ConstraintModel([[1], [1]], [[1, 1], []]))
    assert sink.count == 0


def test_expected_row_forces_cells():
    model = ConstraintModel([[1], [2], [1]], [[3], [1], []])
    tracker = ColumnProgressTracker(model)
    # column 0 needs all three rows, column 2 is always empty
    assert expected_row(model, tracker, 0) == (Cell.FILLED, Cell.UNKNOWN, Cell.EMPTY)
    tracker.push(0, as_line("#.."))
    assert expected_row(model, tracker, 1) == (Cell.FILLED, Cell.UNKNOWN, Cell.EMPTY)
    tracker.push(1, as_line("##."))
    # column 1 finished its only block
    assert expected_row(model, tracker, 2) == (Cell.FILLED, Cell.EMPTY, Cell.EMPTY)


def test_expected_row_reports_dead_end():
    model = ConstraintModel([[1], [1], [1]], [[2], [1]])
    tracker = ColumnProgressTracker(model)
    tracker.push(0, as_line(".#"))
    tracker.push(1, as_line(".."))
    # column 0 still needs two cells with one row left
    assert expected_row(model, tracker, 2) is None


def test_matches():
    expected = (Cell.FILLED, Cell.UNKNOWN, Cell.EMPTY)
    assert matches(as_line("##."), expected)
    assert matches(as_line("#.."), expected)
    assert not matches(as_line(".#."), expected)


def test_descend_rolls_back_grid_and_tracker():
    model = ConstraintModel([[1], [1], [1]], [[1], [1], [1]])
    context = SearchContext(model)
    context.grid.commit_row(0, as_line("#.."))
    context.tracker.push(0, as_line("#.."))
    grid_before = context.grid.snapshot()
    tracker_before = context.tracker.snapshot()

    found = context.descend(1, as_line(".#."))
    assert found == 1
    assert context.grid.snapshot() == grid_before
    assert context.tracker.snapshot() == tracker_before
    assert context.grid.row(1) == (Cell.UNKNOWN,) * 3


def test_solve_count_matches_sink():
    model = ConstraintModel([[1]] * 3, [[1]] * 3)
    context = SearchContext(model)
    assert context.solve() == 6
    assert context.sink.count == 6


def test_heart_is_unique():
    rows = [[1, 1], [5], [5], [3], [1]]
    columns = [[2], [4], [4], [4], [2]]
    sink = solve(ConstraintModel(rows, columns))
    assert strings(sink) == [[".#.#.", "#####", "#####", ".###.", "..#.."]]


def random_grid(rng, height, width, density):
    return [
        tuple(Cell.FILLED if rng.random() < density else Cell.EMPTY for _ in range(width))
        for _ in range(height)
    ]


@pytest.mark.parametrize("seed", range(12))
def test_matches_brute_force_on_random_pictures(seed):
    rng = random.Random(seed)
    height, width = rng.randint(1, 5), rng.randint(1, 5)
    grid = random_grid(rng, height, width, rng.choice([0.3, 0.5, 0.7]))
    rows, columns = clues_for(grid)
    model = ConstraintModel(rows, columns)

    sink = solve(model)
    found = [s.grid for s in sink]
    assert len(found) == len(set(found)) == sink.count
    assert all(grid_satisfies(model, g) for g in found)
    assert set(found) == brute_force(rows, columns)
    assert tuple(grid) in set(found)


@pytest.mark.parametrize("seed", range(8))
def test_matches_brute_force_on_random_clues(seed):
    # clues that do not come from a picture are usually unsolvable
    rng = random.Random(1000 + seed)
    height, width = rng.randint(2, 4), rng.randint(2, 4)
    rows = [list(clues_for(random_grid(rng, 1, width, 0.5))[0][0]) for _ in range(height)]
    columns = [list(clues_for(random_grid(rng, height, 1, 0.5))[1][0]) for _ in range(width)]
    sink = solve(ConstraintModel(rows, columns))
    assert {s.grid for s in sink} == brute_force(rows, columns)


def test_six_by_six_checkerboard_rows():
    rows = [[1, 1, 1]] * 6
    columns = [[1, 1, 1]] * 6
    sink = solve(ConstraintModel(rows, columns))
    assert {s.grid for s in sink} == brute_force(rows, columns)
    assert sink.count > 0


def test_limit_only_affects_retention():
    model = ConstraintModel([[1]] * 3, [[1]] * 3)
    sink = solve(model, limit=2)
    assert sink.count == 6
    assert len(sink) == 2


def test_parallel_matches_sequential():
    model = ConstraintModel([[1]] * 4, [[1]] * 4)
    sequential = solve(model)
    parallel = solve_parallel(model, workers=2)
    assert parallel.count == sequential.count == 24
    assert parallel.solutions == sequential.solutions


def test_parallel_without_candidates():
    model = ConstraintModel([[3], [1]], [[1], [1]])
    assert solve_parallel(model, workers=2).count == 0


def test_solution_is_a_copy():
    model = ConstraintModel([[1]], [[1]])
    context = SearchContext(model)
    context.solve()
    (solution,) = context.sink
    assert isinstance(solution, Solution)
    assert solution.to_lines() == ["#"]
    assert context.grid.row(0) == (Cell.UNKNOWN,)


def test_zero_rows_with_unmet_column_clues():
    model = ConstraintModel([], [[1]])
    assert solve(model).count == 0
    assert solve_parallel(model, workers=2).count == 0


def test_zero_rows_with_empty_column_clues():
    sink = solve(ConstraintModel([], [[], []]))
    assert sink.count == 1
    assert list(sink) == [Solution(())]


def test_first_row_dead_end_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="nonogram.core.csp")
    assert solve(ConstraintModel([[1], [1]], [[2], [2]])).count == 0
    assert "No layout of the first row" in caplog.text
