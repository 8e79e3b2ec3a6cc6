"""Independent brute-force reference used by the search tests."""

from itertools import product

from nonogram.core.layouts import line_blocks
from nonogram.core.model import Cell


def all_lines(length):
    return [tuple(cells) for cells in product((Cell.FILLED, Cell.EMPTY), repeat=length)]


def brute_force(rows, columns):
    """Every grid satisfying all clues, found without the solver's machinery."""
    width = len(columns)
    lines = all_lines(width)
    per_row = [[line for line in lines if line_blocks(line) == tuple(blocks)] for blocks in rows]
    found = set()
    for grid in product(*per_row):
        if all(
            line_blocks([row[c] for row in grid]) == tuple(columns[c])
            for c in range(width)
        ):
            found.add(tuple(grid))
    return found


def clues_for(grid):
    rows = [list(line_blocks(row)) for row in grid]
    columns = [list(line_blocks([row[c] for row in grid])) for c in range(len(grid[0]))]
    return rows, columns
