"""Row/column layout enumeration.

A layout is one concrete way of placing a block sequence on a line: the
filled runs, read left to right, have exactly the requested lengths and are
separated by at least one empty cell.
"""

from __future__ import annotations

from typing import List, Sequence

from .model import Blocks, Cell, Line


def line_blocks(line: Sequence[Cell]) -> Blocks:
    """Lengths of the maximal filled runs of ``line``, in order."""
    runs = []
    current = 0
    for cell in line:
        if cell == Cell.FILLED:
            current += 1
        elif current:
            runs.append(current)
            current = 0
    if current:
        runs.append(current)
    return tuple(runs)


def count_blocks(line: Sequence[Cell]) -> int:
    count = 0
    previous = Cell.EMPTY
    for cell in line:
        if cell == Cell.FILLED and previous != Cell.FILLED:
            count += 1
        previous = cell
    return count


def enumerate_layouts(blocks: Sequence[int], length: int) -> List[Line]:
    """Return every line of ``length`` cells whose filled runs are ``blocks``.

    Layouts are produced in a fixed order: first every layout that starts
    with the first block at position 0, then every layout that starts with an
    empty cell. The result has no duplicates and is empty when the blocks
    cannot fit.
    """
    blocks = tuple(blocks)
    if sum(blocks) > length:
        return []
    if not blocks:
        return [(Cell.EMPTY,) * length]

    result: List[Line] = []

    # first block flush against the left edge
    head = (Cell.FILLED,) * blocks[0]
    for rest in enumerate_layouts(blocks[1:], length - blocks[0]):
        line = head + rest
        # a rest starting with a filled cell would merge into the head
        if len(line) == length and count_blocks(line) == len(blocks):
            result.append(line)

    # first block starts later
    for rest in enumerate_layouts(blocks, length - 1):
        result.append((Cell.EMPTY,) + rest)

    return result
