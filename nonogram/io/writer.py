from __future__ import annotations

from pathlib import Path
from typing import Sequence, TextIO

from nonogram.core.solution import Solution
from nonogram.formats import get_format


def render_solutions(solutions: Sequence[Solution], count: int, fmt: str = "plain") -> str:
    return get_format(fmt).render(solutions, count)


def write_solutions(
    solutions: Sequence[Solution],
    count: int,
    target: str | Path | TextIO,
    fmt: str = "plain",
) -> None:
    """Write rendered solutions to a path or an open text stream."""
    text = render_solutions(solutions, count, fmt)
    if hasattr(target, "write"):
        target.write(text)
        return
    with open(target, "w", encoding="utf-8") as f:
        f.write(text)
