"""Command-line interface."""

from __future__ import annotations

import argparse
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from nonogram.core.csp import solve_parallel
from nonogram.core.solution import ambiguous_cells
from nonogram.formats import FORMAT_REGISTRY

from .parser import PuzzleFormatError, load_puzzle
from .writer import render_solutions, write_solutions

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class SolverOptions:
    format: str = "plain"
    workers: int = 1
    limit: int | None = None
    output: Path | None = None


def resolve_options(puzzle_options: Mapping[str, Any], args: argparse.Namespace) -> SolverOptions:
    """Merge defaults, the puzzle's ``options`` block and command-line flags (highest wins)."""
    options = SolverOptions()
    for key, value in puzzle_options.items():
        if key not in SolverOptions.__dataclass_fields__:
            logger.warning("Ignoring unknown puzzle option %r", key)
            continue
        setattr(options, key, value)
    for key in ("format", "workers", "limit", "output"):
        value = getattr(args, key, None)
        if value is not None:
            setattr(options, key, value)

    if options.format not in FORMAT_REGISTRY:
        known = ", ".join(sorted(FORMAT_REGISTRY))
        raise PuzzleFormatError(f"unknown output format {options.format!r} (known: {known})")
    try:
        options.workers = int(options.workers)
        options.limit = None if options.limit is None else int(options.limit)
    except (TypeError, ValueError):
        raise PuzzleFormatError("'workers' and 'limit' must be integers") from None
    if options.workers < 1:
        raise PuzzleFormatError("'workers' must be at least 1")
    if options.limit is not None and options.limit < 0:
        raise PuzzleFormatError("'limit' must not be negative")
    if options.output is not None:
        options.output = Path(options.output)
    return options


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Find every solution of a nonogram puzzle")
    ap.add_argument("puzzle", type=Path, help="Puzzle file (.yaml/.yml, or the plain 'M N' text format)")
    ap.add_argument("-f", "--format", choices=sorted(FORMAT_REGISTRY), default=None, help="Output format")
    ap.add_argument("-o", "--output", type=Path, default=None, help="Write solutions here instead of stdout")
    ap.add_argument("-w", "--workers", type=int, default=None, help="Worker processes for the search")
    ap.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Keep at most this many solutions for output; all solutions are still counted",
    )
    ap.add_argument(
        "--ambiguity",
        action="store_true",
        help="Also list cells that differ between solutions (needs every solution, so not with --limit)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        puzzle = load_puzzle(args.puzzle)
        options = resolve_options(puzzle.options, args)
    except FileNotFoundError as exc:
        raise SystemExit(f"Puzzle file not found: {args.puzzle}") from exc
    except PuzzleFormatError as exc:
        raise SystemExit(f"Invalid puzzle {args.puzzle}: {exc}") from exc
    if args.ambiguity and options.limit is not None:
        raise SystemExit("--ambiguity compares every solution and cannot be combined with a limit")

    logger.info("Loaded puzzle %s with %d rows and %d columns", puzzle.name, puzzle.height, puzzle.width)
    model = puzzle.to_model()

    start = time.perf_counter()
    logger.info("Going down that rabbit hole...")
    sink = solve_parallel(model, options.workers, options.limit)
    if sink.count:
        logger.info("Hooray! %d solution(s) found", sink.count)
    else:
        logger.info("No solution found :/")
    logger.info("Execution time was: %d ms", (time.perf_counter() - start) * 1000)

    if options.output is not None:
        write_solutions(sink.solutions, sink.count, options.output, options.format)
        logger.info("Wrote %d solution(s) to %s", len(sink), options.output)
    else:
        print(render_solutions(sink.solutions, sink.count, options.format), end="")

    if args.ambiguity:
        cells = ambiguous_cells(sink.solutions)
        print(f"Ambiguous cells: {len(cells)}")
        for row, col in cells:
            print(f"  ({row}, {col})")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
