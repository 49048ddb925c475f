"""Command line front end: solve 81-character Sudoku lines.

Puzzles are read one per line from the named files or standard input. Every
solution is written on its own line and each puzzle's output is followed by a
blank line. Lines shorter than 81 characters are ignored.
"""

from __future__ import annotations

import argparse
import fileinput
import logging
import sys
import time
from typing import List, Optional, TextIO

from constraints import shared_matrix
from model import PuzzleModel, iter_puzzles
from solver import SearchStats, solve

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Solve 9x9 Sudoku puzzles by exact cover search."
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Files with one puzzle per line. Reads standard input if omitted.",
    )
    limits = parser.add_mutually_exclusive_group()
    limits.add_argument(
        "--first",
        action="store_true",
        help="Stop after the first solution of each puzzle.",
    )
    limits.add_argument(
        "--limit",
        type=int,
        metavar="N",
        help="Stop after N solutions of each puzzle.",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Print solutions as boxed grids.",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Log search statistics for every puzzle.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="More log output (repeat for debug).",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only log errors."
    )
    args = parser.parse_args(argv)
    if args.limit is not None and args.limit < 1:
        parser.error("--limit must be positive")
    if args.first:
        args.limit = 1
    return args


def configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
    )


def solve_stream(
    lines,
    out: TextIO,
    limit: Optional[int] = None,
    pretty: bool = False,
    show_stats: bool = False,
) -> int:
    """Solve every puzzle in ``lines``; return the number of puzzles read."""
    matrix = shared_matrix()
    count = 0
    for puzzle in iter_puzzles(lines):
        count += 1
        stats = SearchStats()
        start = time.time()
        for n, grid in enumerate(solve(matrix, puzzle, stats=stats), start=1):
            if pretty:
                out.write(PuzzleModel(grid).render() + "\n")
            else:
                out.write(grid + "\n")
            if limit is not None and n >= limit:
                break
        out.write("\n")
        if show_stats:
            logger.info(
                "puzzle %d: %d solution(s), %d nodes, %d backtracks, %d ms",
                count,
                stats.solutions,
                stats.nodes,
                stats.backtracks,
                int((time.time() - start) * 1000),
            )
        elif stats.solutions == 0:
            logger.info("puzzle %d has no solution", count)
    return count


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose + (1 if args.stats else 0), args.quiet)
    try:
        with fileinput.input(files=args.files or ("-",)) as lines:
            count = solve_stream(
                lines,
                sys.stdout,
                limit=args.limit,
                pretty=args.pretty,
                show_stats=args.stats,
            )
    except OSError as e:
        logger.error("cannot read input: %s", e)
        return 1
    logger.info("solved %d puzzle(s)", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
