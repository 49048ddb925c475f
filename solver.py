from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Tuple

from constraints import (
    NUM_CONSTRAINTS,
    NUM_PLACEMENTS,
    PLACEMENTS_PER_CONSTRAINT,
    ConstraintMatrix,
    decode_placement,
    describe_constraint,
    shared_matrix,
)

logger = logging.getLogger(__name__)

Trace = Callable[[str], None]

# no real constraint has more than nine candidates
NO_CONSTRAINT = PLACEMENTS_PER_CONSTRAINT + 1


class SearchInvariantError(RuntimeError):
    """Raised when the search reaches a state that consistent input cannot produce."""


class SearchState:
    """Live counters for one puzzle.

    ``used[c]`` is nonzero once a chosen placement covers constraint ``c``;
    ``blocked[p]`` is nonzero while some chosen placement shares a constraint
    with placement ``p``. Both are reference counts so that every change can be
    undone by applying the same placement with the opposite sign.
    """

    def __init__(self, matrix: ConstraintMatrix) -> None:
        self.matrix = matrix
        self.used: List[int] = [0] * NUM_CONSTRAINTS
        self.blocked: List[int] = [0] * NUM_PLACEMENTS

    def apply(self, placement: int, sign: int) -> None:
        used = self.used
        blocked = self.blocked
        placements = self.matrix.placements
        for c in self.matrix.constraints[placement]:
            used[c] += sign
            for p in placements[c]:
                blocked[p] += sign

    def select(self, placement: int) -> None:
        self.apply(placement, 1)

    def deselect(self, placement: int) -> None:
        self.apply(placement, -1)

    def viable_count(self, constraint: int) -> int:
        blocked = self.blocked
        n = 0
        for p in self.matrix.placements[constraint]:
            if blocked[p] == 0:
                n += 1
        return n


@dataclass
class SearchStats:
    nodes: int = 0
    backtracks: int = 0
    solutions: int = 0


def _cell_label(placement: int) -> Tuple[str, str]:
    row, col, digit = decode_placement(placement)
    return f"r{row + 1}c{col + 1}", str(digit + 1)


def solve(
    matrix: ConstraintMatrix,
    puzzle: str,
    stats: Optional[SearchStats] = None,
    trace: Optional[Trace] = None,
) -> Iterator[str]:
    """Yield every completed grid for an 81-character puzzle.

    Characters '1'-'9' are givens, anything else is an empty cell. The search
    is an iterative depth-first search over the exact cover matrix which
    branches on the unsatisfied constraint with the fewest viable placements.
    Each call starts from fresh state; stop iterating to abandon the search.
    """
    state = SearchState(matrix)
    placements = matrix.placements
    used = state.used
    blocked = state.blocked
    if stats is None:
        stats = SearchStats()

    out = list(puzzle[:81])
    hints = 0
    for i, ch in enumerate(out):
        if "1" <= ch <= "9":
            placement = i * 9 + ord(ch) - ord("1")
            if blocked[placement]:
                # clashes with an earlier given
                logger.debug("[solver] given %s at cell %d conflicts", ch, i)
                return
            state.select(placement)
            hints += 1

    target = 81 - hints
    chosen_constraint = [-1] * 81
    chosen_index = [-1] * 81
    i = 0
    c0 = 0
    forward = True
    while True:
        while 0 <= i < target:
            if forward:
                stats.nodes += 1
                best = NO_CONSTRAINT
                for j in range(NUM_CONSTRAINTS):
                    c = j + c0
                    if c >= NUM_CONSTRAINTS:
                        c -= NUM_CONSTRAINTS
                    if used[c]:
                        continue
                    n = 0
                    for p in placements[c]:
                        if blocked[p] == 0:
                            n += 1
                    if n < best:
                        best = n
                        chosen_constraint[i] = c
                        c0 = c + 1
                    if n <= 1:
                        break
                if best == NO_CONSTRAINT:
                    raise SearchInvariantError(
                        f"no unsatisfied constraint left at depth {i} of {target}"
                    )
                if best == 0:
                    if trace:
                        trace(f"Dead end: {describe_constraint(chosen_constraint[i])}")
                    chosen_index[i] = -1
                    i -= 1
                    forward = False
                    stats.backtracks += 1
                    continue

            c = chosen_constraint[i]
            candidates = placements[c]
            if not forward and chosen_index[i] >= 0:
                state.deselect(candidates[chosen_index[i]])
                if trace:
                    cell, digit = _cell_label(candidates[chosen_index[i]])
                    trace(f"Backtrack: {cell} != {digit}")
            k = chosen_index[i] + 1
            while k < PLACEMENTS_PER_CONSTRAINT and blocked[candidates[k]]:
                k += 1
            if k < PLACEMENTS_PER_CONSTRAINT:
                state.select(candidates[k])
                if trace:
                    cell, digit = _cell_label(candidates[k])
                    trace(f"Guess: {cell} = {digit}")
                chosen_index[i] = k
                i += 1
                forward = True
            else:
                chosen_index[i] = -1
                i -= 1
                forward = False
                stats.backtracks += 1

        if i < 0:
            return
        for j in range(i):
            p = placements[chosen_constraint[j]][chosen_index[j]]
            out[p // 9] = str(p % 9 + 1)
        stats.solutions += 1
        yield "".join(out)
        i -= 1
        forward = False


@dataclass
class SolverResult:
    status: str
    solution: Optional[str]
    duration_ms: int
    solutions_found: int = 0
    message: str = ""
    solutions: List[str] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)


class SudokuSolver:
    def __init__(
        self,
        puzzle: str,
        matrix: Optional[ConstraintMatrix] = None,
        logger: Optional[Trace] = None,
    ) -> None:
        if len(puzzle) < 81:
            raise ValueError(f"puzzle must have 81 cells, got {len(puzzle)}")
        self.puzzle = puzzle[:81]
        self.matrix = matrix if matrix is not None else shared_matrix()
        self.logger = logger

    def iter_solutions(self, stats: Optional[SearchStats] = None) -> Iterator[str]:
        return solve(self.matrix, self.puzzle, stats=stats, trace=self.logger)

    def solve(
        self, require_uniqueness: bool = False, max_solutions: Optional[int] = None
    ) -> SolverResult:
        """Run the search and summarise it.

        Without arguments every solution is collected. ``require_uniqueness``
        stops after a second solution proves the puzzle ambiguous;
        ``max_solutions`` caps the count outright.
        """
        if max_solutions is not None and max_solutions < 1:
            raise ValueError("max_solutions must be positive")
        limit = max_solutions
        if require_uniqueness:
            limit = 2 if limit is None else max(limit, 2)

        start = time.time()
        stats = SearchStats()
        solutions: List[str] = []
        logger.debug("[solver] solve start")
        for grid in self.iter_solutions(stats):
            solutions.append(grid)
            if limit is not None and len(solutions) >= limit:
                break
        duration_ms = int((time.time() - start) * 1000)
        logger.debug(
            "[solver] solve end in %d ms; solutions found %d",
            duration_ms,
            len(solutions),
        )
        if not solutions:
            return SolverResult(
                status="no-solution",
                solution=None,
                duration_ms=duration_ms,
                solutions_found=0,
                message="No solution found.",
                stats=stats,
            )
        if len(solutions) > 1:
            return SolverResult(
                status="multiple",
                solution=solutions[0],
                duration_ms=duration_ms,
                solutions_found=len(solutions),
                message="Multiple solutions exist.",
                solutions=solutions,
                stats=stats,
            )
        return SolverResult(
            status="solved",
            solution=solutions[0],
            duration_ms=duration_ms,
            solutions_found=1,
            message="Solved successfully.",
            solutions=solutions,
            stats=stats,
        )
