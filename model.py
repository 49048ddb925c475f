from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from constraints import ALL_CELLS, Cell, box_of, house_constraints

logger = logging.getLogger(__name__)

Grid = List[List[int]]

PUZZLE_LENGTH = 81


def parse_line(line: str) -> Optional[str]:
    """Return the 81-character puzzle at the start of ``line``, or None if too short."""
    line = line.rstrip("\r\n")
    if len(line) < PUZZLE_LENGTH:
        return None
    return line[:PUZZLE_LENGTH]


def iter_puzzles(lines: Iterable[str]) -> Iterator[str]:
    skipped = 0
    for line in lines:
        puzzle = parse_line(line)
        if puzzle is None:
            skipped += 1
            continue
        yield puzzle
    if skipped:
        logger.debug("skipped %d short line(s)", skipped)


class PuzzleModel:
    def __init__(self, line: str = "") -> None:
        self.reset()
        if line:
            self.from_line(line)

    def reset(self) -> None:
        self.grid: Grid = [[0 for _ in range(9)] for _ in range(9)]

    def from_line(self, line: str) -> None:
        puzzle = parse_line(line)
        if puzzle is None:
            raise ValueError(
                f"puzzle line must have at least {PUZZLE_LENGTH} characters"
            )
        for (r, c), ch in zip(ALL_CELLS, puzzle):
            self.grid[r][c] = int(ch) if "1" <= ch <= "9" else 0

    def to_line(self, blank: str = ".") -> str:
        return "".join(
            str(self.grid[r][c]) if self.grid[r][c] else blank for r, c in ALL_CELLS
        )

    def set_value(self, row: int, col: int, value: int) -> None:
        if not 1 <= value <= 9:
            raise ValueError(f"digit must be 1-9, got {value}")
        self.grid[row][col] = value

    def clear_value(self, row: int, col: int) -> None:
        self.grid[row][col] = 0

    def clear_digits(self) -> None:
        for r in range(9):
            for c in range(9):
                self.grid[r][c] = 0

    def copy_grid(self) -> Grid:
        return [[self.grid[r][c] for c in range(9)] for r in range(9)]

    def givens(self) -> List[Tuple[int, int, int]]:
        return [(r, c, self.grid[r][c]) for r, c in ALL_CELLS if self.grid[r][c]]

    def hint_count(self) -> int:
        return len(self.givens())

    def conflicts(self) -> List[Tuple[Cell, Cell]]:
        """Pairs of filled cells that share a row, column or box and a digit."""
        found = []
        filled = self.givens()
        for i, (r1, c1, v1) in enumerate(filled):
            for r2, c2, v2 in filled[i + 1 :]:
                if v1 != v2:
                    continue
                if r1 == r2 or c1 == c2 or box_of(r1, c1) == box_of(r2, c2):
                    found.append(((r1, c1), (r2, c2)))
        return found

    def is_solved(self) -> bool:
        if any(self.grid[r][c] == 0 for r, c in ALL_CELLS):
            return False
        assignment = {(r, c): self.grid[r][c] for r, c in ALL_CELLS}
        return all(h.is_satisfied(assignment) for h in house_constraints())

    def render(self) -> str:
        border = "+" + "-------+" * 3
        lines = [border]
        for r in range(9):
            row = "|"
            for c in range(9):
                val = self.grid[r][c]
                row += f" {val if val else '.'}"
                if c % 3 == 2:
                    row += " |"
            lines.append(row)
            if r % 3 == 2:
                lines.append(border)
        return "\n".join(lines)
