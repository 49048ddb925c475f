from __future__ import annotations

from model import PuzzleModel


def is_valid_grid(grid: str) -> bool:
    return len(grid) == 81 and PuzzleModel(grid).is_solved()


def keeps_givens(puzzle: str, grid: str) -> bool:
    return all(p == g for p, g in zip(puzzle, grid) if "1" <= p <= "9")
