"""Exact cover geometry for 9x9 Sudoku.

There are 9x9x9 = 729 placements (a digit in a cell) and 4x81 = 324
constraints. A placement is numbered ``row * 81 + col * 9 + digit`` with all
three parts zero-based. Constraints come in four families of 81:

* ``[0, 81)``    row-column: cell (row, col) holds exactly one digit
* ``[81, 162)``  box-number: box b holds digit d exactly once
* ``[162, 243)`` row-number: row r holds digit d exactly once
* ``[243, 324)`` col-number: column c holds digit d exactly once

Every placement touches one constraint of each family and every constraint is
touched by exactly nine placements, so the 729x324 incidence matrix is stored
as two dense index tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Sequence, Tuple

Cell = Tuple[int, int]

SIZE = 9
BOX = 3
NUM_PLACEMENTS = SIZE * SIZE * SIZE
NUM_CONSTRAINTS = 4 * SIZE * SIZE
PLACEMENTS_PER_CONSTRAINT = SIZE
CONSTRAINTS_PER_PLACEMENT = 4

ROW_COLUMN = 0
BOX_NUMBER = 81
ROW_NUMBER = 162
COL_NUMBER = 243

FAMILY_NAMES = ("row-column", "box-number", "row-number", "col-number")

ALL_CELLS: List[Cell] = [(r, c) for r in range(SIZE) for c in range(SIZE)]


def _check(name: str, value: int) -> None:
    if not 0 <= value < SIZE:
        raise ValueError(f"{name} must be in [0, {SIZE}), got {value}")


def box_of(row: int, col: int) -> int:
    return row // BOX * BOX + col // BOX


def placement_index(row: int, col: int, digit: int) -> int:
    """Number the placement of zero-based ``digit`` in cell (row, col)."""
    _check("row", row)
    _check("col", col)
    _check("digit", digit)
    return row * 81 + col * 9 + digit


def decode_placement(placement: int) -> Tuple[int, int, int]:
    """Inverse of :func:`placement_index`: ``(row, col, digit)``."""
    if not 0 <= placement < NUM_PLACEMENTS:
        raise ValueError(f"placement out of range: {placement}")
    cell, digit = divmod(placement, SIZE)
    row, col = divmod(cell, SIZE)
    return row, col, digit


def row_column_constraint(row: int, col: int) -> int:
    _check("row", row)
    _check("col", col)
    return ROW_COLUMN + 9 * row + col


def box_number_constraint(row: int, col: int, digit: int) -> int:
    _check("row", row)
    _check("col", col)
    _check("digit", digit)
    return BOX_NUMBER + box_of(row, col) * 9 + digit


def row_number_constraint(row: int, digit: int) -> int:
    _check("row", row)
    _check("digit", digit)
    return ROW_NUMBER + 9 * row + digit


def col_number_constraint(col: int, digit: int) -> int:
    _check("col", col)
    _check("digit", digit)
    return COL_NUMBER + 9 * col + digit


def constraints_for(row: int, col: int, digit: int) -> Tuple[int, int, int, int]:
    """The four constraints a placement covers, in family order."""
    return (
        row_column_constraint(row, col),
        box_number_constraint(row, col, digit),
        row_number_constraint(row, digit),
        col_number_constraint(col, digit),
    )


def constraint_family(constraint: int) -> str:
    if not 0 <= constraint < NUM_CONSTRAINTS:
        raise ValueError(f"constraint out of range: {constraint}")
    return FAMILY_NAMES[constraint // 81]


def describe_constraint(constraint: int) -> str:
    """Human-readable form, e.g. ``row-number r3 #7`` (one-based)."""
    family = constraint_family(constraint)
    major, minor = divmod(constraint % 81, 9)
    if family == "row-column":
        return f"{family} r{major + 1}c{minor + 1}"
    prefix = {"box-number": "b", "row-number": "r", "col-number": "c"}[family]
    return f"{family} {prefix}{major + 1} #{minor + 1}"


@dataclass(frozen=True)
class ConstraintMatrix:
    """Sparse incidence between placements and constraints.

    ``placements[c]`` lists the nine placements covering constraint ``c``;
    ``constraints[p]`` lists the four constraints covered by placement ``p``.
    Built once and never mutated.
    """

    placements: Tuple[Tuple[int, ...], ...]
    constraints: Tuple[Tuple[int, ...], ...]


def build_matrix() -> ConstraintMatrix:
    by_placement: List[Tuple[int, int, int, int]] = []
    for row in range(SIZE):
        for col in range(SIZE):
            for digit in range(SIZE):
                by_placement.append(constraints_for(row, col, digit))

    by_constraint = [[0] * PLACEMENTS_PER_CONSTRAINT for _ in range(NUM_CONSTRAINTS)]
    cursor = [0] * NUM_CONSTRAINTS
    for placement, covered in enumerate(by_placement):
        for constraint in covered:
            by_constraint[constraint][cursor[constraint]] = placement
            cursor[constraint] += 1

    return ConstraintMatrix(
        placements=tuple(tuple(row) for row in by_constraint),
        constraints=tuple(by_placement),
    )


@lru_cache(maxsize=None)
def shared_matrix() -> ConstraintMatrix:
    """The process-wide matrix, built on first use."""
    return build_matrix()


@dataclass
class AllDifferentConstraint:
    cells: Sequence[Cell]
    name: str = "all-different"

    def affected_cells(self) -> Sequence[Cell]:
        return self.cells

    def is_satisfied(self, assignment: Dict[Cell, int]) -> bool:
        """Return True if the assigned cells hold pairwise different digits."""
        vals = [assignment[cell] for cell in self.cells]
        return len(vals) == len(set(vals))


def build_row_constraints() -> List[AllDifferentConstraint]:
    return [
        AllDifferentConstraint([(r, c) for c in range(9)], name=f"row {r + 1}")
        for r in range(9)
    ]


def build_col_constraints() -> List[AllDifferentConstraint]:
    return [
        AllDifferentConstraint([(r, c) for r in range(9)], name=f"column {c + 1}")
        for c in range(9)
    ]


def build_box_constraints() -> List[AllDifferentConstraint]:
    constraints: List[AllDifferentConstraint] = []
    for box_r in range(3):
        for box_c in range(3):
            cells = []
            for dr in range(3):
                for dc in range(3):
                    cells.append((box_r * 3 + dr, box_c * 3 + dc))
            constraints.append(
                AllDifferentConstraint(cells, name=f"box {box_r * 3 + box_c + 1}")
            )
    return constraints


def house_constraints() -> List[AllDifferentConstraint]:
    constraints: List[AllDifferentConstraint] = []
    constraints.extend(build_row_constraints())
    constraints.extend(build_col_constraints())
    constraints.extend(build_box_constraints())
    return constraints
