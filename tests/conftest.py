from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

import pytest

CLASSIC = (
    "53..7....6..195....98....6.8...6...34..8.3..17...2...6"
    ".6....28....419..5....8..79"
)

CLASSIC_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


@pytest.fixture
def classic() -> str:
    return CLASSIC


@pytest.fixture
def classic_solution() -> str:
    return CLASSIC_SOLUTION


@pytest.fixture
def two_solution_puzzle() -> str:
    # blank a 1/3 rectangle in rows 4-5, columns 6 and 9: both fillings work
    cells = list(CLASSIC_SOLUTION)
    for idx in (3 * 9 + 5, 3 * 9 + 8, 4 * 9 + 5, 4 * 9 + 8):
        cells[idx] = "."
    return "".join(cells)
