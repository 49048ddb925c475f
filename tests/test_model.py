from __future__ import annotations

import io

import pytest

from model import PuzzleModel, iter_puzzles, parse_line


def test_parse_line_strips_terminator(classic):
    assert parse_line(classic + "\n") == classic
    assert parse_line(classic + "\r\n") == classic


def test_parse_line_keeps_first_81_characters(classic):
    assert parse_line(classic + "  # comment\n") == classic


def test_parse_line_rejects_short_lines():
    assert parse_line("") is None
    assert parse_line("." * 80 + "\n") is None


def test_iter_puzzles_skips_short_lines(classic):
    stream = io.StringIO("header\n" + classic + "\n\n" + "." * 81 + "\n")
    assert list(iter_puzzles(stream)) == [classic, "." * 81]


def test_round_trip_through_grid(classic):
    model = PuzzleModel(classic)
    assert model.grid[0][:3] == [5, 3, 0]
    assert model.to_line() == classic
    assert model.to_line(blank="0") == classic.replace(".", "0")
    assert model.hint_count() == 30


def test_non_digits_are_empty():
    model = PuzzleModel("x0-" + "." * 78)
    assert model.hint_count() == 0


def test_from_line_rejects_short_input():
    with pytest.raises(ValueError):
        PuzzleModel("123")


def test_editing():
    model = PuzzleModel()
    model.set_value(2, 3, 7)
    assert model.givens() == [(2, 3, 7)]
    copy = model.copy_grid()
    model.clear_value(2, 3)
    assert model.hint_count() == 0
    assert copy[2][3] == 7
    with pytest.raises(ValueError):
        model.set_value(0, 0, 10)
    model.set_value(0, 0, 1)
    model.clear_digits()
    assert model.to_line() == "." * 81


def test_conflicts():
    model = PuzzleModel()
    model.set_value(0, 0, 5)
    model.set_value(0, 4, 5)
    model.set_value(1, 1, 5)
    model.set_value(8, 8, 5)
    assert sorted(model.conflicts()) == [
        ((0, 0), (0, 4)),
        ((0, 0), (1, 1)),
    ]


def test_is_solved(classic, classic_solution):
    assert PuzzleModel(classic_solution).is_solved()
    assert not PuzzleModel(classic).is_solved()
    broken = classic_solution[:-2] + classic_solution[-1] + classic_solution[-2]
    assert not PuzzleModel(broken).is_solved()


def test_render(classic_solution):
    text = PuzzleModel(classic_solution).render()
    lines = text.splitlines()
    assert len(lines) == 13
    assert lines[0] == "+-------+-------+-------+"
    assert lines[1] == "| 5 3 4 | 6 7 8 | 9 1 2 |"
    assert PuzzleModel().render().splitlines()[1] == "| . . . | . . . | . . . |"
