from __future__ import annotations

import io

import main


def test_cli_solves_each_line(tmp_path, capsys, classic, classic_solution):
    path = tmp_path / "puzzles.txt"
    path.write_text(
        "too short\n" + classic + "\n" + "5.5" + "." * 78 + "\n"
    )
    assert main.main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out == classic_solution + "\n\n" + "\n"


def test_cli_enumerates_multiple_solutions(tmp_path, capsys, two_solution_puzzle):
    path = tmp_path / "puzzles.txt"
    path.write_text(two_solution_puzzle + "\n")
    assert main.main([str(path)]) == 0
    lines = capsys.readouterr().out.split("\n")
    assert len(lines[0]) == 81
    assert len(lines[1]) == 81
    assert lines[0] != lines[1]
    assert lines[2] == ""


def test_cli_first_and_limit(tmp_path, capsys):
    path = tmp_path / "empty.txt"
    path.write_text("." * 81 + "\n")
    assert main.main(["--first", str(path)]) == 0
    assert capsys.readouterr().out.count("\n") == 2
    assert main.main(["--limit", "3", str(path)]) == 0
    assert capsys.readouterr().out.count("\n") == 4


def test_cli_pretty(tmp_path, capsys, classic):
    path = tmp_path / "puzzles.txt"
    path.write_text(classic + "\n")
    assert main.main(["--pretty", str(path)]) == 0
    out = capsys.readouterr().out
    assert "| 5 3 4 | 6 7 8 | 9 1 2 |" in out


def test_cli_missing_file(tmp_path, capsys):
    assert main.main([str(tmp_path / "nope.txt")]) == 1


def test_solve_stream_counts_puzzles(classic):
    out = io.StringIO()
    count = main.solve_stream([classic + "\n", "x\n", classic], out)
    assert count == 2
    assert out.getvalue().count("\n") == 4
