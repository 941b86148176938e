import csv
import json
import sys
from pathlib import Path

import pytest

from run import collect_puzzles, format_result, main, write_results_csv
from src.sudoku.model import Grid
from src.sudoku.solver_core import SolveStatus

PUZZLE = (
    "53..7...."
    "6..195..."
    ".98....6."
    "8...6...3"
    "4..8.3..1"
    "7...2...6"
    ".6....28."
    "...419..5"
    "....8..79"
)


def fake_solve(puzzle, tracer=None):
    grid = Grid.from_string("1" + "0" * 80)
    return grid, SolveStatus.UNSOLVABLE


def test_format_result_without_grid():
    row = format_result("p1", None, "error", -1)
    assert row["puzzle"] == ""
    assert row["solution"] == ""
    assert row["grid"] == {"cells": []}


def test_format_result_serialises_grid():
    grid = Grid.from_string(PUZZLE)
    row = format_result("p1", grid, "solved", 10, grid)
    assert row["puzzle"] == PUZZLE
    assert len(row["grid"]["cells"]) == 9


def test_collect_puzzles_accepts_literal_board():
    assert collect_puzzles(PUZZLE) == [{"id": "puzzle-0", "puzzle": PUZZLE}]
    with pytest.raises(ValueError):
        collect_puzzles("not-a-board")


def test_generate_to_csv(tmp_path):
    output_path = tmp_path / "out.csv"
    sys.argv = [
        "run.py", "generate", "--difficulty", "hard", "--count", "2",
        "--seed", "3", "--with-solution", "--output", str(output_path),
    ]
    main()

    with open(output_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["id"] for r in rows] == ["puzzle-0", "puzzle-1"]
    assert all(r["puzzle"].count(".") == 50 for r in rows)
    assert all(len(r["solution"]) == 81 and "." not in r["solution"] for r in rows)
    assert all(int(r["steps"]) >= 81 for r in rows)


def test_generate_unknown_difficulty_falls_back(tmp_path):
    results = main(["generate", "--difficulty", "whatever", "--output", str(tmp_path / "out.json")])
    assert results[0]["puzzle"].count(".") == 40
    saved = json.loads((tmp_path / "out.json").read_text())
    assert saved[0]["grid"]["cells"][0][0].keys() == {"value", "isGiven", "hasError"}


def test_solve_directory_input(tmp_path):
    for i in range(3):
        f = tmp_path / f"puzzle{i}.json"
        f.write_text(json.dumps({"id": f"puzzle{i}", "puzzle": PUZZLE}))
    (tmp_path / "notes.txt").write_text("ignored")

    results = main(["solve", str(tmp_path)])

    assert [r["id"] for r in results] == ["puzzle0", "puzzle1", "puzzle2"]
    assert all(r["status"] == "solved" for r in results)
    assert results[0]["solution"].startswith("534678912")


def test_solve_reports_malformed_puzzle(tmp_path, capsys):
    path = tmp_path / "bad.jsonl"
    path.write_text(json.dumps({"id": "short", "puzzle": "123"}) + "\n")

    results = main(["solve", str(path)])

    assert results[0]["status"] == "error"
    assert results[0]["steps"] == -1
    assert "ERROR: Failed to solve puzzle short" in capsys.readouterr().err


def test_solve_uses_solver_status(monkeypatch, tmp_path):
    monkeypatch.setattr("run.solve_puzzle", fake_solve)
    results = main(["solve", PUZZLE, "--output", str(tmp_path / "r.csv")])
    assert results[0]["status"] == "unsolvable"
    assert results[0]["solution"] == ""


def test_trace_directory_receives_csv(tmp_path):
    trace_dir = tmp_path / "traces"
    main(["solve", PUZZLE, "--trace", str(trace_dir)])
    content = (trace_dir / "puzzle-0.csv").read_text()
    assert content.startswith("timestamp,step_number,action_type")
    assert ",place," in content


def test_csv_output_header(tmp_path):
    output_path = Path(tmp_path / "results.csv")
    write_results_csv([format_result("x", None, "error", -1)], output_path)
    assert output_path.read_text().splitlines()[0] == "id,puzzle,solution,status,steps"


def test_stdout_results_are_plain_json(tmp_path, capsys):
    main(["generate", "--difficulty", "easy", "--count", "2", "--trace", str(tmp_path)])

    captured = capsys.readouterr()
    results = json.loads(captured.out)
    assert [r["id"] for r in results] == ["puzzle-0", "puzzle-1"]
    assert "Generating 2 puzzle(s), 30 blanks each" in captured.err
    assert "Trace written" in captured.err


def test_directory_without_ids_keeps_traces_apart(tmp_path):
    puzzles_dir = tmp_path / "puzzles"
    puzzles_dir.mkdir()
    for name in ("a", "b"):
        (puzzles_dir / f"{name}.jsonl").write_text(json.dumps({"puzzle": PUZZLE}) + "\n")
    trace_dir = tmp_path / "traces"

    results = main(["solve", str(puzzles_dir), "--trace", str(trace_dir)])

    assert [r["id"] for r in results] == ["a-0", "b-0"]
    assert sorted(p.name for p in trace_dir.iterdir()) == ["a-0.csv", "b-0.csv"]
