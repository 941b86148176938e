import json

import pandas as pd
import pytest

from src.sudoku.loader import load_puzzles

BOARD = "0" * 40 + "123456789" + "0" * 32


def test_load_csv_keeps_leading_zeros(tmp_path):
    path = tmp_path / "puzzles.csv"
    pd.DataFrame({"id": ["a", "b"], "quizzes": [BOARD, BOARD]}).to_csv(path, index=False)

    records = load_puzzles(str(path))

    assert [r["id"] for r in records] == ["a", "b"]
    assert records[0]["puzzle"] == BOARD


def test_load_json_array_and_object(tmp_path):
    array_path = tmp_path / "many.json"
    array_path.write_text(json.dumps([{"puzzle": BOARD}, {"grid": BOARD}, "skip-me"]))
    object_path = tmp_path / "one.json"
    object_path.write_text(json.dumps({"id": "solo", "puzzle": BOARD}))

    many = load_puzzles(str(array_path))
    assert [r["id"] for r in many] == ["many-0", "many-1"]
    assert all(r["puzzle"] == BOARD for r in many)
    assert load_puzzles(str(object_path))[0]["id"] == "solo"


def test_json_extension_with_line_delimited_content(tmp_path):
    path = tmp_path / "lines.json"
    path.write_text(json.dumps({"puzzle": BOARD}) + "\n" + json.dumps({"puzzle": BOARD}) + "\n")
    assert len(load_puzzles(str(path))) == 2


def test_load_jsonl_skips_bad_lines(tmp_path):
    path = tmp_path / "puzzles.jsonl"
    path.write_text(json.dumps({"id": 7, "puzzle": BOARD}) + "\n{broken\n\n")
    records = load_puzzles(str(path))
    assert len(records) == 1
    assert records[0]["id"] == "7"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_puzzles(str(tmp_path / "nope.csv"))


def test_default_ids_include_file_stem(tmp_path):
    for name in ("first", "second"):
        (tmp_path / f"{name}.jsonl").write_text(json.dumps({"puzzle": BOARD}) + "\n")

    ids = [
        r["id"]
        for name in ("first", "second")
        for r in load_puzzles(str(tmp_path / f"{name}.jsonl"))
    ]
    assert ids == ["first-0", "second-0"]
