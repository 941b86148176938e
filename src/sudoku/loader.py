import json
import os
from typing import Any, Dict, List

import pandas as pd

_PUZZLE_KEYS = ("puzzle", "quizzes", "grid", "board")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .parquet, .csv, .json and .jsonl formats.
    Returns a list of raw puzzle dictionaries with the grid under "puzzle" and an
    "id" (defaulting to "<file stem>-<index>").
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")
    stem = os.path.splitext(os.path.basename(file_path))[0]

    def _is_nonempty_str(value: Any) -> bool:
        return isinstance(value, str) and value.strip() != ""

    def _normalize_record(record: Dict[str, Any], index: int) -> Dict[str, Any]:
        for key in _PUZZLE_KEYS:
            value = record.get(key)
            if _is_nonempty_str(value):
                record["puzzle"] = value.strip()
                break

        if not _is_nonempty_str(record.get("id")):
            raw_id = record.get("id")
            record["id"] = str(raw_id) if raw_id not in (None, "") else f"{stem}-{index}"
        return record

    def _normalize_all(records: List[Any]) -> List[Dict[str, Any]]:
        return [
            _normalize_record(dict(r), i)
            for i, r in enumerate(records)
            if isinstance(r, dict)
        ]

    # Case 1: Parquet / CSV (tabular)
    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        return _normalize_all(df.to_dict(orient="records"))

    if file_path.endswith(".csv"):
        # Keep boards as text so leading zeros survive.
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        return _normalize_all(df.to_dict(orient="records"))

    # Case 2: JSON File (Text; array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            if isinstance(payload, list):
                return _normalize_all(payload)
            if isinstance(payload, dict):
                return _normalize_all([payload])
            return []
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            return _normalize_all(_read_lines(file_path))

    # Case 3: JSONL File (Text)
    return _normalize_all(_read_lines(file_path))


def _read_lines(file_path: str) -> List[Any]:
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                data.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return data
