"""Puzzle parser: convert raw puzzle payloads into Grid structures.

Supports:
- 81-character strings ("0" or "." for blanks), including pretty-printed
  boards with "|", "-", "+" separators and line breaks
- 9x9 nested lists of ints
- record dictionaries carrying the string under "puzzle", "quizzes" or "grid"
"""

from __future__ import annotations

from typing import Any, Dict, Sequence

from .generator import stamp_givens
from .model import GRID_SIZE, Grid

_RECORD_KEYS = ("puzzle", "quizzes", "grid")
_SEPARATORS = set("|-+")


def parse_grid(source: Any) -> Grid:
    """Build a grid from `source`; filled cells are marked as given."""
    if isinstance(source, Grid):
        return source.copy()

    if isinstance(source, dict):
        grid = _parse_string(_extract_puzzle_text(source))
    elif isinstance(source, str):
        grid = _parse_string(source)
    elif isinstance(source, (list, tuple)):
        grid = _parse_rows(source)
    else:
        raise TypeError(f"parse_grid cannot read a {type(source).__name__}")

    stamp_givens(grid)
    return grid


def _extract_puzzle_text(record: Dict[str, Any]) -> str:
    for key in _RECORD_KEYS:
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            return value
    raise ValueError(f"Record has none of the keys {', '.join(_RECORD_KEYS)}")


def _parse_string(text: str) -> Grid:
    cleaned = "".join(ch for ch in text if not ch.isspace() and ch not in _SEPARATORS)
    return Grid.from_string(cleaned)


def _parse_rows(rows: Sequence[Any]) -> Grid:
    if len(rows) != GRID_SIZE:
        raise ValueError(f"Expected {GRID_SIZE} rows, got {len(rows)}")
    values = []
    for row in rows:
        if isinstance(row, str):
            row = [0 if ch == "." else int(ch) for ch in row if not ch.isspace()]
        elif not isinstance(row, (list, tuple)):
            raise ValueError(f"Grid rows must be lists or strings, got {type(row).__name__}")
        # Values other than plain ints are rejected by Grid.from_values.
        values.append(list(row))
    return Grid.from_values(values)
