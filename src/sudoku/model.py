"""Sudoku core data structures: cells, the 9x9 grid, and difficulty levels."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

GRID_SIZE = 9
BOX_SIZE = 3
EMPTY = 0

Coord = Tuple[int, int]


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Any) -> Optional["Difficulty"]:
        """Resolve a member or a case-insensitive name; None when unrecognised."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        return None


def _check_value(value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or not EMPTY <= value <= GRID_SIZE:
        raise ValueError(f"Cell value must be an integer in [0, {GRID_SIZE}], got {value!r}")
    return value


def check_coord(row: int, col: int) -> None:
    if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
        raise IndexError(f"Cell ({row}, {col}) is outside the {GRID_SIZE}x{GRID_SIZE} grid")


@dataclass
class Cell:
    """
    One board position. `given` marks values that belong to the puzzle;
    `error` is left to callers that check player input and is never touched
    by the engine.
    """

    value: int = EMPTY
    given: bool = False
    error: bool = False

    def __post_init__(self) -> None:
        _check_value(self.value)

    @property
    def is_empty(self) -> bool:
        return self.value == EMPTY


def _empty_rows() -> List[List[Cell]]:
    return [[Cell() for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]


@dataclass
class Grid:
    cells: List[List[Cell]] = field(default_factory=_empty_rows)

    def __post_init__(self) -> None:
        if len(self.cells) != GRID_SIZE or any(len(row) != GRID_SIZE for row in self.cells):
            raise ValueError(f"Grid must be {GRID_SIZE}x{GRID_SIZE}")

    @classmethod
    def from_values(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        if len(rows) != GRID_SIZE or any(len(row) != GRID_SIZE for row in rows):
            raise ValueError(f"Grid must be {GRID_SIZE}x{GRID_SIZE}")
        return cls([[Cell(_check_value(v)) for v in row] for row in rows])

    @classmethod
    def from_string(cls, text: str) -> "Grid":
        """Build a grid from 81 characters; '0' or '.' mark empty cells."""
        text = text.strip()
        if len(text) != GRID_SIZE * GRID_SIZE:
            raise ValueError(f"Expected {GRID_SIZE * GRID_SIZE} characters, got {len(text)}")
        values = []
        for ch in text:
            if ch == ".":
                values.append(EMPTY)
            elif ch.isdigit():
                values.append(int(ch))
            else:
                raise ValueError(f"Unexpected character {ch!r} in grid string")
        rows = [values[i : i + GRID_SIZE] for i in range(0, len(values), GRID_SIZE)]
        return cls.from_values(rows)

    def cell(self, row: int, col: int) -> Cell:
        check_coord(row, col)
        return self.cells[row][col]

    def value(self, row: int, col: int) -> int:
        return self.cell(row, col).value

    def set_value(self, row: int, col: int, value: int) -> None:
        self.cell(row, col).value = _check_value(value)

    def iter_coords(self) -> Iterator[Coord]:
        for row in range(GRID_SIZE):
            for col in range(GRID_SIZE):
                yield row, col

    def row_values(self, row: int) -> List[int]:
        return [cell.value for cell in self.cells[row]]

    def col_values(self, col: int) -> List[int]:
        return [self.cells[row][col].value for row in range(GRID_SIZE)]

    def box_values(self, row: int, col: int) -> List[int]:
        top, left = row - row % BOX_SIZE, col - col % BOX_SIZE
        return [
            self.cells[r][c].value
            for r in range(top, top + BOX_SIZE)
            for c in range(left, left + BOX_SIZE)
        ]

    def units(self) -> Iterator[List[int]]:
        """Yield the values of every row, column, and box."""
        for i in range(GRID_SIZE):
            yield self.row_values(i)
            yield self.col_values(i)
        for top in range(0, GRID_SIZE, BOX_SIZE):
            for left in range(0, GRID_SIZE, BOX_SIZE):
                yield self.box_values(top, left)

    def is_complete(self) -> bool:
        return all(not cell.is_empty for row in self.cells for cell in row)

    def is_consistent(self) -> bool:
        """Check that no unit repeats a non-zero value among the filled cells."""
        for unit in self.units():
            filled = [v for v in unit if v != EMPTY]
            if len(filled) != len(set(filled)):
                return False
        return True

    def is_solved(self) -> bool:
        full = set(range(1, GRID_SIZE + 1))
        return all(set(unit) == full for unit in self.units())

    def count_empty(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.is_empty)

    def copy(self) -> "Grid":
        return Grid([[Cell(c.value, c.given, c.error) for c in row] for row in self.cells])

    def values(self) -> List[List[int]]:
        return [self.row_values(row) for row in range(GRID_SIZE)]

    def to_string(self) -> str:
        return "".join(
            str(cell.value) if not cell.is_empty else "." for row in self.cells for cell in row
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cells": [
                [
                    {"value": cell.value, "isGiven": cell.given, "hasError": cell.error}
                    for cell in row
                ]
                for row in self.cells
            ]
        }

    def __str__(self) -> str:
        lines = []
        for r, row in enumerate(self.cells):
            if r and r % BOX_SIZE == 0:
                lines.append("------+-------+------")
            chunks = []
            for left in range(0, GRID_SIZE, BOX_SIZE):
                chunks.append(
                    " ".join(str(c.value) if c.value else "." for c in row[left : left + BOX_SIZE])
                )
            lines.append(" | ".join(chunks))
        return "\n".join(lines)
