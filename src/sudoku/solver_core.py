"""Backtracking Sudoku solver with row-major cell order and ascending candidates."""

from enum import Enum
from typing import Optional

from .model import BOX_SIZE, EMPTY, GRID_SIZE, Coord, Grid, check_coord
from src.utils.trace import Tracer


class SolveStatus(Enum):
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    INVALID = "invalid"  # The starting values already break a row, column, or box


def solve_grid(grid: Grid, tracer: Optional[Tracer] = None) -> SolveStatus:
    """
    Solve `grid` in place and report the outcome.

    A grid whose filled cells already conflict is rejected without searching,
    since the search only checks the values it places itself. On
    UNSOLVABLE the grid is left with its starting values.
    """
    if not grid.is_consistent():
        return SolveStatus.INVALID
    if solve(grid, tracer):
        return SolveStatus.SOLVED
    return SolveStatus.UNSOLVABLE


def solve(grid: Grid, tracer: Optional[Tracer] = None) -> bool:
    """
    Fill every empty cell of `grid` by depth-first backtracking.

    The first empty cell in row-major order receives the lowest value that
    fits, so an empty grid always solves to the same board. Returns False
    when no value fits somewhere down the line; every tentative placement
    is undone before returning False.
    """
    tracer = tracer if tracer is not None else Tracer(enabled=False)
    return _backtrack(grid, 0, tracer)


def _backtrack(grid: Grid, depth: int, tracer: Tracer) -> bool:
    empty = find_empty_cell(grid)
    if empty is None:
        tracer.log_solution_found(filled_cells=GRID_SIZE * GRID_SIZE)
        return True

    row, col = empty
    for value in range(1, GRID_SIZE + 1):
        if not is_valid_placement(grid, value, row, col):
            continue

        grid.cells[row][col].value = value
        tracer.log_place(row, col, value, depth=depth + 1)

        if _backtrack(grid, depth + 1, tracer):
            return True

        grid.cells[row][col].value = EMPTY

    tracer.log_backtrack(row, col)
    return False


def find_empty_cell(grid: Grid) -> Optional[Coord]:
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            if grid.cells[row][col].value == EMPTY:
                return row, col
    return None


def is_valid_placement(grid: Grid, value: int, row: int, col: int) -> bool:
    """
    True when no other cell in the row, column, or box of (row, col) holds
    `value`. The given flag plays no part.
    """
    check_coord(row, col)
    cells = grid.cells
    for i in range(GRID_SIZE):
        if i != col and cells[row][i].value == value:
            return False
        if i != row and cells[i][col].value == value:
            return False

    top, left = row - row % BOX_SIZE, col - col % BOX_SIZE
    for r in range(top, top + BOX_SIZE):
        for c in range(left, left + BOX_SIZE):
            if (r, c) != (row, col) and cells[r][c].value == value:
                return False
    return True
