"""Puzzle construction: blank cells of a solved grid according to difficulty."""

import random
from typing import Any, Dict, List, Optional, Tuple

from .model import EMPTY, GRID_SIZE, Coord, Difficulty, Grid
from .solver_core import solve
from src.utils.trace import Tracer

BLANK_COUNTS: Dict[Difficulty, int] = {
    Difficulty.EASY: 30,
    Difficulty.MEDIUM: 40,
    Difficulty.HARD: 50,
}
DEFAULT_BLANK_COUNT = 40


def blank_count(difficulty: Any) -> int:
    """Number of cells to empty for `difficulty`; unknown levels count as medium."""
    level = Difficulty.parse(difficulty)
    if level is None:
        return DEFAULT_BLANK_COUNT
    return BLANK_COUNTS[level]


def empty_cells(
    grid: Grid,
    count: int,
    rng: Optional[random.Random] = None,
    tracer: Optional[Tracer] = None,
) -> List[Coord]:
    """
    Empty `count` filled cells chosen uniformly at random.

    The 81 coordinates are shuffled once and the first `count` filled ones
    are cleared, so the loop always ends after at most 81 draws.
    """
    rng = rng or random.Random()
    tracer = tracer if tracer is not None else Tracer(enabled=False)

    filled = GRID_SIZE * GRID_SIZE - grid.count_empty()
    if count < 0 or count > filled:
        raise ValueError(f"Cannot empty {count} cells from a grid with {filled} filled cells")

    coords = list(grid.iter_coords())
    rng.shuffle(coords)

    emptied: List[Coord] = []
    for row, col in coords:
        if len(emptied) == count:
            break
        cell = grid.cells[row][col]
        if cell.value == EMPTY:
            continue
        tracer.log_cell_emptied(row, col, cell.value)
        cell.value = EMPTY
        emptied.append((row, col))
    return emptied


def stamp_givens(grid: Grid, tracer: Optional[Tracer] = None) -> None:
    """Mark every filled cell as given and every empty one as editable."""
    tracer = tracer if tracer is not None else Tracer(enabled=False)
    for row in grid.cells:
        for cell in row:
            cell.given = cell.value != EMPTY
    tracer.log_givens_stamped(filled_cells=GRID_SIZE * GRID_SIZE - grid.count_empty())


def generate_puzzle(
    grid: Grid,
    difficulty: Any,
    rng: Optional[random.Random] = None,
    tracer: Optional[Tracer] = None,
) -> None:
    """Turn a solved `grid` into a playable puzzle in place."""
    if not grid.is_solved():
        raise ValueError("generate_puzzle expects a completely solved grid")

    empty_cells(grid, blank_count(difficulty), rng=rng, tracer=tracer)
    stamp_givens(grid, tracer=tracer)


def generate_with_solution(
    difficulty: Any,
    rng: Optional[random.Random] = None,
    tracer: Optional[Tracer] = None,
) -> Tuple[Grid, Grid]:
    """Return a fresh puzzle together with the solved grid it was cut from."""
    grid = Grid()
    solve(grid, tracer)
    solution = grid.copy()
    generate_puzzle(grid, difficulty, rng=rng, tracer=tracer)
    return grid, solution


def generate(
    difficulty: Any,
    rng: Optional[random.Random] = None,
    tracer: Optional[Tracer] = None,
) -> Grid:
    """Build a new puzzle for `difficulty` on a grid owned by the caller."""
    puzzle, _ = generate_with_solution(difficulty, rng=rng, tracer=tracer)
    return puzzle
