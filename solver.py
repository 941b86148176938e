"""Top-level Sudoku solve interface.

Expose `solve_puzzle(puzzle)` that accepts a Grid or any raw payload
compatible with `src.sudoku.parser.parse_grid`.
"""

from typing import Any, Optional, Tuple

from src.sudoku import solver_core
from src.sudoku.model import Grid
from src.sudoku.parser import parse_grid
from src.sudoku.solver_core import SolveStatus
from src.utils.trace import Tracer


def solve_puzzle(puzzle: Any, tracer: Optional[Tracer] = None) -> Tuple[Grid, SolveStatus]:
    """
    Solve a puzzle and return the worked grid with the outcome.
    Accepts:
      - Grid instances (copied, the caller's grid is left untouched)
      - 81-character strings, 9x9 nested lists, or puzzle dictionaries
    Steps are recorded only when a `tracer` is passed.
    """
    grid = parse_grid(puzzle)
    status = solver_core.solve_grid(grid, tracer)
    return grid, status


__all__ = ["solve_puzzle"]
