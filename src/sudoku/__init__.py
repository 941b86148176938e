"""Sudoku grid model, backtracking solver, and puzzle generator."""

from .model import Cell, Difficulty, Grid
from .solver_core import SolveStatus, is_valid_placement, solve, solve_grid
from .generator import blank_count, generate, generate_puzzle, generate_with_solution
from .parser import parse_grid

__all__ = [
    "Cell",
    "Difficulty",
    "Grid",
    "SolveStatus",
    "is_valid_placement",
    "solve",
    "solve_grid",
    "blank_count",
    "generate",
    "generate_puzzle",
    "generate_with_solution",
    "parse_grid",
]
