"""CLI entrypoint: generate puzzles or solve puzzle files, and report results."""

import argparse
import csv
import json
import random
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from solver import solve_puzzle
from src.sudoku.generator import blank_count, generate_with_solution
from src.sudoku.loader import load_puzzles
from src.sudoku.model import GRID_SIZE, Grid
from src.sudoku.parser import parse_grid
from src.sudoku.solver_core import SolveStatus
from src.utils.io import save_json
from src.utils.trace import get_tracer, reset_tracer

PUZZLE_SUFFIXES = (".json", ".jsonl", ".parquet", ".csv")


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Generate and solve 9x9 Sudoku puzzles")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate playable puzzles")
    gen.add_argument(
        "--difficulty",
        default="medium",
        help="easy, medium or hard (anything else is treated as medium)",
    )
    gen.add_argument("--count", type=int, default=1, help="Number of puzzles to generate")
    gen.add_argument("--seed", type=int, default=None, help="Seed for reproducible blanking")
    gen.add_argument(
        "--with-solution",
        action="store_true",
        help="Include the solved grid each puzzle was cut from.",
    )

    solve = sub.add_parser("solve", help="Solve puzzles from a file, directory, or literal string")
    solve.add_argument("input", help="Puzzle file, directory of puzzle files, or an 81-char board")

    for p in (gen, solve):
        p.add_argument("--output", type=Path, default=None, help="Optional .csv or .json results path")
        p.add_argument(
            "--trace",
            type=Path,
            default=None,
            help="Optional directory receiving one step-trace CSV per puzzle.",
        )
    return parser.parse_args(argv)


def format_result(
    puzzle_id: str,
    grid: Optional[Grid],
    status: str,
    steps: int,
    solution: Optional[Grid] = None,
) -> Dict[str, Any]:
    return {
        "id": puzzle_id,
        "puzzle": grid.to_string() if grid is not None else "",
        "solution": solution.to_string() if solution is not None else "",
        "status": status,
        "steps": steps,
        "grid": grid.to_dict() if grid is not None else {"cells": []},
    }


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "puzzle", "solution", "status", "steps"])

        for r in results:
            writer.writerow([r["id"], r["puzzle"], r["solution"], r["status"], r["steps"]])


def write_results(results, output_path: Optional[Path]):
    if output_path is None:
        print(json.dumps(
            [{k: v for k, v in r.items() if k != "grid"} for r in results],
            indent=2,
        ))
    elif output_path.suffix == ".csv":
        write_results_csv(results, output_path)
    else:
        save_json(output_path, results)


def _write_trace(trace_dir: Optional[Path], puzzle_id: str) -> None:
    if trace_dir is not None:
        get_tracer().to_csv(trace_dir / f"{puzzle_id}.csv")


def collect_puzzles(source: str) -> List[Dict[str, Any]]:
    path = Path(source)
    if path.is_file():
        return load_puzzles(str(path))
    if path.is_dir():
        puzzles = []
        for file_path in sorted(path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
        return puzzles
    if len(source.strip()) == GRID_SIZE * GRID_SIZE:
        return [{"id": "puzzle-0", "puzzle": source.strip()}]
    raise ValueError(f"Input {source} is neither a file, a directory, nor an 81-character board")


def run_generate(args) -> List[Dict[str, Any]]:
    results = []
    print(
        f"Generating {args.count} puzzle(s), {blank_count(args.difficulty)} blanks each",
        file=sys.stderr,
    )
    for i in range(args.count):
        reset_tracer()
        tracer = get_tracer()
        rng = random.Random(args.seed + i) if args.seed is not None else random.Random()
        puzzle_id = f"puzzle-{i}"

        puzzle, solution = generate_with_solution(args.difficulty, rng=rng, tracer=tracer)
        results.append(format_result(
            puzzle_id,
            puzzle,
            "generated",
            tracer.summary()["num_placements"],
            solution if args.with_solution else None,
        ))
        _write_trace(args.trace, puzzle_id)
    return results


def run_solve(args) -> List[Dict[str, Any]]:
    results = []
    for index, puzzle in enumerate(collect_puzzles(args.input)):
        reset_tracer()
        tracer = get_tracer()
        puzzle_id = str(puzzle.get("id", f"puzzle-{index}"))

        try:
            original = parse_grid(puzzle)
            grid, status = solve_puzzle(original, tracer=tracer)
            # Count placements as search effort; bookkeeping steps are excluded.
            results.append(format_result(
                puzzle_id,
                original,
                status.value,
                tracer.summary()["num_placements"],
                grid if status is SolveStatus.SOLVED else None,
            ))
        except Exception as e:
            print(f"ERROR: Failed to solve puzzle {puzzle_id}: {e}", file=sys.stderr)
            results.append(format_result(puzzle_id, None, "error", -1))
        _write_trace(args.trace, puzzle_id)
    return results


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    if args.command == "generate":
        results = run_generate(args)
    else:
        results = run_solve(args)
    write_results(results, args.output)
    return results


if __name__ == "__main__":
    main()
