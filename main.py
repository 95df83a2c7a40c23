import argparse
import json
import random
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, StrictInt, ValidationError

from sudoku.generator import generate
from sudoku.solver import solve_matrix
from sudoku.types import GenerationStrategy, Matrix, SolveOrder
from sudoku.validation import GENERATION_STRATEGIES, SOLVE_ORDERS, validate_matrix


class PuzzleFile(BaseModel):
    grid: list[list[StrictInt]] = Field(..., description="Square grid of integers with 0 for empty cells")
    order: str = Field(default="input", description="Solve order: input or constrained.")


def run_solve(matrix: Matrix, order: SolveOrder = "input") -> Matrix:
    # boundary validation
    validate_matrix(matrix)
    return solve_matrix(matrix, order=order)


def run_solve_with_trace(matrix: Matrix, order: SolveOrder = "input") -> tuple[Matrix, list[str]]:
    trace_log: list[str] = []
    result = solve_matrix(matrix, order=order, trace=True, trace_log=trace_log)
    return result, trace_log


def run_generate(
    size: int,
    non_empty_count: Optional[int] = None,
    strategy: GenerationStrategy = "simple",
    seed: Optional[int] = None,
) -> Matrix:
    rng = random.Random(seed)
    return generate(size, non_empty_count=non_empty_count, strategy=strategy, rng=rng).as_array()


def load_puzzle_from_file(input_path: str) -> tuple[Matrix, SolveOrder]:
    path = Path(input_path)
    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError(f"input file not found: {input_path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"input file is not valid JSON: {input_path}") from exc

    if not isinstance(payload, dict):
        raise ValueError("JSON root must be an object")
    if "grid" not in payload:
        raise ValueError("JSON must include 'grid'")

    try:
        puzzle = PuzzleFile.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"invalid puzzle file: {exc.errors()[0]['msg']}") from exc

    return puzzle.grid, puzzle.order


def format_grid_rows(grid: Matrix, empty_notation: str = ".") -> list[str]:
    return [" ".join(empty_notation if value == 0 else str(value) for value in row) for row in grid]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve and generate N x N Sudoku puzzles")
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve_parser = subparsers.add_parser("solve", help="Solve a puzzle read from a JSON file")
    solve_parser.add_argument("--input", required=True, help="Path to a JSON file with a 'grid' matrix (0 for empty)")
    solve_parser.add_argument("--order", choices=SOLVE_ORDERS, default=None, help="Override the order from the file")
    solve_parser.add_argument("--trace", action="store_true", help="Include solver trace output")

    generate_parser = subparsers.add_parser("generate", help="Generate a complete grid or a puzzle")
    generate_parser.add_argument("--size", type=int, default=9, help="Grid size; must be a perfect square")
    generate_parser.add_argument("--filled", type=int, default=None, help="Number of cells left filled")
    generate_parser.add_argument("--strategy", choices=GENERATION_STRATEGIES, default="simple")
    generate_parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    generate_parser.add_argument("--format", choices=("json", "text"), default="json")
    return parser


def cli(argv: Optional[list[str]] = None) -> None:
    args = _build_parser().parse_args(argv)

    try:
        if args.command == "solve":
            matrix, order = load_puzzle_from_file(args.input)
            order = args.order or order
            if args.trace:
                solution, trace_log = run_solve_with_trace(matrix, order=order)
                print(json.dumps({"solution": solution, "trace": trace_log}, indent=2))
            else:
                solution = run_solve(matrix, order=order)
                print(json.dumps({"solution": solution}, indent=2))
        else:
            grid = run_generate(args.size, non_empty_count=args.filled, strategy=args.strategy, seed=args.seed)
            if args.format == "text":
                print("\n".join(format_grid_rows(grid)))
            else:
                print(json.dumps({"grid": grid}, indent=2))
    except ValueError as exc:
        raise SystemExit(f"Error: {exc}")


if __name__ == "__main__":
    cli()
