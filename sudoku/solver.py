from typing import Optional

from .cell import Cell
from .exceptions import UnsolvableError
from .grid import Grid
from .search import search_targets
from .types import Matrix, SolveOrder, TraceLog, TraceMeta, TraceStep
from .utils import trace as emit_trace
from .validation import validate_solve_order


def solve(
    grid: Grid,
    order: SolveOrder = "input",
    trace: bool = False,
    trace_log: Optional[TraceLog] = None,
    trace_steps: Optional[list[TraceStep]] = None,
    trace_meta: Optional[TraceMeta] = None,
    trace_max_steps: int = 1000,
) -> None:
    """Fill every empty cell of ``grid`` in place.

    ``order="input"`` visits the empty cells in row-major order;
    ``order="constrained"`` visits them by ascending number of permissible
    values (ties broken by row, then column). The order is fixed once before
    the search starts.

    Raises :class:`UnsolvableError` when no completion exists, in which case
    the grid is left exactly as it was.
    """
    if grid is None:
        raise TypeError("grid must not be None")
    validate_solve_order(order)

    if grid.has_empty_and_invalid_cells():
        raise UnsolvableError("grid contains empty cells without permissible values")
    if grid.conflicting_houses():
        raise UnsolvableError("grid contains conflicting values")

    targets = solve_targets(grid, order)
    emit_trace(
        trace,
        trace_log,
        f"Initialized search: size={grid.size}, order={order}, empty_cells={len(targets)}",
    )

    if not search_targets(
        grid,
        targets,
        lambda cell: sorted(grid.permissible_values(cell)),
        trace_enabled=trace,
        trace_log=trace_log,
        trace_steps=trace_steps,
        trace_meta=trace_meta,
        trace_max_steps=trace_max_steps,
    ):
        raise UnsolvableError("no valid solution exists for the provided grid")


def solve_targets(grid: Grid, order: SolveOrder) -> list[Cell]:
    if order == "constrained":
        return grid.sorted_empty_cells_by_constraint()
    return [cell for cell in grid.iter_cells() if cell.is_empty()]


def solve_matrix(
    matrix: Matrix,
    order: SolveOrder = "input",
    trace: bool = False,
    trace_log: Optional[TraceLog] = None,
) -> Matrix:
    grid = Grid.from_matrix(matrix)
    solve(grid, order=order, trace=trace, trace_log=trace_log)
    return grid.as_array()
