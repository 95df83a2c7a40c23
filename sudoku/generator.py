import random
from typing import Optional

from .cell import Cell
from .exceptions import UnsolvableError
from .grid import Grid
from .search import search_targets
from .types import GenerationStrategy, TraceLog, TraceMeta, TraceStep
from .utils import diagonal_blocks, random_elements
from .utils import trace as emit_trace
from .validation import validate_generation_strategy, validate_non_empty_count, validate_size


def generate(
    size: int,
    non_empty_count: Optional[int] = None,
    strategy: GenerationStrategy = "simple",
    rng: Optional[random.Random] = None,
    trace: bool = False,
    trace_log: Optional[TraceLog] = None,
    trace_steps: Optional[list[TraceStep]] = None,
    trace_meta: Optional[TraceMeta] = None,
    trace_max_steps: int = 1000,
) -> Grid:
    """Generate a complete grid, or a puzzle with ``non_empty_count`` clues.

    Arguments are checked before any search runs. The same ``rng`` drives both
    the fill and the carving, so a seeded ``random.Random`` reproduces the
    result.
    """
    validate_non_empty_count(size, non_empty_count)
    validate_generation_strategy(strategy)
    rng = rng or random.Random()

    grid = generate_complete(
        size,
        strategy=strategy,
        rng=rng,
        trace=trace,
        trace_log=trace_log,
        trace_steps=trace_steps,
        trace_meta=trace_meta,
        trace_max_steps=trace_max_steps,
    )
    if non_empty_count is not None:
        carve(grid, non_empty_count, rng=rng)
    return grid


def generate_complete(
    size: int,
    strategy: GenerationStrategy = "simple",
    rng: Optional[random.Random] = None,
    trace: bool = False,
    trace_log: Optional[TraceLog] = None,
    trace_steps: Optional[list[TraceStep]] = None,
    trace_meta: Optional[TraceMeta] = None,
    trace_max_steps: int = 1000,
) -> Grid:
    validate_size(size)
    validate_generation_strategy(strategy)
    rng = rng or random.Random()
    grid = Grid(size)

    if strategy == "simple":
        targets = list(grid.iter_cells())
        emit_trace(trace, trace_log, f"Initialized generation: size={size}, strategy={strategy}, target_cells={len(targets)}")
        if not search_targets(
            grid,
            targets,
            lambda cell: shuffled_permissible_values(grid, cell, rng),
            trace_enabled=trace,
            trace_log=trace_log,
            trace_steps=trace_steps,
            trace_meta=trace_meta,
            trace_max_steps=trace_max_steps,
        ):
            raise UnsolvableError(f"could not complete a grid of size {size}")
        return grid

    blocks = diagonal_blocks(grid)
    while True:
        populate_diagonal_blocks(grid, blocks, rng)
        # search resumes right after the first diagonal block
        targets = [cell for cell in list(grid.iter_cells())[grid.block_size:] if cell.is_empty()]
        emit_trace(trace, trace_log, f"Initialized generation: size={size}, strategy={strategy}, target_cells={len(targets)}")
        if search_targets(
            grid,
            targets,
            lambda cell: shuffled_permissible_values(grid, cell, rng),
            trace_enabled=trace,
            trace_log=trace_log,
            trace_steps=trace_steps,
            trace_meta=trace_meta,
            trace_max_steps=trace_max_steps,
        ):
            break
        # some diagonal fills of 4 x 4 grids admit no completion; draw new ones
        release_blocks(grid, blocks, clear=True)

    release_blocks(grid, blocks)
    return grid


def populate_diagonal_blocks(grid: Grid, blocks: frozenset[int], rng: random.Random) -> None:
    for index in sorted(blocks):
        values = sorted(grid.values())
        rng.shuffle(values)
        for cell, value in zip(grid.block(index), values):
            grid.set_value(cell, value)
            cell.set_fixed(True)


def release_blocks(grid: Grid, blocks: frozenset[int], clear: bool = False) -> None:
    for index in blocks:
        house = grid.block(index)
        for cell in house:
            cell.set_fixed(False)
        if clear:
            house.clear_values()


def shuffled_permissible_values(grid: Grid, cell: Cell, rng: random.Random) -> list[int]:
    values = sorted(grid.permissible_values(cell))
    rng.shuffle(values)
    return values


def carve(grid: Grid, non_empty_count: int, rng: Optional[random.Random] = None) -> Grid:
    """Empty random cells until exactly ``non_empty_count`` values remain."""
    validate_non_empty_count(grid.size, non_empty_count)
    filled = sorted(grid.non_empty_cells(), key=lambda cell: cell.coordinates)
    for cell in random_elements(filled, max(len(filled) - non_empty_count, 0), rng):
        grid.remove_value(cell)
    return grid
