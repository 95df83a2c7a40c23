from typing import Callable, Iterator, Optional, Sequence

from .cell import Cell
from .grid import Grid
from .types import TraceLog, TraceMeta, TraceStep
from .utils import indent, trace


CandidateSource = Callable[[Cell], list[int]]


def search_targets(
    grid: Grid,
    targets: Sequence[Cell],
    candidates_for: CandidateSource,
    trace_enabled: bool = False,
    trace_log: Optional[TraceLog] = None,
    trace_steps: Optional[list[TraceStep]] = None,
    trace_meta: Optional[TraceMeta] = None,
    trace_max_steps: int = 1000,
) -> bool:
    """Depth-first fill of ``targets`` in the given order.

    Depth ``i`` of the search is the cell ``targets[i]``. Each level keeps an
    iterator over the candidate values produced by ``candidates_for`` when the
    level was entered; a failed continuation undoes the cell's value and moves
    to the next candidate. The frames live in a list instead of the call stack,
    so the depth is bounded by the number of targets rather than by the
    interpreter's recursion limit.

    Returns True with every target filled, or False with every target restored
    to empty.
    """

    def record_step(
        event: str,
        message: str,
        depth: int,
        cell: Optional[Cell] = None,
        value: Optional[int] = None,
        candidates: Optional[list[int]] = None,
    ) -> None:
        trace(trace_enabled, trace_log, message)
        if trace_steps is None:
            return
        if len(trace_steps) >= trace_max_steps:
            if trace_meta is not None:
                trace_meta["truncated"] = True
            return
        trace_steps.append(
            {
                "event": event,
                "message": message,
                "depth": depth,
                "row": None if cell is None else cell.row,
                "col": None if cell is None else cell.column,
                "value": value,
                "candidates": candidates,
                "grid": grid.as_array(),
            }
        )

    frames: list[Iterator[int]] = []
    depth = 0
    while True:
        if depth == len(targets):
            record_step("complete", f"{indent(depth)}All {len(targets)} target cells assigned", depth)
            return True

        cell = targets[depth]
        r, c = cell.coordinates
        if len(frames) == depth:
            candidates = candidates_for(cell)
            if not candidates:
                record_step("prune_branch", f"{indent(depth)}No valid values remain for ({r}, {c})", depth, cell=cell)
                if depth == 0:
                    return False
                depth -= 1
                continue
            record_step(
                "select_cell",
                f"{indent(depth)}Select cell ({r}, {c}) with {len(candidates)} candidates",
                depth,
                cell=cell,
                candidates=candidates,
            )
            frames.append(iter(candidates))
        else:
            previous = cell.remove_value()
            record_step("backtrack", f"{indent(depth)}Backtrack on ({r}, {c}) value {previous}", depth, cell=cell, value=previous)

        value = next(frames[depth], None)
        if value is None:
            frames.pop()
            record_step("prune_branch", f"{indent(depth)}No valid values remain for ({r}, {c})", depth, cell=cell)
            if depth == 0:
                return False
            depth -= 1
            continue

        record_step("try_value", f"{indent(depth)}Try value {value} at ({r}, {c})", depth, cell=cell, value=value)
        cell.set_value(value)
        depth += 1
