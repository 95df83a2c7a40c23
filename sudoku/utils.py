import math
import random
from typing import TYPE_CHECKING, Optional, Sequence, TypeVar

from .exceptions import InvalidArgumentError
from .types import TraceLog

if TYPE_CHECKING:
    from .grid import Grid


T = TypeVar("T")


def block_size(size: int) -> int:
    return math.isqrt(size)


def block_index(size: int, row: int, column: int) -> int:
    side = block_size(size)
    return side * (row // side) + column // side


def diagonal_blocks(grid: "Grid") -> frozenset[int]:
    """Indices of the blocks on the main diagonal.

    No two of these blocks share a row, column or block, so each of them can be
    filled independently of the others.
    """
    side = grid.block_size
    return frozenset(range(0, grid.size, side + 1))


def value_universe(size: int) -> set[int]:
    return set(range(1, size + 1))


def random_element(items: Sequence[T], rng: Optional[random.Random] = None) -> Optional[T]:
    if not items:
        return None
    return (rng or random.Random()).choice(items)


def random_elements(items: Sequence[T], count: int, rng: Optional[random.Random] = None) -> list[T]:
    if count < 0 or count > len(items):
        raise InvalidArgumentError(f"count must be in the range 0 to {len(items)}, got {count}")
    return (rng or random.Random()).sample(list(items), count)


def trace(enabled: bool, trace_log: Optional[TraceLog], message: str) -> None:
    if not enabled:
        return
    if trace_log is not None:
        trace_log.append(message)
    else:
        print(message)


def indent(depth: int) -> str:
    return "  " * depth
