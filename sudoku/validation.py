import math
from typing import Optional

from .exceptions import (
    GridIndexOutOfBoundsError,
    InvalidArgumentError,
    InvalidSizeError,
    ValueOutOfRangeError,
)
from .types import GenerationStrategy, Matrix, SolveOrder


SOLVE_ORDERS = ("input", "constrained")
GENERATION_STRATEGIES = ("simple", "diagonal")


def validate_size(size: int) -> None:
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise InvalidSizeError(size)
    if math.isqrt(size) ** 2 != size:
        raise InvalidSizeError(size)


def validate_index(size: int, index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or index < 0 or index >= size:
        raise GridIndexOutOfBoundsError(index, size)


def validate_value(size: int, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1 or value > size:
        raise ValueOutOfRangeError(value, size)


def validate_matrix(matrix: Matrix) -> None:
    if not isinstance(matrix, list):
        raise InvalidSizeError(matrix, "matrix must be a list of rows")
    size = len(matrix)
    try:
        validate_size(size)
    except InvalidSizeError as exc:
        raise InvalidSizeError(size, f"matrix has {size} rows; row count must be a positive perfect square") from exc

    for row_index, row in enumerate(matrix):
        if not isinstance(row, list) or len(row) != size:
            raise InvalidSizeError(size, f"matrix row {row_index} must be a list of length {size}")
        for value in row:
            if isinstance(value, bool) or not isinstance(value, int) or value < 0 or value > size:
                raise ValueOutOfRangeError(value, size, allow_empty=True)


def validate_non_empty_count(size: int, non_empty_count: Optional[int]) -> None:
    validate_size(size)
    if non_empty_count is None:
        return
    cell_count = size * size
    if non_empty_count < 0 or non_empty_count > cell_count:
        raise InvalidArgumentError(
            f"invalid non_empty_count {non_empty_count}; must be in the range 0 to {cell_count}"
        )


def validate_solve_order(order: SolveOrder) -> None:
    if order not in SOLVE_ORDERS:
        raise InvalidArgumentError("order must be one of: input, constrained")


def validate_generation_strategy(strategy: GenerationStrategy) -> None:
    if strategy not in GENERATION_STRATEGIES:
        raise InvalidArgumentError("strategy must be one of: simple, diagonal")


def validate_delimiters(cell_delimiter: str, row_delimiter: str, empty_notation: str) -> None:
    for name, argument in (
        ("cell_delimiter", cell_delimiter),
        ("row_delimiter", row_delimiter),
        ("empty_notation", empty_notation),
    ):
        if argument is None:
            raise TypeError(f"{name} must not be None")
        if not isinstance(argument, str):
            raise TypeError(f"{name} must be a string")
