from typing import Optional

from .utils import block_index
from .validation import validate_index, validate_size, validate_value


class Cell:
    """One position of a grid.

    A cell knows its coordinates and the size of the grid it belongs to, which
    is all it needs for range checks and block arithmetic. Whether a value is
    legal with respect to the neighbouring cells is decided by the grid.
    Equality is positional: two cells are equal when they share a row and a
    column, whatever their values.
    """

    __slots__ = ("_row", "_column", "_size", "_value", "_fixed")

    def __init__(self, row: int, column: int, size: int) -> None:
        validate_size(size)
        validate_index(size, row)
        validate_index(size, column)
        self._row = row
        self._column = column
        self._size = size
        self._value: Optional[int] = None
        self._fixed = False

    @property
    def row(self) -> int:
        return self._row

    @property
    def column(self) -> int:
        return self._column

    @property
    def size(self) -> int:
        return self._size

    @property
    def value(self) -> Optional[int]:
        return self._value

    @property
    def coordinates(self) -> tuple[int, int]:
        return self._row, self._column

    def set_value(self, value: int) -> None:
        validate_value(self._size, value)
        self._value = value

    def remove_value(self) -> int:
        previous = self._value
        self._value = None
        return 0 if previous is None else previous

    def is_empty(self) -> bool:
        return self._value is None

    def is_fixed(self) -> bool:
        return self._fixed

    def set_fixed(self, fixed: bool) -> None:
        self._fixed = fixed

    def block_index(self) -> int:
        return block_index(self._size, self._row, self._column)

    def is_related(self, other: "Cell") -> bool:
        if other is None:
            raise TypeError("cannot relate a cell to None")
        return (
            self._row == other.row
            or self._column == other.column
            or self.block_index() == other.block_index()
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self._row == other.row and self._column == other.column

    def __hash__(self) -> int:
        return self._size * self._row + self._column

    def __repr__(self) -> str:
        value = 0 if self._value is None else self._value
        return f"Cell(row={self._row}, column={self._column}, block={self.block_index()}, value={value})"
