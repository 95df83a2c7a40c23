from typing import Iterator, Optional, Union

from .cell import Cell
from .exceptions import (
    ConflictingValuesError,
    DisallowedValueError,
    InvalidArgumentError,
    UnsatisfiableGridError,
)
from .house import House, HouseType
from .types import Coordinates, Matrix
from .utils import block_size, value_universe
from .validation import (
    validate_delimiters,
    validate_index,
    validate_matrix,
    validate_size,
    validate_value,
)


Position = Union[Cell, Coordinates]

DEFAULT_CELL_DELIMITER = ","
DEFAULT_ROW_DELIMITER = "\n"
DEFAULT_EMPTY_NOTATION = "0"


class Grid:
    """An N x N Sudoku grid and the constraint engine behind it.

    The grid owns its cells (a flat row-major list) and the three families of
    houses built over them. It is the only place where the legality of a value
    is decided: ``permissible_values`` is the central primitive and
    ``set_value`` refuses anything outside of it while active verification is
    on.

    Positions are passed either as a :class:`Cell` or as a ``(row, column)``
    tuple.
    """

    def __init__(self, size: int) -> None:
        validate_size(size)
        self._size = size
        self._block_size = block_size(size)
        self._cells = [Cell(row, column, size) for row in range(size) for column in range(size)]
        self._rows = tuple(
            House(index, HouseType.ROW, self._cells[index * size:(index + 1) * size], size)
            for index in range(size)
        )
        self._columns = tuple(
            House(index, HouseType.COLUMN, self._cells[index::size], size) for index in range(size)
        )
        members: list[list[Cell]] = [[] for _ in range(size)]
        for cell in self._cells:
            members[cell.block_index()].append(cell)
        self._blocks = tuple(House(index, HouseType.BLOCK, members[index], size) for index in range(size))
        self._active_verification = True

    @classmethod
    def from_matrix(cls, matrix: Matrix) -> "Grid":
        """Build a grid from a dense matrix where 0 marks an empty cell.

        Non-zero entries are replayed through :meth:`set_value` in row-major
        order, so a matrix that breaks a constraint fails with
        :class:`DisallowedValueError` at the first offending cell.
        """
        validate_matrix(matrix)
        grid = cls(len(matrix))
        for row, values in enumerate(matrix):
            for column, value in enumerate(values):
                if value != 0:
                    grid.set_value((row, column), value)
        return grid

    @property
    def size(self) -> int:
        return self._size

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def rows(self) -> tuple[House, ...]:
        return self._rows

    @property
    def columns(self) -> tuple[House, ...]:
        return self._columns

    @property
    def blocks(self) -> tuple[House, ...]:
        return self._blocks

    @property
    def active_verification(self) -> bool:
        return self._active_verification

    @active_verification.setter
    def active_verification(self, enabled: bool) -> None:
        if enabled:
            self.validate()
        self._active_verification = enabled

    def cell(self, row: int, column: int) -> Cell:
        validate_index(self._size, row)
        validate_index(self._size, column)
        return self._cells[row * self._size + column]

    def value(self, row: int, column: int) -> Optional[int]:
        return self.cell(row, column).value

    def row(self, index: int) -> House:
        validate_index(self._size, index)
        return self._rows[index]

    def column(self, index: int) -> House:
        validate_index(self._size, index)
        return self._columns[index]

    def block(self, index: int) -> House:
        validate_index(self._size, index)
        return self._blocks[index]

    def houses_of(self, position: Position) -> tuple[House, House, House]:
        cell = self._resolve(position)
        return self._rows[cell.row], self._columns[cell.column], self._blocks[cell.block_index()]

    def values(self) -> set[int]:
        return value_universe(self._size)

    def iter_cells(self) -> Iterator[Cell]:
        return iter(self._cells)

    def all_cells(self) -> set[Cell]:
        return set(self._cells)

    def empty_cells(self) -> set[Cell]:
        return {cell for cell in self._cells if cell.is_empty()}

    def non_empty_cells(self) -> set[Cell]:
        return {cell for cell in self._cells if not cell.is_empty()}

    def permissible_values(self, position: Position) -> set[int]:
        row, column, block = self.houses_of(position)
        present = row.present_values() | column.present_values() | block.present_values()
        return value_universe(self._size) - present

    def empty_cells_with_permissible_values(self) -> dict[Cell, set[int]]:
        return {cell: self.permissible_values(cell) for cell in self._cells if cell.is_empty()}

    def invalid_empty_cells(self) -> set[Cell]:
        return {cell for cell in self._cells if cell.is_empty() and not self.permissible_values(cell)}

    def has_empty_and_invalid_cells(self) -> bool:
        return any(cell.is_empty() and not self.permissible_values(cell) for cell in self._cells)

    def sorted_empty_cells_by_constraint(self) -> list[Cell]:
        candidates = self.empty_cells_with_permissible_values()
        return sorted(candidates, key=lambda cell: (len(candidates[cell]), cell.row, cell.column))

    def set_value(self, position: Position, value: int) -> None:
        cell = self._resolve(position)
        validate_value(self._size, value)
        if self._active_verification and value not in self.permissible_values(cell):
            raise DisallowedValueError(cell.row, cell.column, value)
        cell.set_value(value)

    def remove_value(self, position: Position) -> int:
        return self._resolve(position).remove_value()

    def set_non_empty_as_fixed(self) -> bool:
        changed = False
        for cell in self._cells:
            if not cell.is_empty() and not cell.is_fixed():
                cell.set_fixed(True)
                changed = True
        return changed

    def conflicting_houses(self) -> list[House]:
        conflicts: list[House] = []
        for house in (*self._rows, *self._columns, *self._blocks):
            values = [cell.value for cell in house if not cell.is_empty()]
            if len(values) != len(set(values)):
                conflicts.append(house)
        return conflicts

    def validate(self) -> None:
        if self.has_empty_and_invalid_cells():
            raise UnsatisfiableGridError("grid contains empty cells without permissible values")
        conflicts = self.conflicting_houses()
        if conflicts:
            house = conflicts[0]
            raise ConflictingValuesError(f"grid contains conflicting values in {house.house_type.value} {house.index}")

    def as_array(self) -> Matrix:
        return [
            [cell.value or 0 for cell in self._cells[row * self._size:(row + 1) * self._size]]
            for row in range(self._size)
        ]

    def to_array(self) -> Matrix:
        return self.as_array()

    def to_string(
        self,
        cell_delimiter: str = DEFAULT_CELL_DELIMITER,
        row_delimiter: str = DEFAULT_ROW_DELIMITER,
        empty_notation: str = DEFAULT_EMPTY_NOTATION,
    ) -> str:
        validate_delimiters(cell_delimiter, row_delimiter, empty_notation)
        lines = []
        for values in self.as_array():
            lines.append(cell_delimiter.join(empty_notation if value == 0 else str(value) for value in values))
            lines.append(row_delimiter)
        return "".join(lines)

    def _resolve(self, position: Position) -> Cell:
        if isinstance(position, Cell):
            if position.size != self._size:
                raise InvalidArgumentError(f"cell belongs to a grid of size {position.size}, not {self._size}")
            return self._cells[position.row * self._size + position.column]
        if position is None:
            raise TypeError("position must be a Cell or a (row, column) tuple")
        row, column = position
        return self.cell(row, column)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Grid(size={self._size}, filled={len(self.non_empty_cells())})"
