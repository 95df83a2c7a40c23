from enum import Enum
from typing import Iterator, Sequence

from .cell import Cell
from .exceptions import MalformedHouseError
from .utils import value_universe
from .validation import validate_index, validate_size


class HouseType(str, Enum):
    ROW = "row"
    COLUMN = "column"
    BLOCK = "block"


def _member_index(cell: Cell, house_type: HouseType) -> int:
    if house_type is HouseType.ROW:
        return cell.row
    if house_type is HouseType.COLUMN:
        return cell.column
    return cell.block_index()


class House:
    """A fixed, ordered view of the cells of one row, column or block.

    Membership never changes after construction; only the values held by the
    member cells do.
    """

    __slots__ = ("_index", "_house_type", "_size", "_cells")

    def __init__(self, index: int, house_type: HouseType, cells: Sequence[Cell], size: int) -> None:
        validate_size(size)
        validate_index(size, index)
        if not isinstance(house_type, HouseType):
            raise MalformedHouseError(f"house_type must be a HouseType, got {house_type!r}")
        if cells is None or len(cells) != size:
            count = 0 if cells is None else len(cells)
            raise MalformedHouseError(f"{house_type.value} {index} needs exactly {size} cells, got {count}")

        seen: set[tuple[int, int]] = set()
        for cell in cells:
            if cell is None:
                raise MalformedHouseError(f"{house_type.value} {index} contains a missing cell")
            if cell.size != size or _member_index(cell, house_type) != index:
                raise MalformedHouseError(
                    f"cell ({cell.row}, {cell.column}) does not belong to {house_type.value} {index}"
                )
            if cell.coordinates in seen:
                raise MalformedHouseError(
                    f"cell ({cell.row}, {cell.column}) appears twice in {house_type.value} {index}"
                )
            seen.add(cell.coordinates)

        self._index = index
        self._house_type = house_type
        self._size = size
        self._cells = tuple(cells)

    @property
    def index(self) -> int:
        return self._index

    @property
    def house_type(self) -> HouseType:
        return self._house_type

    @property
    def cells(self) -> tuple[Cell, ...]:
        return self._cells

    def present_values(self) -> set[int]:
        return {cell.value for cell in self._cells if not cell.is_empty()}

    def missing_values(self) -> set[int]:
        return value_universe(self._size) - self.present_values()

    def fixed_cells(self) -> list[Cell]:
        return [cell for cell in self._cells if cell.is_fixed()]

    def non_fixed_cells(self) -> list[Cell]:
        return [cell for cell in self._cells if not cell.is_fixed()]

    def clear_values(self) -> bool:
        changed = False
        for cell in self._cells:
            if not cell.is_fixed() and not cell.is_empty():
                cell.remove_value()
                changed = True
        return changed

    def set_fixed(self) -> bool:
        changed = False
        for cell in self._cells:
            if not cell.is_fixed():
                cell.set_fixed(True)
                changed = True
        return changed

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __getitem__(self, position: int) -> Cell:
        return self._cells[position]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, House):
            return NotImplemented
        return self._index == other.index and self._house_type is other.house_type

    def __hash__(self) -> int:
        return hash((self._index, self._house_type))

    def __repr__(self) -> str:
        return f"House({self._house_type.value}={self._index}, values={[cell.value or 0 for cell in self._cells]})"
