import unittest

from sudoku.cell import Cell
from sudoku.exceptions import (
    ConflictingValuesError,
    DisallowedValueError,
    GridIndexOutOfBoundsError,
    InvalidSizeError,
    UnsatisfiableGridError,
    ValueOutOfRangeError,
)
from sudoku.grid import Grid
from sudoku.house import HouseType


SOLVED_MATRIX = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]

PARTIAL_MATRIX = [
    [0, 0, 1, 0, 4, 0, 0, 0, 2],
    [0, 5, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 9],
    [0, 4, 0, 0, 0, 0, 2, 9, 0],
    [0, 0, 6, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 3, 0, 0, 0],
    [5, 0, 7, 0, 2, 8, 0, 3, 0],
    [4, 3, 2, 0, 0, 0, 0, 6, 0],
    [0, 0, 0, 0, 0, 0, 5, 0, 0],
]

BLOCKED_CELL_MATRIX = [
    [0, 2, 3, 4, 5, 6, 7, 8, 9],
    [1, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
]


class TestGridConstruction(unittest.TestCase):
    def test_builds_cells_and_houses(self) -> None:
        grid = Grid(9)
        self.assertEqual(grid.size, 9)
        self.assertEqual(grid.block_size, 3)
        self.assertEqual(len(grid.all_cells()), 81)
        self.assertEqual(len(grid.rows), 9)
        self.assertEqual(len(grid.columns), 9)
        self.assertEqual(len(grid.blocks), 9)
        self.assertEqual(grid.empty_cells(), grid.all_cells())
        self.assertTrue(grid.active_verification)

    def test_houses_have_matching_members(self) -> None:
        grid = Grid(9)
        for index in range(9):
            self.assertTrue(all(cell.row == index for cell in grid.row(index)))
            self.assertTrue(all(cell.column == index for cell in grid.column(index)))
            self.assertTrue(all(cell.block_index() == index for cell in grid.block(index)))
            self.assertEqual(grid.row(index).house_type, HouseType.ROW)
            self.assertEqual(grid.block(index).house_type, HouseType.BLOCK)

    def test_houses_share_the_grid_cells(self) -> None:
        grid = Grid(4)
        grid.set_value((1, 2), 3)
        self.assertIs(grid.row(1)[2], grid.cell(1, 2))
        self.assertIs(grid.column(2)[1], grid.cell(1, 2))
        self.assertEqual(grid.block(1).present_values(), {3})

    def test_raises_on_invalid_size(self) -> None:
        for size in (0, -4, 2, 8, 10):
            with self.assertRaises(InvalidSizeError):
                Grid(size)

    def test_size_one_grid_is_valid(self) -> None:
        grid = Grid(1)
        self.assertEqual(grid.permissible_values((0, 0)), {1})

    def test_accessors_raise_on_bad_index(self) -> None:
        grid = Grid(4)
        with self.assertRaises(GridIndexOutOfBoundsError):
            grid.cell(4, 0)
        with self.assertRaises(GridIndexOutOfBoundsError):
            grid.row(-1)
        with self.assertRaises(GridIndexOutOfBoundsError):
            grid.block(4)
        with self.assertRaises(IndexError):
            grid.value(0, 7)

    def test_accessors_reject_non_integer_indices(self) -> None:
        grid = Grid(4)
        with self.assertRaises(GridIndexOutOfBoundsError):
            grid.cell(True, False)
        with self.assertRaises(GridIndexOutOfBoundsError):
            grid.set_value((1.0, 0), 1)
        with self.assertRaises(GridIndexOutOfBoundsError):
            grid.row("0")
        self.assertEqual(grid.empty_cells(), grid.all_cells())


class TestPermissibleValues(unittest.TestCase):
    def test_4x4_first_row_filled(self) -> None:
        grid = Grid.from_matrix([[1, 2, 3, 4], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        # column 0 holds 1, block 0 holds 1 and 2
        self.assertEqual(grid.permissible_values((1, 0)), {3, 4})
        self.assertEqual(grid.permissible_values((1, 3)), {1, 2})
        self.assertEqual(grid.permissible_values((3, 1)), {1, 3, 4})

    def test_accepts_cell_and_coordinates(self) -> None:
        grid = Grid.from_matrix(PARTIAL_MATRIX)
        cell = grid.cell(0, 0)
        self.assertEqual(grid.permissible_values(cell), grid.permissible_values((0, 0)))
        self.assertEqual(grid.permissible_values(Cell(0, 0, 9)), grid.permissible_values((0, 0)))

    def test_equals_universe_minus_house_values(self) -> None:
        grid = Grid.from_matrix(PARTIAL_MATRIX)
        for cell in grid.empty_cells():
            row, column, block = grid.houses_of(cell)
            expected = set(range(1, 10)) - row.present_values() - column.present_values() - block.present_values()
            self.assertEqual(grid.permissible_values(cell), expected)

    def test_setting_values_follows_permissible_set(self) -> None:
        grid = Grid.from_matrix(PARTIAL_MATRIX)
        for cell in sorted(grid.empty_cells(), key=lambda c: c.coordinates)[:10]:
            permissible = grid.permissible_values(cell)
            for value in range(1, 10):
                if value in permissible:
                    grid.set_value(cell, value)
                    grid.remove_value(cell)
                else:
                    with self.assertRaises(DisallowedValueError):
                        grid.set_value(cell, value)
            self.assertTrue(cell.is_empty())

    def test_empty_cells_with_permissible_values(self) -> None:
        grid = Grid.from_matrix(PARTIAL_MATRIX)
        mapping = grid.empty_cells_with_permissible_values()
        self.assertEqual(set(mapping), grid.empty_cells())
        self.assertEqual(mapping[grid.cell(0, 0)], grid.permissible_values((0, 0)))


class TestGridMutation(unittest.TestCase):
    def test_set_value_raises_when_out_of_range(self) -> None:
        grid = Grid(4)
        for value in (0, 5):
            with self.assertRaises(ValueOutOfRangeError):
                grid.set_value((0, 0), value)

    def test_set_value_raises_when_disallowed(self) -> None:
        grid = Grid(9)
        grid.set_value((0, 0), 5)
        with self.assertRaises(DisallowedValueError) as context:
            grid.set_value((0, 8), 5)
        self.assertEqual((context.exception.row, context.exception.column, context.exception.value), (0, 8, 5))
        with self.assertRaises(DisallowedValueError):
            grid.set_value((8, 0), 5)
        with self.assertRaises(DisallowedValueError):
            grid.set_value((2, 2), 5)
        self.assertIsNone(grid.value(0, 8))

    def test_remove_value(self) -> None:
        grid = Grid(4)
        grid.set_value((2, 3), 4)
        self.assertEqual(grid.remove_value(grid.cell(2, 3)), 4)
        self.assertEqual(grid.remove_value((2, 3)), 0)

    def test_inactive_verification_allows_conflicts(self) -> None:
        grid = Grid(4)
        grid.active_verification = False
        grid.set_value((0, 0), 1)
        grid.set_value((0, 1), 1)
        self.assertEqual(grid.as_array()[0], [1, 1, 0, 0])
        with self.assertRaises(ValueOutOfRangeError):
            grid.set_value((0, 2), 9)

    def test_reactivating_verification_validates_grid(self) -> None:
        grid = Grid(4)
        grid.active_verification = False
        grid.set_value((0, 0), 1)
        grid.set_value((0, 1), 1)
        with self.assertRaises(ConflictingValuesError):
            grid.active_verification = True
        self.assertFalse(grid.active_verification)
        grid.remove_value((0, 1))
        grid.active_verification = True
        self.assertTrue(grid.active_verification)

    def test_set_non_empty_as_fixed(self) -> None:
        grid = Grid.from_matrix(PARTIAL_MATRIX)
        self.assertTrue(grid.set_non_empty_as_fixed())
        fixed = {cell for cell in grid.all_cells() if cell.is_fixed()}
        self.assertEqual(fixed, grid.non_empty_cells())
        self.assertFalse(grid.set_non_empty_as_fixed())


class TestGridQueries(unittest.TestCase):
    def test_empty_and_non_empty_partition(self) -> None:
        grid = Grid.from_matrix(PARTIAL_MATRIX)
        filled = sum(1 for row in PARTIAL_MATRIX for value in row if value)
        self.assertEqual(len(grid.non_empty_cells()), filled)
        self.assertEqual(len(grid.empty_cells()), 81 - filled)
        self.assertEqual(grid.empty_cells() | grid.non_empty_cells(), grid.all_cells())

    def test_invalid_empty_cells(self) -> None:
        grid = Grid.from_matrix(BLOCKED_CELL_MATRIX)
        self.assertEqual(grid.invalid_empty_cells(), {grid.cell(0, 0)})
        self.assertTrue(grid.has_empty_and_invalid_cells())
        self.assertFalse(Grid.from_matrix(PARTIAL_MATRIX).has_empty_and_invalid_cells())

    def test_sorted_empty_cells_by_constraint(self) -> None:
        grid = Grid.from_matrix(PARTIAL_MATRIX)
        ordered = grid.sorted_empty_cells_by_constraint()
        self.assertEqual(set(ordered), grid.empty_cells())
        keys = [(len(grid.permissible_values(cell)), cell.row, cell.column) for cell in ordered]
        self.assertEqual(keys, sorted(keys))

    def test_sorted_empty_cells_breaks_ties_by_position(self) -> None:
        ordered = Grid(4).sorted_empty_cells_by_constraint()
        self.assertEqual([cell.coordinates for cell in ordered[:5]], [(0, 0), (0, 1), (0, 2), (0, 3), (1, 0)])


class TestGridValidation(unittest.TestCase):
    def test_valid_grids_pass(self) -> None:
        Grid.from_matrix(SOLVED_MATRIX).validate()
        Grid.from_matrix(PARTIAL_MATRIX).validate()
        Grid(9).validate()

    def test_raises_on_invalid_empty_cell(self) -> None:
        with self.assertRaises(UnsatisfiableGridError):
            Grid.from_matrix(BLOCKED_CELL_MATRIX).validate()

    def test_raises_on_conflicting_values(self) -> None:
        grid = Grid(9)
        grid.active_verification = False
        grid.set_value((3, 3), 7)
        grid.set_value((5, 5), 7)
        with self.assertRaises(ConflictingValuesError):
            grid.validate()
        self.assertEqual(len(grid.conflicting_houses()), 1)

    def test_conflicting_values_are_unsatisfiable(self) -> None:
        grid = Grid(4)
        grid.cell(0, 0).set_value(2)
        grid.cell(0, 3).set_value(2)
        with self.assertRaises(UnsatisfiableGridError):
            grid.validate()


class TestGridSerialization(unittest.TestCase):
    def test_round_trip_through_array(self) -> None:
        for matrix in (SOLVED_MATRIX, PARTIAL_MATRIX, [[0] * 4 for _ in range(4)]):
            grid = Grid.from_matrix(matrix)
            self.assertEqual(grid.to_array(), matrix)
            self.assertEqual(Grid.from_matrix(grid.to_array()).as_array(), grid.as_array())

    def test_from_matrix_raises_on_bad_shape(self) -> None:
        with self.assertRaises(InvalidSizeError):
            Grid.from_matrix([[0, 0], [0, 0]])
        with self.assertRaises(InvalidSizeError):
            Grid.from_matrix([[0, 0, 0, 0], [0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        with self.assertRaises(InvalidSizeError):
            Grid.from_matrix([])

    def test_from_matrix_raises_on_out_of_range_value(self) -> None:
        with self.assertRaises(ValueOutOfRangeError):
            Grid.from_matrix([[5, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        with self.assertRaises(ValueOutOfRangeError):
            Grid.from_matrix([[0, 0, 0, 0], [0, -1, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])

    def test_from_matrix_reports_first_conflict_in_row_major_order(self) -> None:
        matrix = [[1, 0, 0, 1], [0, 0, 0, 0], [2, 0, 0, 0], [2, 0, 0, 0]]
        with self.assertRaises(DisallowedValueError) as context:
            Grid.from_matrix(matrix)
        self.assertEqual((context.exception.row, context.exception.column), (0, 3))

    def test_to_string_defaults(self) -> None:
        grid = Grid.from_matrix([[1, 2, 3, 4], [3, 4, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.assertEqual(grid.to_string(), "1,2,3,4\n3,4,0,0\n0,0,0,0\n0,0,0,0\n")
        self.assertEqual(str(grid), grid.to_string())

    def test_to_string_custom_delimiters(self) -> None:
        grid = Grid.from_matrix([[1, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 2]])
        self.assertEqual(grid.to_string(", ", "|", "*"), "1, *, *, *|*, *, *, *|*, *, *, *|*, *, *, 2|")
        self.assertEqual(grid.to_string("", "", ""), "12")

    def test_to_string_rejects_none(self) -> None:
        grid = Grid(4)
        with self.assertRaises(TypeError):
            grid.to_string(None, "\n", "0")
        with self.assertRaises(TypeError):
            grid.to_string(",", None, "0")
        with self.assertRaises(TypeError):
            grid.to_string(",", "\n", None)


if __name__ == "__main__":
    unittest.main()
