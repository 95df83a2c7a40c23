"""Exception hierarchy for the sudoku engine.

Every error derives from :class:`SudokuError`, which is itself a
:class:`ValueError`, so callers that only care about bad input can keep
catching ``ValueError``.
"""


class SudokuError(ValueError):
    """Base exception for all grid, solver and generator failures."""


class InvalidSizeError(SudokuError):
    """Raised when a size is not a positive perfect square."""

    def __init__(self, size: object, message: str = "") -> None:
        self.size = size
        super().__init__(message or f"invalid size {size}; size must be a positive perfect square")


class GridIndexOutOfBoundsError(SudokuError, IndexError):
    """Raised when a row, column or house index lies outside the grid."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"invalid index {index}; grid index must be in the range 0 to {size - 1}")


class ValueOutOfRangeError(SudokuError):
    """Raised when a value lies outside the range allowed for the grid."""

    def __init__(self, value: object, size: int, allow_empty: bool = False) -> None:
        self.value = value
        self.size = size
        low = 0 if allow_empty else 1
        super().__init__(f"value {value} out of range; value must be in the range {low} to {size}")


class DisallowedValueError(SudokuError):
    """Raised when a value is numerically valid but already present in a related house."""

    def __init__(self, row: int, column: int, value: int) -> None:
        self.row = row
        self.column = column
        self.value = value
        super().__init__(f"value {value} not allowed for cell at ({row}, {column})")


class MalformedHouseError(SudokuError):
    """Raised when a house is built from an invalid list of cells."""


class UnsatisfiableGridError(SudokuError):
    """Raised when a grid admits no legal completion."""


class ConflictingValuesError(UnsatisfiableGridError):
    """Raised when a house holds the same value in two cells."""


class UnsolvableError(UnsatisfiableGridError):
    """Raised when the search proves that a grid cannot be completed."""


class InvalidArgumentError(SudokuError):
    """Raised for out-of-range counts and unknown search options."""
