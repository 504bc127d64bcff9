"""Immutable 9x9 Sudoku board as handed over by the digit extractor."""

from __future__ import annotations
import operator
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import MalformedBoardError

SIZE = 9
BOX_SIZE = 3

GROUP_KINDS = ("row", "column", "square")

BoardLike = Union["SudokuBoard", np.ndarray, Sequence[Sequence[int]]]

_INT64 = np.iinfo(np.int64)


def square_origin(index: int) -> Tuple[int, int]:
    """Top-left (row, col) of square `index`, squares numbered row-major."""
    return (index // BOX_SIZE) * BOX_SIZE, (index % BOX_SIZE) * BOX_SIZE


def square_index(row: int, col: int) -> int:
    """Index (0-8) of the square containing (row, col)."""
    return (row // BOX_SIZE) * BOX_SIZE + (col // BOX_SIZE)


def group_cells(kind: str, index: int) -> List[Tuple[int, int]]:
    """Cell positions of one group, in reading order."""
    if kind == "row":
        return [(index, c) for c in range(SIZE)]
    if kind == "column":
        return [(r, index) for r in range(SIZE)]
    if kind == "square":
        r0, c0 = square_origin(index)
        return [(r0 + i, c0 + j) for i in range(BOX_SIZE) for j in range(BOX_SIZE)]
    raise ValueError(f"Unknown group kind: {kind!r}")


def _as_cell(value, row: int, col: int) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise MalformedBoardError(f"Cell ({row}, {col}) is a boolean, expected an integer")
    try:
        value = operator.index(value)
    except TypeError:
        raise MalformedBoardError(
            f"Cell ({row}, {col}) holds {value!r}, which is not an integer"
        ) from None
    if not _INT64.min <= value <= _INT64.max:
        raise MalformedBoardError(f"Cell ({row}, {col}) value {value} is too large")
    return value


def _coerce_grid(data) -> np.ndarray:
    """Check shape and cell types of `data` and return a fresh int64 grid."""
    if isinstance(data, np.ndarray):
        if data.shape != (SIZE, SIZE):
            raise MalformedBoardError(f"Grid shape must be ({SIZE}, {SIZE}), got {data.shape}")
        if data.dtype.kind not in "iu":
            raise MalformedBoardError(f"Grid must hold integers, got dtype {data.dtype}")
        if data.dtype.kind == "u" and data.max() > _INT64.max:
            row, col = (int(x) for x in np.argwhere(data > _INT64.max)[0])
            raise MalformedBoardError(f"Cell ({row}, {col}) value {data[row, col]} is too large")
        return data.astype(np.int64)

    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        raise MalformedBoardError(f"Expected a 9x9 grid, got {type(data).__name__}")
    if len(data) != SIZE:
        raise MalformedBoardError(f"Grid must have {SIZE} rows, got {len(data)}")

    grid = np.zeros((SIZE, SIZE), dtype=np.int64)
    for i, row in enumerate(data):
        if isinstance(row, (str, bytes)) or not isinstance(row, (Sequence, np.ndarray)):
            raise MalformedBoardError(f"Row {i} is not a sequence of cells")
        if len(row) != SIZE:
            raise MalformedBoardError(f"Row {i} must have {SIZE} cells, got {len(row)}")
        for j, value in enumerate(row):
            grid[i, j] = _as_cell(value, i, j)
    return grid


class SudokuBoard:
    """
    A 9x9 Sudoku grid. 0 marks an empty cell, 1-9 a placed digit.

    Boards are values: the underlying array is read-only and operations
    that change a cell return a new board. Cell values are not range
    checked here, so a board read from a noisy source can still be
    handed to the validator and classified.
    """

    size = SIZE
    box_size = BOX_SIZE

    def __init__(self, grid: Optional[BoardLike] = None):
        """
        Initialize a board.

        Args:
            grid: Optional 9x9 array-like. If None, creates an empty board.

        Raises:
            MalformedBoardError: If `grid` is not a 9x9 grid of integers.
        """
        if grid is None:
            arr = np.zeros((SIZE, SIZE), dtype=np.int64)
        elif isinstance(grid, SudokuBoard):
            arr = grid.grid.copy()
        else:
            arr = _coerce_grid(grid)
        arr.flags.writeable = False
        self._grid = arr

    @classmethod
    def coerce(cls, board: BoardLike) -> SudokuBoard:
        """Return `board` itself if it already is a SudokuBoard, else build one."""
        if isinstance(board, SudokuBoard):
            return board
        return cls(board)

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the cell values."""
        return self._grid

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self._grid[row, col])

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return bool(self._grid[row, col] == 0)

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self._grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self._grid[:, col]

    def get_square(self, index: int) -> np.ndarray:
        """Get the nine values of square `index` in reading order."""
        r0, c0 = square_origin(index)
        return self._grid[r0:r0 + BOX_SIZE, c0:c0 + BOX_SIZE].flatten()

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the square containing (row, col)."""
        return self.get_square(square_index(row, col))

    def get_group(self, kind: str, index: int) -> np.ndarray:
        if kind == "row":
            return self.get_row(index)
        if kind == "column":
            return self.get_col(index)
        if kind == "square":
            return self.get_square(index)
        raise ValueError(f"Unknown group kind: {kind!r}")

    def iter_groups(self) -> Iterator[Tuple[str, int, np.ndarray]]:
        """Yield (kind, index, values) for the 9 rows, 9 columns and 9 squares."""
        for kind in GROUP_KINDS:
            for index in range(SIZE):
                yield kind, index, self.get_group(kind, index)

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions."""
        rows, cols = np.nonzero(self._grid == 0)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self._grid == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self._grid != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def with_value(self, row: int, col: int, value: int) -> SudokuBoard:
        """Return a copy of the board with (row, col) set to `value`."""
        arr = self._grid.copy()
        arr[row, col] = _as_cell(value, row, col)
        return SudokuBoard(arr)

    def swap(self, a: Tuple[int, int], b: Tuple[int, int]) -> SudokuBoard:
        """Return a copy of the board with cells `a` and `b` exchanged."""
        arr = self._grid.copy()
        arr[a], arr[b] = arr[b], arr[a]
        return SudokuBoard(arr)

    def to_list(self) -> List[List[int]]:
        return self._grid.tolist()

    def to_string(self) -> str:
        """
        Convert board to a compact 81-character string.

        Cells outside 0-9 cannot be written in this form and are emitted
        as '?'.
        """
        chars = []
        for val in self._grid.flat:
            chars.append(str(val) if 0 <= val <= 9 else "?")
        return "".join(chars)

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from a string representation.

        Args:
            s: 81 cell characters, '0' or '.' for empty, '1'-'9' for digits.
               Whitespace anywhere in the string is ignored.

        Raises:
            MalformedBoardError: On a wrong length or an unknown character.
        """
        cells = "".join(s.split())
        if len(cells) != SIZE * SIZE:
            raise MalformedBoardError(
                f"String length must be {SIZE * SIZE}, got {len(cells)}"
            )

        grid = np.zeros((SIZE, SIZE), dtype=np.int64)
        for idx, c in enumerate(cells):
            if c == "." or c == "0":
                continue
            if c not in "123456789":
                raise MalformedBoardError(
                    f"Unexpected character {c!r} at position {idx}"
                )
            grid[idx // SIZE, idx % SIZE] = int(c)
        return cls(grid)

    @classmethod
    def from_2d_list(cls, data: Sequence[Sequence[int]]) -> SudokuBoard:
        """Create a board from a 2D list."""
        return cls(_coerce_grid(data))

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = "+" + (("-" * (BOX_SIZE * 2 + 1)) + "+") * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = "|"
            for j in range(SIZE):
                val = self._grid[i, j]
                if val == 0:
                    row_str += " ."
                elif 1 <= val <= 9:
                    row_str += f" {val}"
                else:
                    row_str += " ?"

                if (j + 1) % BOX_SIZE == 0:
                    row_str += " |"

            lines.append(row_str)

        lines.append(horizontal_sep)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return NotImplemented
        return np.array_equal(self._grid, other._grid)

    def __hash__(self) -> int:
        return hash(self._grid.tobytes())
