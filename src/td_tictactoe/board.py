"""Tic-Tac-Toe board, win detection and canonical string encoding."""

from enum import Enum
from typing import List, Optional, Sequence, Tuple
import numpy as np
import numpy.typing as npt

from td_tictactoe.exceptions import BoardEncodingError, OutOfBoundsError

Move = Tuple[int, int]


class Cell(str, Enum):
    """State of a single board cell. The value is its encoding symbol."""

    EMPTY = "_"
    MARK_A = "A"
    MARK_B = "B"

    @property
    def opponent(self) -> "Cell":
        """The other player's mark."""
        if self is Cell.MARK_A:
            return Cell.MARK_B
        if self is Cell.MARK_B:
            return Cell.MARK_A
        raise ValueError("Empty cell has no opponent")


# Numeric codes stored in the grid: 0 = empty, 1 = mark A, -1 = mark B
_CODES = {Cell.EMPTY: 0, Cell.MARK_A: 1, Cell.MARK_B: -1}
_CELLS = {code: cell for cell, code in _CODES.items()}

# Rows, then columns, then the two diagonals. winner() scans in this order.
WIN_LINES: List[Tuple[Move, Move, Move]] = (
    [((r, 0), (r, 1), (r, 2)) for r in range(3)]
    + [((0, c), (1, c), (2, c)) for c in range(3)]
    + [((0, 0), (1, 1), (2, 2)), ((0, 2), (1, 1), (2, 0))]
)


def _check_bounds(row: int, col: int) -> None:
    if not (0 <= row < 3 and 0 <= col < 3):
        raise OutOfBoundsError(f"Coordinate ({row}, {col}) is outside the 3x3 board")


class Board:
    """
    3x3 Tic-Tac-Toe board.

    Cells are stored row-major in a numpy array, (0, 0) is the top-left cell.
    Equality and hashing are structural, so boards with the same layout are
    interchangeable as dictionary keys. Do not mutate a board after using it
    as a key; use copy() or with_mark() instead.

    Canonical encoding is 9 characters in row-major order over {_, A, B},
    for example "A_B______". The bracketed form "[A_B______]" is what
    str() returns and what estimates files contain.
    """

    def __init__(self) -> None:
        """Create an empty board."""
        self._grid: npt.NDArray[np.int8] = np.zeros((3, 3), dtype=np.int8)

    @classmethod
    def from_cells(cls, rows: Sequence[Sequence[Cell]]) -> "Board":
        """Build a board from a 3x3 nested sequence of cells."""
        if len(rows) != 3 or any(len(row) != 3 for row in rows):
            raise ValueError("Board must be 3 rows of 3 cells")
        board = cls()
        for i, row in enumerate(rows):
            for j, cell in enumerate(row):
                board.set(i, j, Cell(cell))
        return board

    def get(self, row: int, col: int) -> Cell:
        """Return the cell at (row, col)."""
        _check_bounds(row, col)
        return _CELLS[int(self._grid[row, col])]

    def set(self, row: int, col: int, mark: Cell) -> None:
        """
        Write a cell at (row, col).

        Overwriting an occupied cell is not rejected here; callers only
        choose coordinates from available_moves().
        """
        _check_bounds(row, col)
        self._grid[row, col] = _CODES[Cell(mark)]

    def copy(self) -> "Board":
        """Return an independent copy of this board."""
        board = Board()
        board._grid = self._grid.copy()
        return board

    def with_mark(self, row: int, col: int, mark: Cell) -> "Board":
        """Return a copy of this board with mark placed at (row, col)."""
        board = self.copy()
        board.set(row, col, mark)
        return board

    def available_moves(self) -> List[Move]:
        """Return every empty coordinate in row-major order."""
        return [
            (int(row), int(col)) for row, col in np.argwhere(self._grid == 0)
        ]

    def is_drawn(self) -> bool:
        """
        True if no empty cell remains.

        Does not look for a winner; a full board can also be won, so check
        winner() first.
        """
        return not np.any(self._grid == 0)

    def winner(self) -> Optional[Cell]:
        """
        Return the mark owning a complete line, or None.

        Lines are checked rows first, then columns, then diagonals, and the
        first complete line decides. A board on which both marks complete a
        line cannot arise from legal play; it reports whichever is found
        first.
        """
        for line in WIN_LINES:
            codes = {int(self._grid[r, c]) for r, c in line}
            if len(codes) == 1:
                code = codes.pop()
                if code != 0:
                    return _CELLS[code]
        return None

    def is_terminal(self) -> bool:
        """True if the board is won or full."""
        return self.winner() is not None or self.is_drawn()

    def count(self, mark: Cell) -> int:
        """Number of cells holding mark."""
        return int(np.count_nonzero(self._grid == _CODES[Cell(mark)]))

    def encode(self) -> str:
        """Return the 9-character canonical encoding."""
        return "".join(_CELLS[int(code)].value for code in self._grid.flat)

    @classmethod
    def decode(cls, text: str) -> "Board":
        """
        Parse a canonical encoding, bare ("A_B______") or bracketed.

        Raises:
            BoardEncodingError: If text is not 9 symbols over {_, A, B},
                optionally wrapped in square brackets
        """
        body = text
        if len(text) == 11 and text.startswith("[") and text.endswith("]"):
            body = text[1:-1]
        if len(body) != 9:
            raise BoardEncodingError(f"Expected 9 board symbols, got {text!r}")

        board = cls()
        for index, symbol in enumerate(body):
            try:
                cell = Cell(symbol)
            except ValueError as e:
                raise BoardEncodingError(
                    f"Invalid board symbol {symbol!r} in {text!r}"
                ) from e
            board._grid[divmod(index, 3)] = _CODES[cell]
        return board

    def render(self) -> str:
        """Render the board as a grid with coordinates."""
        lines = ["  0 1 2"]
        for i in range(3):
            lines.append(f"{i} " + " ".join(self.get(i, j).value for j in range(3)))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._grid, other._grid))

    def __hash__(self) -> int:
        return hash(self._grid.tobytes())

    def __str__(self) -> str:
        return f"[{self.encode()}]"

    def __repr__(self) -> str:
        return f"Board({self.encode()!r})"
