"""State-value table with lazy initialization."""

from typing import Callable, Dict, Iterator, List, Tuple

from td_tictactoe.board import Board
from td_tictactoe.exceptions import UninitializedStateError


class ValueTable:
    """
    Mapping from Board to a value estimate in [0, 1].

    Unseen boards are inserted on first read with the value computed by the
    initializer, so every board ever evaluated (including lookahead
    candidates) ends up in the table. Entries are never removed.
    """

    def __init__(self, initializer: Callable[[Board], float]) -> None:
        """
        Initialize an empty table.

        Args:
            initializer: Computes the default value of a board seen for the
                first time
        """
        self._initializer = initializer
        self._values: Dict[Board, float] = {}

    def get_or_init(self, board: Board) -> float:
        """Return the stored value, inserting the default if board is new."""
        value = self._values.get(board)
        if value is None:
            value = float(self._initializer(board))
            self._values[board.copy()] = value
        return value

    def set(self, board: Board, value: float) -> None:
        """
        Overwrite the value of an existing entry.

        Raises:
            UninitializedStateError: If board has no entry yet
        """
        if board not in self._values:
            raise UninitializedStateError(
                f"update called before initialization for {board}"
            )
        self._values[board] = float(value)

    def insert(self, board: Board, value: float) -> None:
        """Store a value unconditionally, as when loading saved estimates."""
        value = float(value)
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"Value {value} for {board} is outside [0, 1]")
        self._values[board.copy()] = value

    def iterate(self) -> Iterator[Tuple[Board, float]]:
        """Iterate over a snapshot of (board, value) pairs."""
        return iter(self.items())

    def items(self) -> List[Tuple[Board, float]]:
        return list(self._values.items())

    def __getitem__(self, board: Board) -> float:
        try:
            return self._values[board]
        except KeyError:
            raise UninitializedStateError(f"No value stored for {board}") from None

    def __contains__(self, board: object) -> bool:
        return board in self._values

    def __len__(self) -> int:
        return len(self._values)
