"""Protocol for Tic-Tac-Toe players driven by the game loop."""

from typing import Optional, Protocol

from td_tictactoe.board import Board, Cell, Move


class Player(Protocol):
    """Protocol for players the game loop alternates between."""

    mark: Cell

    def select_move(self, board: Board) -> Optional[Move]:
        """
        Choose a move for the current board.

        Args:
            board: Current board, not to be mutated

        Returns:
            (row, col) of an empty cell, or None if no legal move exists
        """
        ...

    def learn_from_transition(self, prior: Board, resulting: Board) -> None:
        """
        Learn from one of this player's own moves.

        Called right after the move is applied, with the board before and
        after it. Optional for players that do not learn.
        """
        ...
