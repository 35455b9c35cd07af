"""Random player that moves uniformly at random among empty cells."""

from typing import Optional
import numpy as np

from td_tictactoe.board import Board, Cell, Move


class RandomPlayer:
    """Player that selects moves uniformly at random from legal moves."""

    def __init__(self, mark: Cell, seed: int | None = None) -> None:
        """
        Initialize the random player.

        Args:
            mark: Mark this player places on the board
            seed: Random seed for reproducibility (optional)
        """
        self.mark = Cell(mark)
        self.rng = np.random.default_rng(seed)

    def select_move(self, board: Board) -> Optional[Move]:
        """Select a random empty cell, or None on a full board."""
        moves = board.available_moves()
        if not moves:
            return None
        return moves[int(self.rng.integers(len(moves)))]

    def learn_from_transition(self, prior: Board, resulting: Board) -> None:
        """No-op for a non-learning player."""
        pass
