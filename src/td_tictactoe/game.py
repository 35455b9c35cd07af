"""Game loop alternating two players on a shared board."""

import logging
from dataclasses import dataclass
from typing import Optional

from td_tictactoe.agents.base import Player
from td_tictactoe.board import Board, Cell

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameResult:
    """Outcome of one episode."""

    winner: Optional[Cell]
    num_moves: int

    @property
    def is_draw(self) -> bool:
        return self.winner is None


class Game:
    """
    One board shared by two players.

    Mark A always moves first. After each move the mover is handed the
    board before and after its move so it can learn; the opponent's
    following move is never part of that transition.
    """

    def __init__(self, player_a: Player, player_b: Player) -> None:
        """
        Args:
            player_a: Player marking MARK_A, moves first
            player_b: Player marking MARK_B
        """
        if player_a.mark is not Cell.MARK_A or player_b.mark is not Cell.MARK_B:
            raise ValueError("player_a must play MARK_A and player_b must play MARK_B")
        self.players = {Cell.MARK_A: player_a, Cell.MARK_B: player_b}
        self.board = Board()
        self.current = Cell.MARK_A

    def reset(self) -> None:
        """Clear the board and give the move to mark A."""
        self.board = Board()
        self.current = Cell.MARK_A

    @property
    def current_player(self) -> Player:
        return self.players[self.current]

    def step(self) -> bool:
        """
        Let the current player make one move.

        Returns:
            False if the player had no legal move, True otherwise
        """
        player = self.current_player
        move = player.select_move(self.board)
        if move is None:
            logger.debug("No remaining moves for %s", self.current.value)
            return False

        before = self.board.copy()
        row, col = move
        self.board.set(row, col, self.current)
        player.learn_from_transition(before, self.board.copy())
        self.current = self.current.opponent
        return True

    def play(self) -> GameResult:
        """
        Play from the current board until it is won or drawn.

        Returns:
            GameResult with the winning mark (None for a draw) and the number
            of moves made
        """
        logger.debug("play, board: %s", self.board)
        num_moves = 0
        while True:
            if not self.step():
                return GameResult(winner=self.board.winner(), num_moves=num_moves)
            num_moves += 1
            logger.debug("play, board: %s", self.board)

            winner = self.board.winner()
            if winner is not None:
                return GameResult(winner=winner, num_moves=num_moves)
            if self.board.is_drawn():
                return GameResult(winner=None, num_moves=num_moves)
