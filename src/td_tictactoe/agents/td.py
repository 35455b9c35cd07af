"""Tabular TD(0) agent for Tic-Tac-Toe."""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union
import numpy as np

from td_tictactoe.board import Board, Cell, Move
from td_tictactoe.persistence import load_estimates, save_estimates
from td_tictactoe.value_table import ValueTable

logger = logging.getLogger(__name__)

DEFAULT_ALPHA = 0.1


def _validate_epsilon(epsilon: float) -> float:
    epsilon = float(epsilon)
    if not 0.0 <= epsilon <= 1.0:
        raise ValueError(f"epsilon must be in [0, 1], got {epsilon}")
    return epsilon


def _validate_alpha(alpha: float) -> float:
    alpha = float(alpha)
    if not 0.0 < alpha <= 1.0:
        raise ValueError(f"alpha must be in (0, 1], got {alpha}")
    return alpha


class TDAgent:
    """
    Tabular state-value agent trained with TD(0).

    Each agent keeps its own table of board values from its own point of
    view. Boards seen for the first time start at 1.0 if already won by the
    agent, 0.0 if already won by the opponent and 0.5 otherwise.

    After each of its own moves the agent moves the value of the board it
    moved from toward the value of the board it produced:
    V(s) <- V(s) + alpha * [V(s') - V(s)]

    Moves are chosen epsilon-greedily over the values of the successor
    boards.
    """

    def __init__(
        self,
        player: Cell,
        epsilon: float,
        alpha: float = DEFAULT_ALPHA,
        seed: int | None = None,
    ) -> None:
        """
        Initialize a TD agent with an empty value table.

        Args:
            player: Mark this agent places on the board (MARK_A or MARK_B)
            epsilon: Probability of an exploratory move
            alpha: TD step size
            seed: Random seed for reproducibility
        """
        player = Cell(player)
        if player is Cell.EMPTY:
            raise ValueError("Agent must play MARK_A or MARK_B")

        self.mark = player
        self.opponent = player.opponent
        self.epsilon = _validate_epsilon(epsilon)
        self.alpha = _validate_alpha(alpha)
        self.rng = np.random.default_rng(seed)
        self.table = ValueTable(self.initial_value)
        self.training_mode = True
        self._updates = 0

    @classmethod
    def from_persisted_file(
        cls,
        player: Cell,
        path: Union[str, Path],
        seed: int | None = None,
    ) -> "TDAgent":
        """
        Build an agent from an estimates file.

        Epsilon and alpha come from the file header.

        Raises:
            EstimatesReadError: If the file cannot be read
            EstimatesParseError: If the file is malformed
        """
        estimates = load_estimates(path)
        agent = cls(player, estimates.epsilon, estimates.alpha, seed=seed)
        for board, value in estimates.entries:
            agent.table.insert(board, value)
        logger.info(
            "Loaded %d estimates from %s (epsilon=%s, alpha=%s)",
            len(agent.table), path, agent.epsilon, agent.alpha,
        )
        return agent

    def initial_value(self, board: Board) -> float:
        """Default value of a board seen for the first time."""
        winner = board.winner()
        if winner is self.mark:
            return 1.0
        if winner is self.opponent:
            return 0.0
        return 0.5

    def value_of(self, board: Board) -> float:
        """Current value estimate of board, initializing it if unseen."""
        return self.table.get_or_init(board)

    def select_move(self, board: Board) -> Optional[Move]:
        """
        Select a move using the epsilon-greedy policy.

        The board itself is always entered into the table, even when no move
        is possible.

        Args:
            board: Current board

        Returns:
            (row, col) to play, or None if the board has no empty cell
        """
        self.table.get_or_init(board)

        moves = board.available_moves()
        if not moves:
            return None

        k = self.rng.random()
        if self.training_mode and k < self.epsilon:
            return self._explore(board, moves)
        return self._exploit(board, moves)

    def _candidate_value(self, board: Board, move: Move) -> float:
        row, col = move
        return self.table.get_or_init(board.with_mark(row, col, self.mark))

    def _explore(self, board: Board, moves: List[Move]) -> Move:
        """Pick uniformly among the moves sharing the best successor value."""
        scored = [(self._candidate_value(board, move), move) for move in moves]
        values = [value for value, _ in scored]
        best = max(values)

        if any(value != values[0] for value in values):
            bucket = [move for value, move in scored if value == best]
        else:
            bucket = moves

        return bucket[int(self.rng.integers(len(bucket)))]

    def _exploit(self, board: Board, moves: List[Move]) -> Move:
        """Pick the first move, in row-major order, with the highest value."""
        best_move = moves[0]
        best_value = float("-inf")
        for move in moves:
            value = self._candidate_value(board, move)
            if value > best_value:
                best_value = value
                best_move = move
        return best_move

    def learn_from_transition(self, prior: Board, resulting: Board) -> None:
        """
        Apply the TD(0) update for one of this agent's moves.

        Args:
            prior: Board immediately before the move, already in the table
            resulting: Board immediately after the move

        Raises:
            UninitializedStateError: If prior was never evaluated
        """
        if not self.training_mode:
            return

        prior_value = self.table[prior]
        next_value = self.table.get_or_init(resulting)
        new_value = prior_value + self.alpha * (next_value - prior_value)
        self.table.set(prior, new_value)
        self._updates += 1

        logger.debug(
            "%s %s: %.4f -> %.4f (next %s = %.4f)",
            self.mark.value, prior, prior_value, new_value, resulting, next_value,
        )
        self.log_estimates()

    def estimates(self) -> Iterator[Tuple[Board, float]]:
        """Iterate over (board, value) pairs of the table."""
        return self.table.iterate()

    def log_estimates(self) -> None:
        """Log the size of the value table at debug level."""
        logger.debug("%s: %d estimates", self.mark.value, len(self.table))

    def set_epsilon(self, epsilon: float) -> None:
        """Update exploration rate."""
        self.epsilon = _validate_epsilon(epsilon)

    def set_training_mode(self, mode: bool) -> None:
        """Set training mode (enables/disables exploration and learning)."""
        self.training_mode = mode

    def save(self, path: Union[str, Path]) -> Path:
        """
        Write the table and hyperparameters to a new estimates file.

        Raises:
            PersistenceConflictError: If path already exists
        """
        written = save_estimates(path, self.epsilon, self.alpha, self.table.iterate())
        logger.info("Saved %d estimates to %s", len(self.table), written)
        return written

    def get_stats(self) -> Dict[str, int]:
        """Get statistics about the value table."""
        return {
            "num_states": len(self.table),
            "num_updates": self._updates,
        }
