"""Shared pytest fixtures for td-tictactoe tests."""

from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pytest

from td_tictactoe.board import Board, Cell, Move


class ScriptedPlayer:
    """Player that plays a fixed list of moves and records learning calls."""

    def __init__(self, mark: Cell, moves: List[Move]) -> None:
        self.mark = mark
        self.moves = list(moves)
        self.transitions: List[Tuple[Board, Board]] = []

    def select_move(self, board: Board) -> Optional[Move]:
        if not self.moves:
            return None
        return self.moves.pop(0)

    def learn_from_transition(self, prior: Board, resulting: Board) -> None:
        self.transitions.append((prior, resulting))


@pytest.fixture
def scripted_player() -> Callable[[Cell, List[Move]], ScriptedPlayer]:
    """Factory for scripted players."""
    return ScriptedPlayer


@pytest.fixture
def drawn_board() -> Board:
    """A full board with no winner.

    A B A
    A B B
    B A A
    """
    return Board.decode("ABAABBBAA")


@pytest.fixture
def estimates_file(tmp_path: Path) -> Path:
    """An estimates file with three entries."""
    path = tmp_path / "estimates"
    path.write_text(
        "epsilon: 0.08, alpha: 0.1\n"
        "[_________] 0.5\n"
        "[A___B____] 0.55\n"
        "[AAABB____] 1.0\n",
        encoding="utf-8",
    )
    return path
