"""Players for Tic-Tac-Toe."""

from td_tictactoe.agents.base import Player
from td_tictactoe.agents.random import RandomPlayer
from td_tictactoe.agents.td import DEFAULT_ALPHA, TDAgent

__all__ = ["Player", "RandomPlayer", "TDAgent", "DEFAULT_ALPHA"]
