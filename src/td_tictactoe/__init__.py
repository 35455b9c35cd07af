"""Temporal-difference self-play for Tic-Tac-Toe."""

from td_tictactoe.board import Board, Cell
from td_tictactoe.value_table import ValueTable
from td_tictactoe.agents import RandomPlayer, TDAgent
from td_tictactoe.game import Game, GameResult

__version__ = "0.1.0"

__all__ = ["Board", "Cell", "ValueTable", "TDAgent", "RandomPlayer", "Game", "GameResult"]
