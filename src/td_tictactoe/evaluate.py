"""Evaluation utilities for comparing players."""

from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table

from td_tictactoe.agents.base import Player
from td_tictactoe.board import Cell
from td_tictactoe.game import Game


def evaluate_agents(
    player_a: Player,
    player_b: Player,
    name_a: str,
    name_b: str,
    num_games: int = 100,
) -> Dict[str, Any]:
    """
    Play two players against each other.

    Learning players should be frozen first (set_training_mode(False)),
    otherwise they keep updating their tables during evaluation.

    Args:
        player_a: Player marking MARK_A (moves first)
        player_b: Player marking MARK_B
        name_a: Display name of player_a
        name_b: Display name of player_b
        num_games: Number of games to play

    Returns:
        Dictionary with evaluation results
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1")

    game = Game(player_a, player_b)

    wins_a = 0
    wins_b = 0
    draws = 0
    total_moves = 0

    for _ in range(num_games):
        result = game.play()
        game.reset()
        total_moves += result.num_moves

        if result.winner is Cell.MARK_A:
            wins_a += 1
        elif result.winner is Cell.MARK_B:
            wins_b += 1
        else:
            draws += 1

    return {
        "name_a": name_a,
        "name_b": name_b,
        "num_games": num_games,
        "wins_a": wins_a,
        "wins_b": wins_b,
        "draws": draws,
        "win_rate_a": wins_a / num_games,
        "win_rate_b": wins_b / num_games,
        "draw_rate": draws / num_games,
        "avg_moves_per_game": total_moves / num_games,
    }


def print_evaluation_results(
    results: Dict[str, Any], console: Optional[Console] = None
) -> None:
    """
    Pretty print evaluation results.

    Args:
        results: Results dictionary from evaluate_agents
        console: Console to print to (defaults to a new one)
    """
    console = console or Console()

    table = Table(title=f"{results['name_a']} (A) vs {results['name_b']} (B)")
    table.add_column("Outcome", style="cyan")
    table.add_column("Games", justify="right")
    table.add_column("Rate", justify="right")

    table.add_row(f"{results['name_a']} wins", str(results["wins_a"]), f"{results['win_rate_a']:.1%}")
    table.add_row(f"{results['name_b']} wins", str(results["wins_b"]), f"{results['win_rate_b']:.1%}")
    table.add_row("Draws", str(results["draws"]), f"{results['draw_rate']:.1%}")

    console.print(table)
    console.print(
        f"Games played: {results['num_games']}, "
        f"average moves per game: {results['avg_moves_per_game']:.1f}"
    )
