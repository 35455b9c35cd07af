"""Tests for evaluation and plotting."""

from pathlib import Path

import pytest
from rich.console import Console

from td_tictactoe.agents.random import RandomPlayer
from td_tictactoe.agents.td import TDAgent
from td_tictactoe.board import Cell
from td_tictactoe.evaluate import evaluate_agents, print_evaluation_results
from td_tictactoe.train import TrainingMetrics
from td_tictactoe.visualize import plot_learning_curves


class TestEvaluateAgents:
    """Test head-to-head evaluation."""

    def test_results(self) -> None:
        """Test that results add up."""
        results = evaluate_agents(
            RandomPlayer(Cell.MARK_A, seed=1),
            RandomPlayer(Cell.MARK_B, seed=2),
            "Random", "Random",
            num_games=40,
        )

        assert results["num_games"] == 40
        assert results["wins_a"] + results["wins_b"] + results["draws"] == 40
        assert results["win_rate_a"] + results["win_rate_b"] + results["draw_rate"] == pytest.approx(1.0)
        assert 5 <= results["avg_moves_per_game"] <= 9

    def test_frozen_agent_does_not_learn(self) -> None:
        """Test that a frozen TD agent keeps its values during evaluation."""
        agent = TDAgent(Cell.MARK_A, epsilon=0.0)
        agent.set_training_mode(False)

        evaluate_agents(agent, RandomPlayer(Cell.MARK_B, seed=3), "TD", "Random", num_games=10)

        assert agent.get_stats()["num_updates"] == 0
        assert len(agent.table) > 0

    def test_requires_games(self) -> None:
        """Test that at least one game is required."""
        with pytest.raises(ValueError):
            evaluate_agents(
                RandomPlayer(Cell.MARK_A), RandomPlayer(Cell.MARK_B), "a", "b", num_games=0
            )

    def test_print_results(self) -> None:
        """Test the rich results table."""
        results = evaluate_agents(
            RandomPlayer(Cell.MARK_A, seed=1),
            RandomPlayer(Cell.MARK_B, seed=2),
            "Alpha", "Beta",
            num_games=5,
        )
        console = Console(record=True, width=100)
        print_evaluation_results(results, console=console)

        output = console.export_text()
        assert "Alpha wins" in output
        assert "Beta wins" in output
        assert "Draws" in output
        assert "Games played: 5" in output


class TestPlotLearningCurves:
    """Test plotting training metrics."""

    def test_saves_image(self, tmp_path: Path) -> None:
        """Test that a plot file is written."""
        metrics = TrainingMetrics()
        metrics.record(10, 5, 3, 2, 30, 28)
        metrics.record(20, 4, 2, 4, 45, 40)
        path = tmp_path / "curves.png"

        plot_learning_curves(metrics.to_dict(), save_path=str(path))

        assert path.exists()
        assert path.stat().st_size > 0

    def test_rejects_empty_metrics(self, tmp_path: Path) -> None:
        """Test that there must be something to plot."""
        with pytest.raises(ValueError):
            plot_learning_curves(TrainingMetrics().to_dict(), save_path=str(tmp_path / "x.png"))
