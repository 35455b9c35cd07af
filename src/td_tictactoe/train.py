"""Self-play training of two TD agents."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from td_tictactoe.agents.td import TDAgent
from td_tictactoe.board import Cell
from td_tictactoe.config import TrainingConfig
from td_tictactoe.exceptions import (
    EstimatesParseError,
    EstimatesReadError,
    PersistenceConflictError,
)
from td_tictactoe.game import Game

logger = logging.getLogger(__name__)


class TrainingMetrics:
    """Track outcomes and table growth over training windows."""

    def __init__(self) -> None:
        """Initialize metrics tracking."""
        self.episodes: List[int] = []
        self.wins_a: List[int] = []
        self.wins_b: List[int] = []
        self.draws: List[int] = []
        self.win_rates_a: List[float] = []
        self.win_rates_b: List[float] = []
        self.draw_rates: List[float] = []
        self.table_sizes_a: List[int] = []
        self.table_sizes_b: List[int] = []

    def record(
        self,
        episode: int,
        wins_a: int,
        wins_b: int,
        draws: int,
        table_size_a: int,
        table_size_b: int,
    ) -> None:
        """Record the outcome counts of the window ending at episode."""
        total = wins_a + wins_b + draws

        self.episodes.append(episode)
        self.wins_a.append(wins_a)
        self.wins_b.append(wins_b)
        self.draws.append(draws)
        self.win_rates_a.append(wins_a / total if total > 0 else 0.0)
        self.win_rates_b.append(wins_b / total if total > 0 else 0.0)
        self.draw_rates.append(draws / total if total > 0 else 0.0)
        self.table_sizes_a.append(table_size_a)
        self.table_sizes_b.append(table_size_b)

    def to_dict(self) -> Dict[str, List]:
        """Convert metrics to dictionary."""
        return {
            "episodes": self.episodes,
            "wins_a": self.wins_a,
            "wins_b": self.wins_b,
            "draws": self.draws,
            "win_rates_a": self.win_rates_a,
            "win_rates_b": self.win_rates_b,
            "draw_rates": self.draw_rates,
            "table_sizes_a": self.table_sizes_a,
            "table_sizes_b": self.table_sizes_b,
        }


@dataclass
class TrainingResult:
    """Agents and totals produced by a training run."""

    agent_a: TDAgent
    agent_b: TDAgent
    metrics: TrainingMetrics
    episodes: int
    wins_a: int
    wins_b: int
    draws: int
    estimates_path: Path


def build_agent_a(config: TrainingConfig) -> TDAgent:
    """
    Create the mark A agent, resuming from saved estimates when configured.

    A resume file that cannot be read or parsed is logged and replaced by a
    fresh agent.
    """
    seat = config.player_a
    if config.resume_from is not None:
        try:
            return TDAgent.from_persisted_file(
                Cell.MARK_A, config.resume_from, seed=config.seed
            )
        except (EstimatesReadError, EstimatesParseError) as e:
            logger.warning("Could not resume from %s, starting fresh: %s", config.resume_from, e)
    return TDAgent(Cell.MARK_A, seat.epsilon, seat.alpha, seed=config.seed)


def train(config: TrainingConfig) -> TrainingResult:
    """
    Play config.episodes self-play games and save the mark A estimates.

    Args:
        config: Training configuration

    Returns:
        TrainingResult with both agents, metrics and outcome totals

    Raises:
        PersistenceConflictError: If the estimates file already exists
    """
    estimates_path = Path(config.estimates_path)
    if estimates_path.exists():
        raise PersistenceConflictError(f"Estimates file '{estimates_path}' already exists")

    agent_a = build_agent_a(config)
    seed_b = None if config.seed is None else config.seed + 1
    agent_b = TDAgent(
        Cell.MARK_B, config.player_b.epsilon, config.player_b.alpha, seed=seed_b
    )

    game = Game(agent_a, agent_b)
    metrics = TrainingMetrics()
    totals = {Cell.MARK_A: 0, Cell.MARK_B: 0, None: 0}
    window = {Cell.MARK_A: 0, Cell.MARK_B: 0, None: 0}

    logger.info(
        "Training for %d episodes (A: epsilon=%s alpha=%s, B: epsilon=%s alpha=%s)",
        config.episodes, agent_a.epsilon, agent_a.alpha, agent_b.epsilon, agent_b.alpha,
    )

    for episode in range(1, config.episodes + 1):
        result = game.play()
        totals[result.winner] += 1
        window[result.winner] += 1
        game.reset()
        logger.debug("episode %d: %s", episode, result)

        if episode % config.report_interval == 0 or episode == config.episodes:
            metrics.record(
                episode,
                window[Cell.MARK_A],
                window[Cell.MARK_B],
                window[None],
                len(agent_a.table),
                len(agent_b.table),
            )
            logger.info(
                "Episode %d/%d | A wins: %d | B wins: %d | Draws: %d | States: %d/%d",
                episode, config.episodes,
                window[Cell.MARK_A], window[Cell.MARK_B], window[None],
                len(agent_a.table), len(agent_b.table),
            )
            window = {Cell.MARK_A: 0, Cell.MARK_B: 0, None: 0}

    agent_a.save(estimates_path)

    return TrainingResult(
        agent_a=agent_a,
        agent_b=agent_b,
        metrics=metrics,
        episodes=config.episodes,
        wins_a=totals[Cell.MARK_A],
        wins_b=totals[Cell.MARK_B],
        draws=totals[None],
        estimates_path=estimates_path,
    )
