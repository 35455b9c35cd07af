"""Command line interface for td-tictactoe."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from td_tictactoe.agents import RandomPlayer, TDAgent
from td_tictactoe.board import Cell
from td_tictactoe.config import load_config
from td_tictactoe.evaluate import evaluate_agents, print_evaluation_results
from td_tictactoe.exceptions import TicTacToeError
from td_tictactoe.persistence import load_estimates
from td_tictactoe.train import train

console = Console()


def setup_logging(level: str) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """td-tictactoe: temporal-difference self-play for Tic-Tac-Toe.

    \b
    Examples:
        td-tictactoe train --episodes 5000        # Train and save rlttt_estimates
        td-tictactoe evaluate rlttt_estimates     # Play the table against random
        td-tictactoe inspect rlttt_estimates      # Show the best-valued states
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command("train")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a YAML training configuration",
)
@click.option("--episodes", "-n", type=int, help="Number of self-play games")
@click.option(
    "--output",
    "-o",
    "estimates_path",
    type=click.Path(dir_okay=False),
    help="Estimates file to write (must not exist)",
)
@click.option(
    "--resume",
    "resume_from",
    type=click.Path(dir_okay=False),
    help="Estimates file to start the mark A agent from",
)
@click.option("--seed", type=int, help="Random seed")
@click.option(
    "--plot",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Save learning curves to this image file",
)
@click.pass_context
def train_command(
    ctx: click.Context,
    config_path: Optional[Path],
    episodes: Optional[int],
    estimates_path: Optional[str],
    resume_from: Optional[str],
    seed: Optional[int],
    plot: Optional[Path],
) -> None:
    """Train two TD agents against each other and save mark A's table."""
    try:
        config = load_config(
            config_path,
            overrides={
                "episodes": episodes,
                "estimates_path": estimates_path,
                "resume_from": resume_from,
                "seed": seed,
            },
        )
        setup_logging("DEBUG" if ctx.obj.get("verbose") else config.log_level)

        result = train(config)
    except TicTacToeError as e:
        raise click.ClickException(str(e))

    console.print(f"[green]✓[/green] Played {result.episodes} games.")
    console.print(
        f"Wins: A: {result.wins_a}, B: {result.wins_b}, Draws: {result.draws}"
    )
    console.print(
        f"Saved {len(result.agent_a.table)} estimates to {escape(str(result.estimates_path))}"
    )

    if plot is not None:
        from td_tictactoe.visualize import plot_learning_curves

        plot.parent.mkdir(parents=True, exist_ok=True)
        plot_learning_curves(result.metrics.to_dict(), save_path=str(plot))
        console.print(f"Saved plot to {escape(str(plot))}")


@cli.command("evaluate")
@click.argument("estimates", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--games", "-g", type=click.IntRange(min=1), default=100, show_default=True, help="Games to play")
@click.option("--seed", type=int, help="Random seed for the opponent")
@click.pass_context
def evaluate_command(
    ctx: click.Context, estimates: Path, games: int, seed: Optional[int]
) -> None:
    """Play a saved mark A table greedily against a random opponent."""
    setup_logging("DEBUG" if ctx.obj.get("verbose") else "WARNING")
    try:
        agent = TDAgent.from_persisted_file(Cell.MARK_A, estimates, seed=seed)
    except TicTacToeError as e:
        raise click.ClickException(str(e))

    agent.set_training_mode(False)
    opponent = RandomPlayer(Cell.MARK_B, seed=seed)
    results = evaluate_agents(agent, opponent, "TD", "Random", num_games=games)
    print_evaluation_results(results, console=console)


@cli.command("inspect")
@click.argument("estimates", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--top", "-t", type=click.IntRange(min=1), default=10, show_default=True, help="States to show")
def inspect_command(estimates: Path, top: int) -> None:
    """Show the header and highest-valued states of an estimates file."""
    try:
        data = load_estimates(estimates)
    except TicTacToeError as e:
        raise click.ClickException(str(e))

    console.print(f"[bold]{escape(str(estimates))}[/bold]")
    console.print(f"{len(data.entries)} states, epsilon={data.epsilon}, alpha={data.alpha}")

    table = Table(title=f"Top {top} states")
    table.add_column("Board", style="cyan")
    table.add_column("Value", justify="right")
    ranked = sorted(data.entries, key=lambda entry: entry[1], reverse=True)
    for board, value in ranked[:top]:
        table.add_row(escape(str(board)), f"{value:.4f}")
    console.print(table)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
