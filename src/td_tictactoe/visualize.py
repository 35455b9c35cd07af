"""Visualization of training metrics."""

from typing import Dict, List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402


def plot_learning_curves(
    metrics: Dict[str, List],
    save_path: str,
    title: str = "TD Self-Play Training Progress",
) -> None:
    """
    Plot learning curves from training metrics and save them to a file.

    Args:
        metrics: Dictionary of metrics from TrainingMetrics.to_dict()
        save_path: Image file to write
        title: Plot title
    """
    if not metrics["episodes"]:
        raise ValueError("No training data to plot")

    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    fig.suptitle(title, fontsize=16, fontweight="bold")

    # Outcome rates per window
    ax = axes[0]
    ax.plot(metrics["episodes"], metrics["win_rates_a"], label="A wins", linewidth=2)
    ax.plot(metrics["episodes"], metrics["win_rates_b"], label="B wins", linewidth=2)
    ax.plot(metrics["episodes"], metrics["draw_rates"], label="Draws", linewidth=2)
    ax.set_xlabel("Episode")
    ax.set_ylabel("Rate")
    ax.set_title("Outcome Rates")
    ax.legend()
    ax.grid(True, alpha=0.3)
    ax.set_ylim([-0.05, 1.05])

    # Value table growth
    ax = axes[1]
    ax.plot(metrics["episodes"], metrics["table_sizes_a"], label="A", linewidth=2)
    ax.plot(metrics["episodes"], metrics["table_sizes_b"], label="B", linewidth=2)
    ax.set_xlabel("Episode")
    ax.set_ylabel("Number of States")
    ax.set_title("Value Table Size")
    ax.legend()
    ax.grid(True, alpha=0.3)

    # Cumulative outcomes
    ax = axes[2]
    ax.plot(metrics["episodes"], np.cumsum(metrics["wins_a"]), label="A wins", linewidth=2)
    ax.plot(metrics["episodes"], np.cumsum(metrics["wins_b"]), label="B wins", linewidth=2)
    ax.plot(metrics["episodes"], np.cumsum(metrics["draws"]), label="Draws", linewidth=2)
    ax.set_xlabel("Episode")
    ax.set_ylabel("Cumulative Count")
    ax.set_title("Cumulative Game Outcomes")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
