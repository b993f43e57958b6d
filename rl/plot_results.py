"""
Plotting script for training runs.
Generates learning curves from the MetricsCallback CSVs.
"""

import os
import argparse
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt


def load_metrics(log_dir: str, run_name: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for a run (e.g. 'ppo_flappy')."""
    for csv_path in (
        os.path.join(log_dir, run_name, f"{run_name}_metrics.csv"),
        os.path.join(log_dir, f"{run_name}_metrics.csv"),
    ):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def plot_learning_curve(
    df: pd.DataFrame,
    run_name: str,
    output_dir: str,
    window: int = 50,
) -> str:
    """Plot reward, length, score and death rate for one run."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{run_name} Learning Curves", fontsize=16, fontweight="bold")

    panels = [
        (axes[0, 0], "reward", "Episode Reward", None),
        (axes[0, 1], "length", "Episode Length", "orange"),
        (axes[1, 0], "score", "Final Score", "purple"),
        (axes[1, 1], "died", "Death Rate", "red"),
    ]
    for ax, column, label, color in panels:
        values = smooth(df[column].values.astype(float), window)
        ax.plot(df["timestep"].values[:len(values)], values, linewidth=2, color=color)
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.set_title(f"{label} vs Timesteps")
        ax.grid(True, alpha=0.3)
    axes[1, 1].set_ylim(0, 1.1)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{run_name}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    print(f"Saved {run_name} learning curve to {save_path}")
    return save_path


def plot_comparison(
    data: Dict[str, pd.DataFrame],
    output_dir: str,
    window: int = 50,
) -> str:
    """Overlay the smoothed score curves of several runs."""
    fig, ax = plt.subplots(figsize=(10, 6))
    for run_name, df in data.items():
        scores = smooth(df["score"].values.astype(float), window)
        ax.plot(df["timestep"].values[:len(scores)], scores, linewidth=2, label=run_name)
    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Final Score")
    ax.set_title("Score Comparison")
    ax.legend()
    ax.grid(True, alpha=0.3)

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "score_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    print(f"Saved comparison plot to {save_path}")
    return save_path


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Plot training metrics")
    parser.add_argument(
        "runs",
        nargs="+",
        help="Run names to plot, e.g. ppo_flappy dqn_pacman",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="./logs",
        help="Directory holding the metrics CSVs (default: ./logs)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="./plots",
        help="Where to write the figures (default: ./plots)",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=50,
        help="Smoothing window in episodes (default: 50)",
    )

    args = parser.parse_args(argv)

    data = {}
    for run_name in args.runs:
        df = load_metrics(args.log_dir, run_name)
        if df is None or df.empty:
            print(f"No metrics found for {run_name}, skipping")
            continue
        data[run_name] = df
        plot_learning_curve(df, run_name, args.output_dir, args.window)

    if len(data) > 1:
        plot_comparison(data, args.output_dir, args.window)


if __name__ == "__main__":
    main()
