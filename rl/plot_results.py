"""
Plotting script for RL experiment results.
Generates learning curves and comparison plots from MetricsCallback CSVs.
"""

import os
import argparse
from typing import Dict, Optional

import pandas as pd
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

COLORS = {"dqn": "#2ecc71", "ppo": "#3498db", "sac": "#e74c3c"}


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for an algorithm."""
    for csv_path in (os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
                     os.path.join(log_dir, f"{algo}_metrics.csv")):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def plot_learning_curve(df: pd.DataFrame, algo: str, output_dir: str, window: int = 50) -> str:
    """Plot reward, score, captures and clear rate for a single algorithm."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")

    panels = [
        ("reward", "Episode Reward", None),
        ("score", "Final Score", "orange"),
        ("captures", "Pursuers Captured", "purple"),
        ("cleared", "Clear Rate", "green"),
    ]
    for ax, (column, label, color) in zip(axes.flat, panels):
        if column not in df.columns:
            ax.axis("off")
            continue
        values = smooth(df[column].values.astype(float), window)
        ax.plot(df["timestep"].values[:len(values)], values, linewidth=2, color=color)
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.set_title(f"{label} vs Timesteps")
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(data: Dict[str, pd.DataFrame], output_dir: str, window: int = 50) -> str:
    """Overlay smoothed reward and score curves of every algorithm."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle("Algorithm Comparison", fontsize=16, fontweight="bold")

    for ax, column, label in ((axes[0], "reward", "Episode Reward"), (axes[1], "score", "Final Score")):
        for algo, df in data.items():
            values = smooth(df[column].values.astype(float), window)
            ax.plot(df["timestep"].values[:len(values)], values, linewidth=2,
                    label=algo.upper(), color=COLORS.get(algo))
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "algorithm_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    print(f"Saved comparison plot to {save_path}")
    return save_path


def summary_report(data: Dict[str, pd.DataFrame], last_n: int = 100) -> str:
    """Text summary of the final `last_n` episodes of each algorithm."""
    lines = ["=" * 60, "RL EXPERIMENT SUMMARY REPORT", "=" * 60]
    for algo, df in data.items():
        final = df.tail(last_n)
        lines.append(f"\n{algo.upper()} Results:")
        lines.append("-" * 40)
        lines.append(f"  Total Episodes: {len(df)}")
        lines.append(f"  Total Timesteps: {df['timestep'].max():,}")
        lines.append(f"  Final Mean Reward: {final['reward'].mean():.2f} ± {final['reward'].std():.2f}")
        lines.append(f"  Final Mean Score: {final['score'].mean():.1f}")
        lines.append(f"  Clear Rate: {final['cleared'].mean():.2%}")
    lines.append("\n" + "=" * 60)
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(description="Plot RL experiment results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory containing log files")
    parser.add_argument("--output-dir", type=str, default="./plots", help="Directory to save plots")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window size (default: 50)")
    parser.add_argument("--algos", nargs="+", default=["dqn", "ppo", "sac"], help="Algorithms to plot")

    args = parser.parse_args()

    print(f"Loading metrics from {args.log_dir}...")

    data = {}
    for algo in args.algos:
        df = load_metrics(args.log_dir, algo)
        if df is None or df.empty:
            print(f"  No data found for {algo}")
            continue
        print(f"  Loaded {algo}: {len(df)} episodes")
        data[algo] = df

    if not data:
        print("\nNo data found! Make sure training has generated metrics files.")
        return

    for algo, df in data.items():
        plot_learning_curve(df, algo, args.output_dir, args.window)
    if len(data) > 1:
        plot_comparison(data, args.output_dir, args.window)

    report = summary_report(data)
    print(report)
    os.makedirs(args.output_dir, exist_ok=True)
    report_path = os.path.join(args.output_dir, "experiment_summary.txt")
    with open(report_path, "w") as f:
        f.write(report)
    print(f"\nAll plots saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
