import argparse
import os

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from dssim_optimizer.history import load_history

OUTPUT_DIR = "search_plots"

sns.set_theme(style="whitegrid", font_scale=1.2)
plt.rcParams["font.family"] = "sans-serif"
plt.rcParams["axes.unicode_minus"] = False
plt.rcParams["pdf.fonttype"] = 42


def plot_trajectory(df, lower, upper, output_dir=OUTPUT_DIR, name="search_trajectory"):
    """
    Two stacked panels sharing the evaluation axis:
    DSSIM per evaluation with the target band shaded, and the candidate quality.
    """
    if not os.path.exists(output_dir):
        os.makedirs(output_dir)

    df = df.copy()
    df["Eval_Count"] = np.arange(1, len(df) + 1)
    hue = "Encoder" if df["Encoder"].nunique() > 1 else None

    fig, axes = plt.subplots(2, 1, figsize=(10, 8), sharex=True)

    sns.lineplot(data=df, x="Eval_Count", y="DSSIM", hue=hue, marker="o", ax=axes[0])
    axes[0].axhspan(lower, upper, color="#2ca02c", alpha=0.15, label="Target band")
    axes[0].set_title("DSSIM per Evaluation", fontsize=14)
    axes[0].set_ylabel("DSSIM")

    sns.lineplot(data=df, x="Eval_Count", y="Quality", hue=hue, marker="o", ax=axes[1])
    axes[1].set_title("Candidate Quality", fontsize=14)
    axes[1].set_xlabel("Evaluations")
    axes[1].set_ylabel("Quality")
    axes[1].set_xticks(df["Eval_Count"])

    plt.tight_layout()
    png_path = os.path.join(output_dir, f"{name}.png")
    plt.savefig(png_path, dpi=300)
    plt.savefig(os.path.join(output_dir, f"{name}.pdf"))
    plt.close(fig)
    print(f"Saved trajectory plot to {png_path}")
    return png_path


def main():
    parser = argparse.ArgumentParser(description="Plot a DSSIM search history CSV.")
    parser.add_argument("csv", help="History CSV written by run.py --history-csv")
    parser.add_argument("--lower", type=float, default=0.008)
    parser.add_argument("--upper", type=float, default=0.010)
    parser.add_argument("--output-dir", default=OUTPUT_DIR)
    args = parser.parse_args()

    df = load_history(args.csv)
    if df.empty:
        print(f"No rows in {args.csv}")
        return
    plot_trajectory(df, args.lower, args.upper, args.output_dir)


if __name__ == "__main__":
    main()
