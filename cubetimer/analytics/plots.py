from __future__ import annotations

"""Matplotlib plots for solve trends and the CFOP step breakdown."""

import os
from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

from .metrics import step_breakdown  # noqa: E402


def plot_trend(df: pd.DataFrame, *, save_path: Optional[str | os.PathLike[str]] = None) -> bool:
    """Scatter of solve times with any ao{n} / EWMA columns as lines. Returns False if nothing to plot."""
    if df.empty:
        return False
    g = df.sort_values("solve_idx")
    seconds = g["elapsed_ms"] / 1000.0
    plt.figure()
    plt.plot(g["solve_idx"], seconds, marker="o", linestyle="", label="time")
    for col in g.columns:
        if col.startswith("ao") or col.endswith("_smooth"):
            plt.plot(g["solve_idx"], g[col] / 1000.0, linewidth=2, label=col)
    pbs = g[g["is_pb"]]
    if not pbs.empty:
        plt.plot(pbs["solve_idx"], pbs["elapsed_ms"] / 1000.0, marker="*", markersize=12, linestyle="", label="PB")
    plt.xlabel("Solve")
    plt.ylabel("Seconds")
    plt.title("Solve times")
    plt.legend()
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
    return True


def plot_step_breakdown(step_df: pd.DataFrame, *, save_path: Optional[str | os.PathLike[str]] = None) -> bool:
    """Bar chart of mean time per CFOP step."""
    if step_df.empty:
        return False
    bd = step_breakdown(step_df)
    plt.figure()
    plt.bar([str(s) for s in bd.index], bd["mean_ms"].fillna(0) / 1000.0)
    plt.xlabel("Step")
    plt.ylabel("Mean seconds")
    plt.title("CFOP step breakdown")
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
    return True
