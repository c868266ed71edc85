from __future__ import annotations

"""Metric computations over solve frames."""

from typing import Sequence

import numpy as np
import pandas as pd

from ..results.schema import CFOP_STEPS
from ..stats.stats import TRIMMED_WINDOWS
from .config import AnalyticsConfig


def rolling_average(values: Sequence[float], n: int) -> np.ndarray:
    """Trailing average-of-n for every position.

    Position i holds the average of values[i-n+1 .. i] (trimmed of one best and
    one worst for Ao5/Ao12), or NaN while fewer than n values exist.
    """
    if n < 1:
        raise ValueError("n must be >= 1")
    arr = np.asarray(values, dtype="float64")
    out = np.full(arr.shape[0], np.nan, dtype="float64")
    if arr.shape[0] < n:
        return out
    windows = np.lib.stride_tricks.sliding_window_view(arr, n)
    if n in TRIMMED_WINDOWS:
        trimmed = np.sort(windows, axis=1)[:, 1:-1]
        out[n - 1 :] = trimmed.mean(axis=1)
    else:
        out[n - 1 :] = windows.mean(axis=1)
    return out


def compute_metrics(df: pd.DataFrame, cfg: AnalyticsConfig) -> pd.DataFrame:
    """Return a copy of a solves frame with ``ao{n}`` columns and the running best."""
    out = df.copy()
    values = out["elapsed_ms"].to_numpy(dtype="float64")
    for n in cfg.rolling_windows:
        out[f"ao{n}"] = rolling_average(values, n)
    out["running_best"] = out["elapsed_ms"].cummin()
    return out


def step_breakdown(step_df: pd.DataFrame) -> pd.DataFrame:
    """Per-step count, mean and best in CFOP order; steps without data are NaN."""
    grouped = step_df.groupby("step", observed=False)["elapsed_ms"]
    out = pd.DataFrame(
        {
            "count": grouped.count(),
            "mean_ms": grouped.mean(),
            "best_ms": grouped.min(),
        }
    )
    out = out.reindex(list(CFOP_STEPS))
    out["count"] = out["count"].fillna(0).astype("int64")
    out.index.name = "step"
    return out


def step_share(step_df: pd.DataFrame) -> pd.Series:
    """Fraction of the average solve spent in each step."""
    means = step_breakdown(step_df)["mean_ms"]
    total = means.sum()
    if not total or np.isnan(total):
        return means * np.nan
    return (means / total).astype("float64")
