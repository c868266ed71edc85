from __future__ import annotations

"""Smoothing utilities (EWMA over solve order)."""

import pandas as pd


def ewma_by_solve(df: pd.DataFrame, value_col: str, span: int) -> pd.DataFrame:
    """Return a copy of df sorted by solve_idx with a ``{value_col}_smooth`` column."""
    g = df.sort_values("solve_idx").copy()
    g[f"{value_col}_smooth"] = g[value_col].astype("float64").ewm(span=span).mean()
    return g
