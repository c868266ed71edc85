from __future__ import annotations

"""Build pandas frames from solve histories."""

from typing import Iterable

import pandas as pd

from ..results.schema import CFOP_STEPS, SolveRecord, StepSolveRecord

SOLVE_COLUMNS = ["id", "recorded_at", "elapsed_ms", "raw_ms", "penalty_ms", "is_pb"]
STEP_COLUMNS = ["id", "recorded_at", "step", "elapsed_ms", "total_ms", "is_pb"]


def solves_frame(records: Iterable[SolveRecord]) -> pd.DataFrame:
    """One row per solve in recorded order, with a stable ``solve_idx``."""
    rows = [
        {
            "id": r.id,
            "recorded_at": r.recorded_at,
            "elapsed_ms": r.elapsed,
            "raw_ms": r.raw_elapsed if r.raw_elapsed is not None else r.elapsed - r.penalty,
            "penalty_ms": r.penalty,
            "is_pb": r.is_personal_best,
        }
        for r in records
    ]
    df = pd.DataFrame(rows, columns=SOLVE_COLUMNS)
    df = df.astype({"id": "int64", "elapsed_ms": "int64", "raw_ms": "int64", "penalty_ms": "int64", "is_pb": "bool"})
    df["recorded_at"] = pd.to_datetime(df["recorded_at"], utc=True)
    df["solve_idx"] = range(len(df))
    return df


def step_solves_frame(records: Iterable[StepSolveRecord]) -> pd.DataFrame:
    """Long-form frame: one row per (step solve, step)."""
    rows = [
        {
            "id": r.id,
            "recorded_at": r.recorded_at,
            "step": s.name,
            "elapsed_ms": s.elapsed,
            "total_ms": r.total,
            "is_pb": r.is_personal_best,
        }
        for r in records
        for s in r.steps
    ]
    df = pd.DataFrame(rows, columns=STEP_COLUMNS)
    df = df.astype({"id": "int64", "elapsed_ms": "int64", "total_ms": "int64", "is_pb": "bool"})
    df["recorded_at"] = pd.to_datetime(df["recorded_at"], utc=True)
    df["step"] = pd.Categorical(df["step"], categories=list(CFOP_STEPS), ordered=True)
    return df
