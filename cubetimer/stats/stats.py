from __future__ import annotations

"""Solve statistics over lists of millisecond times, and their formatting."""

from typing import Dict, Optional, Sequence

TRIMMED_WINDOWS = (5, 12)
NOT_ENOUGH_DATA = None
PLACEHOLDER = "--"


def average_of_n(values: Sequence[float], n: int) -> Optional[float]:
    """Average of the ``n`` most recent values, oldest first in ``values``.

    Ao5 and Ao12 drop the single best and single worst time before averaging.
    Any other ``n`` is a plain mean. Returns ``None`` with fewer than ``n`` values.
    """
    if n < 1:
        raise ValueError("n must be >= 1")
    if len(values) < n:
        return NOT_ENOUGH_DATA
    window = list(values[-n:])
    if n in TRIMMED_WINDOWS:
        window = sorted(window)[1:-1]
    return sum(window) / len(window)


def mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return NOT_ENOUGH_DATA
    return sum(values) / len(values)


def best(values: Sequence[float]) -> Optional[float]:
    return min(values) if values else NOT_ENOUGH_DATA


def worst(values: Sequence[float]) -> Optional[float]:
    return max(values) if values else NOT_ENOUGH_DATA


def personal_best_index(values: Sequence[float]) -> Optional[int]:
    """Index of the minimum value; ties keep the earliest."""
    if not values:
        return None
    return min(range(len(values)), key=lambda i: (values[i], i))


def format_time(ms: Optional[float]) -> str:
    """``ss.xx`` under a minute, ``m:ss.xx`` above; ``--`` for missing values."""
    if ms is None:
        return PLACEHOLDER
    total_seconds = ms / 1000.0
    minutes = int(total_seconds // 60)
    seconds = total_seconds - minutes * 60
    if minutes > 0:
        return f"{minutes}:{seconds:05.2f}"
    return f"{seconds:.2f}"


def summarize(values: Sequence[float]) -> Dict[str, Optional[float]]:
    return {
        "count": len(values),
        "ao5": average_of_n(values, 5),
        "ao12": average_of_n(values, 12),
        "best": best(values),
        "worst": worst(values),
        "mean": mean(values),
    }


def format_summary(stats: Dict[str, Optional[float]]) -> str:
    """Return a human-readable summary of stats."""
    lines = [f"Solves: {int(stats.get('count') or 0)}"]
    for label, key in (("Ao5", "ao5"), ("Ao12", "ao12"), ("Best (PB)", "best"), ("Worst", "worst"), ("Mean", "mean")):
        lines.append(f"{label}: {format_time(stats.get(key))}")
    return "\n".join(lines)
