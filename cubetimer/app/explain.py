from __future__ import annotations

"""Milestone tracing for timing sessions (Explain Mode).

``cubetimer --explain`` prints one line per milestone (inspection started,
solve stopped, PB changed, store write failed...), stamped with the
milliseconds since tracing was switched on so phase gaps can be read off
directly.
"""

import json
import sys
import time
from typing import Any, Dict, Iterable, Optional, Set

_ENABLED = False
_EVENTS: Optional[Set[str]] = None
_T0 = 0.0


def enable(flag: bool = True, events: Iterable[str] | None = None) -> None:
    """Switch tracing on or off; ``events`` limits output to those names."""
    global _ENABLED, _EVENTS, _T0
    _ENABLED = bool(flag)
    _EVENTS = set(events) if events is not None else None
    _T0 = time.perf_counter()


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED or (_EVENTS is not None and event not in _EVENTS):
        return
    stamp = int((time.perf_counter() - _T0) * 1000)
    try:
        body = json.dumps(payload or {}, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        body = "{}"
    print(f"[EXPLAIN +{stamp}ms] {event} :: {body}")


def warn(message: str) -> None:
    """Non-fatal problem the user should see; never raises."""
    print(f"[WARN] {message}", file=sys.stderr)
