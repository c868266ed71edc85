from __future__ import annotations

"""Clock sources. All values are milliseconds as floats."""

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float: ...


class MonotonicClock:
    """Wall-independent high resolution clock backed by ``time.perf_counter``."""

    def now(self) -> float:
        return time.perf_counter() * 1000.0


class ManualClock:
    """Clock that only moves when told to. Used for replays and tests."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> None:
        if ms < 0:
            raise ValueError("clock cannot move backwards")
        self._now += float(ms)

    def advance_s(self, seconds: float) -> None:
        self.advance(seconds * 1000.0)
