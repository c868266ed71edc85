from __future__ import annotations

"""Solve timer with optional inspection countdown.

IDLE -> (INSPECTING ->) RUNNING -> IDLE. Starting the solve after the
inspection allowance has run out adds a fixed +2s penalty to the reported
time. Inspection is never cut short; a late start is allowed but penalized.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..app.explain import trace as xtrace
from ..clock import Clock, MonotonicClock
from ..config.inspection import InspectionConfig
from .ticker import TickFactory, TickOwner

PENALTY_MS = 2000


class SolvePhase(str, Enum):
    IDLE = "idle"
    INSPECTING = "inspecting"
    RUNNING = "running"


@dataclass(frozen=True)
class CompletedSolve:
    raw_ms: int
    penalty_ms: int

    @property
    def elapsed_ms(self) -> int:
        return self.raw_ms + self.penalty_ms


@dataclass(frozen=True)
class SolveSnapshot:
    phase: SolvePhase
    elapsed_ms: float
    inspection_elapsed_ms: float
    inspection_remaining_s: float
    warning: bool
    penalty_pending: bool


class SolveTimer(TickOwner):
    def __init__(
        self,
        config: InspectionConfig,
        clock: Optional[Clock] = None,
        on_complete: Optional[Callable[[CompletedSolve], None]] = None,
        tick_factory: Optional[TickFactory] = None,
        on_tick: Optional[Callable[[SolveSnapshot], None]] = None,
    ) -> None:
        super().__init__(tick_factory, on_tick)  # type: ignore[arg-type]
        self.config = config
        self.clock = clock or MonotonicClock()
        self.on_complete = on_complete
        self.phase = SolvePhase.IDLE
        self.last_solve: Optional[CompletedSolve] = None
        self._start: Optional[float] = None
        self._inspection_start: Optional[float] = None
        self._inspection_elapsed = 0.0
        # Config in force for the solve in progress; updates apply to the next one.
        self._active_config = config

    def update_config(self, config: InspectionConfig) -> None:
        self.config = config

    # Intents
    def start_or_inspect(self) -> None:
        if self.phase is SolvePhase.RUNNING:
            return
        if self.phase is SolvePhase.IDLE:
            self._active_config = self.config
            if self._active_config.enabled:
                self._inspection_start = self.clock.now()
                self._inspection_elapsed = 0.0
                self.phase = SolvePhase.INSPECTING
                self._restart_tick()
                xtrace("inspection_started", {"duration_s": self._active_config.duration_seconds})
                return
            self._begin_solve()
            return
        # INSPECTING
        assert self._inspection_start is not None
        self._inspection_elapsed = self.clock.now() - self._inspection_start
        self._begin_solve()

    def stop(self) -> Optional[CompletedSolve]:
        if self.phase is not SolvePhase.RUNNING:
            return None
        assert self._start is not None
        raw = max(0.0, self.clock.now() - self._start)
        penalty = PENALTY_MS if self._penalized() else 0
        result = CompletedSolve(raw_ms=int(round(raw)), penalty_ms=penalty)
        self._to_idle()
        self.last_solve = result
        xtrace("solve_stopped", {"raw_ms": result.raw_ms, "penalty_ms": penalty})
        if self.on_complete is not None:
            self.on_complete(result)
        return result

    def reset(self) -> None:
        if self.phase is not SolvePhase.IDLE:
            xtrace("solve_reset", {"phase": self.phase.value})
        self._to_idle()

    def toggle(self) -> Optional[CompletedSolve]:
        """Single-key control: start or inspect when idle, start from inspection, stop when running."""
        if self.phase is SolvePhase.RUNNING:
            return self.stop()
        self.start_or_inspect()
        return None

    # Display
    def inspection_elapsed_ms(self) -> float:
        started = self._inspection_start
        if self.phase is SolvePhase.INSPECTING and started is not None:
            return max(0.0, self.clock.now() - started)
        return self._inspection_elapsed

    def elapsed_ms(self) -> float:
        start = self._start
        if self.phase is SolvePhase.RUNNING and start is not None:
            return max(0.0, self.clock.now() - start)
        last = self.last_solve
        if self.phase is SolvePhase.IDLE and last is not None:
            return float(last.raw_ms)
        return 0.0

    def snapshot(self) -> SolveSnapshot:
        cfg = self._active_config if self.phase is not SolvePhase.IDLE else self.config
        insp = self.inspection_elapsed_ms() if self.phase is SolvePhase.INSPECTING else 0.0
        remaining = max(0.0, cfg.duration_seconds - insp / 1000.0)
        inspecting = self.phase is SolvePhase.INSPECTING
        return SolveSnapshot(
            phase=self.phase,
            elapsed_ms=self.elapsed_ms(),
            inspection_elapsed_ms=insp,
            inspection_remaining_s=remaining,
            warning=inspecting and cfg.show_warnings and remaining <= cfg.warning_threshold_seconds,
            penalty_pending=(inspecting and insp > cfg.duration_ms)
            or (self.phase is SolvePhase.RUNNING and self._penalized()),
        )

    # Internals
    def _begin_solve(self) -> None:
        self._start = self.clock.now()
        self._inspection_start = None
        self.phase = SolvePhase.RUNNING
        self._restart_tick()
        xtrace("solve_started", {"inspection_ms": int(self._inspection_elapsed)})

    def _penalized(self) -> bool:
        return self._active_config.enabled and self._inspection_elapsed > self._active_config.duration_ms

    def _to_idle(self) -> None:
        self._stop_tick()
        self.phase = SolvePhase.IDLE
        self._start = None
        self._inspection_start = None
        self._inspection_elapsed = 0.0
