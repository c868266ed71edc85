from __future__ import annotations

"""Independent per-step timers (hotkey mode).

Unlike the sequential StepTimer, any CFOP step can be timed on its own, in any
order. Only one step runs at a time: starting another discards the active one.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from ..app.explain import trace as xtrace
from ..clock import Clock, MonotonicClock
from ..results.schema import CFOP_STEPS
from .ticker import TickFactory, TickOwner


@dataclass(frozen=True)
class StepLap:
    step: str
    elapsed_ms: int


@dataclass(frozen=True)
class IndividualSnapshot:
    active_step: Optional[str]
    current_ms: float


class IndividualStepTimers(TickOwner):
    def __init__(
        self,
        clock: Optional[Clock] = None,
        on_complete: Optional[Callable[[StepLap], None]] = None,
        tick_factory: Optional[TickFactory] = None,
        on_tick: Optional[Callable[[IndividualSnapshot], None]] = None,
    ) -> None:
        super().__init__(tick_factory, on_tick)  # type: ignore[arg-type]
        self.clock = clock or MonotonicClock()
        self.on_complete = on_complete
        self.active_step: Optional[str] = None
        self._start: Optional[float] = None

    def start(self, step: str) -> None:
        if step not in CFOP_STEPS:
            raise ValueError(f"Unknown step: {step}")
        if self.active_step is not None and self.active_step != step:
            xtrace("individual_step_discarded", {"step": self.active_step})
        self.active_step = step
        self._start = self.clock.now()
        self._restart_tick()

    def stop(self) -> Optional[StepLap]:
        if self.active_step is None or self._start is None:
            return None
        lap = StepLap(step=self.active_step, elapsed_ms=int(round(max(0.0, self.clock.now() - self._start))))
        self.reset()
        xtrace("individual_step_recorded", {"step": lap.step, "elapsed_ms": lap.elapsed_ms})
        if self.on_complete is not None:
            self.on_complete(lap)
        return lap

    def toggle(self, step: str) -> Optional[StepLap]:
        if self.active_step == step:
            return self.stop()
        self.start(step)
        return None

    def reset(self) -> None:
        self._stop_tick()
        self.active_step = None
        self._start = None

    def current_ms(self) -> float:
        start = self._start
        if self.active_step is not None and start is not None:
            return max(0.0, self.clock.now() - start)
        return 0.0

    def snapshot(self) -> IndividualSnapshot:
        return IndividualSnapshot(active_step=self.active_step, current_ms=self.current_ms())
