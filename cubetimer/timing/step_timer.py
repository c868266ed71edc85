from __future__ import annotations

"""Sequential CFOP step timer.

Times Cross, F2L, OLL and PLL one after another. Completing PLL finishes the
solve: the four step times are emitted together and the timer rewinds to Cross.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..app.explain import trace as xtrace
from ..clock import Clock, MonotonicClock
from ..results.schema import CFOP_STEPS, StepTime
from .ticker import TickFactory, TickOwner


@dataclass(frozen=True)
class StepSnapshot:
    step_index: int
    step_name: str
    running: bool
    current_ms: float
    completed: Tuple[StepTime, ...]
    total_ms: float


class StepTimer(TickOwner):
    def __init__(
        self,
        clock: Optional[Clock] = None,
        on_complete: Optional[Callable[[List[StepTime]], None]] = None,
        tick_factory: Optional[TickFactory] = None,
        on_tick: Optional[Callable[[StepSnapshot], None]] = None,
    ) -> None:
        super().__init__(tick_factory, on_tick)  # type: ignore[arg-type]
        self.clock = clock or MonotonicClock()
        self.on_complete = on_complete
        self.current_step_index = 0
        self.completed_steps: List[StepTime] = []
        self.running = False
        self._step_start: Optional[float] = None

    @property
    def current_step(self) -> str:
        return CFOP_STEPS[self.current_step_index]

    def start_step(self) -> None:
        if self.running:
            return
        self._step_start = self.clock.now()
        self.running = True
        self._restart_tick()
        xtrace("step_started", {"step": self.current_step})

    def complete_step(self) -> Optional[List[StepTime]]:
        """Finish the running step. Returns the four step times when PLL completes."""
        if not self.running or self._step_start is None:
            return None
        elapsed = max(0.0, self.clock.now() - self._step_start)
        self._stop_tick()
        self.completed_steps.append(StepTime(name=self.current_step, elapsed=int(round(elapsed))))
        self.running = False
        self._step_start = None
        xtrace("step_completed", {"step": self.current_step, "elapsed_ms": int(round(elapsed))})

        if self.current_step_index < len(CFOP_STEPS) - 1:
            self.current_step_index += 1
            return None

        steps = list(self.completed_steps)
        self.reset()
        if self.on_complete is not None:
            self.on_complete(steps)
        return steps

    def advance(self) -> Optional[List[StepTime]]:
        """Single-key control: start the current step, or complete it if running."""
        if self.running:
            return self.complete_step()
        self.start_step()
        return None

    def reset(self) -> None:
        self._stop_tick()
        self.current_step_index = 0
        self.completed_steps = []
        self.running = False
        self._step_start = None

    def current_ms(self) -> float:
        start = self._step_start
        if self.running and start is not None:
            return max(0.0, self.clock.now() - start)
        return 0.0

    def snapshot(self) -> StepSnapshot:
        current = self.current_ms()
        done = sum(s.elapsed for s in self.completed_steps)
        return StepSnapshot(
            step_index=self.current_step_index,
            step_name=self.current_step,
            running=self.running,
            current_ms=current,
            completed=tuple(self.completed_steps),
            total_ms=done + current,
        )
