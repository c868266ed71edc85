from __future__ import annotations

"""Timer session: wires the timing machines to the persisted histories.

This is the intent surface a front end talks to. It owns the store, the
inspection config, the three timing machines and the histories they feed.
"""

import random
from typing import Any, Callable, Dict, List, Optional

from ..clock import Clock, MonotonicClock
from ..config.inspection import InspectionConfig
from ..results.history import History, solve_history, step_history
from ..results.individual import IndividualStepLog
from ..results.schema import SolveRecord, StepSolveRecord, StepTime
from ..scramble import Move, format_scramble, generate_scramble
from ..storage.store import KEY_INSPECTION_CONFIG, KeyValueStore
from ..timing.individual import IndividualStepTimers, StepLap
from ..timing.solve_timer import CompletedSolve, SolvePhase, SolveTimer
from ..timing.step_timer import StepTimer
from ..timing.ticker import TickFactory
from .explain import trace as xtrace, warn


class TimerSession:
    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Clock] = None,
        tick_factory: Optional[TickFactory] = None,
        on_tick: Optional[Callable[[Any], None]] = None,
        rng: Optional[random.Random] = None,
        auto_scramble: bool = True,
    ) -> None:
        self.store = store
        self.clock = clock or MonotonicClock()
        self.rng = rng
        self.auto_scramble = auto_scramble

        self.inspection = InspectionConfig.from_json(store.load(KEY_INSPECTION_CONFIG))
        self.solves: History[SolveRecord] = solve_history(store)
        self.step_solves: History[StepSolveRecord] = step_history(store)
        self.individual_log = IndividualStepLog(store)

        self.solve_timer = SolveTimer(
            self.inspection, self.clock, on_complete=self._record_solve, tick_factory=tick_factory, on_tick=on_tick
        )
        self.step_timer = StepTimer(
            self.clock, on_complete=self._record_step_solve, tick_factory=tick_factory, on_tick=on_tick
        )
        self.individual_timers = IndividualStepTimers(
            self.clock, on_complete=self._record_individual, tick_factory=tick_factory, on_tick=on_tick
        )
        self.scramble: List[Move] = []
        xtrace("session_loaded", {"solves": self.solves.count, "step_solves": self.step_solves.count})

    # Solve timer intents
    def start_or_inspect(self) -> None:
        self.solve_timer.start_or_inspect()

    def stop(self) -> Optional[SolveRecord]:
        before = self.solves.count
        self.solve_timer.stop()
        return self.solves.records[-1] if self.solves.count > before else None

    def toggle_solve(self) -> Optional[SolveRecord]:
        before = self.solves.count
        self.solve_timer.toggle()
        return self.solves.records[-1] if self.solves.count > before else None

    def reset_solve_timer(self) -> None:
        self.solve_timer.reset()

    # Step timer intents
    def start_step(self) -> None:
        self.step_timer.start_step()

    def complete_step(self) -> Optional[StepSolveRecord]:
        before = self.step_solves.count
        self.step_timer.complete_step()
        return self.step_solves.records[-1] if self.step_solves.count > before else None

    def advance_step(self) -> Optional[StepSolveRecord]:
        if self.step_timer.running:
            return self.complete_step()
        self.start_step()
        return None

    def reset_step_timer(self) -> None:
        self.step_timer.reset()

    # Individual step timers
    def toggle_individual_step(self, step: str) -> Optional[StepLap]:
        return self.individual_timers.toggle(step)

    def stop_individual_step(self) -> Optional[StepLap]:
        return self.individual_timers.stop()

    def reset_individual_step(self) -> None:
        self.individual_timers.reset()

    def clear_individual_records(self) -> None:
        self.individual_log.clear()

    def reset_active(self) -> None:
        """Escape key: reset whichever machine is mid-timing."""
        if self.solve_timer.phase is not SolvePhase.IDLE:
            self.solve_timer.reset()
        elif self.step_timer.running or self.step_timer.completed_steps:
            self.step_timer.reset()
        elif self.individual_timers.active_step is not None:
            self.individual_timers.reset()

    # Scramble
    def generate_scramble(self) -> str:
        self.scramble = generate_scramble(self.rng)
        text = format_scramble(self.scramble)
        xtrace("scramble", {"moves": len(self.scramble)})
        return text

    @property
    def scramble_text(self) -> str:
        return format_scramble(self.scramble)

    # History management
    def delete_solve(self, record_id: int) -> bool:
        return self.solves.delete(record_id)

    def delete_step(self, record_id: int) -> bool:
        return self.step_solves.delete(record_id)

    def clear_all_solves(self) -> None:
        self.solves.clear_all()

    def clear_all_steps(self) -> None:
        self.step_solves.clear_all()

    # Configuration
    def update_inspection_config(self, **partial: Any) -> InspectionConfig:
        cfg = self.inspection.updated(**partial)
        self.inspection = cfg
        self.solve_timer.update_config(cfg)
        if not self.store.save(KEY_INSPECTION_CONFIG, cfg.to_json()):
            warn("Could not save inspection config; it applies to this session only.")
        xtrace("inspection_config", cfg.to_json())
        return cfg

    # Statistics
    def statistics(self) -> Dict[str, Optional[float]]:
        return self.solves.summary()

    def step_statistics(self) -> Dict[str, Optional[float]]:
        return self.step_solves.summary()

    # Completion callbacks
    def _record_solve(self, result: CompletedSolve) -> None:
        self.solves.append(
            SolveRecord(elapsed=result.elapsed_ms, raw_elapsed=result.raw_ms, penalty=result.penalty_ms)
        )
        if self.auto_scramble:
            self.generate_scramble()

    def _record_step_solve(self, steps: List[StepTime]) -> None:
        self.step_solves.append(StepSolveRecord(steps=steps))
        if self.auto_scramble:
            self.generate_scramble()

    def _record_individual(self, lap: StepLap) -> None:
        self.individual_log.add(lap.step, lap.elapsed_ms)
