import unittest

from cubetimer.clock import ManualClock
from cubetimer.results.schema import CFOP_STEPS
from cubetimer.timing.individual import IndividualStepTimers
from cubetimer.timing.step_timer import StepTimer
from tests.helpers import FakeTickFactory


class StepTimerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = ManualClock()
        self.ticks = FakeTickFactory()
        self.done = []
        self.timer = StepTimer(self.clock, on_complete=self.done.append, tick_factory=self.ticks)

    def run_steps(self, durations) -> None:
        for ms in durations:
            self.timer.advance()
            self.clock.advance(ms)
            self.timer.advance()

    def test_full_solve_emits_four_steps_and_rewinds(self) -> None:
        self.run_steps([1200, 3400, 800, 600])
        self.assertEqual(len(self.done), 1)
        steps = self.done[0]
        self.assertEqual([s.name for s in steps], list(CFOP_STEPS))
        self.assertEqual([s.elapsed for s in steps], [1200, 3400, 800, 600])
        self.assertEqual(self.timer.current_step, "Cross")
        self.assertEqual(self.timer.completed_steps, [])
        self.assertFalse(self.timer.running)

    def test_partial_progress_and_snapshot(self) -> None:
        self.run_steps([1000, 2000])
        self.timer.start_step()
        self.clock.advance(500)
        snap = self.timer.snapshot()
        self.assertEqual(snap.step_name, "OLL")
        self.assertTrue(snap.running)
        self.assertEqual(snap.current_ms, 500.0)
        self.assertEqual(snap.total_ms, 3500.0)
        self.assertEqual(self.done, [])

    def test_complete_without_start_is_a_noop(self) -> None:
        self.assertIsNone(self.timer.complete_step())
        self.assertEqual(self.timer.current_step_index, 0)

    def test_reset_discards_progress(self) -> None:
        self.run_steps([1000, 2000])
        self.timer.start_step()
        self.timer.reset()
        self.assertEqual(self.timer.current_step_index, 0)
        self.assertEqual(self.timer.completed_steps, [])
        self.assertFalse(self.timer.tick_active)
        self.assertEqual(self.done, [])

    def test_tick_stops_between_steps(self) -> None:
        self.timer.start_step()
        self.assertTrue(self.timer.tick_active)
        self.timer.complete_step()
        self.assertFalse(self.timer.tick_active)
        self.assertEqual(self.ticks.live, [])


class IndividualStepTimersTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = ManualClock()
        self.laps = []
        self.timers = IndividualStepTimers(self.clock, on_complete=self.laps.append)

    def test_toggle_records_a_lap(self) -> None:
        self.timers.toggle("OLL")
        self.clock.advance(2500)
        lap = self.timers.toggle("OLL")
        self.assertEqual(lap.step, "OLL")
        self.assertEqual(lap.elapsed_ms, 2500)
        self.assertEqual(self.laps, [lap])
        self.assertIsNone(self.timers.active_step)

    def test_starting_another_step_discards_the_active_one(self) -> None:
        self.timers.start("Cross")
        self.clock.advance(4000)
        self.timers.start("F2L")
        self.clock.advance(1000)
        lap = self.timers.stop()
        self.assertEqual((lap.step, lap.elapsed_ms), ("F2L", 1000))
        self.assertEqual(len(self.laps), 1)

    def test_unknown_step_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.timers.start("ZBLL")

    def test_stop_and_reset_when_idle(self) -> None:
        self.assertIsNone(self.timers.stop())
        self.timers.start("PLL")
        self.timers.reset()
        self.assertIsNone(self.timers.stop())
        self.assertEqual(self.timers.snapshot().current_ms, 0.0)
        self.assertEqual(self.laps, [])


if __name__ == "__main__":
    unittest.main()
