import threading
import time
import unittest
from unittest import mock

from cubetimer.clock import ManualClock, MonotonicClock
from cubetimer.config.inspection import InspectionConfig
from cubetimer.timing.individual import IndividualStepTimers
from cubetimer.timing.solve_timer import SolvePhase, SolveTimer
from cubetimer.timing.step_timer import StepTimer
from cubetimer.timing.ticker import Ticker, ticker_factory


class StallingClock(ManualClock):
    """Clock whose reads from a tick thread stall, so a stop can land mid-callback."""

    def __init__(self, stall_s: float = 0.2) -> None:
        super().__init__()
        self.stall_s = stall_s
        self.in_tick = threading.Event()

    def now(self) -> float:
        if threading.current_thread() is not threading.main_thread():
            self.in_tick.set()
            time.sleep(self.stall_s)
        return super().now()


class ClockTests(unittest.TestCase):
    def test_manual_clock_moves_only_forward(self) -> None:
        clock = ManualClock(100)
        clock.advance(250)
        clock.advance_s(1.5)
        self.assertEqual(clock.now(), 1850.0)
        with self.assertRaises(ValueError):
            clock.advance(-1)

    def test_monotonic_clock_is_non_decreasing(self) -> None:
        clock = MonotonicClock()
        a = clock.now()
        b = clock.now()
        self.assertGreaterEqual(b, a)


class TickerTests(unittest.TestCase):
    def test_fires_until_cancelled(self) -> None:
        fired = threading.Event()
        ticker = Ticker(1, fired.set)
        ticker.start()
        try:
            self.assertTrue(fired.wait(2.0))
            self.assertTrue(ticker.active)
        finally:
            ticker.cancel()
        self.assertFalse(ticker.active)

    def test_context_manager_and_factory(self) -> None:
        calls = []
        make = ticker_factory(5)
        with make(lambda: calls.append(1)) as ticker:
            self.assertTrue(ticker.active)
        self.assertFalse(ticker.active)

    def test_cancel_waits_for_callback_in_flight(self) -> None:
        entered = threading.Event()
        calls = []

        def slow() -> None:
            entered.set()
            time.sleep(0.2)
            calls.append("done")

        ticker = Ticker(1, slow)
        ticker.start()
        self.assertTrue(entered.wait(2.0))
        ticker.cancel()
        self.assertEqual(calls, ["done"])
        time.sleep(0.05)
        self.assertEqual(calls, ["done"])

    def test_callback_may_cancel_its_own_tick(self) -> None:
        done = threading.Event()
        holder = {}

        def stop_self() -> None:
            holder["ticker"].cancel()
            done.set()

        holder["ticker"] = Ticker(1, stop_self)
        holder["ticker"].start()
        self.assertTrue(done.wait(2.0))
        self.assertFalse(holder["ticker"].active)


class StopDuringTickTests(unittest.TestCase):
    def setUp(self) -> None:
        self.errors = []
        self.snapshots = []
        self.clock = StallingClock()
        patcher = mock.patch.object(threading, "excepthook", lambda args: self.errors.append(args.exc_type.__name__))
        patcher.start()
        self.addCleanup(patcher.stop)

    def assert_quiet_after(self, stop) -> None:
        self.assertTrue(self.clock.in_tick.wait(2.0))
        stop()
        published = len(self.snapshots)
        time.sleep(0.3)
        self.assertEqual(self.errors, [])
        self.assertEqual(len(self.snapshots), published)

    def test_solve_stop(self) -> None:
        timer = SolveTimer(InspectionConfig(), self.clock, tick_factory=ticker_factory(1), on_tick=self.snapshots.append)
        timer.start_or_inspect()
        self.assert_quiet_after(timer.stop)
        self.assertIs(timer.phase, SolvePhase.IDLE)
        self.assertFalse(timer.tick_active)

    def test_solve_reset_during_inspection(self) -> None:
        timer = SolveTimer(
            InspectionConfig(enabled=True), self.clock, tick_factory=ticker_factory(1), on_tick=self.snapshots.append
        )
        timer.start_or_inspect()
        self.assert_quiet_after(timer.reset)

    def test_step_complete(self) -> None:
        timer = StepTimer(self.clock, tick_factory=ticker_factory(1), on_tick=self.snapshots.append)
        timer.start_step()
        self.assert_quiet_after(timer.complete_step)
        self.assertEqual(len(timer.completed_steps), 1)

    def test_individual_stop(self) -> None:
        timers = IndividualStepTimers(self.clock, tick_factory=ticker_factory(1), on_tick=self.snapshots.append)
        timers.start("OLL")
        self.assert_quiet_after(timers.stop)


if __name__ == "__main__":
    unittest.main()
