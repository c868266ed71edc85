import unittest

from cubetimer.app.keybindings import build_keymap, dispatch_key, normalize_key
from cubetimer.app.session import TimerSession
from cubetimer.clock import ManualClock
from cubetimer.config.config import validate_config
from cubetimer.scramble import parse_scramble
from cubetimer.storage.store import KEY_INSPECTION_CONFIG, MemoryStore
from cubetimer.timing.solve_timer import SolvePhase
from tests.helpers import FakeTickFactory


class TimerSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryStore()
        self.clock = ManualClock()
        self.ticks = FakeTickFactory()
        self.session = TimerSession(self.store, clock=self.clock, tick_factory=self.ticks)

    def test_solve_is_recorded_with_new_scramble(self) -> None:
        self.assertIsNone(self.session.toggle_solve())
        self.clock.advance(9000)
        rec = self.session.toggle_solve()
        self.assertEqual((rec.id, rec.elapsed, rec.penalty), (1, 9000, 0))
        self.assertTrue(rec.is_personal_best)
        self.assertGreaterEqual(len(parse_scramble(self.session.scramble_text)), 20)

    def test_inspection_penalty_is_recorded(self) -> None:
        self.session.update_inspection_config(enabled=True, duration_seconds=10)
        self.session.start_or_inspect()
        self.clock.advance(11000)
        self.session.start_or_inspect()
        self.clock.advance(5000)
        rec = self.session.stop()
        self.assertEqual((rec.elapsed, rec.raw_elapsed, rec.penalty), (7000, 5000, 2000))

    def test_inspection_config_is_persisted(self) -> None:
        self.session.update_inspection_config(enabled=True, warning_threshold_seconds=5)
        stored = self.store.load(KEY_INSPECTION_CONFIG)
        self.assertTrue(stored["enabled"])
        self.assertEqual(TimerSession(self.store, clock=self.clock).inspection.warning_threshold_seconds, 5)
        with self.assertRaises(ValueError):
            self.session.update_inspection_config(duration_seconds=-1)
        self.assertTrue(self.session.inspection.enabled)

    def test_step_solve_is_recorded(self) -> None:
        rec = None
        for ms in (1200, 3400, 800, 600):
            self.assertIsNone(self.session.advance_step())
            self.clock.advance(ms)
            rec = self.session.advance_step()
        self.assertIsNotNone(rec)
        self.assertEqual(rec.total, 6000)
        self.assertTrue(rec.is_personal_best)
        self.assertEqual(self.session.step_statistics()["best"], 6000)

    def test_delete_and_clear(self) -> None:
        for ms in (1200, 1000, 1800):
            self.session.start_or_inspect()
            self.clock.advance(ms)
            self.session.stop()
        self.assertTrue(self.session.delete_solve(2))
        self.assertFalse(self.session.delete_solve(2))
        self.assertEqual(self.session.solves.personal_best().elapsed, 1200)
        self.session.clear_all_solves()
        self.assertEqual(self.session.statistics()["count"], 0)

    def test_reset_active_cancels_what_is_running(self) -> None:
        self.session.start_or_inspect()
        self.session.reset_active()
        self.assertIs(self.session.solve_timer.phase, SolvePhase.IDLE)
        self.session.advance_step()
        self.session.reset_active()
        self.assertFalse(self.session.step_timer.running)
        self.session.toggle_individual_step("OLL")
        self.session.reset_active()
        self.assertIsNone(self.session.individual_timers.active_step)
        self.assertEqual(self.session.solves.count, 0)
        self.assertEqual(self.ticks.live, [])

    def test_failed_writes_do_not_interrupt_timing(self) -> None:
        self.store.fail_writes = True
        self.session.start_or_inspect()
        self.clock.advance(4000)
        rec = self.session.stop()
        self.assertEqual(rec.elapsed, 4000)
        self.assertFalse(self.session.solves.last_save_ok)

    def test_individual_steps_go_to_the_log(self) -> None:
        self.session.toggle_individual_step("Cross")
        self.clock.advance(1800)
        lap = self.session.toggle_individual_step("Cross")
        self.assertEqual(lap.elapsed_ms, 1800)
        self.assertEqual(self.session.individual_log.step_best("Cross"), 1800)
        self.session.clear_individual_records()
        self.assertEqual(self.session.individual_log.records, [])


class KeyBindingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = ManualClock()
        self.session = TimerSession(MemoryStore(), clock=self.clock, auto_scramble=False)
        self.keymap = build_keymap(validate_config({})["keys"])

    def test_normalize(self) -> None:
        self.assertEqual(normalize_key(" "), "space")
        self.assertEqual(normalize_key("\r"), "enter")
        self.assertEqual(normalize_key("Esc"), "escape")
        self.assertEqual(normalize_key("C"), "c")

    def test_space_toggles_solve(self) -> None:
        self.assertEqual(dispatch_key(self.session, self.keymap, " "), "solve")
        self.clock.advance(3000)
        dispatch_key(self.session, self.keymap, "space")
        self.assertEqual(self.session.solves.values(), [3000])
        self.assertEqual(self.session.scramble_text, "")

    def test_enter_advances_steps_and_escape_resets(self) -> None:
        dispatch_key(self.session, self.keymap, "\n")
        self.assertTrue(self.session.step_timer.running)
        dispatch_key(self.session, self.keymap, "\x1b")
        self.assertFalse(self.session.step_timer.running)

    def test_step_hotkeys_and_unbound_keys(self) -> None:
        self.assertEqual(dispatch_key(self.session, self.keymap, "f"), "step:F2L")
        self.clock.advance(2500)
        dispatch_key(self.session, self.keymap, "F")
        self.assertEqual(self.session.individual_log.times("F2L"), [2500])
        self.assertIsNone(dispatch_key(self.session, self.keymap, "z"))


if __name__ == "__main__":
    unittest.main()
