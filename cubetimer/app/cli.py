from __future__ import annotations

"""CLI for cubetimer using TimerSession."""

import argparse
import sys
from typing import Any, Dict, Optional

from .. import __version__
from ..config.config import load_config, validate_config
from ..config.inspection import INSPECTION_DURATIONS, WARNING_THRESHOLDS
from ..results.schema import STEP_LABELS
from ..scramble import format_scramble, generate_scramble
from ..stats.stats import format_summary, format_time
from ..storage.store import JsonFileStore, KeyValueStore, MemoryStore
from ..timing.individual import IndividualSnapshot
from ..timing.solve_timer import SolvePhase, SolveSnapshot
from ..timing.step_timer import StepSnapshot
from ..timing.ticker import ticker_factory
from ..util.randomness import make_rng, resolve_seed, seed_if_needed
from .keybindings import build_keymap, dispatch_key
from .session import TimerSession


def _make_store(cfg: Dict[str, Any]) -> KeyValueStore:
    storage = cfg["storage"]
    if storage["backend"] == "memory":
        return MemoryStore()
    return JsonFileStore(storage["data_dir"])


def _render(snap: Any) -> str:
    if isinstance(snap, SolveSnapshot):
        if snap.phase is SolvePhase.INSPECTING:
            if snap.penalty_pending:
                return "PENALTY +2s - press Enter to start"
            flag = " (!)" if snap.warning else ""
            return f"Inspection: {snap.inspection_remaining_s:.1f}s left{flag}"
        return format_time(snap.elapsed_ms)
    if isinstance(snap, StepSnapshot):
        return f"{snap.step_name}: {format_time(snap.current_ms)}  total {format_time(snap.total_ms)}"
    if isinstance(snap, IndividualSnapshot) and snap.active_step:
        return f"{snap.active_step}: {format_time(snap.current_ms)}"
    return ""


def _print_tick(snap: Any) -> None:
    sys.stdout.write("\r" + _render(snap).ljust(48))
    sys.stdout.flush()


def _open_session(cfg: Dict[str, Any], *, live: bool) -> TimerSession:
    seed = resolve_seed(cfg["scramble"].get("seed"))
    return TimerSession(
        _make_store(cfg),
        tick_factory=ticker_factory(cfg["display"]["tick_interval_ms"]) if live else None,
        on_tick=_print_tick if live else None,
        rng=make_rng(seed) if seed is not None else None,
        auto_scramble=bool(cfg["scramble"].get("auto_new_after_solve", True)),
    )


def _confirm(prompt: str) -> bool:
    return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


def _run_solves(session: TimerSession) -> None:
    keymap = {"enter": "solve", "r": "reset", "escape": "reset"}
    print("Enter: start/stop (starts inspection when enabled) | s: new scramble | r: reset | q: quit")
    print(f"Scramble: {session.generate_scramble()}")
    while True:
        line = input()
        cmd = line.strip().lower()
        if cmd == "q":
            session.reset_solve_timer()
            return
        if cmd == "s":
            print(f"Scramble: {session.generate_scramble()}")
            continue
        before = session.solves.count
        if dispatch_key(session, keymap, cmd or "enter") is None:
            continue
        snap = session.solve_timer.snapshot()
        if session.solves.count > before:
            rec = session.solves.records[-1]
            pen = " (+2)" if rec.penalty else ""
            pb = "  NEW PB!" if rec.is_personal_best else ""
            print(f"\r#{rec.id}: {format_time(rec.elapsed)}{pen}{pb}".ljust(48))
            print(f"Ao5: {format_time(session.solves.average_of_n(5))}  Ao12: {format_time(session.solves.average_of_n(12))}")
            print(f"Scramble: {session.scramble_text}")
        elif snap.phase is SolvePhase.IDLE:
            print("\rReset.".ljust(48))
        else:
            print(f"\r{_render(snap)}".ljust(48))


def _run_steps(session: TimerSession) -> None:
    keymap = {"enter": "advance", "r": "reset", "escape": "reset"}
    print("Enter: start/complete step | r: reset | q: quit")
    print(f"Scramble: {session.generate_scramble()}")
    while True:
        cmd = input().strip().lower()
        if cmd == "q":
            session.reset_step_timer()
            return
        before = session.step_solves.count
        if dispatch_key(session, keymap, cmd or "enter") is None:
            continue
        if session.step_solves.count > before:
            rec = session.step_solves.records[-1]
            parts = "  ".join(f"{s.name} {format_time(s.elapsed)}" for s in rec.steps)
            pb = "  NEW PB!" if rec.is_personal_best else ""
            print(f"\r#{rec.id}: {parts}  = {format_time(rec.total)}{pb}".ljust(48))
            print(f"Scramble: {session.scramble_text}")
        else:
            snap = session.step_timer.snapshot()
            state = "running" if snap.running else "ready"
            print(f"\r{STEP_LABELS[snap.step_name]} {state}".ljust(48))


def _run_individual(session: TimerSession, keys_cfg: Dict[str, Any]) -> None:
    keymap = build_keymap(keys_cfg)
    keymap = {k: v for k, v in keymap.items() if v.startswith("step:") or v == "reset"}
    hints = ", ".join(f"{k}: {v.split(':', 1)[1]}" for k, v in keymap.items() if v.startswith("step:"))
    print(f"{hints} (type the key and Enter to start/stop) | q: quit")
    while True:
        cmd = input().strip().lower()
        if cmd == "q":
            session.reset_individual_step()
            return
        before = len(session.individual_log.records)
        if dispatch_key(session, keymap, cmd) is None:
            continue
        if len(session.individual_log.records) > before:
            rec = session.individual_log.records[-1]
            print(f"\r{rec.step}: {format_time(rec.elapsed)}  best {format_time(session.individual_log.step_best(rec.step))}".ljust(48))


def _print_history(session: TimerSession, steps: bool, last: int) -> None:
    hist = session.step_solves if steps else session.solves
    if not hist.records:
        print("No solves recorded yet.")
        return
    for rec in list(hist.records)[-last:][::-1]:
        ts = rec.recorded_at.astimezone().strftime("%Y-%m-%d %H:%M")
        pb = " PB" if rec.is_personal_best else ""
        if steps:
            parts = " ".join(f"{s.name}={format_time(s.elapsed)}" for s in rec.steps)
            print(f"#{rec.id:<4} {ts}  {format_time(rec.total):>8}  {parts}{pb}")
        else:
            pen = " +2" if rec.penalty else ""
            print(f"#{rec.id:<4} {ts}  {format_time(rec.elapsed):>8}{pen}{pb}")


def _print_stats(session: TimerSession, steps: bool, plot: Optional[str]) -> None:
    from ..analytics import (
        AnalyticsConfig,
        compute_metrics,
        ewma_by_solve,
        plot_step_breakdown,
        plot_trend,
        solves_frame,
        step_breakdown,
        step_solves_frame,
    )

    if steps:
        print(format_summary(session.step_statistics()))
        df = step_solves_frame(session.step_solves.records)
        bd = step_breakdown(df)
        print("\nPer step (sequential):")
        for name, row in bd.iterrows():
            mean_ms = None if row["mean_ms"] != row["mean_ms"] else row["mean_ms"]
            best_ms = None if row["best_ms"] != row["best_ms"] else row["best_ms"]
            print(f"  {name:<6} n={int(row['count']):<4} mean {format_time(mean_ms):>8}  best {format_time(best_ms):>8}")
        print("\nPer step (individual timers):")
        for name, st in session.individual_log.per_step().items():
            print(f"  {name:<6} mean {format_time(st['mean']):>8}  best {format_time(st['best']):>8}")
        if plot and not plot_step_breakdown(df, save_path=plot):
            print("Nothing to plot yet.")
        return

    print(format_summary(session.statistics()))
    if plot:
        cfg = AnalyticsConfig()
        df = ewma_by_solve(compute_metrics(solves_frame(session.solves.records), cfg), "elapsed_ms", cfg.smoothing_span)
        if plot_trend(df, save_path=plot):
            print(f"Saved plot to {plot}")
        else:
            print("Nothing to plot yet.")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="cubetimer")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--explain", action="store_true", help="Trace timing milestones")
    p.add_argument("--explain-only", default=None, help="Comma-separated event names to trace (implies --explain)")
    p.add_argument("--version", action="version", version=f"cubetimer {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sc = sub.add_parser("scramble")
    sc.add_argument("--count", type=int, default=1)
    sc.add_argument("--seed", type=int, default=None)

    sub.add_parser("run")
    sub.add_parser("steps")
    sub.add_parser("individual")

    st = sub.add_parser("stats")
    st.add_argument("--steps", action="store_true")
    st.add_argument("--plot", default=None, help="Save a PNG chart to this path")

    hp = sub.add_parser("history")
    hp.add_argument("--steps", action="store_true")
    hp.add_argument("--last", type=int, default=20)

    dp = sub.add_parser("delete")
    dp.add_argument("id", type=int)
    dp.add_argument("--steps", action="store_true")

    cp = sub.add_parser("clear")
    group = cp.add_mutually_exclusive_group()
    group.add_argument("--steps", action="store_true")
    group.add_argument("--individual", action="store_true")
    cp.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    ip = sub.add_parser("inspection")
    ip.add_argument("--enable", dest="enabled", action="store_true")
    ip.add_argument("--disable", dest="enabled", action="store_false")
    ip.set_defaults(enabled=None)
    ip.add_argument("--duration", type=int, choices=INSPECTION_DURATIONS, default=None)
    ip.add_argument("--warnings", dest="show_warnings", action="store_true")
    ip.add_argument("--no-warnings", dest="show_warnings", action="store_false")
    ip.set_defaults(show_warnings=None)
    ip.add_argument("--warning-at", type=int, choices=WARNING_THRESHOLDS, default=None)

    args = p.parse_args(argv)

    if args.explain or args.explain_only:
        from .explain import enable as explain_enable
        only = [e.strip() for e in args.explain_only.split(",") if e.strip()] if args.explain_only else None
        explain_enable(True, only)
    seed_if_needed()

    if args.cmd == "scramble":
        rng = make_rng(args.seed) if args.seed is not None else None
        for _ in range(max(1, args.count)):
            print(format_scramble(generate_scramble(rng)))
        return 0

    cfg = validate_config(load_config(args.config))
    live = args.cmd in ("run", "steps", "individual")
    session = _open_session(cfg, live=live)

    try:
        if args.cmd == "run":
            _run_solves(session)
        elif args.cmd == "steps":
            _run_steps(session)
        elif args.cmd == "individual":
            _run_individual(session, cfg["keys"])
    except (EOFError, KeyboardInterrupt):
        session.reset_solve_timer()
        session.reset_step_timer()
        session.reset_individual_step()
        print()
    if live:
        return 0

    if args.cmd == "stats":
        _print_stats(session, args.steps, args.plot)
        return 0

    if args.cmd == "history":
        _print_history(session, args.steps, max(1, args.last))
        return 0

    if args.cmd == "delete":
        ok = session.delete_step(args.id) if args.steps else session.delete_solve(args.id)
        if not ok:
            print(f"No record with id {args.id}.", file=sys.stderr)
            return 1
        print(f"Deleted #{args.id}.")
        return 0

    if args.cmd == "clear":
        what = "individual step records" if args.individual else ("step solves" if args.steps else "solves")
        if not args.yes and not _confirm(f"Delete all {what}? This cannot be undone."):
            print("Cancelled.")
            return 1
        if args.individual:
            session.clear_individual_records()
        elif args.steps:
            session.clear_all_steps()
        else:
            session.clear_all_solves()
        print(f"Cleared {what}.")
        return 0

    if args.cmd == "inspection":
        partial = {
            k: v
            for k, v in (
                ("enabled", args.enabled),
                ("duration_seconds", args.duration),
                ("show_warnings", args.show_warnings),
                ("warning_threshold_seconds", args.warning_at),
            )
            if v is not None
        }
        cfg_now = session.update_inspection_config(**partial) if partial else session.inspection
        for k, v in cfg_now.to_json().items():
            print(f"{k}: {v}")
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
