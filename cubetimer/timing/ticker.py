from __future__ import annotations

"""Cancellable repeating display tick.

The tick only reads state and publishes it; it never drives a transition.
A machine starts one when it enters a timed phase and cancels it on every exit.
"""

import threading
from typing import Callable, Optional, Protocol


class Tick(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


TickFactory = Callable[[Callable[[], None]], Tick]


class Ticker:
    def __init__(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self.interval_s = max(1, int(interval_ms)) / 1000.0
        self.callback = callback
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        # Held for the whole callback; reentrant so a callback may cancel its own tick.
        self._callback_lock = threading.RLock()
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        with self._lock:
            self._active = True
            self._arm()

    def cancel(self) -> None:
        """Stop the tick. Returns only after any in-flight callback has finished."""
        with self._lock:
            self._active = False
            if self._timer:
                self._timer.cancel()
                self._timer = None
        with self._callback_lock:
            pass

    def _arm(self) -> None:
        if self._timer:
            self._timer.cancel()
        self._timer = threading.Timer(self.interval_s, self._fire)
        self._timer.daemon = True
        self._timer.start()

    def _fire(self) -> None:
        with self._callback_lock:
            with self._lock:
                if not self._active:
                    return
            try:
                self.callback()
            finally:
                with self._lock:
                    if self._active:
                        self._arm()

    def __enter__(self) -> "Ticker":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.cancel()


class TickOwner:
    """Base for machines that own at most one display tick at a time."""

    def __init__(self, tick_factory: Optional[TickFactory], on_tick: Optional[Callable[[object], None]]) -> None:
        self._tick_factory = tick_factory
        self._on_tick = on_tick
        self._tick: Optional[Tick] = None

    @property
    def tick_active(self) -> bool:
        return self._tick is not None and self._tick.active

    def snapshot(self) -> object:
        raise NotImplementedError

    def _restart_tick(self) -> None:
        self._stop_tick()
        if self._tick_factory is None:
            return
        self._tick = self._tick_factory(self._publish)
        self._tick.start()

    def _stop_tick(self) -> None:
        if self._tick is not None:
            self._tick.cancel()
            self._tick = None

    def _publish(self) -> None:
        if self._on_tick is not None:
            self._on_tick(self.snapshot())


def ticker_factory(interval_ms: int) -> TickFactory:
    """Build a factory the timing machines use to create their display tick."""

    def make(callback: Callable[[], None]) -> Tick:
        return Ticker(interval_ms, callback)

    return make
