from __future__ import annotations

from typing import Callable, List


class FakeTick:
    """Tick that never fires on its own; tests call ``fire`` explicitly."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.active = False

    def start(self) -> None:
        self.active = True

    def cancel(self) -> None:
        self.active = False

    def fire(self) -> None:
        if self.active:
            self.callback()


class FakeTickFactory:
    def __init__(self) -> None:
        self.made: List[FakeTick] = []

    def __call__(self, callback: Callable[[], None]) -> FakeTick:
        t = FakeTick(callback)
        self.made.append(t)
        return t

    @property
    def live(self) -> List[FakeTick]:
        return [t for t in self.made if t.active]
