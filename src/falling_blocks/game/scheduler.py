from __future__ import annotations

import threading
from typing import Callable, Optional, Protocol


TickCallback = Callable[[], None]


class Scheduler(Protocol):
    """External timer that invokes the bound callback once per period."""

    def bind(self, callback: TickCallback) -> None:
        ...

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...

    def set_period_millis(self, period_millis: int) -> None:
        ...


def _check_period(period_millis: int) -> int:
    period_millis = int(period_millis)
    if period_millis <= 0:
        raise ValueError(f"period must be positive, got {period_millis}")
    return period_millis


class ManualScheduler:
    """Deterministic scheduler driven by explicit ``advance()`` calls.

    Time only moves when the owner says so, which makes it suitable for
    tests and headless runs. A period change made from inside the callback
    applies to the following interval.
    """

    def __init__(self, period_millis: int = 1000) -> None:
        self.period_millis = _check_period(period_millis)
        self.callback: Optional[TickCallback] = None
        self.running = False
        self.elapsed = 0

    def bind(self, callback: TickCallback) -> None:
        self.callback = callback

    def start(self) -> None:
        if not self.running:
            self.running = True
            self.elapsed = 0

    def stop(self) -> None:
        self.running = False

    def set_period_millis(self, period_millis: int) -> None:
        self.period_millis = _check_period(period_millis)

    def advance(self, millis: int) -> int:
        """Let ``millis`` pass and return how many times the callback fired."""
        fired = 0
        if not self.running:
            return fired
        self.elapsed += int(millis)
        while self.running and self.callback is not None and self.elapsed >= self.period_millis:
            self.elapsed -= self.period_millis
            self.callback()
            fired += 1
        return fired


class ThreadingScheduler:
    """Re-arming ``threading.Timer`` that fires on a daemon thread.

    The callback runs outside the scheduler lock, so it may call ``stop()``
    or ``set_period_millis()`` itself. A new period is picked up when the
    timer is re-armed after the in-flight firing.
    """

    def __init__(self, period_millis: int = 1000) -> None:
        self.period_millis = _check_period(period_millis)
        self.callback: Optional[TickCallback] = None
        self.running = False
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._sync_lock = threading.Lock()

    def bind(self, callback: TickCallback) -> None:
        self.callback = callback

    def start(self) -> None:
        with self._sync_lock:
            if self.running:
                return
            self.running = True
            self._generation += 1
            self._arm(self._generation)

    def stop(self) -> None:
        with self._sync_lock:
            self.running = False
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def set_period_millis(self, period_millis: int) -> None:
        with self._sync_lock:
            self.period_millis = _check_period(period_millis)

    def _arm(self, generation: int) -> None:
        self._timer = threading.Timer(self.period_millis / 1000.0, self._fire, (generation,))
        self._timer.daemon = True
        self._timer.start()

    def _fire(self, generation: int) -> None:
        with self._sync_lock:
            if not self.running or generation != self._generation:
                return
            callback = self.callback
        if callback is not None:
            callback()
        with self._sync_lock:
            if self.running and generation == self._generation:
                self._arm(generation)
