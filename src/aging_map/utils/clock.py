"""Controllable clock for replaying timelines against an ``AgingMap``."""

import threading


class ManualClock:
    """Monotonic clock that only moves when told to.

    Instances are callable, so they can be passed as the ``clock`` argument
    of ``AgingMap``.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._lock = threading.Lock()

    def __call__(self) -> float:
        with self._lock:
            return self._now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError("A monotonic clock cannot move backwards")
        with self._lock:
            self._now += seconds
            return self._now

    def set(self, now: float) -> None:
        with self._lock:
            if now < self._now:
                raise ValueError("A monotonic clock cannot move backwards")
            self._now = float(now)
