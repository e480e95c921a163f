from __future__ import annotations

from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Default wall-clock implementation."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class MonotonicUtcClock:
    """UTC wall clock that never returns the same instant twice.

    If the system clock has not advanced (or went backwards) since the last
    call, the previous reading plus one microsecond is returned instead.
    """

    _TICK = timedelta(microseconds=1)

    def __init__(self, source: Clock | None = None) -> None:
        self._source = source or SystemClock()
        self._last: datetime | None = None
        self._lock = Lock()

    def now(self) -> datetime:
        current = self._source.now()
        with self._lock:
            if self._last is not None and current <= self._last:
                current = self._last + self._TICK
            self._last = current
        return current
