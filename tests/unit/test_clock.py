from __future__ import annotations

from datetime import datetime, timedelta, timezone

from chama_chat.application.ports.clock import MonotonicUtcClock, SystemClock


class FrozenClock:
    def __init__(self, *readings: datetime) -> None:
        self._readings = list(readings)

    def now(self) -> datetime:
        return self._readings.pop(0)


T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def test_system_clock_is_utc():
    assert SystemClock().now().tzinfo is timezone.utc


def test_monotonic_clock_passes_through_advancing_time():
    clock = MonotonicUtcClock(FrozenClock(T0, T0 + timedelta(seconds=2)))

    assert clock.now() == T0
    assert clock.now() == T0 + timedelta(seconds=2)


def test_monotonic_clock_breaks_ties():
    clock = MonotonicUtcClock(FrozenClock(T0, T0, T0))

    readings = [clock.now(), clock.now(), clock.now()]

    assert readings == [
        T0,
        T0 + timedelta(microseconds=1),
        T0 + timedelta(microseconds=2),
    ]


def test_monotonic_clock_survives_backwards_step():
    clock = MonotonicUtcClock(FrozenClock(T0, T0 - timedelta(minutes=5)))

    first, second = clock.now(), clock.now()

    assert second > first
