"""
Clock — источник текущего времени (UNIX seconds).

Все time-priced вычисления (цена аукциона, birth_time) берут "now" из
инжектированных часов, а не из time.time() напрямую.
"""

import time
from typing import Protocol

from src.core.errors import InvalidArgumentError


class Clock(Protocol):
    """Источник текущего времени."""

    def now(self) -> int:
        ...


class SystemClock:
    """Часы на основе системного времени."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """
    Управляемые часы для тестов и симуляций.

    Время никогда не идёт назад: advance() принимает только неотрицательные
    сдвиги, set() — только значения не меньше текущего.
    """

    def __init__(self, start: int = 1_500_000_000):
        if start < 0:
            raise InvalidArgumentError(f"start must be non-negative, got {start}")
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise InvalidArgumentError(f"seconds must be non-negative, got {seconds}")
        self._now += seconds
        return self._now

    def set(self, timestamp: int) -> None:
        if timestamp < self._now:
            raise InvalidArgumentError(
                f"timestamp {timestamp} is before current time {self._now}"
            )
        self._now = timestamp
