"""Millisecond clocks used for timestamps and deferred tasks."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        ...

    def sleep(self, delay_ms: float) -> None:
        ...


class SystemClock:
    """Wall clock in unix milliseconds."""

    def now(self) -> int:
        return int(time.time() * 1000)

    def sleep(self, delay_ms: float) -> None:
        if delay_ms > 0:
            time.sleep(delay_ms / 1000.0)


class ManualClock:
    """Clock that only moves when told to; ``sleep`` advances it."""

    def __init__(self, start: int = 0) -> None:
        self._now = int(start)

    def now(self) -> int:
        return self._now

    def advance(self, delta_ms: int) -> int:
        self._now += int(delta_ms)
        return self._now

    def sleep(self, delay_ms: float) -> None:
        if delay_ms > 0:
            self.advance(int(delay_ms))
