"""Tick-wait strategies: block until the clock passes a given millisecond.

Used by IdGenerator when the per-millisecond sequence space is exhausted.
Default is an unbounded spin; max_wait_ms turns a stalled clock into
ClockStalledError instead of an endless loop.
"""
import time
from collections.abc import Callable
from typing import Protocol

from src.sf_common.errors import ClockStalledError
from src.sf_generator.engine.clock import ClockProtocol


class TickWaiterProtocol(Protocol):
    def wait_past(self, clock: ClockProtocol, last_timestamp_ms: int) -> int: ...


class _TickWait:
    """Sampling loop and deadline shared by the concrete strategies."""

    def __init__(
        self,
        max_wait_ms: int | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_wait_ms is not None and max_wait_ms < 0:
            raise ValueError(f"max_wait_ms must be non-negative, got {max_wait_ms}")
        self._max_wait_ms = max_wait_ms
        self._monotonic = monotonic

    @property
    def max_wait_ms(self) -> int | None:
        return self._max_wait_ms

    def wait_past(self, clock: ClockProtocol, last_timestamp_ms: int) -> int:
        """Return the first clock reading strictly greater than last_timestamp_ms."""
        started = self._monotonic()
        timestamp = clock.now_ms()
        while timestamp <= last_timestamp_ms:
            if self._max_wait_ms is not None:
                elapsed_ms = (self._monotonic() - started) * 1000
                if elapsed_ms >= self._max_wait_ms:
                    raise ClockStalledError(last_timestamp_ms, round(elapsed_ms))
            self._pause()
            timestamp = clock.now_ms()
        return timestamp

    def _pause(self) -> None:
        raise NotImplementedError


class SpinWait(_TickWait):
    """Re-sample the clock in a tight loop until it advances."""

    def _pause(self) -> None:
        pass


class SleepWait(_TickWait):
    """Sleep between samples; yields the CPU on coarse clocks."""

    def __init__(
        self,
        interval_s: float = 0.0001,
        max_wait_ms: int | None = None,
        monotonic: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval_s < 0:
            raise ValueError(f"interval_s must be non-negative, got {interval_s}")
        super().__init__(max_wait_ms=max_wait_ms, monotonic=monotonic)
        self._interval_s = interval_s
        self._sleep = sleep

    def _pause(self) -> None:
        self._sleep(self._interval_s)
