"""Clock sources for the generator.

The algorithm only needs "current wall-clock time in milliseconds"; it tolerates
forward jumps and detects regressions itself.
"""
import time
from typing import Protocol


class ClockProtocol(Protocol):
    def now_ms(self) -> int: ...


class SystemClock:
    """Wall clock, milliseconds since the Unix epoch. May regress (NTP)."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000
