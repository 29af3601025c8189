"""Snowflake domain models — pure dataclasses."""
from dataclasses import dataclass
from datetime import datetime

from src.sf_common.datetime_utils import ms_to_datetime


@dataclass(frozen=True)
class SnowflakeParts:
    """The four fields packed into one id."""

    timestamp_ms: int  # raw wall-clock ms (epoch already added back)
    datacenter_id: int
    worker_id: int
    sequence: int

    @property
    def created_at(self) -> datetime:
        return ms_to_datetime(self.timestamp_ms)


@dataclass
class GeneratorStats:
    """Counters exposed by IdGenerator.stats (snapshot copy)."""

    ids_generated: int = 0
    sequence_exhaustions: int = 0
    clock_regressions: int = 0
    total_wait_s: float = 0.0  # time spent blocked waiting for the next millisecond
    last_regression_ms: int | None = None
