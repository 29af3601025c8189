"""IdGenerator — thread-safe Twitter-Snowflake style 64-bit id generator.

One long-lived instance per worker. (last_timestamp, sequence) is the only
shared mutable state and is read-checked-mutated under a single lock.
"""
import dataclasses
import logging
import threading
import time

from src.sf_common.errors import (
    ClockMovedBackwardsError,
    InvalidIdentityError,
    TimestampOutOfRangeError,
)
from src.sf_generator.domain.codec import decode_id
from src.sf_generator.domain.layout import DEFAULT_LAYOUT, BitLayout
from src.sf_generator.domain.models import GeneratorStats, SnowflakeParts
from src.sf_generator.engine.clock import ClockProtocol, SystemClock
from src.sf_generator.engine.wait import SpinWait, TickWaiterProtocol

logger = logging.getLogger(__name__)


def _validate_identity(field: str, value: int, max_value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field} must be an int, got {type(value).__name__}")
    if not (0 <= value <= max_value):
        raise InvalidIdentityError(field, value, max_value)


class IdGenerator:
    def __init__(
        self,
        worker_id: int,
        datacenter_id: int,
        layout: BitLayout = DEFAULT_LAYOUT,
        clock: ClockProtocol | None = None,
        waiter: TickWaiterProtocol | None = None,
    ) -> None:
        _validate_identity("worker_id", worker_id, layout.max_worker_id)
        _validate_identity("datacenter_id", datacenter_id, layout.max_datacenter_id)
        self._worker_id = worker_id
        self._datacenter_id = datacenter_id
        self._layout = layout
        self._clock: ClockProtocol = clock if clock is not None else SystemClock()
        self._waiter: TickWaiterProtocol = waiter if waiter is not None else SpinWait()
        self._sequence = 0
        self._last_timestamp = 0
        self._stats = GeneratorStats()
        self._lock = threading.Lock()
        logger.info(
            "IdGenerator ready: datacenter_id=%d worker_id=%d epoch_ms=%d "
            "bits(dc=%d, worker=%d, seq=%d)",
            datacenter_id,
            worker_id,
            layout.epoch_ms,
            layout.datacenter_bits,
            layout.worker_bits,
            layout.sequence_bits,
        )

    @property
    def worker_id(self) -> int:
        return self._worker_id

    @property
    def datacenter_id(self) -> int:
        return self._datacenter_id

    @property
    def layout(self) -> BitLayout:
        return self._layout

    @property
    def last_timestamp(self) -> int:
        with self._lock:
            return self._last_timestamp

    @property
    def sequence(self) -> int:
        with self._lock:
            return self._sequence

    @property
    def stats(self) -> GeneratorStats:
        with self._lock:
            return dataclasses.replace(self._stats)

    def generate_id(self) -> int:
        """Return the next id. Blocks while the current millisecond is exhausted.

        Raises ClockMovedBackwardsError (state untouched) if the clock reads
        earlier than the last issued timestamp, ClockStalledError if the
        configured waiter gives up, and TimestampOutOfRangeError (state untouched)
        if the clock falls before the epoch or past the timestamp field width.
        """
        with self._lock:
            timestamp = self._clock.now_ms()
            if timestamp < self._last_timestamp:
                regression = self._last_timestamp - timestamp
                self._stats.clock_regressions += 1
                self._stats.last_regression_ms = regression
                raise ClockMovedBackwardsError(regression, self._last_timestamp)

            if timestamp == self._last_timestamp:
                sequence = (self._sequence + 1) & self._layout.sequence_mask
                if sequence == 0:
                    # Nothing is committed until the wait returns, so a stalled
                    # waiter leaves the exhausted sequence in place.
                    timestamp = self._wait_next_millis()
            else:
                sequence = 0

            offset = timestamp - self._layout.epoch_ms
            if not (0 <= offset <= self._layout.max_timestamp):
                raise TimestampOutOfRangeError(
                    timestamp, self._layout.epoch_ms, self._layout.max_timestamp
                )

            self._sequence = sequence
            self._last_timestamp = timestamp
            self._stats.ids_generated += 1
            return self._layout.pack(
                offset,
                self._datacenter_id,
                self._worker_id,
                sequence,
            )

    def decode(self, snowflake_id: int) -> SnowflakeParts:
        return decode_id(self._layout, snowflake_id)

    def _wait_next_millis(self) -> int:
        self._stats.sequence_exhaustions += 1
        logger.debug(
            "Sequence exhausted at %d ms, waiting for next tick", self._last_timestamp
        )
        started = time.perf_counter()
        try:
            return self._waiter.wait_past(self._clock, self._last_timestamp)
        finally:
            waited = time.perf_counter() - started
            self._stats.total_wait_s += waited
            logger.debug("Waited %.6fs for clock to pass %d", waited, self._last_timestamp)
