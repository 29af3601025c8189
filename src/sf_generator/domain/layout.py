"""Snowflake bit layout — field widths, shifts and masks.

Default layout (63 usable bits, sign bit reserved):
  - 41 bits: millisecond timestamp (since custom epoch)
  -  5 bits: datacenter_id (0-31)
  -  5 bits: worker_id (0-31)
  - 12 bits: sequence (0-4095 per millisecond)

Field positions, low to high: sequence, worker_id, datacenter_id, timestamp.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from src.sf_common.datetime_utils import datetime_to_ms
from src.sf_common.errors import InvalidLayoutError

DEFAULT_EPOCH = datetime(2018, 11, 6, 7, 8, 22, tzinfo=timezone.utc)
DEFAULT_EPOCH_MS = datetime_to_ms(DEFAULT_EPOCH)  # 1541488102000


@dataclass(frozen=True)
class BitLayout:
    """Immutable layout parameters. Validated on construction."""

    epoch_ms: int = DEFAULT_EPOCH_MS
    datacenter_bits: int = 5
    worker_bits: int = 5
    sequence_bits: int = 12
    signed: bool = True  # reserve the top bit so ids stay positive as int64

    def __post_init__(self) -> None:
        for name in ("datacenter_bits", "worker_bits", "sequence_bits"):
            if getattr(self, name) < 0:
                raise InvalidLayoutError(f"{name} must be non-negative")
        if self.sequence_bits == 0:
            raise InvalidLayoutError("sequence_bits must be at least 1")
        if self.epoch_ms < 0:
            raise InvalidLayoutError("epoch_ms must be non-negative")
        if self.timestamp_bits < 1:
            raise InvalidLayoutError(
                f"field widths sum to {self.timestamp_shift}, "
                f"leaving no room for a timestamp in {self.total_bits} bits"
            )

    @property
    def total_bits(self) -> int:
        return 63 if self.signed else 64

    @property
    def worker_shift(self) -> int:
        return self.sequence_bits

    @property
    def datacenter_shift(self) -> int:
        return self.sequence_bits + self.worker_bits

    @property
    def timestamp_shift(self) -> int:
        return self.sequence_bits + self.worker_bits + self.datacenter_bits

    @property
    def timestamp_bits(self) -> int:
        return self.total_bits - self.timestamp_shift

    @property
    def sequence_mask(self) -> int:
        return (1 << self.sequence_bits) - 1

    @property
    def max_worker_id(self) -> int:
        return (1 << self.worker_bits) - 1

    @property
    def max_datacenter_id(self) -> int:
        return (1 << self.datacenter_bits) - 1

    @property
    def max_timestamp(self) -> int:
        """Largest encodable offset from the epoch, in milliseconds."""
        return (1 << self.timestamp_bits) - 1

    def pack(
        self, timestamp_offset: int, datacenter_id: int, worker_id: int, sequence: int
    ) -> int:
        """Shift and OR the four fields together. No range checks."""
        return (
            (timestamp_offset << self.timestamp_shift)
            | (datacenter_id << self.datacenter_shift)
            | (worker_id << self.worker_shift)
            | sequence
        )


DEFAULT_LAYOUT = BitLayout()
