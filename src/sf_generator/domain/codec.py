"""Validated encode / decode between SnowflakeParts and integer ids."""

from src.sf_generator.domain.layout import BitLayout
from src.sf_generator.domain.models import SnowflakeParts


def _check_range(name: str, value: int, max_value: int) -> None:
    if not (0 <= value <= max_value):
        raise ValueError(f"{name} must be between 0 and {max_value}, got {value}")


def encode_id(layout: BitLayout, parts: SnowflakeParts) -> int:
    """Pack parts into an id, rejecting any field outside its width."""
    offset = parts.timestamp_ms - layout.epoch_ms
    _check_range("timestamp offset", offset, layout.max_timestamp)
    _check_range("datacenter_id", parts.datacenter_id, layout.max_datacenter_id)
    _check_range("worker_id", parts.worker_id, layout.max_worker_id)
    _check_range("sequence", parts.sequence, layout.sequence_mask)
    return layout.pack(offset, parts.datacenter_id, parts.worker_id, parts.sequence)


def decode_id(layout: BitLayout, snowflake_id: int) -> SnowflakeParts:
    """Split an id back into its fields. Timestamp is returned as raw Unix ms."""
    if snowflake_id < 0 or snowflake_id.bit_length() > layout.total_bits:
        raise ValueError(
            f"id {snowflake_id} does not fit in a {layout.total_bits}-bit layout"
        )
    return SnowflakeParts(
        timestamp_ms=(snowflake_id >> layout.timestamp_shift) + layout.epoch_ms,
        datacenter_id=(snowflake_id >> layout.datacenter_shift) & layout.max_datacenter_id,
        worker_id=(snowflake_id >> layout.worker_shift) & layout.max_worker_id,
        sequence=snowflake_id & layout.sequence_mask,
    )
