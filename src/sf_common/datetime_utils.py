"""UTC datetime utilities."""

from datetime import datetime, timedelta, timezone

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def ms_to_datetime(timestamp_ms: int) -> datetime:
    """Convert Unix epoch milliseconds to a timezone-aware UTC datetime."""
    return _UNIX_EPOCH + timedelta(milliseconds=timestamp_ms)


def datetime_to_ms(value: datetime) -> int:
    """Convert an aware datetime to Unix epoch milliseconds."""
    if value.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return (value - _UNIX_EPOCH) // timedelta(milliseconds=1)
