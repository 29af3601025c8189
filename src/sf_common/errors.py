"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Configuration / identity (permanent, service must not start)
  2xxx: Clock (transient, caller may retry)
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        retryable: bool = False,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.retryable = retryable
        super().__init__(message)


# --- 1xxx: Configuration / identity ---

class InvalidIdentityError(AppError):
    def __init__(self, field: str, value: int, max_value: int) -> None:
        self.field = field
        self.value = value
        self.max_value = max_value
        super().__init__(
            1001,
            f"Invalid {field}: {value} (must be between 0 and {max_value})",
            500,
        )


class InvalidLayoutError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(1002, f"Invalid bit layout: {detail}", 500)


class TimestampOutOfRangeError(AppError):
    def __init__(self, timestamp_ms: int, epoch_ms: int, max_offset: int) -> None:
        self.timestamp_ms = timestamp_ms
        self.epoch_ms = epoch_ms
        self.max_offset = max_offset
        super().__init__(
            1003,
            f"Timestamp {timestamp_ms} is outside the layout range "
            f"[{epoch_ms}, {epoch_ms + max_offset}]; check EPOCH_MS and bit widths",
            500,
        )


# --- 2xxx: Clock ---

class ClockMovedBackwardsError(AppError):
    def __init__(self, observed_regression_ms: int, last_timestamp_ms: int) -> None:
        self.observed_regression_ms = observed_regression_ms
        self.last_timestamp_ms = last_timestamp_ms
        super().__init__(
            2001,
            f"Clock moved backwards. Refusing to generate id for "
            f"{observed_regression_ms} milliseconds",
            503,
            retryable=True,
        )


class ClockStalledError(AppError):
    def __init__(self, last_timestamp_ms: int, waited_ms: int) -> None:
        self.last_timestamp_ms = last_timestamp_ms
        self.waited_ms = waited_ms
        super().__init__(
            2002,
            f"Clock did not advance past {last_timestamp_ms} within {waited_ms} ms",
            503,
            retryable=True,
        )
