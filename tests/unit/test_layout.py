"""Tests for sf_generator.domain.layout."""

import dataclasses
from datetime import datetime, timezone

import pytest

from src.sf_common.datetime_utils import datetime_to_ms, ms_to_datetime
from src.sf_common.errors import InvalidLayoutError
from src.sf_generator.domain.layout import DEFAULT_EPOCH_MS, DEFAULT_LAYOUT, BitLayout


class TestDefaultLayout:
    def test_widths(self) -> None:
        assert DEFAULT_LAYOUT.datacenter_bits == 5
        assert DEFAULT_LAYOUT.worker_bits == 5
        assert DEFAULT_LAYOUT.sequence_bits == 12

    def test_shifts(self) -> None:
        assert DEFAULT_LAYOUT.worker_shift == 12
        assert DEFAULT_LAYOUT.datacenter_shift == 17
        assert DEFAULT_LAYOUT.timestamp_shift == 22

    def test_masks(self) -> None:
        assert DEFAULT_LAYOUT.sequence_mask == 4095
        assert DEFAULT_LAYOUT.max_worker_id == 31
        assert DEFAULT_LAYOUT.max_datacenter_id == 31

    def test_timestamp_width(self) -> None:
        assert DEFAULT_LAYOUT.timestamp_bits == 41
        assert DEFAULT_LAYOUT.max_timestamp == 2**41 - 1

    def test_epoch(self) -> None:
        assert DEFAULT_EPOCH_MS == 1541488102000
        assert ms_to_datetime(DEFAULT_EPOCH_MS) == datetime(
            2018, 11, 6, 7, 8, 22, tzinfo=timezone.utc
        )

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_LAYOUT.sequence_bits = 10  # type: ignore[misc]


class TestPack:
    def test_fields_land_in_place(self) -> None:
        packed = DEFAULT_LAYOUT.pack(1, 2, 3, 4)
        assert packed == (1 << 22) | (2 << 17) | (3 << 12) | 4

    def test_all_ones(self) -> None:
        layout = DEFAULT_LAYOUT
        packed = layout.pack(layout.max_timestamp, 31, 31, 4095)
        assert packed == 2**63 - 1


class TestValidation:
    def test_negative_width(self) -> None:
        with pytest.raises(InvalidLayoutError):
            BitLayout(worker_bits=-1)

    def test_zero_sequence_bits(self) -> None:
        with pytest.raises(InvalidLayoutError):
            BitLayout(sequence_bits=0)

    def test_zero_identity_bits_allowed(self) -> None:
        layout = BitLayout(datacenter_bits=0, worker_bits=0)
        assert layout.max_worker_id == 0
        assert layout.timestamp_shift == 12

    def test_widths_must_leave_timestamp_room_signed(self) -> None:
        BitLayout(datacenter_bits=20, worker_bits=20, sequence_bits=22)
        with pytest.raises(InvalidLayoutError):
            BitLayout(datacenter_bits=20, worker_bits=20, sequence_bits=23)

    def test_unsigned_gains_one_bit(self) -> None:
        layout = BitLayout(datacenter_bits=20, worker_bits=20, sequence_bits=23, signed=False)
        assert layout.timestamp_bits == 1
        assert DEFAULT_LAYOUT.timestamp_bits + 1 == BitLayout(signed=False).timestamp_bits

    def test_negative_epoch(self) -> None:
        with pytest.raises(InvalidLayoutError) as exc_info:
            BitLayout(epoch_ms=-1)
        assert exc_info.value.code == 1002


class TestDatetimeConversion:
    def test_naive_rejected(self) -> None:
        with pytest.raises(ValueError):
            datetime_to_ms(datetime(2020, 1, 1))

    def test_millisecond_precision(self) -> None:
        assert datetime_to_ms(ms_to_datetime(1541488102123)) == 1541488102123
