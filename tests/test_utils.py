"""Tests for time utility functions."""

from datetime import datetime, timedelta, timezone

from graphite_reader_core.utils import (
    datetime_to_epoch,
    days_ago,
    epoch_to_datetime,
    format_absolute,
    hours_ago,
    minutes_ago,
)


class TestEpochConversion:
    """Test epoch/datetime conversion."""

    def test_epoch_to_datetime(self) -> None:
        result = epoch_to_datetime(1609459200)
        assert result == datetime(2021, 1, 1, tzinfo=timezone.utc)
        assert result.tzinfo == timezone.utc

    def test_epoch_zero(self) -> None:
        assert epoch_to_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_datetime_to_epoch(self) -> None:
        assert datetime_to_epoch(datetime(2021, 1, 1, tzinfo=timezone.utc)) == 1609459200

    def test_naive_datetime_is_utc(self) -> None:
        assert datetime_to_epoch(datetime(2021, 1, 1)) == 1609459200

    def test_other_timezone(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        assert datetime_to_epoch(datetime(2021, 1, 1, 2, 0, tzinfo=plus_two)) == 1609459200

    def test_roundtrip(self) -> None:
        assert datetime_to_epoch(epoch_to_datetime(1704067200)) == 1704067200


class TestRelativeTimes:
    """Test relative from/until helpers."""

    def test_minutes_ago(self) -> None:
        assert minutes_ago(5) == "-5min"

    def test_hours_ago(self) -> None:
        assert hours_ago(2) == "-2h"

    def test_days_ago(self) -> None:
        assert days_ago(7) == "-7d"


class TestFormatAbsolute:
    """Test absolute time formatting."""

    def test_utc(self) -> None:
        dt = datetime(2021, 1, 1, 4, 0, tzinfo=timezone.utc)
        assert format_absolute(dt) == "04:00_20210101"

    def test_naive(self) -> None:
        assert format_absolute(datetime(2020, 12, 31, 23, 59)) == "23:59_20201231"

    def test_converted_to_utc(self) -> None:
        minus_five = timezone(timedelta(hours=-5))
        dt = datetime(2020, 12, 31, 23, 30, tzinfo=minus_five)
        assert format_absolute(dt) == "04:30_20210101"
