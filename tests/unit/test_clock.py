"""Tests for Modified Julian Day conversion."""

from __future__ import annotations

import datetime as dt

from rdsmon.decoders.clock import MIN_MJD, decode_clock_time, mjd_to_date


def test_mjd_to_date() -> None:
    assert mjd_to_date(58849) == dt.date(2020, 1, 1)
    assert mjd_to_date(58849 + 59) == dt.date(2020, 2, 29)
    assert mjd_to_date(MIN_MJD) == dt.date(1900, 3, 1)


def test_mjd_below_minimum() -> None:
    assert mjd_to_date(MIN_MJD - 1) is None
    assert decode_clock_time(15078, 12, 0, 0) is None


def test_out_of_range_time_is_invalid() -> None:
    assert decode_clock_time(58849, 24, 0, 0) is None
    assert decode_clock_time(58849, 12, 60, 0) is None


def test_offset_applies_to_local_time_only() -> None:
    clock = decode_clock_time(58849, 12, 0, -3)
    assert clock is not None
    assert clock.utc == dt.datetime(2020, 1, 1, 12, 0, tzinfo=dt.timezone.utc)
    assert clock.offset == dt.timedelta(minutes=-90)
    assert clock.local.hour == 10
    assert clock.local.minute == 30
    assert str(clock) == "2020-01-01T10:30:00-01:30"
