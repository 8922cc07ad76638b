"""Modified Julian Day clock-time conversion for 4A groups."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

# 1 March 1900, the first day the conversion below is defined for
MIN_MJD = 15079


@dataclass(frozen=True)
class ClockTime:
    """Decoded clock time: a UTC instant plus the broadcast local offset."""

    utc: dt.datetime
    offset_half_hours: int

    @property
    def offset(self) -> dt.timedelta:
        return dt.timedelta(minutes=30 * self.offset_half_hours)

    @property
    def local(self) -> dt.datetime:
        return self.utc.astimezone(dt.timezone(self.offset))

    def __str__(self) -> str:
        return self.local.isoformat()


def mjd_to_date(mjd: int) -> dt.date | None:
    """Convert a Modified Julian Day to a calendar date.

    Uses the integer arithmetic of IEC 62106 Annex G. Returns None below
    ``MIN_MJD``.
    """
    if mjd < MIN_MJD:
        return None
    yp = int((mjd - 15078.2) / 365.25)
    mp = int((mjd - 14956.1 - int(yp * 365.25)) / 30.6001)
    day = mjd - 14956 - int(yp * 365.25) - int(mp * 30.6001)
    k = 1 if mp in (14, 15) else 0
    year = 1900 + yp + k
    month = mp - 1 - k * 12
    return dt.date(year, month, day)


def decode_clock_time(
    mjd: int,
    hour: int,
    minute: int,
    offset_half_hours: int,
) -> ClockTime | None:
    """Build a :class:`ClockTime`, or None if the fields are not a valid time.

    The broadcast hour and minute are UTC; the offset is only attached for
    local display.
    """
    date = mjd_to_date(mjd)
    if date is None or not 0 <= hour <= 23 or not 0 <= minute <= 59:
        return None
    utc = dt.datetime(date.year, date.month, date.day, hour, minute, tzinfo=dt.timezone.utc)
    return ClockTime(utc=utc, offset_half_hours=offset_half_hours)
