"""iCalendar DATE / DATE-TIME conversion.

Handles ``YYYYMMDD``, ``YYYYMMDDTHHMMSS`` (local time) and
``YYYYMMDDTHHMMSSZ`` (UTC). TZID parameters and UTC offsets are not supported.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta
from dateutil.tz import tzlocal

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int | None:
    """Integer formed by the leading digits of ``text``, None if there are none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def parse_ical_datetime(value: str | None) -> datetime | None:
    """Parse an iCalendar date or date-time into an aware datetime.

    Components are sliced at fixed offsets and read up to their first non-digit;
    they are not range checked: values past their field's range carry over into
    the next field (month 13 is January of the following year, hour 25 is 01:00
    the next day). Returns None when a slice holds no digits or the result falls
    outside the representable range.
    """
    if not value:
        return None

    fields = [value[0:4], value[4:6], value[6:8]]
    if len(value) > 8 and value[8] == "T":
        fields += [value[9:11], value[11:13], value[13:15]]
    else:
        fields += ["0", "0", "0"]

    numbers = [_leading_int(f) for f in fields]
    if None in numbers:
        return None
    year, month, day, hours, minutes, seconds = numbers

    tz = timezone.utc if value.endswith("Z") else tzlocal()
    try:
        return (
            datetime(year, 1, 1, tzinfo=tz)
            + relativedelta(months=month - 1)
            + timedelta(days=day - 1, hours=hours, minutes=minutes, seconds=seconds)
        )
    except (ValueError, OverflowError):
        return None


def format_ical_datetime(value: datetime, local: bool = False) -> str:
    """Format ``value`` as ``YYYYMMDDTHHMMSSZ``, or ``YYYYMMDDTHHMMSS`` in local time.

    Naive datetimes are taken to be local time.
    """
    if local:
        dt = value.astimezone(tzlocal())
        suffix = ""
    else:
        dt = value.astimezone(timezone.utc)
        suffix = "Z"
    return (
        f"{dt.year:04d}{dt.month:02d}{dt.day:02d}"
        f"T{dt.hour:02d}{dt.minute:02d}{dt.second:02d}{suffix}"
    )
