"""Local calendar day to UTC millisecond range conversion.

A trading "day" is the calendar date as observed at a fixed UTC offset
(default +08:00), not the UTC date. The range runs from local 00:00:00
to local 23:59:59, so trades stamped within the final second before
local midnight fall outside it. Callers rely on that boundary, so it is
kept as-is.
"""

import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone

from hedge_proxy.exceptions import InvalidDateRange

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_END_OF_DAY = time(23, 59, 59)


@dataclass(frozen=True)
class DateRange:
    """Inclusive UTC epoch-millisecond bounds of one local calendar day."""

    start_ms: int
    end_ms: int


def offset_timezone(offset_hours: float) -> timezone:
    """Build a fixed-offset tzinfo, rounding fractional hours to whole minutes."""
    minutes = round(offset_hours * 60)
    return timezone(timedelta(minutes=minutes))


def format_offset(offset_hours: float) -> str:
    """Render an offset in ISO-8601 form, e.g. 8 -> '+08:00', -3.5 -> '-03:30'."""
    minutes = round(offset_hours * 60)
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{mins:02d}"


def _to_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def get_day_range(date_str: str, offset: float | timezone = 8.0) -> DateRange:
    """Resolve a YYYY-MM-DD date to the UTC millisecond range of that local day.

    Args:
        date_str: Calendar date in strict YYYY-MM-DD form.
        offset: Signed UTC offset of the local day in hours (fractions
            allowed), or an already-built fixed-offset tzinfo.

    Returns:
        DateRange with start at local 00:00:00 and end at local 23:59:59.

    Raises:
        InvalidDateRange: If the string is malformed or not a real date.
    """
    if not isinstance(date_str, str) or not _DATE_RE.match(date_str):
        raise InvalidDateRange(f"expected YYYY-MM-DD, got {date_str!r}")
    try:
        day = datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as e:
        raise InvalidDateRange(f"{date_str!r} is not a calendar date") from e

    tz = offset if isinstance(offset, timezone) else offset_timezone(offset)
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, _END_OF_DAY, tzinfo=tz)
    return DateRange(start_ms=_to_ms(start), end_ms=_to_ms(end))
