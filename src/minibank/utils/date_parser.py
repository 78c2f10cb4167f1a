"""Date parsing utilities."""

import re
from datetime import UTC, date, datetime, time, timedelta
from typing import Optional

from dateutil import parser as date_parser

DATE_ONLY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

END_OF_DAY = time(23, 59, 59, 999000)


def as_utc(value: datetime) -> datetime:
    """Return a timezone-aware UTC datetime, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_timestamp(value: str) -> datetime:
    """Parse an absolute timestamp string into a UTC datetime.

    Args:
        value: Timestamp string, e.g. "2023-11-15T10:30:00Z"

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: If the string cannot be parsed
    """
    try:
        return as_utc(date_parser.isoparse(value))
    except (ValueError, TypeError, OverflowError):
        pass

    try:
        return as_utc(date_parser.parse(value))
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse timestamp '{value}': {e}")


def parse_boundary(value, end_of_day: bool = False) -> Optional[datetime]:
    """Resolve a range boundary into a UTC datetime.

    Bare calendar dates ("YYYY-MM-DD") resolve to the start of that day in
    UTC, or to 23:59:59.999 UTC when ``end_of_day`` is set. Any other
    string is parsed as an absolute timestamp. ``date`` and ``datetime``
    objects are accepted as-is. Empty values mean "no boundary".

    Args:
        value: Boundary string, date, datetime or None
        end_of_day: Whether a bare date should resolve to the end of the day

    Returns:
        UTC datetime, or None if no boundary was given

    Raises:
        ValueError: If the value cannot be parsed
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return as_utc(value)

    if isinstance(value, date):
        return _day_boundary(value, end_of_day)

    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")

    text = value.strip()
    if DATE_ONLY_PATTERN.match(text):
        try:
            day = date.fromisoformat(text)
        except ValueError as e:
            raise ValueError(f"Could not parse date '{value}': {e}")
        return _day_boundary(day, end_of_day)

    return parse_timestamp(text)


def _day_boundary(day: date, end_of_day: bool) -> datetime:
    return datetime.combine(day, END_OF_DAY if end_of_day else time.min, tzinfo=UTC)


def utc_day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Return the first and last instant of the UTC calendar day containing ``moment``."""
    day = as_utc(moment).date()
    start = _day_boundary(day, False)
    return start, start + timedelta(days=1) - timedelta(microseconds=1)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC string with millisecond precision."""
    text = as_utc(value).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")
