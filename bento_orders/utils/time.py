"""Date and time helpers shared by the ordering engine.

All "today" comparisons are derived from a single captured ``now`` so that a
request straddling midnight sees one consistent calendar date.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time

ISO_DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
TIME_OF_DAY_PATTERN = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])")


class InvalidDateFormat(ValueError):
    """Raised when a date string is not a real ``YYYY-MM-DD`` calendar date."""


class InvalidTimeFormat(ValueError):
    """Raised when a time string is not ``HH:MM`` in 24-hour notation."""


def current_local_datetime() -> datetime:
    """Return the local wall-clock time.

    Every request reads the clock through this function exactly once.
    """
    return datetime.now()


def today(now: datetime | None = None) -> date:
    """Return the calendar date of ``now`` (local midnight)."""
    if now is None:
        now = current_local_datetime()
    return now.date()


def parse_iso_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string.

    ``2025-2-1`` is rejected on format; ``2025-02-30`` matches the format but
    is not a calendar date and is rejected as well.
    """
    match = ISO_DATE_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidDateFormat(f"Invalid date format: {value!r} (expected YYYY-MM-DD)")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDateFormat(f"Invalid calendar date: {value!r}") from exc


def format_iso_date(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_time_of_day(value: str) -> time:
    """Parse a strict ``HH:MM`` string."""
    match = TIME_OF_DAY_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidTimeFormat(f"Invalid time format: {value!r} (expected HH:MM)")
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def format_time_of_day(value: time) -> str:
    return value.strftime("%H:%M")


def last_day_of_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` (1-12) of ``year``."""
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping ``day`` to the last valid day of the month."""
    return date(year, month, min(day, last_day_of_month(year, month)))


def add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    """Shift a (year, month) pair by ``delta`` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def days_between(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end`` (negative when ``end`` is earlier)."""
    return (end - start).days
