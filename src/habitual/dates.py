"""Calendar helpers shared by the store and the statistics engine.

Weekdays are numbered the way habit schedules store them: 0 = Sunday through
6 = Saturday. Everything below the request layer works on ``datetime.date``;
strings and timestamps are converted once by :func:`normalize_date`.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone

DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DateLike = date | datetime | str


def normalize_date(value: DateLike) -> date:
    """Return the calendar day for a date, datetime or ISO-8601 string.

    Timestamps carrying a UTC offset are converted to UTC first, so
    ``2024-03-01T23:30:00-05:00`` lands on March 2nd.
    """

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Date value is empty.")
        if len(text) == 10:
            return date.fromisoformat(text)
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        return normalize_date(datetime.fromisoformat(text))
    raise TypeError(f"Unsupported date value: {value!r}")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Return the current UTC calendar day.

    Completion timestamps are bucketed by their UTC day, so "today" for every
    statistics window is taken in the same frame.
    """

    return utc_now().date()


def format_iso(day: date) -> str:
    """Return ``YYYY-MM-DD`` for the given day."""

    return day.isoformat()


def weekday_index(day: date) -> int:
    """Return the Sunday-based weekday (0 = Sunday, 6 = Saturday)."""

    return (day.weekday() + 1) % 7


def day_label(day: date) -> str:
    return DAY_LABELS[weekday_index(day)]


def week_dates(day: date) -> list[date]:
    """Return the Sunday..Saturday dates of the week containing ``day``."""

    sunday = day - timedelta(days=weekday_index(day))
    return [sunday + timedelta(days=offset) for offset in range(7)]


def trailing_days(end: date, length: int = 7) -> list[date]:
    """Return ``length`` days ending on ``end``, newest first."""

    return [end - timedelta(days=offset) for offset in range(length)]


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a 1-indexed month."""

    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12; got {month}.")
    return calendar.monthrange(year, month)[1]


def month_dates(year: int, month: int) -> list[date]:
    """Return every calendar day of the month in ascending order."""

    return [date(year, month, day) for day in range(1, days_in_month(year, month) + 1)]


def range_label(start: date, end: date) -> str:
    """Label a week bucket as ``"<Mon> <startDay>-<endDay>"`` (e.g. ``Mar 3-9``)."""

    return f"{MONTH_LABELS[start.month - 1]} {start.day}-{end.day}"


__all__ = [
    "DAY_LABELS",
    "MONTH_LABELS",
    "DateLike",
    "day_label",
    "days_in_month",
    "format_iso",
    "month_dates",
    "normalize_date",
    "range_label",
    "trailing_days",
    "utc_now",
    "utc_today",
    "week_dates",
    "weekday_index",
]
