"""Calendar helpers and the canonical YYYY-MM-DD date key.

Every map in the application is keyed by ``to_date_key``; dates are plain
calendar days (``datetime.date``) in local time, never UTC instants.
"""

import calendar
from collections.abc import Iterator
from datetime import date, datetime, timedelta

DATE_KEY_FORMAT = "%Y-%m-%d"


def to_date_key(day: date) -> str:
    """Format a calendar day as a zero-padded ``YYYY-MM-DD`` key."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_date_key(key: str) -> date:
    """Parse a ``YYYY-MM-DD`` key back into a date.

    Raises:
        ValueError: If the key is not a valid calendar day.
    """
    try:
        return datetime.strptime(key, DATE_KEY_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid date key {key!r}: expected YYYY-MM-DD") from e


def monday_of(day: date) -> date:
    """Return the Monday on or before ``day``. Sunday maps back six days."""
    return day - timedelta(days=day.weekday())


def add_days(day: date, n: int) -> date:
    """Calendar-correct addition of ``n`` days (negative moves backwards)."""
    return day + timedelta(days=n)


def days_of_week(week_start: date) -> list[date]:
    """The seven consecutive days starting at ``week_start``."""
    return [add_days(week_start, i) for i in range(7)]


def days_of_month(year: int, month: int) -> list[date | None]:
    """Calendar grid cells for a month, Monday-first.

    Leading ``None`` slots pad the first day into its weekday column
    (0 = Monday). No padding is added after the last day.
    """
    first_weekday, length = calendar.monthrange(year, month)
    cells: list[date | None] = [None] * first_weekday
    cells.extend(date(year, month, d) for d in range(1, length + 1))
    return cells


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def date_range(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive.

    Raises:
        ValueError: If ``start`` is after ``end``.
    """
    if start > end:
        raise ValueError(f"Range start {start} is after end {end}")
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def month_label(day: date) -> str:
    """English "Month Year" label, e.g. ``March 2024``."""
    return f"{calendar.month_name[day.month]} {day.year}"


def first_of_month_before(today: date, months: int) -> date:
    """First day of the month ``months`` calendar months before ``today``."""
    index = today.year * 12 + (today.month - 1) - months
    return date(index // 12, index % 12 + 1, 1)


__all__ = [
    "DATE_KEY_FORMAT",
    "add_days",
    "date_range",
    "days_in_month",
    "days_of_month",
    "days_of_week",
    "first_of_month_before",
    "monday_of",
    "month_label",
    "parse_date_key",
    "to_date_key",
]
