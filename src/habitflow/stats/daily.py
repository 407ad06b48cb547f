"""Per-day habit and sleep statistics.

All figures are recomputed from the raw completion and sleep maps on every
call; nothing is cached between calls.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from habitflow.habits.dates import date_range, days_in_month, to_date_key
from habitflow.habits.models import (
    CompletionMap,
    Habit,
    SleepMap,
    is_completed,
    sleep_minutes_for,
)

# Sleep chart ceilings (hours). The PDF and the on-screen charts differ.
EXPORT_SLEEP_AXIS_MAX = 12
SCREEN_SLEEP_AXIS_MAX = 14


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves away from zero (2.5 -> 3), unlike ``round``."""
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percent(actual: int, possible: int) -> int:
    """Integer percentage, 0 when nothing was possible."""
    if possible <= 0:
        return 0
    return int(round_half_up(actual / possible * 100))


def clamp_hours(hours: float, axis_max: float) -> float:
    """Clamp a sleep figure into ``[0, axis_max]`` for plotting."""
    return min(max(hours, 0.0), float(axis_max))


@dataclass
class DayStats:
    """Aggregated figures for one calendar day."""

    date: date
    completed: int
    total: int
    sleep_minutes: int

    @property
    def key(self) -> str:
        """Date key of this day."""
        return to_date_key(self.date)

    @property
    def sleep_hours(self) -> float:
        """Sleep in hours, unrounded."""
        return self.sleep_minutes / 60

    @property
    def is_perfect(self) -> bool:
        """Every habit done; a day with no habits is never perfect."""
        return self.total > 0 and self.completed == self.total


def count_completed(habits: Sequence[Habit], completions: CompletionMap, key: str) -> int:
    """Number of habits marked done on the day ``key``."""
    return sum(1 for h in habits if is_completed(completions, h.id, key))


def day_stats(
    habits: Sequence[Habit],
    completions: CompletionMap,
    sleep: SleepMap,
    day: date,
) -> DayStats:
    """Statistics for a single day."""
    key = to_date_key(day)
    return DayStats(
        date=day,
        completed=count_completed(habits, completions, key),
        total=len(habits),
        sleep_minutes=sleep_minutes_for(sleep, key),
    )


def daily_stats(
    habits: Sequence[Habit],
    completions: CompletionMap,
    sleep: SleepMap,
    start: date,
    end: date,
) -> list[DayStats]:
    """Statistics for every day from ``start`` to ``end`` inclusive."""
    return [day_stats(habits, completions, sleep, d) for d in date_range(start, end)]


def perfect_day_count(
    habits: Sequence[Habit],
    completions: CompletionMap,
    start: date,
    end: date,
) -> int:
    """Days in range on which every habit was completed."""
    days = list(date_range(start, end))
    if not habits:
        return 0
    return sum(
        1
        for d in days
        if count_completed(habits, completions, to_date_key(d)) == len(habits)
    )


def average_sleep_hours(sleep: SleepMap, start: date, end: date) -> float:
    """Mean nightly sleep over the range in hours, one decimal.

    Unlogged days count as the 360-minute default.
    """
    minutes = [sleep_minutes_for(sleep, to_date_key(d)) for d in date_range(start, end)]
    return round_half_up(sum(minutes) / len(minutes) / 60, 1)


def completion_percentage(
    habits: Sequence[Habit],
    completions: CompletionMap,
    days: Iterable[date],
) -> int:
    """Completed habit-days as a share of all habit-days in ``days``."""
    keys = [to_date_key(d) for d in days]
    done = sum(count_completed(habits, completions, k) for k in keys)
    return percent(done, len(habits) * len(keys))


@dataclass
class MonthlyPoint:
    """One day of the on-screen monthly chart."""

    day: int
    completed: int
    total: int
    sleep_hours: float


@dataclass
class MonthlyStats:
    """Month summary: totals plus the per-day chart series."""

    total_completions: int
    perfect_days: int
    points: list[MonthlyPoint]


def monthly_summary(
    habits: Sequence[Habit],
    completions: CompletionMap,
    sleep: SleepMap,
    year: int,
    month: int,
) -> MonthlyStats:
    """Summarize a calendar month."""
    start = date(year, month, 1)
    end = date(year, month, days_in_month(year, month))
    days = daily_stats(habits, completions, sleep, start, end)

    return MonthlyStats(
        total_completions=sum(d.completed for d in days),
        perfect_days=sum(1 for d in days if d.is_perfect),
        points=[
            MonthlyPoint(
                day=d.date.day,
                completed=d.completed,
                total=d.total,
                sleep_hours=round_half_up(d.sleep_hours, 1),
            )
            for d in days
        ],
    )


__all__ = [
    "EXPORT_SLEEP_AXIS_MAX",
    "SCREEN_SLEEP_AXIS_MAX",
    "DayStats",
    "MonthlyPoint",
    "MonthlyStats",
    "average_sleep_hours",
    "clamp_hours",
    "completion_percentage",
    "count_completed",
    "daily_stats",
    "day_stats",
    "monthly_summary",
    "percent",
    "perfect_day_count",
    "round_half_up",
]
