"""Week-level habit and sleep statistics.

Two week-bucketing policies exist side by side and are deliberately kept
apart:

- ``calendar_weeks_of_month``: fixed day-of-month spans 1-7, 8-14, 15-21 and
  22-end, used by the monthly view's weekly improvement chart.
- ``literal_week_chunks``: the days of a range split at every Monday, used by
  the PDF export. The first chunk is short when the range starts mid-week.

They produce different buckets for the same month and are not interchangeable.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from habitflow.habits.dates import (
    add_days,
    date_range,
    days_in_month,
    days_of_week,
    monday_of,
    to_date_key,
)
from habitflow.habits.models import (
    CompletionMap,
    Habit,
    SleepMap,
    is_completed,
    sleep_minutes_for,
)

from .daily import DayStats, count_completed, day_stats, percent, round_half_up

CALENDAR_WEEK_SPANS = ((1, 7), (8, 14), (15, 21), (22, 31))


@dataclass
class WeekBucket:
    """A named span of days with its completion tally."""

    label: str
    start: date
    end: date
    possible_completions: int = 0
    actual_completions: int = 0

    @property
    def days(self) -> list[date]:
        """Every day in the bucket, in order."""
        return list(date_range(self.start, self.end))

    @property
    def day_count(self) -> int:
        """Number of days in the bucket."""
        return (self.end - self.start).days + 1

    @property
    def percentage(self) -> int:
        """Actual over possible completions, as an integer percentage."""
        return percent(self.actual_completions, self.possible_completions)


def _tally(
    bucket: WeekBucket,
    habits: Sequence[Habit],
    completions: CompletionMap | None,
) -> WeekBucket:
    completions = completions or {}
    bucket.possible_completions = len(habits) * bucket.day_count
    bucket.actual_completions = sum(
        count_completed(habits, completions, to_date_key(d)) for d in bucket.days
    )
    return bucket


def calendar_weeks_of_month(
    year: int,
    month: int,
    habits: Sequence[Habit] = (),
    completions: CompletionMap | None = None,
) -> list[WeekBucket]:
    """Split a month into the four fixed day-of-month weeks.

    The last span runs from day 22 to the month's final day.
    """
    length = days_in_month(year, month)
    buckets = []
    for index, (first, last) in enumerate(CALENDAR_WEEK_SPANS, start=1):
        bucket = WeekBucket(
            label=f"Week {index}",
            start=date(year, month, first),
            end=date(year, month, min(last, length)),
        )
        buckets.append(_tally(bucket, habits, completions))
    return buckets


def literal_week_chunks(
    start: date,
    end: date,
    habits: Sequence[Habit] = (),
    completions: CompletionMap | None = None,
) -> list[WeekBucket]:
    """Split a date range into chunks that break on each Monday.

    A Monday starts a new chunk only once the current one holds at least
    one day, so a range starting on Monday does not produce an empty chunk.
    """
    groups: list[list[date]] = []
    current: list[date] = []
    for day in date_range(start, end):
        if day.weekday() == 0 and current:
            groups.append(current)
            current = []
        current.append(day)
    if current:
        groups.append(current)

    return [
        _tally(WeekBucket(label=f"Week {i}", start=g[0], end=g[-1]), habits, completions)
        for i, g in enumerate(groups, start=1)
    ]


def weekly_improvement(
    habits: Sequence[Habit],
    completions: CompletionMap,
    year: int,
    month: int,
) -> list[WeekBucket]:
    """Calendar weeks of the month scored against all habits."""
    return calendar_weeks_of_month(year, month, habits, completions)


@dataclass
class HabitWeekCount:
    """Completions of one habit in one calendar week of a month."""

    label: str
    count: int
    total: int

    def __str__(self) -> str:
        return f"{self.count}/{self.total}"


def habit_weekly_counts(
    habit_id: str,
    completions: CompletionMap,
    year: int,
    month: int,
) -> list[HabitWeekCount]:
    """Per-week completion counts of one habit, labelled W1..W4."""
    return [
        HabitWeekCount(
            label=f"W{i}",
            count=sum(1 for d in bucket.days if is_completed(completions, habit_id, to_date_key(d))),
            total=bucket.day_count,
        )
        for i, bucket in enumerate(calendar_weeks_of_month(year, month), start=1)
    ]


def habit_week_fraction(habit_id: str, completions: CompletionMap, bucket: WeekBucket) -> float:
    """Share of the bucket's days on which the habit was done."""
    done = sum(1 for d in bucket.days if is_completed(completions, habit_id, to_date_key(d)))
    return done / bucket.day_count


def weekly_average_sleep(sleep: SleepMap, bucket: WeekBucket) -> float:
    """Mean sleep hours across the bucket, unrounded, with the default filled in."""
    total = sum(sleep_minutes_for(sleep, to_date_key(d)) for d in bucket.days)
    return total / bucket.day_count / 60


def week_overview(
    habits: Sequence[Habit],
    completions: CompletionMap,
    week_start: date,
    sleep: SleepMap | None = None,
) -> list[DayStats]:
    """Seven days of stats for the Monday-aligned week containing ``week_start``."""
    monday = monday_of(week_start)
    return [day_stats(habits, completions, sleep or {}, d) for d in days_of_week(monday)]


def last_week_overview(
    habits: Sequence[Habit],
    completions: CompletionMap,
    today: date | None = None,
) -> list[DayStats]:
    """The full week before the current one, relative to ``today``."""
    today = today or date.today()
    return week_overview(habits, completions, add_days(monday_of(today), -7))


def habit_week_matrix(
    habits: Sequence[Habit],
    completions: CompletionMap,
    week_start: date,
) -> dict[str, list[int]]:
    """0/1 completion flags per habit id for each day of the week."""
    days = days_of_week(monday_of(week_start))
    return {
        h.id: [1 if is_completed(completions, h.id, to_date_key(d)) else 0 for d in days]
        for h in habits
    }


@dataclass
class WeeklySleepSummary:
    """Sleep per day of a Monday-aligned week plus its average."""

    hours: list[tuple[date, float]] = field(default_factory=list)
    average_hours: float = 0.0


def weekly_sleep_summary(sleep: SleepMap, week_start: date) -> WeeklySleepSummary:
    """Daily sleep hours (one decimal) and the seven-day average."""
    days = days_of_week(monday_of(week_start))
    raw = [sleep_minutes_for(sleep, to_date_key(d)) / 60 for d in days]
    return WeeklySleepSummary(
        hours=[(d, round_half_up(h, 1)) for d, h in zip(days, raw, strict=True)],
        average_hours=round_half_up(sum(raw) / 7, 1),
    )


__all__ = [
    "CALENDAR_WEEK_SPANS",
    "HabitWeekCount",
    "WeekBucket",
    "WeeklySleepSummary",
    "calendar_weeks_of_month",
    "habit_week_fraction",
    "habit_week_matrix",
    "habit_weekly_counts",
    "last_week_overview",
    "literal_week_chunks",
    "week_overview",
    "weekly_average_sleep",
    "weekly_improvement",
    "weekly_sleep_summary",
]
