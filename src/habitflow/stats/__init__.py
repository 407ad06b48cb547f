"""Statistics module for HabitFlow.

Provides daily, monthly and weekly aggregation over habit snapshots.
"""

from .daily import (
    EXPORT_SLEEP_AXIS_MAX,
    SCREEN_SLEEP_AXIS_MAX,
    DayStats,
    MonthlyStats,
    average_sleep_hours,
    completion_percentage,
    daily_stats,
    monthly_summary,
    perfect_day_count,
)
from .weekly import (
    HabitWeekCount,
    WeekBucket,
    calendar_weeks_of_month,
    habit_weekly_counts,
    literal_week_chunks,
    week_overview,
    weekly_improvement,
)

__all__ = [
    "EXPORT_SLEEP_AXIS_MAX",
    "SCREEN_SLEEP_AXIS_MAX",
    "DayStats",
    "HabitWeekCount",
    "MonthlyStats",
    "WeekBucket",
    "average_sleep_hours",
    "calendar_weeks_of_month",
    "completion_percentage",
    "daily_stats",
    "habit_weekly_counts",
    "literal_week_chunks",
    "monthly_summary",
    "perfect_day_count",
    "week_overview",
    "weekly_improvement",
]
