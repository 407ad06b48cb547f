"""Habit tracking module for HabitFlow.

Provides the date-key helpers and the habit state model.
"""

from .dates import (
    add_days,
    date_range,
    days_of_month,
    days_of_week,
    monday_of,
    month_label,
    parse_date_key,
    to_date_key,
)
from .models import (
    DEFAULT_SLEEP_MINUTES,
    CompletionMap,
    Habit,
    HabitState,
    SleepMap,
    UserProfile,
    initial_habits,
)

__all__ = [
    "DEFAULT_SLEEP_MINUTES",
    "CompletionMap",
    "Habit",
    "HabitState",
    "SleepMap",
    "UserProfile",
    "add_days",
    "date_range",
    "days_of_month",
    "days_of_week",
    "initial_habits",
    "monday_of",
    "month_label",
    "parse_date_key",
    "to_date_key",
]
