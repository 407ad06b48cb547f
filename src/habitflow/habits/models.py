"""Data models for habit tracking.

Defines the Habit and UserProfile entities and the HabitState snapshot that
every aggregation, report and insight function reads from.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from typing import Any

from .dates import parse_date_key, to_date_key

# habit id -> date key -> done
CompletionMap = dict[str, dict[str, bool]]
# date key -> minutes slept
SleepMap = dict[str, int]

DEFAULT_SLEEP_MINUTES = 360
DEFAULT_CATEGORY = "General"
THEMES = ("light", "dark")

HABIT_COLORS = [
    "#4f46e5",  # Indigo
    "#ec4899",  # Pink
    "#06b6d4",  # Cyan
    "#8b5cf6",  # Violet
    "#f59e0b",  # Amber
    "#10b981",  # Emerald
    "#ef4444",  # Red
    "#3b82f6",  # Blue
]


def habit_color(index: int) -> str:
    """Palette colour for the habit at ``index``."""
    return HABIT_COLORS[index % len(HABIT_COLORS)]


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True)
class Habit:
    """A habit the user wants to complete daily.

    Attributes:
        id: Unique identifier (UUID4 for new habits)
        name: Display name
        category: Free-form category label
        created_at: ISO-8601 creation timestamp
    """

    id: str
    name: str
    category: str = DEFAULT_CATEGORY
    created_at: str = field(default_factory=_now_iso)

    @classmethod
    def create(cls, name: str, category: str = DEFAULT_CATEGORY) -> "Habit":
        """Create a new habit with a fresh id.

        Raises:
            ValueError: If the name is blank.
        """
        name = name.strip()
        if not name:
            raise ValueError("Habit name must not be empty")
        return cls(id=str(uuid.uuid4()), name=name, category=category.strip() or DEFAULT_CATEGORY)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary form."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "created": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Habit":
        """Create from the persisted dictionary form."""
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            category=str(data.get("category", DEFAULT_CATEGORY)),
            created_at=str(data.get("created") or data.get("created_at") or _now_iso()),
        )


@dataclass(frozen=True)
class UserProfile:
    """Display profile shown on the dashboard."""

    name: str = "Guest User"
    tagline: str = "Building habits, one day at a time."
    avatar_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary form."""
        return {"name": self.name, "tagline": self.tagline, "avatarUrl": self.avatar_url}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        """Create from the persisted dictionary form."""
        default = cls()
        return cls(
            name=data.get("name", default.name),
            tagline=data.get("tagline", default.tagline),
            avatar_url=data.get("avatarUrl", default.avatar_url),
        )


def initial_habits() -> list[Habit]:
    """Sample habits used when nothing has been persisted yet."""
    created = _now_iso()
    return [
        Habit(id="1", name="Morning Run (5k)", category="Health", created_at=created),
        Habit(id="2", name="Read 30 mins", category="Learning", created_at=created),
        Habit(id="3", name="Drink 2L Water", category="Health", created_at=created),
    ]


def is_completed(completions: CompletionMap, habit_id: str, key: str) -> bool:
    """True only for an explicit ``True`` entry; absence means not done."""
    return bool(completions.get(habit_id, {}).get(key, False))


def sleep_minutes_for(sleep: SleepMap, key: str) -> int:
    """Logged minutes for a day, or the 360-minute default when unknown."""
    minutes = sleep.get(key)
    return DEFAULT_SLEEP_MINUTES if minutes is None else minutes


@dataclass(frozen=True)
class HabitState:
    """Immutable snapshot of the whole application state.

    Mutating methods return a new snapshot with the touched map replaced
    whole; the receiving snapshot is never modified.
    """

    habits: tuple[Habit, ...] = ()
    completions: CompletionMap = field(default_factory=dict)
    sleep: SleepMap = field(default_factory=dict)
    profile: UserProfile = field(default_factory=UserProfile)
    theme: str = "dark"

    def habit(self, habit_id: str) -> Habit:
        """Look up a habit by id.

        Raises:
            KeyError: If no habit has that id.
        """
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        raise KeyError(f"Unknown habit id: {habit_id}")

    def add_habit(self, name: str, category: str = DEFAULT_CATEGORY) -> "HabitState":
        """Append a newly created habit."""
        return replace(self, habits=(*self.habits, Habit.create(name, category)))

    def delete_habit(self, habit_id: str) -> "HabitState":
        """Remove a habit. Its completion entries stay behind as orphans."""
        self.habit(habit_id)
        return replace(self, habits=tuple(h for h in self.habits if h.id != habit_id))

    def toggle_completion(
        self, habit_id: str, key: str, today: date | None = None
    ) -> "HabitState":
        """Flip the completion flag of a habit on a day.

        Raises:
            KeyError: If the habit does not exist.
            ValueError: If the day is after ``today``.
        """
        self.habit(habit_id)
        day = parse_date_key(key)
        today = today or date.today()
        if day > today:
            raise ValueError(f"Cannot mark {key} complete: it is after {to_date_key(today)}")

        habit_days = dict(self.completions.get(habit_id, {}))
        habit_days[key] = not habit_days.get(key, False)
        completions = {**self.completions, habit_id: habit_days}
        return replace(self, completions=completions)

    def set_sleep(self, key: str, minutes: int) -> "HabitState":
        """Record total sleep minutes for a day."""
        parse_date_key(key)
        if minutes < 0:
            raise ValueError(f"Sleep minutes must be non-negative, got {minutes}")
        return replace(self, sleep={**self.sleep, key: int(minutes)})

    def set_sleep_field(
        self, key: str, hours: int | None = None, minutes: int | None = None
    ) -> "HabitState":
        """Update the hour and/or minute part of a day's sleep.

        Hours clamp to 0-23 and minutes to 0-59, each on its own; the part
        not given keeps its current value (or the default's).
        """
        current = sleep_minutes_for(self.sleep, key)
        current_h, current_m = divmod(current, 60)
        new_h = current_h if hours is None else min(max(int(hours), 0), 23)
        new_m = current_m if minutes is None else min(max(int(minutes), 0), 59)
        return self.set_sleep(key, new_h * 60 + new_m)

    def update_profile(self, profile: UserProfile) -> "HabitState":
        """Replace the user profile."""
        return replace(self, profile=profile)

    def set_theme(self, theme: str) -> "HabitState":
        """Switch between light and dark theme."""
        if theme not in THEMES:
            raise ValueError(f"Unknown theme {theme!r}, expected one of {THEMES}")
        return replace(self, theme=theme)


__all__ = [
    "DEFAULT_CATEGORY",
    "DEFAULT_SLEEP_MINUTES",
    "HABIT_COLORS",
    "CompletionMap",
    "Habit",
    "HabitState",
    "SleepMap",
    "UserProfile",
    "habit_color",
    "initial_habits",
    "is_completed",
    "sleep_minutes_for",
]
