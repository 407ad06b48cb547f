"""JSON file store for HabitFlow state.

The file mirrors a browser's local storage: a flat map of keys to strings,
most of them JSON text. It is wrapped in a versioned envelope::

    {"version": 1, "items": {"habits": "[...]", "theme": "dark", ...}}

Unversioned files (a bare key -> value object) are migrated on load.
Values that fail to parse are logged and replaced by that key's default.
"""

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from habitflow.habits.models import (
    THEMES,
    CompletionMap,
    Habit,
    HabitState,
    SleepMap,
    UserProfile,
    initial_habits,
)
from habitflow.insights.bundle import InsightBundle
from habitflow.insights.errors import InsightParseError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

HABITS_KEY = "habits"
COMPLETIONS_KEY = "completions"
SLEEP_KEY = "sleepData"
PROFILE_KEY = "userProfile"
THEME_KEY = "theme"
INSIGHT_CACHE_KEY = "habit_insights_cache"
INSIGHT_LAST_RUN_KEY = "habit_insights_last_run"

T = TypeVar("T")


class StorageError(Exception):
    """Raised when the state file cannot be understood at all."""

    pass


def migrate_document(document: Any) -> dict[str, str]:
    """Bring a raw state document up to the current schema.

    Returns:
        The flat key -> string item map.

    Raises:
        StorageError: If the document was written by a newer schema.
    """
    if not isinstance(document, dict):
        logger.error(f"State document is a {type(document).__name__}, starting empty")
        return {}

    if "version" in document and "items" in document:
        version = document["version"]
        if not isinstance(version, int) or version > SCHEMA_VERSION:
            raise StorageError(
                f"State file schema version {version!r} is newer than supported ({SCHEMA_VERSION})"
            )
        items = document["items"] if isinstance(document["items"], dict) else {}
    else:
        logger.info(f"Migrating unversioned state document to version {SCHEMA_VERSION}")
        items = document

    return {
        str(key): value if isinstance(value, str) else json.dumps(value)
        for key, value in items.items()
    }


class HabitStore:
    """Key-value state persisted as one JSON file."""

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: State file; created on first write.
        """
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        """Location of the state file."""
        return self._path

    # --- Raw items ---

    def _read_items(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                document = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Corrupt state file {self._path}: {e}; starting empty")
            return {}
        return migrate_document(document)

    def _write_items(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump({"version": SCHEMA_VERSION, "items": items}, f, indent=2)
        os.replace(tmp_path, self._path)

    def get_item(self, key: str) -> str | None:
        """Raw string stored under ``key``."""
        return self._read_items().get(key)

    def set_items(self, values: dict[str, str]) -> None:
        """Store several raw strings in one write."""
        items = self._read_items()
        items.update(values)
        self._write_items(items)

    def set_item(self, key: str, value: str) -> None:
        """Store a raw string under ``key``."""
        self.set_items({key: value})

    def remove_item(self, key: str) -> None:
        """Delete ``key`` if present."""
        items = self._read_items()
        if items.pop(key, None) is not None:
            self._write_items(items)

    # --- Typed state ---

    @staticmethod
    def _decode(
        items: dict[str, str],
        key: str,
        convert: Callable[[Any], T],
        default: Callable[[], T],
    ) -> T:
        raw = items.get(key)
        if raw is None:
            return default()
        try:
            return convert(json.loads(raw))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Invalid stored value for '{key}': {e}; using default")
            return default()

    def load_state(self) -> HabitState:
        """Load the full state, substituting defaults for missing keys."""
        items = self._read_items()

        habits = self._decode(
            items, HABITS_KEY, lambda data: [Habit.from_dict(h) for h in data], initial_habits
        )
        completions = self._decode(items, COMPLETIONS_KEY, _to_completions, dict)
        sleep = self._decode(items, SLEEP_KEY, _to_sleep, dict)
        profile = self._decode(items, PROFILE_KEY, UserProfile.from_dict, UserProfile)

        theme = items.get(THEME_KEY, "dark")
        if theme not in THEMES:
            logger.error(f"Invalid stored theme {theme!r}; using dark")
            theme = "dark"

        return HabitState(
            habits=tuple(habits),
            completions=completions,
            sleep=sleep,
            profile=profile,
            theme=theme,
        )

    def save_state(self, state: HabitState) -> None:
        """Persist every part of the state."""
        self.set_items(
            {
                HABITS_KEY: json.dumps([h.to_dict() for h in state.habits]),
                COMPLETIONS_KEY: json.dumps(state.completions),
                SLEEP_KEY: json.dumps(state.sleep),
                PROFILE_KEY: json.dumps(state.profile.to_dict()),
                THEME_KEY: state.theme,
            }
        )
        logger.debug(f"Saved state with {len(state.habits)} habits to {self._path}")

    # --- Insight cache ---

    def load_insight_cache(self) -> tuple[InsightBundle | None, int | None]:
        """Cached insight bundle and its last-run time in epoch milliseconds."""
        items = self._read_items()
        raw_last_run = items.get(INSIGHT_LAST_RUN_KEY)
        if INSIGHT_CACHE_KEY not in items or raw_last_run is None:
            return None, None

        try:
            bundle = InsightBundle.from_dict(json.loads(items[INSIGHT_CACHE_KEY]))
            last_run = int(raw_last_run)
        except (json.JSONDecodeError, InsightParseError, ValueError) as e:
            logger.error(f"Invalid cached insights: {e}; ignoring cache")
            return None, None
        return bundle, last_run

    def save_insight_cache(self, bundle: InsightBundle, last_run_ms: int) -> None:
        """Persist an insight bundle and the time it was generated."""
        self.set_items(
            {
                INSIGHT_CACHE_KEY: json.dumps(bundle.to_dict()),
                INSIGHT_LAST_RUN_KEY: str(last_run_ms),
            }
        )


def _to_completions(data: Any) -> CompletionMap:
    if not isinstance(data, dict):
        raise TypeError("completions must be an object")
    return {
        str(habit_id): {str(k): bool(v) for k, v in days.items()}
        for habit_id, days in data.items()
    }


def _to_sleep(data: Any) -> SleepMap:
    if not isinstance(data, dict):
        raise TypeError("sleepData must be an object")
    return {str(k): int(v) for k, v in data.items()}


__all__ = [
    "COMPLETIONS_KEY",
    "HABITS_KEY",
    "INSIGHT_CACHE_KEY",
    "INSIGHT_LAST_RUN_KEY",
    "PROFILE_KEY",
    "SCHEMA_VERSION",
    "SLEEP_KEY",
    "THEME_KEY",
    "HabitStore",
    "StorageError",
    "migrate_document",
]
