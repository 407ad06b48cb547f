"""Caller-side cooldown around insight bundle generation.

The cached bundle and the last-run time survive restarts through the
store. The cooldown is advisory: a forced refresh always calls the model,
and nothing stops two refreshes from overlapping.
"""

import logging
import time
from collections.abc import Callable, Sequence
from typing import Protocol

from habitflow.habits.models import CompletionMap, Habit, SleepMap

from .bundle import InsightBundle
from .coach import InsightCoach
from .errors import NoHabitsError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 15 * 60 * 1000


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def format_remaining(ms: int) -> str:
    """Render a countdown as ``m:ss``."""
    ms = max(ms, 0)
    return f"{ms // 60000}:{(ms % 60000) // 1000:02d}"


class InsightCache(Protocol):
    """Persistence for the last generated bundle."""

    def load_insight_cache(self) -> tuple[InsightBundle | None, int | None]:
        """Return the cached bundle and its generation time (epoch ms)."""
        ...

    def save_insight_cache(self, bundle: InsightBundle, last_run_ms: int) -> None:
        """Persist a bundle and its generation time."""
        ...


class InsightRefresher:
    """Serves cached insights and regenerates them when the cooldown expires."""

    def __init__(
        self,
        coach: InsightCoach,
        cache: InsightCache,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """Initialize the refresher.

        Args:
            coach: Coach used to generate new bundles
            cache: Store for the bundle and last-run timestamp
            interval_ms: Cooldown between automatic refreshes
            clock: Source of epoch milliseconds
        """
        self._coach = coach
        self._cache = cache
        self._interval_ms = interval_ms
        self._clock = clock

    def cached(self) -> InsightBundle | None:
        """The last bundle, if any."""
        bundle, _ = self._cache.load_insight_cache()
        return bundle

    def time_remaining(self) -> int:
        """Milliseconds until the cooldown expires; 0 when stale or never run."""
        bundle, last_run = self._cache.load_insight_cache()
        if bundle is None or last_run is None:
            return 0
        return max(self._interval_ms - (self._clock() - last_run), 0)

    def refresh(
        self,
        habits: Sequence[Habit],
        completions: CompletionMap,
        sleep: SleepMap,
        force: bool = False,
        auto: bool = False,
    ) -> InsightBundle | None:
        """Return fresh or cached insights.

        Args:
            habits: Current habits
            completions: Current completion map
            sleep: Current sleep map
            force: Ignore the cooldown
            auto: Triggered by a timer rather than the user

        Returns:
            The bundle, or None for an automatic refresh with no habits.

        Raises:
            NoHabitsError: If the user asked for insights with no habits.
        """
        if not habits:
            if auto:
                logger.debug("Skipping automatic insight refresh: no habits")
                return None
            raise NoHabitsError("No habits found. Add habits to generate insights.")

        if not force:
            remaining = self.time_remaining()
            if remaining > 0:
                logger.info(f"Insights are fresh, next refresh in {format_remaining(remaining)}")
                return self.cached()

        bundle = self._coach.request_insight_bundle(habits, completions, sleep)
        self._cache.save_insight_cache(bundle, self._clock())
        return bundle


__all__ = [
    "DEFAULT_INTERVAL_MS",
    "InsightCache",
    "InsightRefresher",
    "format_remaining",
    "now_ms",
]
