"""AI coach: daily tips and insight bundles.

Both requests are single round trips with no retries. Any failure,
including a missing API key, degrades to a fixed fallback; nothing raised
by the model escapes these methods.
"""

import logging
from collections.abc import Sequence
from datetime import date

from habitflow.config import InsightConfig
from habitflow.habits.models import CompletionMap, Habit, SleepMap

from .bundle import InsightBundle, fallback_bundle, parse_bundle
from .client import CloudLanguageModel, CloudLLMConfig
from .errors import GenerationError
from .model import LanguageModel
from .prompts import build_insight_prompt, build_tip_prompt

logger = logging.getLogger(__name__)

FALLBACK_TIP = "Consistency is key! You got this."


class InsightCoach:
    """Builds prompts from habit history and interprets the model's replies."""

    def __init__(
        self,
        model: LanguageModel | None = None,
        config: InsightConfig | None = None,
    ) -> None:
        """Initialize the coach.

        Args:
            model: Language model to use. When omitted, the Claude model is
                created on first use from ANTHROPIC_API_KEY.
            config: Model and history settings.
        """
        self._model = model
        self._config = config or InsightConfig()

    def _get_model(self) -> LanguageModel:
        if self._model is None:
            llm_config = CloudLLMConfig.from_env(
                model=self._config.model,
                max_tokens=self._config.max_tokens,
                temperature=self._config.temperature,
            )
            self._model = CloudLanguageModel(llm_config)
        return self._model

    def request_daily_tip(
        self,
        habits: Sequence[Habit],
        completions: CompletionMap,
        today: date | None = None,
    ) -> str:
        """One motivational sentence about today's progress.

        Returns:
            Trimmed model text, or ``FALLBACK_TIP`` on any failure.
        """
        today = today or date.today()
        try:
            response = self._get_model().generate(build_tip_prompt(habits, completions, today))
            text = response.text.strip()
            if not text:
                raise GenerationError("Empty tip response")
            return text
        except Exception as e:
            logger.warning(f"Daily tip generation failed: {e}")
            return FALLBACK_TIP

    def request_insight_bundle(
        self,
        habits: Sequence[Habit],
        completions: CompletionMap,
        sleep: SleepMap,
        today: date | None = None,
    ) -> InsightBundle:
        """Structured analysis of the trailing history.

        Returns:
            Parsed bundle, or ``fallback_bundle()`` on any failure.
        """
        today = today or date.today()
        prompt = build_insight_prompt(
            habits, completions, sleep, today, history_days=self._config.history_days
        )
        try:
            response = self._get_model().generate(prompt, json_output=True)
            return parse_bundle(response.text)
        except Exception as e:
            logger.error(f"Insight generation failed: {e}")
            return fallback_bundle()


__all__ = ["FALLBACK_TIP", "InsightCoach"]
