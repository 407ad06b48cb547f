"""Insight module for HabitFlow.

Provides AI-generated daily tips and insight bundles with deterministic
fallbacks, plus the cooldown-based refresher.
"""

from .bundle import Badge, InsightBundle, fallback_bundle, parse_bundle
from .coach import FALLBACK_TIP, InsightCoach
from .errors import (
    GenerationError,
    InsightError,
    InsightParseError,
    MissingCredentialError,
    NoHabitsError,
)
from .mock import MockLanguageModel
from .model import LanguageModel, LLMResponse
from .prompts import quote_of_the_hour
from .refresher import InsightRefresher, format_remaining

__all__ = [
    "FALLBACK_TIP",
    "Badge",
    "GenerationError",
    "InsightBundle",
    "InsightCoach",
    "InsightError",
    "InsightParseError",
    "InsightRefresher",
    "LLMResponse",
    "LanguageModel",
    "MissingCredentialError",
    "MockLanguageModel",
    "NoHabitsError",
    "fallback_bundle",
    "format_remaining",
    "parse_bundle",
    "quote_of_the_hour",
]
