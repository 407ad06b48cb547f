"""Structured insight bundle returned by the text-generation model."""

import json
import re
from dataclasses import dataclass, field
from typing import Any

from .errors import InsightParseError

BADGE_COLORS = ("indigo", "emerald", "amber", "rose", "cyan", "purple")
DEFAULT_BADGE_COLOR = "indigo"

_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


@dataclass
class Badge:
    """An achievement badge awarded from recent performance."""

    name: str
    emoji: str
    description: str
    color: str = DEFAULT_BADGE_COLOR

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "emoji": self.emoji,
            "description": self.description,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Badge":
        """Create from a wire dictionary; unknown colours become indigo."""
        if not isinstance(data, dict):
            raise InsightParseError(f"Badge must be an object, got {type(data).__name__}")
        color = str(data.get("color", DEFAULT_BADGE_COLOR)).strip().lower()
        return cls(
            name=str(data.get("name", "")),
            emoji=str(data.get("emoji", "")),
            description=str(data.get("description", "")),
            color=color if color in BADGE_COLORS else DEFAULT_BADGE_COLOR,
        )


@dataclass
class InsightBundle:
    """Summary of recent performance: vibe, highlights, tip and badges."""

    weekly_vibe: str
    winning_streak: str
    room_for_growth: str
    smart_tip: str
    badges: list[Badge] = field(default_factory=list)

    _WIRE_FIELDS = {
        "weekly_vibe": "weeklyVibe",
        "winning_streak": "winningStreak",
        "room_for_growth": "roomForGrowth",
        "smart_tip": "smartTip",
    }

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase wire form (also used for caching)."""
        data: dict[str, Any] = {wire: getattr(self, attr) for attr, wire in self._WIRE_FIELDS.items()}
        data["badges"] = [b.to_dict() for b in self.badges]
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "InsightBundle":
        """Create from the wire form.

        Raises:
            InsightParseError: If a required field is missing or malformed.
        """
        if not isinstance(data, dict):
            raise InsightParseError(f"Insight bundle must be an object, got {type(data).__name__}")

        values: dict[str, str] = {}
        for attr, wire in cls._WIRE_FIELDS.items():
            value = data.get(wire)
            if not isinstance(value, str) or not value.strip():
                raise InsightParseError(f"Insight bundle is missing '{wire}'")
            values[attr] = value.strip()

        badges = data.get("badges", [])
        if not isinstance(badges, list):
            raise InsightParseError("'badges' must be a list")

        return cls(badges=[Badge.from_dict(b) for b in badges], **values)


def parse_bundle(text: str) -> InsightBundle:
    """Parse generated text into an insight bundle.

    Tolerates a Markdown code fence around the JSON object.

    Raises:
        InsightParseError: If the text is not a valid bundle.
    """
    stripped = text.strip()
    match = _FENCE.match(stripped)
    if match:
        stripped = match.group(1)
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise InsightParseError(f"Insight response is not valid JSON: {e}") from e
    return InsightBundle.from_dict(data)


def fallback_bundle() -> InsightBundle:
    """Deterministic bundle shown when generation fails."""
    return InsightBundle(
        weekly_vibe="System initializing... gathering more data for analysis.",
        winning_streak="Consistency Building",
        room_for_growth="Data Collection",
        smart_tip="Keep tracking your habits and sleep to unlock AI insights.",
        badges=[
            Badge(name="Newcomer", emoji="👋", description="Welcome to HabitFlow", color="cyan"),
        ],
    )


__all__ = [
    "BADGE_COLORS",
    "Badge",
    "InsightBundle",
    "fallback_bundle",
    "parse_bundle",
]
