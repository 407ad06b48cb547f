"""Prompt templates for daily tips and insight bundles."""

from collections.abc import Sequence
from datetime import date

from habitflow.habits.dates import add_days, to_date_key
from habitflow.habits.models import CompletionMap, Habit, SleepMap, is_completed
from habitflow.stats.daily import count_completed, round_half_up

from .bundle import BADGE_COLORS

QUOTES = [
    "Believe you can and you're halfway there.",
    "Your only limit is you.",
    "The only way to do great work is to love what you do.",
    "Don't watch the clock; do what it does. Keep going.",
    "The future depends on what you do today.",
    "It always seems impossible until it is done.",
    "Success is the sum of small efforts, repeated day in and day out.",
    "You don't have to be great to start, but you have to start to be great.",
    "The secret of getting ahead is getting started.",
    "Dream big and dare to fail.",
    "Act as if what you do makes a difference. It does.",
    "Success is not final, failure is not fatal: it is the courage to continue that counts.",
    "What you get by achieving your goals is not as important as what you become by achieving your goals.",
    "Discipline is doing what needs to be done, even if you don't want to do it.",
    "Motivation is what gets you started. Habit is what keeps you going.",
    "You are what you repeatedly do. Excellence, then, is not an act, but a habit.",
    "Small daily improvements over time lead to stunning results.",
    "Don't wish it were easier. Wish you were better.",
    "The difference between who you are and who you want to be is what you do.",
    "Fall seven times, stand up eight.",
    "Your habits decide your future.",
    "Focus on the process, not the perfection.",
    "One day or day one. You decide.",
    "Consistency is the key to success.",
]


def quote_of_the_hour(hour: int) -> str:
    """Motivational quote for the given hour of day."""
    return QUOTES[hour % len(QUOTES)]


def build_tip_prompt(habits: Sequence[Habit], completions: CompletionMap, today: date) -> str:
    """Prompt asking for one short motivational sentence."""
    done = count_completed(habits, completions, to_date_key(today))
    names = ", ".join(h.name for h in habits)
    return (
        "You are a friendly habit coach.\n"
        f"Context: User has completed {done} out of {len(habits)} habits today.\n"
        f"Habits: {names}.\n\n"
        "Task: Write a SINGLE, short, punchy, motivational sentence (max 20 words) "
        "to encourage them right now.\n"
        'Use an emoji. Do not use "System Notice" or formal language. '
        "Be human and enthusiastic."
    )


def trailing_days(today: date, count: int) -> list[date]:
    """The ``count`` days ending with ``today``, oldest first."""
    return [add_days(today, -offset) for offset in range(count - 1, -1, -1)]


def format_sleep(minutes: int | None) -> str:
    """``7h 30m`` style duration, or ``Not tracked``."""
    if minutes is None:
        return "Not tracked"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m"


def trailing_average_sleep(sleep: SleepMap, days: Sequence[date]) -> str:
    """Average of logged nights only, in hours, or ``N/A``."""
    logged = [sleep[k] for k in (to_date_key(d) for d in days) if k in sleep]
    if not logged:
        return "N/A"
    return f"{round_half_up(sum(logged) / len(logged) / 60, 1):.1f}"


def build_daily_log(
    habits: Sequence[Habit],
    completions: CompletionMap,
    sleep: SleepMap,
    days: Sequence[date],
) -> str:
    """One block per day listing sleep and completed/missed habits."""
    blocks = []
    for day in days:
        key = to_date_key(day)
        completed = [h.name for h in habits if is_completed(completions, h.id, key)]
        missed = [h.name for h in habits if not is_completed(completions, h.id, key)]
        blocks.append(
            f"Date: {key}\n"
            f"- Sleep: {format_sleep(sleep.get(key))}\n"
            f"- Habits Completed: {', '.join(completed) or 'None'}\n"
            f"- Habits Missed: {', '.join(missed) or 'None'}"
        )
    return "\n\n".join(blocks)


INSIGHT_SCHEMA = """{
  "weeklyVibe": "A cool, futuristic, personalized one-sentence summary of their performance vibe. Mention sleep if relevant.",
  "winningStreak": "Highlight their best performing habit or a positive sleep pattern.",
  "roomForGrowth": "Identify the habit with the most misses OR a sleep issue (e.g., 'Inconsistent sleep impacting Morning Run'). Be specific.",
  "smartTip": "A data-backed actionable tip. E.g., 'Try sleeping 7h+ to secure your Reading habit.'",
  "badges": [
    {
      "name": "Creative Badge Name",
      "emoji": "🏆",
      "description": "Specific reason they earned this based on data.",
      "color": "indigo"
    }
  ]
}"""


def build_insight_prompt(
    habits: Sequence[Habit],
    completions: CompletionMap,
    sleep: SleepMap,
    today: date,
    history_days: int = 15,
) -> str:
    """Prompt asking for a JSON insight bundle over the trailing history."""
    days = trailing_days(today, history_days)
    habit_list = ", ".join(f"{h.name} ({h.category})" for h in habits)
    span = history_days - 1

    return f"""You are the "Neural Core" of an advanced Habit & Biometric Tracker app.
Your role is to act as a high-performance behavioral analyst.

--- USER DATA SNAPSHOT ---
Average Sleep (Last {span} days): {trailing_average_sleep(sleep, days)} hours
Total Active Habits: {len(habits)}
Habit List: {habit_list}

--- DAILY PERFORMANCE LOG (Last {span} Days) ---
{build_daily_log(habits, completions, sleep, days)}

--- ANALYTICAL TASK ---
1. **Correlate Sleep & Performance**: Analyze if low sleep causes specific habits to be missed. Does high sleep lead to perfect days?
2. **Identify Micro-Trends**: Look for patterns like "Misses habits on weekends", "skips 'Read' when 'Run' is missed", etc.
3. **Construct Feedback**: Give direct, constructive criticism or praise based on the data.

--- REQUIRED JSON OUTPUT ---
Return ONLY a valid JSON object matching this schema. Do not use Markdown blocks.

{INSIGHT_SCHEMA}

*Badge Color Options*: {", ".join(BADGE_COLORS)}.
*Badge Criteria*:
- Consistent Sleep (>7h avg) -> "Restoration Master"
- Perfect Streak -> "Unstoppable Force"
- Weekend Warrior -> "Weekender"
- Early Riser (deduced from context if possible, else generic consistency) -> "Early Bird"
"""


__all__ = [
    "QUOTES",
    "build_daily_log",
    "build_insight_prompt",
    "build_tip_prompt",
    "format_sleep",
    "quote_of_the_hour",
    "trailing_average_sleep",
    "trailing_days",
]
