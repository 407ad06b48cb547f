"""Unit tests for week bucketing and weekly views."""

from datetime import date

from habitflow.habits.models import Habit
from habitflow.stats.weekly import (
    calendar_weeks_of_month,
    habit_week_fraction,
    habit_week_matrix,
    habit_weekly_counts,
    last_week_overview,
    literal_week_chunks,
    week_overview,
    weekly_average_sleep,
    weekly_improvement,
    weekly_sleep_summary,
)

HABIT_A = Habit(id="a", name="Run", category="Health", created_at="2024-01-01T00:00:00+00:00")
HABIT_B = Habit(id="b", name="Read", category="Learning", created_at="2024-01-01T00:00:00+00:00")


class TestCalendarWeeks:
    """Tests for the calendar-week-of-month policy."""

    def test_31_day_month(self) -> None:
        """Test bucket spans of a 31-day month."""
        buckets = calendar_weeks_of_month(2024, 3)
        spans = [(b.start.day, b.end.day) for b in buckets]
        assert spans == [(1, 7), (8, 14), (15, 21), (22, 31)]
        assert [b.label for b in buckets] == ["Week 1", "Week 2", "Week 3", "Week 4"]

    def test_28_day_month(self) -> None:
        """Test the last bucket stops at day 28."""
        buckets = calendar_weeks_of_month(2023, 2)
        assert (buckets[-1].start.day, buckets[-1].end.day) == (22, 28)
        assert buckets[-1].day_count == 7

    def test_weekly_improvement_percentages(self) -> None:
        """Test actual over possible completions per bucket."""
        completions = {"a": {"2024-03-01": True, "2024-03-02": True, "2024-03-03": True}}
        weeks = weekly_improvement([HABIT_A, HABIT_B], completions, 2024, 3)

        assert weeks[0].possible_completions == 14
        assert weeks[0].actual_completions == 3
        assert weeks[0].percentage == 21
        assert weeks[3].possible_completions == 20
        assert weeks[3].percentage == 0

    def test_no_habits_zero_percent(self) -> None:
        """Test buckets with nothing possible report 0%."""
        assert all(b.percentage == 0 for b in weekly_improvement([], {}, 2024, 3))


class TestLiteralWeekChunks:
    """Tests for the Monday-split policy."""

    def test_monday_start(self) -> None:
        """Test 2024-01-01..15 splits into 7, 7 and 1 days."""
        chunks = literal_week_chunks(date(2024, 1, 1), date(2024, 1, 15))
        assert [(c.start, c.end) for c in chunks] == [
            (date(2024, 1, 1), date(2024, 1, 7)),
            (date(2024, 1, 8), date(2024, 1, 14)),
            (date(2024, 1, 15), date(2024, 1, 15)),
        ]

    def test_midweek_start_short_first_chunk(self) -> None:
        """Test a range starting on Friday gives a short first chunk."""
        chunks = literal_week_chunks(date(2024, 3, 1), date(2024, 3, 10))
        assert [c.day_count for c in chunks] == [3, 7]

    def test_policies_differ(self) -> None:
        """Test the two policies disagree for the same month."""
        calendar = calendar_weeks_of_month(2024, 3)
        literal = literal_week_chunks(date(2024, 3, 1), date(2024, 3, 31))
        assert len(literal) == 5
        assert calendar[0].end != literal[0].end

    def test_tally(self) -> None:
        """Test chunks are tallied against habits."""
        completions = {"a": {"2024-01-15": True}}
        chunks = literal_week_chunks(date(2024, 1, 1), date(2024, 1, 15), [HABIT_A], completions)
        assert chunks[-1].possible_completions == 1
        assert chunks[-1].percentage == 100


class TestHabitWeeklyCounts:
    """Tests for habit_weekly_counts."""

    def test_counts(self) -> None:
        """Test per-week counts over valid days."""
        completions = {"a": {"2024-02-01": True, "2024-02-08": True, "2024-02-29": True}}
        counts = habit_weekly_counts("a", completions, 2024, 2)

        assert [c.label for c in counts] == ["W1", "W2", "W3", "W4"]
        assert [str(c) for c in counts] == ["1/7", "1/7", "0/7", "1/8"]

    def test_habit_week_fraction(self) -> None:
        """Test the share of days done in a bucket."""
        bucket = literal_week_chunks(date(2024, 1, 1), date(2024, 1, 7))[0]
        completions = {"a": {"2024-01-01": True}}
        assert habit_week_fraction("a", completions, bucket) == 1 / 7


class TestWeekViews:
    """Tests for Monday-aligned week views."""

    def test_week_overview(self) -> None:
        """Test the week containing a date starts on Monday."""
        days = week_overview([HABIT_A], {"a": {"2024-03-06": True}}, date(2024, 3, 7))
        assert days[0].date == date(2024, 3, 4)
        assert [d.completed for d in days] == [0, 0, 1, 0, 0, 0, 0]

    def test_last_week_overview(self) -> None:
        """Test the previous week relative to today."""
        days = last_week_overview([HABIT_A], {}, today=date(2024, 3, 10))
        assert days[0].date == date(2024, 2, 26)
        assert days[-1].date == date(2024, 3, 3)

    def test_habit_week_matrix(self) -> None:
        """Test 0/1 flags per day."""
        completions = {"b": {"2024-03-04": True, "2024-03-10": True}}
        matrix = habit_week_matrix([HABIT_A, HABIT_B], completions, date(2024, 3, 4))
        assert matrix["a"] == [0] * 7
        assert matrix["b"] == [1, 0, 0, 0, 0, 0, 1]

    def test_weekly_sleep_summary(self) -> None:
        """Test per-day hours and the average use the default."""
        summary = weekly_sleep_summary({"2024-03-04": 450}, date(2024, 3, 4))
        assert summary.hours[0] == (date(2024, 3, 4), 7.5)
        assert summary.hours[1][1] == 6.0
        # (450 + 6 * 360) / 7 / 60 = 6.214...
        assert summary.average_hours == 6.2

    def test_weekly_average_sleep(self) -> None:
        """Test the unrounded average over a bucket."""
        bucket = literal_week_chunks(date(2024, 1, 1), date(2024, 1, 2))[0]
        assert weekly_average_sleep({"2024-01-01": 480}, bucket) == 7.0
