"""Unit tests for habit state models."""

from datetime import date

import pytest

from habitflow.habits.models import (
    DEFAULT_SLEEP_MINUTES,
    Habit,
    HabitState,
    UserProfile,
    habit_color,
    initial_habits,
    is_completed,
    sleep_minutes_for,
)


def make_state() -> HabitState:
    return HabitState(habits=tuple(initial_habits()))


class TestHabit:
    """Tests for the Habit dataclass."""

    def test_create_trims_name(self) -> None:
        """Test names are trimmed and ids generated."""
        habit = Habit.create("  Meditate  ", "Mind")
        assert habit.name == "Meditate"
        assert habit.category == "Mind"
        assert len(habit.id) == 36

    def test_create_rejects_blank_name(self) -> None:
        """Test empty names are rejected."""
        with pytest.raises(ValueError):
            Habit.create("   ")

    def test_default_category(self) -> None:
        """Test blank category falls back to General."""
        assert Habit.create("Stretch", " ").category == "General"

    def test_dict_round_trip(self) -> None:
        """Test persisted form uses the 'created' key."""
        habit = Habit(id="7", name="Walk", category="Health", created_at="2024-01-01T00:00:00+00:00")
        data = habit.to_dict()
        assert data["created"] == "2024-01-01T00:00:00+00:00"
        assert Habit.from_dict(data) == habit


class TestUserProfile:
    """Tests for UserProfile."""

    def test_defaults(self) -> None:
        """Test default profile values."""
        profile = UserProfile()
        assert profile.name == "Guest User"
        assert profile.tagline == "Building habits, one day at a time."
        assert profile.avatar_url == ""

    def test_wire_keys(self) -> None:
        """Test avatar uses the camelCase key."""
        profile = UserProfile.from_dict({"name": "Sam", "avatarUrl": "http://x/a.png"})
        assert profile.avatar_url == "http://x/a.png"
        assert profile.to_dict()["avatarUrl"] == "http://x/a.png"
        assert profile.tagline == UserProfile().tagline


class TestHelpers:
    """Tests for completion and sleep lookups."""

    def test_initial_habits(self) -> None:
        """Test the three sample habits."""
        habits = initial_habits()
        assert [h.id for h in habits] == ["1", "2", "3"]
        assert habits[0].name == "Morning Run (5k)"
        assert habits[1].category == "Learning"

    def test_absent_completion_is_false(self) -> None:
        """Test missing entries count as not done."""
        assert is_completed({}, "1", "2024-03-01") is False
        assert is_completed({"1": {"2024-03-01": False}}, "1", "2024-03-01") is False
        assert is_completed({"1": {"2024-03-01": True}}, "1", "2024-03-01") is True

    def test_sleep_default(self) -> None:
        """Test unknown days fall back to 360 minutes."""
        assert sleep_minutes_for({}, "2024-03-01") == DEFAULT_SLEEP_MINUTES == 360
        assert sleep_minutes_for({"2024-03-01": 0}, "2024-03-01") == 0

    def test_habit_color_wraps(self) -> None:
        """Test the palette is indexed modulo its length."""
        assert habit_color(0) == habit_color(8) == "#4f46e5"


class TestHabitState:
    """Tests for HabitState transitions."""

    def test_toggle_creates_entry(self) -> None:
        """Test toggling an absent entry marks it done."""
        state = make_state()
        toggled = state.toggle_completion("1", "2024-03-01", today=date(2024, 3, 5))
        assert toggled.completions == {"1": {"2024-03-01": True}}
        assert state.completions == {}

    def test_toggle_twice_flips_back(self) -> None:
        """Test toggling twice leaves the day not done."""
        state = make_state()
        today = date(2024, 3, 5)
        state = state.toggle_completion("1", "2024-03-05", today=today)
        state = state.toggle_completion("1", "2024-03-05", today=today)
        assert is_completed(state.completions, "1", "2024-03-05") is False

    def test_toggle_future_rejected(self) -> None:
        """Test future days cannot be completed."""
        with pytest.raises(ValueError):
            make_state().toggle_completion("1", "2024-03-06", today=date(2024, 3, 5))

    def test_toggle_unknown_habit(self) -> None:
        """Test unknown habit ids raise KeyError."""
        with pytest.raises(KeyError):
            make_state().toggle_completion("missing", "2024-03-01", today=date(2024, 3, 5))

    def test_toggle_replaces_maps(self) -> None:
        """Test the completion map is replaced, not mutated."""
        state = make_state().toggle_completion("1", "2024-03-01", today=date(2024, 3, 5))
        before = state.completions
        after = state.toggle_completion("2", "2024-03-01", today=date(2024, 3, 5)).completions
        assert before is not after
        assert "2" not in before

    def test_add_and_delete_habit(self) -> None:
        """Test deleting keeps orphaned completions."""
        state = make_state().add_habit("Journal")
        assert state.habits[-1].name == "Journal"
        state = state.toggle_completion("1", "2024-03-01", today=date(2024, 3, 5))
        state = state.delete_habit("1")
        assert [h.id for h in state.habits][:2] == ["2", "3"]
        assert state.completions["1"] == {"2024-03-01": True}

    def test_set_sleep_field_clamps(self) -> None:
        """Test hours and minutes clamp independently."""
        state = make_state().set_sleep_field("2024-03-01", hours=30)
        assert state.sleep["2024-03-01"] == 23 * 60
        state = state.set_sleep_field("2024-03-01", minutes=-5)
        assert state.sleep["2024-03-01"] == 23 * 60
        state = state.set_sleep_field("2024-03-01", minutes=75)
        assert state.sleep["2024-03-01"] == 23 * 60 + 59

    def test_set_sleep_field_keeps_default_hours(self) -> None:
        """Test the untouched field comes from the default."""
        state = make_state().set_sleep_field("2024-03-01", minutes=30)
        assert state.sleep["2024-03-01"] == 6 * 60 + 30

    def test_set_theme(self) -> None:
        """Test theme validation."""
        state = make_state()
        assert state.theme == "dark"
        assert state.set_theme("light").theme == "light"
        with pytest.raises(ValueError):
            state.set_theme("blue")

    def test_update_profile(self) -> None:
        """Test the profile is replaced without touching the original state."""
        state = make_state()
        updated = state.update_profile(UserProfile(name="Sam", tagline="Early riser"))

        assert updated.profile.name == "Sam"
        assert updated.profile.tagline == "Early riser"
        assert updated.habits == state.habits
        assert state.profile == UserProfile()
