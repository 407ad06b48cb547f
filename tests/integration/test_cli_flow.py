"""Integration tests for the command-line flow.

Each test runs main() against a temporary state file and a minimal config.
"""

import os
from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest

from habitflow.__main__ import main
from habitflow.storage import HabitStore


@pytest.fixture
def cli(tmp_path: Path):
    """Run the CLI with an isolated config and state file."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("habitflow:\n  logging:\n    level: WARNING\n", encoding="utf-8")
    data_path = tmp_path / "state.json"

    def run(*args: str) -> int:
        return main(["--config", str(config_path), "--data", str(data_path), *args])

    run.data_path = data_path  # type: ignore[attr-defined]
    return run


@pytest.fixture
def no_api_key():
    """Environment without an Anthropic credential."""
    env_without_key = {k: v for k, v in os.environ.items() if k != "ANTHROPIC_API_KEY"}
    with patch.dict(os.environ, env_without_key, clear=True):
        yield


class TestHabitCommands:
    """Tests for habit management commands."""

    def test_list_initial_habits(self, cli, capsys) -> None:
        """Test a fresh state lists the sample habits."""
        assert cli("habits") == 0
        out = capsys.readouterr().out
        assert "[ ] 1  Morning Run (5k) (Health)" in out
        assert "Drink 2L Water" in out

    def test_add_toggle_delete(self, cli, capsys) -> None:
        """Test habits can be added, completed and removed."""
        assert cli("add", "  Meditate ", "--category", "Mind") == 0
        assert cli("toggle", "1") == 0
        assert cli("habits") == 0
        out = capsys.readouterr().out
        assert "Added Meditate" in out
        assert "[x] 1  Morning Run (5k)" in out
        assert "Meditate (Mind)" in out

        assert cli("delete", "1") == 0
        state = HabitStore(cli.data_path).load_state()
        assert [h.id for h in state.habits][:2] == ["2", "3"]
        assert "1" in state.completions

    def test_toggle_future_date(self, cli, capsys) -> None:
        """Test future toggles fail with a message."""
        assert cli("toggle", "1", "--date", "2999-01-01") == 1
        assert "Error:" in capsys.readouterr().err

    def test_unknown_habit(self, cli, capsys) -> None:
        """Test unknown ids fail with a message."""
        assert cli("delete", "nope") == 1
        assert "Unknown habit id: nope" in capsys.readouterr().err

    def test_blank_name(self, cli, capsys) -> None:
        """Test blank habit names are rejected."""
        assert cli("add", "   ") == 1
        assert "must not be empty" in capsys.readouterr().err

    def test_sleep(self, cli, capsys) -> None:
        """Test sleep is recorded with clamped fields."""
        assert cli("sleep", "--date", "2024-03-01", "--hours", "7", "--minutes", "90") == 0
        assert "Sleep on 2024-03-01: 7h 59m" in capsys.readouterr().out
        assert HabitStore(cli.data_path).load_state().sleep == {"2024-03-01": 479}

    def test_sleep_needs_a_value(self, cli, capsys) -> None:
        """Test sleep without --hours or --minutes records nothing."""
        with pytest.raises(SystemExit) as exc_info:
            cli("sleep", "--date", "2024-03-01")

        assert exc_info.value.code == 2
        assert "--hours or --minutes" in capsys.readouterr().err
        assert not cli.data_path.exists()

    def test_invalid_utf8_state(self, cli, capsys) -> None:
        """Test a state file that is not UTF-8 loads as defaults."""
        cli.data_path.write_bytes(b'{"version": 1, "items": {"theme": "\xff\xfe"}}')

        assert cli("habits") == 0
        assert "Morning Run (5k)" in capsys.readouterr().out

    def test_whoami_updates_profile(self, cli, capsys) -> None:
        """Test the profile command saves only the given fields."""
        assert cli("whoami", "--name", "Sam") == 0
        assert cli("whoami") == 0

        out = capsys.readouterr().out
        assert out.count("Sam - Building habits, one day at a time.") == 2
        profile = HabitStore(cli.data_path).load_state().profile
        assert profile.name == "Sam"
        assert profile.avatar_url == ""


class TestReportCommands:
    """Tests for stats and export."""

    def test_stats(self, cli, capsys) -> None:
        """Test a range summary with default sleep."""
        assert cli("stats", "--start", "2024-03-01", "--end", "2024-03-31") == 0
        out = capsys.readouterr().out
        assert "Perfect days: 0" in out
        assert "Average sleep: 6.0h" in out
        assert "Week 5: 2024-03-25 - 2024-03-31" in out

    def test_stats_reversed_range(self, cli, capsys) -> None:
        """Test reversed ranges fail cleanly."""
        assert cli("stats", "--start", "2024-03-31", "--end", "2024-03-01") == 1
        assert "Error:" in capsys.readouterr().err

    def test_export(self, cli, tmp_path: Path, capsys) -> None:
        """Test export writes a named PDF."""
        out_dir = tmp_path / "reports"
        assert cli("export", "--start", "2024-03-01", "--end", "2024-03-31", "--output", str(out_dir)) == 0

        pdf = out_dir / "HabitFlow_Export_2024-03-01_to_2024-03-31.pdf"
        assert pdf.exists()
        assert str(pdf) in capsys.readouterr().out

    def test_export_months(self, cli, tmp_path: Path) -> None:
        """Test the last-N-months shortcut."""
        out_dir = tmp_path / "reports"
        assert cli("export", "--months", "1", "--output", str(out_dir)) == 0

        pdfs = list(out_dir.glob("HabitFlow_Export_*.pdf"))
        assert len(pdfs) == 1
        assert date.today().isoformat() in pdfs[0].name


class TestInsightCommands:
    """Tests for tip and insights without a credential."""

    def test_tip_fallback(self, cli, capsys, no_api_key) -> None:
        """Test the tip falls back without an API key."""
        assert cli("tip") == 0
        assert "Consistency is key! You got this." in capsys.readouterr().out

    def test_insights_fallback_then_cached(self, cli, capsys, no_api_key) -> None:
        """Test insights fall back and are then served from cache."""
        assert cli("insights") == 0
        first = capsys.readouterr().out
        assert "Newcomer" in first

        assert cli("insights") == 0
        second = capsys.readouterr().out
        assert "Newcomer" in second
        assert "Next refresh available in" in second

        bundle, last_run = HabitStore(cli.data_path).load_insight_cache()
        assert bundle is not None
        assert last_run is not None

    def test_insights_without_habits(self, cli, capsys, no_api_key) -> None:
        """Test manual insights with no habits report an error."""
        for habit_id in ("1", "2", "3"):
            assert cli("delete", habit_id) == 0
        capsys.readouterr()

        assert cli("insights") == 1
        assert "No habits found. Add habits to generate insights." in capsys.readouterr().err
