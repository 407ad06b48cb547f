"""HabitFlow command-line entry point.

Usage:
    python -m habitflow [OPTIONS] COMMAND [ARGS]

Options:
    --config PATH    Path to YAML config file
    --profile NAME   Profile name (dev, prod)
    --data PATH      State file (overrides storage.data_path)
    --help           Show this help message
    --version        Show version
"""

from pathlib import Path as _Path

from dotenv import load_dotenv

# Load .env before anything reads the environment
_env_file = _Path(__file__).parent.parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    load_dotenv()

import argparse
import logging
import os
import sys
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path

from . import __version__
from .config import HabitFlowConfig
from .config.loader import load_config
from .habits.dates import parse_date_key, to_date_key
from .habits.models import HabitState, is_completed, sleep_minutes_for
from .insights import (
    InsightCoach,
    InsightError,
    InsightRefresher,
    format_remaining,
    quote_of_the_hour,
)
from .report.export import export_report, preset_range
from .stats.daily import average_sleep_hours, completion_percentage, daily_stats, perfect_day_count
from .stats.weekly import literal_week_chunks
from .storage import HabitStore, StorageError

logger = logging.getLogger("habitflow")


def setup_logging(level: str) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _date_arg(value: str) -> date:
    try:
        return parse_date_key(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="habitflow",
        description="HabitFlow - Habit and sleep tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m habitflow habits                      # List habits and today's status
  python -m habitflow add "Meditate" --category Mind
  python -m habitflow toggle 1                    # Mark habit 1 done today
  python -m habitflow sleep --hours 7 --minutes 30
  python -m habitflow whoami --name "Sam"         # Update the display profile
  python -m habitflow export --months 3           # PDF of the last 3 months
  python -m habitflow insights --force

Environment:
  HABITFLOW_PROFILE    Set profile (dev, prod)
  ANTHROPIC_API_KEY    Credential for tips and insights
""",
    )

    parser.add_argument("--config", type=Path, help="Path to YAML config file", metavar="PATH")
    parser.add_argument(
        "--profile",
        choices=["dev", "prod"],
        default=os.environ.get("HABITFLOW_PROFILE"),
        help="Configuration profile to use",
    )
    parser.add_argument("--data", type=Path, help="State file to use", metavar="PATH")
    parser.add_argument(
        "--version",
        action="version",
        version=f"HabitFlow v{__version__}",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("habits", help="List habits and today's completion")

    add = commands.add_parser("add", help="Add a habit")
    add.add_argument("name")
    add.add_argument("--category", default="General")

    delete = commands.add_parser("delete", help="Delete a habit")
    delete.add_argument("habit_id", metavar="ID")

    toggle = commands.add_parser("toggle", help="Toggle a habit's completion")
    toggle.add_argument("habit_id", metavar="ID")
    toggle.add_argument("--date", type=_date_arg, help="Day to toggle (default: today)")

    sleep = commands.add_parser("sleep", help="Record sleep for a day")
    sleep.add_argument("--date", type=_date_arg, help="Day to record (default: today)")
    sleep.add_argument("--hours", type=int)
    sleep.add_argument("--minutes", type=int)

    profile = commands.add_parser("whoami", help="Show or update the display profile")
    profile.add_argument("--name")
    profile.add_argument("--tagline")
    profile.add_argument("--avatar-url", dest="avatar_url", metavar="URL")

    stats = commands.add_parser("stats", help="Summarize a date range")
    stats.add_argument("--start", type=_date_arg, help="First day (default: first of month)")
    stats.add_argument("--end", type=_date_arg, help="Last day (default: today)")

    export = commands.add_parser("export", help="Export a PDF report")
    export.add_argument("--start", type=_date_arg)
    export.add_argument("--end", type=_date_arg)
    export.add_argument("--months", type=int, help="Last N months up to today")
    export.add_argument("--output", type=Path, metavar="DIR", help="Output directory")

    commands.add_parser("tip", help="Get a motivational tip for today")

    insights = commands.add_parser("insights", help="Show AI insights")
    insights.add_argument("--force", action="store_true", help="Ignore the refresh cooldown")

    args = parser.parse_args(argv)
    # An unlogged night must stay unlogged
    if args.command == "sleep" and args.hours is None and args.minutes is None:
        sleep.error("at least one of --hours or --minutes is required")
    return args


def cmd_habits(state: HabitState, today: date) -> None:
    """Print each habit with today's completion mark."""
    key = to_date_key(today)
    for habit in state.habits:
        mark = "x" if is_completed(state.completions, habit.id, key) else " "
        print(f"[{mark}] {habit.id}  {habit.name} ({habit.category})")
    if not state.habits:
        print("No habits yet. Add one with: habitflow add NAME")


def cmd_stats(state: HabitState, start: date, end: date) -> None:
    days = daily_stats(state.habits, state.completions, state.sleep, start, end)
    print(f"Period: {to_date_key(start)} - {to_date_key(end)}")
    pct = completion_percentage(state.habits, state.completions, [d.date for d in days])
    print(f"Completion: {pct}%")
    print(f"Perfect days: {perfect_day_count(state.habits, state.completions, start, end)}")
    print(f"Average sleep: {average_sleep_hours(state.sleep, start, end):.1f}h")
    for bucket in literal_week_chunks(start, end, state.habits, state.completions):
        print(
            f"  {bucket.label}: {to_date_key(bucket.start)} - {to_date_key(bucket.end)}"
            f"  {bucket.percentage}%"
        )


def cmd_export(
    args: argparse.Namespace, state: HabitState, config: HabitFlowConfig, today: date
) -> Path:
    """Resolve the export range from flags or the configured default and write the PDF."""
    if args.months is not None:
        start, end = preset_range(args.months, today)
    elif args.start or args.end:
        start, end = args.start or today, args.end or today
    else:
        start, end = preset_range(config.report.default_months, today)
    output_dir = args.output or Path(config.report.output_dir)
    return export_report(state, start, end, output_dir)


def cmd_insights(
    args: argparse.Namespace, state: HabitState, store: HabitStore, config: HabitFlowConfig
) -> None:
    refresher = InsightRefresher(
        InsightCoach(config=config.insights),
        store,
        interval_ms=config.insights.refresh_interval_minutes * 60 * 1000,
    )
    bundle = refresher.refresh(state.habits, state.completions, state.sleep, force=args.force)
    if bundle is None:
        return

    print(f"Weekly vibe:     {bundle.weekly_vibe}")
    print(f"Winning streak:  {bundle.winning_streak}")
    print(f"Room for growth: {bundle.room_for_growth}")
    print(f"Smart tip:       {bundle.smart_tip}")
    for badge in bundle.badges:
        print(f"  {badge.emoji} {badge.name}: {badge.description}")

    remaining = refresher.time_remaining()
    if remaining > 0:
        print(f"Next refresh available in {format_remaining(remaining)}")


def run_command(
    args: argparse.Namespace, store: HabitStore, config: HabitFlowConfig, today: date
) -> None:
    """Execute one subcommand against the persisted state."""
    state = store.load_state()

    if args.command == "habits":
        cmd_habits(state, today)
    elif args.command == "add":
        state = state.add_habit(args.name, args.category)
        store.save_state(state)
        habit = state.habits[-1]
        print(f"Added {habit.name} ({habit.id})")
    elif args.command == "delete":
        name = state.habit(args.habit_id).name
        store.save_state(state.delete_habit(args.habit_id))
        print(f"Deleted {name}")
    elif args.command == "toggle":
        key = to_date_key(args.date or today)
        state = state.toggle_completion(args.habit_id, key, today)
        store.save_state(state)
        done = state.completions[args.habit_id][key]
        print(f"{state.habit(args.habit_id).name} on {key}: {'done' if done else 'not done'}")
    elif args.command == "sleep":
        key = to_date_key(args.date or today)
        state = state.set_sleep_field(key, hours=args.hours, minutes=args.minutes)
        store.save_state(state)
        hours, minutes = divmod(sleep_minutes_for(state.sleep, key), 60)
        print(f"Sleep on {key}: {hours}h {minutes}m")
    elif args.command == "whoami":
        fields = {"name": args.name, "tagline": args.tagline, "avatar_url": args.avatar_url}
        changes = {k: v for k, v in fields.items() if v is not None}
        if changes:
            state = state.update_profile(replace(state.profile, **changes))
            store.save_state(state)
        print(f"{state.profile.name} - {state.profile.tagline}")
    elif args.command == "stats":
        cmd_stats(state, args.start or today.replace(day=1), args.end or today)
    elif args.command == "export":
        path = cmd_export(args, state, config, today)
        print(f"Report written to {path}")
    elif args.command == "tip":
        coach = InsightCoach(config=config.insights)
        print(coach.request_daily_tip(state.habits, state.completions, today))
        print(f'"{quote_of_the_hour(datetime.now().hour)}"')
    elif args.command == "insights":
        cmd_insights(args, state, store, config)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for HabitFlow.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parse_args(argv)

    # Load configuration
    try:
        if args.config:
            config = load_config(path=args.config)
        elif args.profile:
            config = load_config(profile=args.profile)
        else:
            config = load_config()
    except FileNotFoundError as e:
        print(f"Error: Config file not found: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.level)
    logger.debug(f"HabitFlow v{__version__}, log level {config.logging.level}")

    store = HabitStore(args.data or config.storage.resolved_path)
    logger.debug(f"State file: {store.path}")

    try:
        run_command(args, store, config, date.today())
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1
    except (ValueError, StorageError, InsightError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
