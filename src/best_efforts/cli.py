#!/usr/bin/env python3
"""
Best Efforts CLI.

Finds personal bests at standard race distances from workout lap splits.

Usage:
    best-efforts import runs.json        # Load workouts and laps from JSON
    best-efforts analyze --days 365      # Leaderboard, recent PRs, insights
    best-efforts workout 42              # Efforts and near misses in one run
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import get_settings
from .db.database import BestEffortsDatabase
from .exceptions import BestEffortsError, WorkoutValidationError
from .models.efforts import BestEffort, WorkoutWithLaps
from .services.best_efforts_service import BestEffortsService

console = Console()


def _effort_table(title: str, efforts: List[BestEffort], show_rank: bool = True) -> Table:
    """Build a table of efforts."""
    table = Table(title=title, box=box.ROUNDED)
    if show_rank:
        table.add_column("#", justify="right")
    table.add_column("Distance", style="cyan")
    table.add_column("Time", justify="right", style="bold")
    table.add_column("Pace /mi", justify="right")
    table.add_column("VDOT", justify="right")
    table.add_column("Date")
    table.add_column("Laps", justify="right")
    table.add_column("PR", justify="center")

    for effort in efforts:
        row = [
            effort.distance,
            effort.time_formatted,
            effort.pace,
            str(effort.equivalent_vdot or "-"),
            effort.workout_date.isoformat(),
            f"{effort.start_lap_index}-{effort.end_lap_index}",
            "[green]yes[/green]" if effort.is_pr else "",
        ]
        if show_rank:
            row.insert(0, str(effort.rank_all_time or "-"))
        table.add_row(*row)
    return table


def load_workouts_file(path: Path) -> List[WorkoutWithLaps]:
    """Parse a JSON list of {"workout": {...}, "laps": [...]} entries."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise WorkoutValidationError(f"Cannot read {path}: {e}", field="file") from e

    if not isinstance(raw, list):
        raise WorkoutValidationError(
            "Expected a JSON list of workout entries", field="file"
        )

    try:
        return [WorkoutWithLaps.model_validate(item) for item in raw]
    except PydanticValidationError as e:
        raise WorkoutValidationError(
            f"Invalid workout entry in {path}",
            details={"errors": e.errors(include_url=False)},
        ) from e


def cmd_import(args, service: BestEffortsService):
    """Load workouts and laps from a JSON file into the store."""
    entries = load_workouts_file(Path(args.file))
    for entry in entries:
        service.db.save_workout_with_laps(entry, user_id=args.user)

    lap_count = sum(len(entry.laps) for entry in entries)
    console.print(
        f"[green]Imported {len(entries)} workouts ({lap_count} laps) "
        f"into {service.db.db_path}[/green]"
    )


def cmd_analyze(args, service: BestEffortsService):
    """Show the best-effort leaderboard, recent PRs and insights."""
    console.print()
    console.print(Panel("[bold]Best Efforts - All-Time Leaderboard[/bold]"))
    console.print()

    result = service.get_best_efforts_with_insights(user_id=args.user, days=args.days)

    if result.best_efforts:
        leaders = [e for e in result.best_efforts if e.rank_all_time and e.rank_all_time <= args.top]
        console.print(_effort_table(f"Top {args.top} per distance (last {args.days} days)", leaders))
        console.print()

    if result.recent_prs:
        console.print(_effort_table("Recent PRs", result.recent_prs, show_rank=False))
        console.print()

    for message in result.notifications:
        console.print(f"  {message}")
    for insight in result.insights:
        console.print(f"  [bold magenta]{insight}[/bold magenta]")
    console.print()


def cmd_workout(args, service: BestEffortsService):
    """Show efforts and near misses for one workout."""
    console.print()
    console.print(Panel(f"[bold]Best Efforts - Workout {args.workout_id}[/bold]"))
    console.print()

    result = service.get_workout_best_efforts(args.workout_id, user_id=args.user)

    if not result.efforts:
        console.print("No standard distance efforts in this workout.")
        console.print()
        return

    console.print(_effort_table("Efforts", result.efforts, show_rank=False))
    console.print()

    if result.near_misses:
        table = Table(title="Near Misses", box=box.ROUNDED)
        table.add_column("Distance", style="cyan")
        table.add_column("Time (s)", justify="right")
        table.add_column("Missed by", justify="right", style="yellow")
        for miss in result.near_misses:
            table.add_row(
                miss.distance,
                f"{miss.time_seconds:.0f}",
                f"{miss.missed_by_seconds:.0f}s ({miss.missed_by_percent:.1f}%)",
            )
        console.print(table)
        console.print()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="best-efforts",
        description="Best Efforts - personal bests from workout lap splits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  best-efforts import runs.json
  best-efforts analyze --days 365
  best-efforts workout 42
        """,
    )
    parser.add_argument("--db", help="Path to the workout database")
    parser.add_argument("--user", default="default", help="User identifier")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    # Accept --user after the subcommand too, without clobbering an earlier one
    user_parent = argparse.ArgumentParser(add_help=False)
    user_parent.add_argument("--user", default=argparse.SUPPRESS, help="User identifier")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    import_p = subparsers.add_parser(
        "import", parents=[user_parent], help="Import workouts and laps from JSON"
    )
    import_p.add_argument("file", help="JSON file of workout entries")

    analyze_p = subparsers.add_parser(
        "analyze", parents=[user_parent], help="Show the best-effort leaderboard"
    )
    analyze_p.add_argument(
        "--days", "-d", type=int, default=get_settings().history_days,
        help="Number of days of history to analyze",
    )
    analyze_p.add_argument(
        "--top", "-n", type=int, default=3, help="Efforts to show per distance"
    )

    workout_p = subparsers.add_parser(
        "workout", parents=[user_parent], help="Show efforts in one workout"
    )
    workout_p.add_argument("workout_id", help="Workout ID")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level="DEBUG" if args.verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "import": cmd_import,
        "analyze": cmd_analyze,
        "workout": cmd_workout,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    try:
        service = BestEffortsService(BestEffortsDatabase(args.db), settings)
        command(args, service)
    except BestEffortsError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
