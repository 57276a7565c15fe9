"""Command-line interface for the goal tracker."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from .client import TogglClient
from .config import ConfigError, MonitorSettings, TogglConfig
from .goal import GoalParseError, parse_goal
from .monitor import GoalMonitor, PollState
from .notify import send_notification
from .paths import get_log_path
from .reporting import ProgressPrinter

app = typer.Typer(help="Watch today's Toggl Track total until a daily goal is reached.")

USAGE = "Usage: goal-tracker <daily_goal_time>\nExample: goal-tracker 6:00"

EXIT_CODES = {
    PollState.REACHED: 0,
    PollState.FATAL: 1,
}


def setup_logging(verbose: bool, log_file: Optional[Path]) -> None:
    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handlers: list[logging.Handler] = [console]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=handlers,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@app.command()
def watch(
    goal: Optional[str] = typer.Argument(
        None,
        metavar="GOAL",
        help='Daily goal, e.g. "6", "6:00", "3.5" or "445" (60 or more means minutes).',
    ),
    workspaces: Optional[List[int]] = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Only count entries from this workspace id. Repeatable; overrides TOGGL_WORKSPACE_IDS.",
    ),
    poll_seconds: float = typer.Option(
        30.0,
        "--interval",
        min=5.0,
        help="Polling interval in seconds.",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        min=1.0,
        help="HTTP timeout in seconds (no timeout by default).",
    ),
    notify: bool = typer.Option(
        True,
        "--notify/--no-notify",
        help="Show a desktop notification when the goal is reached.",
    ),
    update_title: bool = typer.Option(
        True,
        "--title/--no-title",
        help="Show the remaining time in the terminal window title.",
    ),
    log_to_file: bool = typer.Option(
        True,
        "--log-file/--no-log-file",
        help="Also write logs to the per-user log file.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
) -> None:
    """Poll Toggl Track every interval and show progress toward GOAL."""
    if not goal:
        typer.echo(USAGE, err=True)
        raise typer.Exit(code=1)
    try:
        goal_minutes = parse_goal(goal)
    except GoalParseError as exc:
        typer.echo(f"Could not parse goal time: {exc}", err=True)
        raise typer.Exit(code=1)

    setup_logging(verbose, get_log_path() if log_to_file else None)

    try:
        config = TogglConfig.from_env()
        if workspaces:
            config = config.with_workspaces(workspaces)
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    settings = MonitorSettings.from_intervals(
        poll_seconds=poll_seconds, notify=notify, update_title=update_title
    )
    printer = ProgressPrinter(
        console_bar_length=settings.console_bar_length,
        title_bar_length=settings.title_bar_length,
        update_title=settings.update_title,
    )
    monitor = GoalMonitor(
        source=TogglClient(config, timeout=timeout),
        goal_minutes=goal_minutes,
        settings=settings,
        printer=printer,
        notifier=send_notification,
    )
    printer.print_goal(goal_minutes)
    state = monitor.run_forever()
    raise typer.Exit(code=EXIT_CODES.get(state, 130))
