"""Polling loop that watches today's tracked time against the goal."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Protocol

from .client import AuthError, TransientError
from .config import MonitorSettings
from .goal import format_goal
from .models import TimeEntry
from .reporting import ProgressPrinter, ProgressReport, compute_total, format_duration

logger = logging.getLogger(__name__)

NOTIFICATION_TITLE = "Toggl Goal Met"


class PollState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"
    REACHED = "reached"
    FATAL = "fatal"


class EntrySource(Protocol):
    workspace_ids: frozenset[int]

    def fetch_today_entries(self, now: datetime) -> list[TimeEntry]:
        ...


def _local_now() -> datetime:
    return datetime.now().astimezone()


class GoalMonitor:
    """Polls the entry source at a fixed interval until the goal is met."""

    def __init__(
        self,
        source: EntrySource,
        goal_minutes: int,
        settings: MonitorSettings,
        printer: ProgressPrinter,
        notifier: Optional[Callable[[str, str], None]] = None,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self.source = source
        self.goal_minutes = goal_minutes
        self.settings = settings
        self.printer = printer
        self._notifier = notifier
        self._clock = clock
        self.state = PollState.IDLE

    @property
    def goal_seconds(self) -> int:
        return self.goal_minutes * 60

    def poll_once(self) -> PollState:
        self.state = PollState.POLLING
        try:
            entries = self.source.fetch_today_entries(self._clock())
        except AuthError as exc:
            logger.error("Error fetching Toggl data: %s", exc)
            self.printer.print_error(
                "Authentication failed. Please check your Toggl API token."
            )
            self.state = PollState.FATAL
            return self.state
        except TransientError as exc:
            self.printer.close_line()
            logger.warning("Error fetching Toggl data: %s", exc)
            self.state = PollState.IDLE
            return self.state

        now = self._clock()
        total = compute_total(entries, self.source.workspace_ids, now)
        report = ProgressReport(
            total_seconds=total, goal_seconds=self.goal_seconds, timestamp=now
        )
        logger.debug(
            "Tracked %s of %s across %d entries",
            format_duration(total),
            format_duration(self.goal_seconds),
            len(entries),
        )
        if report.reached:
            self._goal_reached(report)
            self.state = PollState.REACHED
        else:
            self.printer.print_progress(report)
            self.state = PollState.IDLE
        return self.state

    def _goal_reached(self, report: ProgressReport) -> None:
        if self.settings.notify and self._notifier is not None:
            self._notifier(
                NOTIFICATION_TITLE,
                f"You have reached your daily goal of {format_goal(self.goal_minutes)}!",
            )
        self.printer.print_goal_reached(report)
        logger.info("Goal of %s reached.", format_goal(self.goal_minutes))

    def run_until_stopped(self, stop_event: threading.Event) -> PollState:
        """Poll now and then every interval until a terminal state or ``stop_event``."""
        interval = self.settings.poll_interval.total_seconds()
        state = self.poll_once()
        # Sleep in an interruptible manner.
        while state is PollState.IDLE and not stop_event.wait(interval):
            state = self.poll_once()
        return state

    def run_forever(self) -> PollState:
        stop_event = threading.Event()
        logger.info(
            "Starting monitor; polling every %ss", self.settings.poll_interval.total_seconds()
        )
        try:
            return self.run_until_stopped(stop_event)
        except KeyboardInterrupt:
            self.printer.close_line()
            logger.info("Monitor interrupted.")
            self.state = PollState.IDLE
            return self.state
