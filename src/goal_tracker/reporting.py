"""Accumulation of tracked time and terminal progress output."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, TextIO

from .models import TimeEntry

CONSOLE_FILLED = "█"
CONSOLE_EMPTY = "░"
TITLE_FILLED = "█"
TITLE_EMPTY = "▒"


def compute_total(
    entries: Iterable[TimeEntry], workspace_ids: Iterable[int], now: datetime
) -> int:
    """Sum the seconds of today's entries, counting running ones up to ``now``.

    An empty ``workspace_ids`` disables filtering. Overlapping entries are
    summed as returned.
    """
    allowed = frozenset(workspace_ids)
    total = 0
    for entry in entries:
        if allowed and entry.workspace_id not in allowed:
            continue
        total += entry.elapsed_seconds(now)
    return total


@dataclass(slots=True, frozen=True)
class ProgressReport:
    """Tracked time compared against the daily goal at one instant."""

    total_seconds: int
    goal_seconds: int
    timestamp: datetime

    @property
    def reached(self) -> bool:
        return self.total_seconds >= self.goal_seconds

    @property
    def remaining_seconds(self) -> int:
        return max(0, self.goal_seconds - self.total_seconds)

    @property
    def percent(self) -> float:
        if self.goal_seconds <= 0:
            return 100.0
        return min(100.0, 100.0 * self.total_seconds / self.goal_seconds)

    def status_line(self, bar_length: int = 60) -> str:
        bar = render_bar(self.percent, bar_length, CONSOLE_FILLED, CONSOLE_EMPTY)
        return (
            f"[{self.timestamp.strftime('%H:%M')}] "
            f"({format_hours_minutes(self.remaining_seconds)} remaining) "
            f"[{bar}] {self.percent:.1f}%"
        )

    def title(self, bar_length: int = 10) -> str:
        bar = render_bar(self.percent, bar_length, TITLE_FILLED, TITLE_EMPTY)
        return f"(-{format_hours_minutes(self.remaining_seconds)}) [{bar}]"


def render_bar(percent: float, length: int, filled: str = "#", empty: str = "-") -> str:
    percent = min(100.0, max(0.0, percent))
    filled_cells = min(length, math.floor(percent / 100 * length))
    return filled * filled_cells + empty * (length - filled_cells)


def format_hours_minutes(seconds: int) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    return f"{hours}:{remainder // 60:02d}"


def format_tracked(seconds: int) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    return f"{hours}h {remainder // 60}m"


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class ProgressPrinter:
    """Render progress in the console, redrawing a single status line."""

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        *,
        console_bar_length: int = 60,
        title_bar_length: int = 10,
        update_title: bool = True,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.error_stream = error_stream if error_stream is not None else sys.stderr
        self.console_bar_length = console_bar_length
        self.title_bar_length = title_bar_length
        self.update_title = update_title
        self._line_open = False

    def print_goal(self, goal_minutes: int) -> None:
        self._write_line(f"Goal: {format_hours_minutes(goal_minutes * 60)}")

    def print_progress(self, report: ProgressReport) -> None:
        if self.update_title:
            self.stream.write(f"\x1b]0;{report.title(self.title_bar_length)}\x07")
        self.stream.write("\r" + report.status_line(self.console_bar_length))
        self.stream.flush()
        self._line_open = True

    def print_goal_reached(self, report: ProgressReport) -> None:
        self._write_line(
            f"Goal reached! You have tracked {format_tracked(report.total_seconds)} today."
        )

    def print_error(self, message: str) -> None:
        self.close_line()
        self.error_stream.write(message + "\n")
        self.error_stream.flush()

    def close_line(self) -> None:
        """End a pending status line so other output starts on a fresh line."""
        if self._line_open:
            self.stream.write("\n")
            self.stream.flush()
            self._line_open = False

    def _write_line(self, text: str) -> None:
        self.close_line()
        self.stream.write(text + "\n")
        self.stream.flush()
