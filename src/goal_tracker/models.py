"""Domain models for tracked time."""

from __future__ import annotations

import math
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_validator


class TimeEntry(BaseModel):
    """A logged (or still running) span of work returned by Toggl."""

    workspace_id: int
    start: datetime
    duration: int

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("start")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def is_running(self) -> bool:
        return self.duration < 0

    def elapsed_seconds(self, now: datetime) -> int:
        """Seconds this entry contributes as of ``now``; never negative."""
        if not self.is_running:
            return self.duration
        elapsed = (now - self.start).total_seconds()
        return max(0, math.floor(elapsed))
