"""Configuration models and helpers for the goal tracker."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, Mapping, Optional

from dotenv import load_dotenv

DEFAULT_API_URL = "https://api.track.toggl.com/api/v9"


class ConfigError(RuntimeError):
    """Raised when a required configuration value is missing or invalid."""


def _require(name: str, value: Optional[str]) -> str:
    if value:
        return value
    raise ConfigError(f"{name} environment variable not set.")


def parse_workspace_ids(values: Iterable[str | int]) -> frozenset[int]:
    ids: set[int] = set()
    for value in values:
        if isinstance(value, int):
            ids.add(value)
            continue
        value = value.strip()
        if not value:
            continue
        try:
            ids.add(int(value))
        except ValueError:
            raise ConfigError(f"Invalid workspace id: {value!r}") from None
    return frozenset(ids)


@dataclass(frozen=True)
class TogglConfig:
    """Credentials and filters for the Toggl Track API."""

    api_token: str
    workspace_ids: frozenset[int] = field(default_factory=frozenset)
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TogglConfig":
        if environ is None:
            load_dotenv()
            environ = os.environ
        raw_ids = environ.get("TOGGL_WORKSPACE_IDS", "")
        return cls(
            api_token=_require("TOGGL_API_TOKEN", environ.get("TOGGL_API_TOKEN")),
            workspace_ids=parse_workspace_ids(raw_ids.split(",")),
            api_url=environ.get("TOGGL_API_URL") or DEFAULT_API_URL,
        )

    def with_workspaces(self, workspace_ids: Iterable[int]) -> "TogglConfig":
        return TogglConfig(
            api_token=self.api_token,
            workspace_ids=parse_workspace_ids(workspace_ids),
            api_url=self.api_url,
        )


@dataclass(slots=True)
class MonitorSettings:
    """Runtime configuration for the goal monitor."""

    poll_interval: timedelta = timedelta(seconds=30)
    console_bar_length: int = 60
    title_bar_length: int = 10
    notify: bool = True
    update_title: bool = True

    @classmethod
    def from_intervals(
        cls,
        poll_seconds: float,
        notify: bool = True,
        update_title: bool = True,
    ) -> "MonitorSettings":
        return cls(
            poll_interval=timedelta(seconds=poll_seconds),
            notify=notify,
            update_title=update_title,
        )
