"""Minimal Toggl Track client used by the goal monitor."""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from typing import Any, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from .config import TogglConfig
from .models import TimeEntry

logger = logging.getLogger(__name__)

AUTH_STATUS_CODES = frozenset({401, 403})

_ENTRIES_ADAPTER = TypeAdapter(list[TimeEntry])


class TogglError(RuntimeError):
    pass


class AuthError(TogglError):
    """The provider rejected the API token."""


class TransientError(TogglError):
    """A network, server or payload failure worth retrying on the next poll."""


def today_range(now: datetime) -> tuple[datetime, datetime]:
    """Return local midnight today and local midnight tomorrow."""
    today = now.astimezone().date()
    # Resolve each midnight separately; the UTC offset can change in between.
    start = datetime.combine(today, time.min).astimezone()
    end = datetime.combine(today + timedelta(days=1), time.min).astimezone()
    return start, end


class TogglClient:
    def __init__(
        self,
        config: TogglConfig,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._config = config
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.auth = (config.api_token, "api_token")
        self._session.headers.update(
            {"Content-Type": "application/json", "Accept": "application/json"}
        )

    @property
    def workspace_ids(self) -> frozenset[int]:
        return self._config.workspace_ids

    def _url(self, path: str) -> str:
        base = self._config.api_url.rstrip("/")
        return f"{base}/{path.lstrip('/')}"

    def _get(self, path: str, **kwargs: Any) -> Any:
        try:
            response = self._session.get(self._url(path), timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            raise TransientError(f"Toggl API request failed: {exc}") from exc
        if response.status_code in AUTH_STATUS_CODES:
            raise AuthError(f"Toggl API request failed with status {response.status_code}")
        if not response.ok:
            raise TransientError(
                f"Toggl API request failed with status {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise TransientError("Toggl API returned a non-JSON response") from exc

    def fetch_today_entries(self, now: datetime) -> list[TimeEntry]:
        """Fetch all time entries between local midnight today and tomorrow."""
        start, end = today_range(now)
        data = self._get(
            "me/time_entries",
            params={"start_date": start.isoformat(), "end_date": end.isoformat()},
        )
        # The endpoint returns either a bare list or an object with "items".
        if isinstance(data, dict):
            data = data.get("items") or []
        try:
            entries = _ENTRIES_ADAPTER.validate_python(data)
        except ValidationError as exc:
            raise TransientError(f"Unexpected time entry payload: {exc}") from exc
        logger.debug("Fetched %d time entries for %s", len(entries), start.date())
        return entries
