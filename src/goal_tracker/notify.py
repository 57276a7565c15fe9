"""Native desktop notifications."""

from __future__ import annotations

import logging
import subprocess
import sys

logger = logging.getLogger(__name__)


def _applescript_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def notification_command(title: str, message: str, platform: str | None = None) -> list[str] | None:
    """Return the command used to show a notification on ``platform``."""
    platform = platform or sys.platform
    if platform == "darwin":
        script = (
            f"display notification {_applescript_string(message)} "
            f"with title {_applescript_string(title)}"
        )
        return ["osascript", "-e", script]
    if platform.startswith("linux"):
        return ["notify-send", title, message]
    return None


def send_notification(title: str, message: str) -> None:
    """Show a notification; failures are logged and otherwise ignored."""
    command = notification_command(title, message)
    if command is None:
        logger.debug("Notifications are not supported on %s", sys.platform)
        return
    try:
        subprocess.run(command, check=True, capture_output=True)
    except (OSError, subprocess.CalledProcessError):
        logger.debug("Failed to send notification via %s", command[0], exc_info=True)
