"""Parsing of user supplied daily goals."""

from __future__ import annotations

import math


class GoalParseError(ValueError):
    """Raised when a goal string cannot be turned into minutes."""


def parse_goal(text: str) -> int:
    """Convert a goal such as ``6``, ``6:00``, ``3.5`` or ``445`` to minutes.

    Plain integers below 60 are hours and 60 or above are minutes, so ``6``
    means six hours while ``360`` means 360 minutes rather than 360 hours.
    """
    text = text.strip()
    if not text:
        raise GoalParseError("Goal time input is empty.")

    if ":" in text:
        hours_part, minutes_part = (text.split(":") + [""])[:2]
        minutes = _int_or_zero(hours_part) * 60 + _int_or_zero(minutes_part)
    elif "." in text:
        try:
            hours = float(text)
        except ValueError:
            raise GoalParseError("Invalid numeric format for goal time.") from None
        if not math.isfinite(hours):
            raise GoalParseError("Invalid numeric format for goal time.")
        minutes = math.floor(hours * 60 + 0.5)
    else:
        try:
            value = int(text)
        except ValueError:
            raise GoalParseError("Invalid goal time format.") from None
        minutes = value if value >= 60 else value * 60

    if minutes < 0:
        raise GoalParseError("Goal time cannot be negative.")
    return minutes


def _int_or_zero(value: str) -> int:
    try:
        parsed = int(value.strip())
    except ValueError:
        return 0
    return parsed if parsed >= 0 else 0


def format_goal(minutes: int) -> str:
    """Render a goal as ``6h`` or ``3h 30m``."""
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m" if mins else f"{hours}h"
