"""Helpers for "HH:MM" clock lexemes."""

import re
from datetime import time

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

_CLOCK_RE = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")


def parse_clock(lexeme: str) -> int:
    """Convert an "HH:MM" 24-hour lexeme to minutes since midnight.

    Args:
        lexeme: Time string like "09:30" or "9:30".

    Returns:
        Minutes since midnight.

    Raises:
        ValueError: If the lexeme is not a valid 24-hour clock time.
    """
    if not isinstance(lexeme, str):
        raise ValueError(f"Cannot parse time: {lexeme!r}")

    match = _CLOCK_RE.match(lexeme.strip())
    if not match:
        raise ValueError(f"Cannot parse time: {lexeme!r}")

    hour, minute = map(int, match.groups())
    if hour > 23 or minute > 59:
        raise ValueError(f"Time out of range: {lexeme!r}")

    return hour * MINUTES_PER_HOUR + minute


def format_clock(minute: int) -> str:
    """Format minutes since midnight as "HH:MM"."""
    hour, mins = divmod(minute, MINUTES_PER_HOUR)
    return f"{hour:02d}:{mins:02d}"


def clock_to_time(lexeme: str) -> time:
    """Convert an "HH:MM" lexeme to a ``datetime.time``."""
    hour, minute = divmod(parse_clock(lexeme), MINUTES_PER_HOUR)
    return time(hour, minute)
