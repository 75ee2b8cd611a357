"""Wall-clock time helpers used by the conflict engine."""

import re
from typing import Protocol


_TWELVE_HOUR = re.compile(r"(\d{1,2}):(\d{2})\s*([ap])\.?m\.?", re.IGNORECASE)
_TWENTY_FOUR_HOUR = re.compile(r"^\s*(\d{1,2}):(\d{2})")


class TimedBlock(Protocol):
    days: frozenset
    start_time: str
    end_time: str


def time_to_minutes(text: str) -> int:
    """Convert a wall-clock string to minutes since midnight.

    Accepts "2:30pm", "12:00 AM" or "14:30". Malformed or empty input
    yields 0, which callers must read as "unknown", not midnight.

    Args:
        text: Time string from the catalog.

    Returns:
        Minutes since midnight, or 0 when the text cannot be parsed.
    """
    if not text:
        return 0

    match = _TWELVE_HOUR.search(text)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        marker = match.group(3).lower()
        if hours > 12 or minutes > 59:
            return 0
        if marker == "a" and hours == 12:
            hours = 0
        elif marker == "p" and hours != 12:
            hours += 12
        return hours * 60 + minutes

    match = _TWENTY_FOUR_HOUR.match(text)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            return 0
        return hours * 60 + minutes

    return 0


def format_minutes(minutes: int) -> str:
    """Render minutes since midnight as "2:30pm"."""
    hours, mins = divmod(minutes, 60)
    suffix = "am" if hours < 12 else "pm"
    hours = hours % 12 or 12
    return f"{hours}:{mins:02d}{suffix}"


def intervals_overlap(a: TimedBlock, b: TimedBlock) -> bool:
    """Check whether two weekly blocks collide.

    Blocks that only touch (one ends when the other starts) do not overlap.
    """
    if not (a.days & b.days):
        return False

    a_start, a_end = time_to_minutes(a.start_time), time_to_minutes(a.end_time)
    b_start, b_end = time_to_minutes(b.start_time), time_to_minutes(b.end_time)

    return a_start < b_end and b_start < a_end
