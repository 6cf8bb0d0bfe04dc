from __future__ import annotations
import re
from typing import Tuple

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR
LAST_MINUTE = MINUTES_PER_DAY - 1

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def split_minutes(total: int) -> Tuple[int, int]:
    """Split a minute count into (whole days, minute of day)."""
    return divmod(total, MINUTES_PER_DAY)


def clamp_minute_of_day(minutes: float) -> int:
    """Floor and clamp into [0, 1439]."""
    return max(0, min(LAST_MINUTE, int(minutes // 1)))


def format_hhmm(minutes: int) -> str:
    h, m = divmod(minutes, MINUTES_PER_HOUR)
    return f"{h:02d}:{m:02d}"


def parse_hhmm(s: str) -> int:
    """Parse 'HH:MM' into minutes from midnight."""
    match = _HHMM_RE.match(s.strip())
    if match is None:
        raise ValueError(f"Expected HH:MM, got {s!r}")
    h, m = int(match.group(1)), int(match.group(2))
    if h > 23 or m > 59:
        raise ValueError(f"Time of day out of range: {s!r}")
    return h * MINUTES_PER_HOUR + m
