"""
Time arithmetic for the day timer: seconds since midnight, formatting and
progress percentages.
"""

import re
from datetime import datetime
from typing import Any, Dict

from ..core.constants import LAST_SECOND, SECONDS_PER_DAY, VIEWPORT_START_MIDNIGHT, VIEWPORT_START_SIX

_HHMM = re.compile(r"([0-9]{2}):([0-9]{2})")


def now_local() -> datetime:
    return datetime.now()


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def seconds_since_midnight(now: datetime) -> int:
    return now.hour * 3600 + now.minute * 60 + now.second


def day_progress_percent(now: datetime) -> float:
    return clamp(seconds_since_midnight(now) / SECONDS_PER_DAY * 100, 0.0, 100.0)


def day_remaining_percent(now: datetime) -> float:
    return 100 - day_progress_percent(now)


def remaining_seconds(now: datetime) -> int:
    return max(0, SECONDS_PER_DAY - seconds_since_midnight(now))


def format_hms_parts(total_seconds: int) -> Dict[str, str]:
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return {
        "hh": f"{hours:02d}",
        "mm": f"{minutes:02d}",
        "ss": f"{seconds:02d}",
    }


def format_hms(total_seconds: int) -> str:
    parts = format_hms_parts(total_seconds)
    return f"{parts['hh']}:{parts['mm']}:{parts['ss']}"


def to_hhmm(seconds: int) -> str:
    s = int(clamp(seconds, 0, LAST_SECOND))
    return f"{s // 3600:02d}:{(s % 3600) // 60:02d}"


def from_hhmm(text: str) -> int:
    """
    Parse a strict "HH:MM" string into seconds since midnight.

    Anything that does not match yields 0 rather than an error; out-of-range
    hours and minutes are clamped to 23 and 59.
    """
    if not isinstance(text, str):
        return 0
    m = _HHMM.fullmatch(text)
    if not m:
        return 0
    hh = min(23, int(m.group(1)))
    mm = min(59, int(m.group(2)))
    return hh * 3600 + mm * 60


def viewport_start_for(start_at_six: bool) -> int:
    return VIEWPORT_START_SIX if start_at_six else VIEWPORT_START_MIDNIGHT


def viewport_progress_percent(now_seconds: int, viewport_start: int) -> float:
    span = SECONDS_PER_DAY - viewport_start
    return clamp((now_seconds - viewport_start) / span * 100, 0.0, 100.0)


def viewport_remaining_percent(now_seconds: int, viewport_start: int) -> float:
    return 100 - viewport_progress_percent(now_seconds, viewport_start)


def clock_state(now: datetime, viewport_start: int = VIEWPORT_START_SIX) -> Dict[str, Any]:
    """Everything the display recomputes on each tick."""
    now_seconds = seconds_since_midnight(now)
    remaining = remaining_seconds(now)
    return {
        "now_seconds": now_seconds,
        "remaining_seconds": remaining,
        "remaining_label": format_hms(remaining),
        "remaining_parts": format_hms_parts(remaining),
        "day_progress_percent": day_progress_percent(now),
        "day_remaining_percent": day_remaining_percent(now),
        "viewport_start": viewport_start,
        "viewport_progress_percent": viewport_progress_percent(now_seconds, viewport_start),
        "viewport_remaining_percent": viewport_remaining_percent(now_seconds, viewport_start),
    }
