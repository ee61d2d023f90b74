"""
Derived view state for whatever renders the day bar.

Everything here is computed from a timeslot snapshot and the current time;
renderers subscribe to ViewStatePublisher instead of poking at globals.
"""

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence
from urllib.parse import quote

from ..config import VIEWPORT_START_AT_SIX
from ..timeslots.core.constants import IDLE_TITLE, SECONDS_PER_DAY, VIEWPORT_START_SIX
from ..timeslots.core.interval_store import DateKey, find_active_slot, today_key
from ..timeslots.core.time_range import TimeRange
from ..timeslots.utils.color_utils import IDLE_COLOR, color_for, solid_color_for
from ..timeslots.utils.time_utils import clamp, clock_state, seconds_since_midnight, to_hhmm, viewport_start_for

logger = logging.getLogger(__name__)

Subscriber = Callable[[Dict[str, Any]], None]


def layout_bands(timeslots: Sequence[TimeRange], now_seconds: int, viewport_start: int) -> List[Dict[str, Any]]:
    """Position each slot as a band inside the viewport, dropping slots that end before it."""
    span = SECONDS_PER_DAY - viewport_start
    bands = []
    for slot in timeslots:
        if slot.end < viewport_start:
            continue
        clip_start = max(slot.start, viewport_start)
        is_past = slot.end < now_seconds
        # running overlay stops one second short of the inclusive end
        is_running = slot.start <= now_seconds < slot.end

        band = {
            "name": slot.name,
            "start": slot.start,
            "end": slot.end,
            "left_pct": (clip_start - viewport_start) / span * 100,
            "width_pct": (slot.end - clip_start + 1) / span * 100,
            "is_past": is_past,
            "is_running": is_running,
            "color": color_for(slot.name, is_past),
            "progress_pct": None,
            "progress_color": None,
        }
        if is_running:
            band["progress_pct"] = clamp((now_seconds - slot.start) / slot.duration() * 100, 0.0, 100.0)
            band["progress_color"] = color_for(slot.name, True, True)
        bands.append(band)
    return bands


def document_title(active: Optional[TimeRange]) -> str:
    if active is None:
        return IDLE_TITLE
    return f"{active.name} · {to_hhmm(active.start)}–{to_hhmm(active.end)}"


def favicon_color(active: Optional[TimeRange]) -> str:
    return solid_color_for(active.name) if active is not None else IDLE_COLOR


def favicon_svg(color: str) -> str:
    """Rounded square icon as a data URL."""
    svg = (
        '<svg xmlns="http://www.w3.org/2000/svg" width="64" height="64">'
        f'<rect x="8" y="8" width="48" height="48" rx="10" ry="10" fill="{color}"/>'
        "</svg>"
    )
    return "data:image/svg+xml," + quote(svg, safe="")


def derive_view_state(timeslots: Sequence[TimeRange], now: datetime, viewport_start: int = VIEWPORT_START_SIX) -> Dict[str, Any]:
    now_seconds = seconds_since_midnight(now)
    active = find_active_slot(timeslots, now_seconds)
    icon_color = favicon_color(active)
    return {
        "clock": clock_state(now, viewport_start),
        "active_slot": active.to_dict() if active else None,
        "title": document_title(active),
        "favicon_color": icon_color,
        "favicon": favicon_svg(icon_color),
        "bands": layout_bands(timeslots, now_seconds, viewport_start),
    }


class ViewStatePublisher:
    """
    Keeps the latest timeslot snapshot and pushes derived view state to subscribers.

    tick() only recomputes time-dependent values; it never reads or writes storage.
    The snapshot belongs to one day and is dropped once the clock passes midnight.
    """
    def __init__(self, viewport_start: int = VIEWPORT_START_SIX):
        self.viewport_start = viewport_start
        self.timeslots: List[TimeRange] = []
        self.date: Optional[DateKey] = None
        self.latest: Optional[Dict[str, Any]] = None
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def set_timeslots(self, timeslots: Sequence[TimeRange], now: datetime) -> Dict[str, Any]:
        self.timeslots = [slot.copy() for slot in timeslots]
        self.date = today_key(now)
        return self._publish(now)

    def tick(self, now: datetime) -> Dict[str, Any]:
        return self._publish(now)

    def _publish(self, now: datetime) -> Dict[str, Any]:
        if self.date is not None and self.date != today_key(now):
            logger.info(f"New day {today_key(now)}, dropping timeslots from {self.date}")
            self.timeslots = []
            self.date = today_key(now)
        state = derive_view_state(self.timeslots, now, self.viewport_start)
        self.latest = state
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(state)
            except Exception as e:
                logger.error(f"View state subscriber {callback!r} failed: {e}")
        return state


publisher = ViewStatePublisher(viewport_start_for(VIEWPORT_START_AT_SIX))
