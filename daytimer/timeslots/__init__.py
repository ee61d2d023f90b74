"""
Day timer core

Timeslot interval store, time arithmetic and color derivation for a
single-day timer. Pure functions only; persistence lives in services.
"""

from .core.time_range import TimeRange
from .core.interval_store import IntervalStore, insert, find_active_slot, normalize_range, today_key
from .core.errors import (
    TimeslotError, InvalidMeta, OverlapError, InvalidRange, InvariantError,
    MalformedPersistedData, StaleDate,
)
from .utils.color_utils import color_for
