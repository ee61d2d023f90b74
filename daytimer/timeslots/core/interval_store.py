"""
Interval store for today's timeslots.

Entries are kept sorted by start and pairwise non-overlapping
(entry[i].end < entry[i + 1].start). insert() is the only way to add
an entry and it checks that invariant on the way in and on the way out.
"""

import bisect
import copy
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .constants import LAST_SECOND
from .errors import InvalidMeta, InvariantError, OverlapError
from .time_range import TimeRange

DateKey = Tuple[int, int, int]


def today_key(now: datetime) -> DateKey:
    """(day, month, year) of the local wall clock."""
    return (now.day, now.month, now.year)


def normalize_range(start: int, end: int) -> Tuple[int, int]:
    """Swap a reversed range, then clamp both ends into the day."""
    if start > end:
        start, end = end, start
    start = max(0, min(LAST_SECOND, start))
    end = max(0, min(LAST_SECOND, end))
    return start, end


def check_invariant(timeslots: Sequence[TimeRange]) -> None:
    for a, b in zip(timeslots, timeslots[1:]):
        if a.end >= b.start:
            raise InvariantError(f"{a!r} and {b!r} are out of order or overlap")


def _validate_meta(meta: Any) -> None:
    if not isinstance(meta, dict):
        raise InvalidMeta()
    name = meta.get("name")
    if not isinstance(name, str) or not name:
        raise InvalidMeta()


def _mergeable(a: TimeRange, b: TimeRange) -> bool:
    return a.end + 1 == b.start and a.meta.get("name") == b.meta.get("name")


def insert(timeslots: Sequence[TimeRange], start: int, end: int, meta: Dict[str, Any]) -> List[TimeRange]:
    """
    Insert [start, end] into a sorted, non-overlapping sequence and return a new list.

    Raises InvalidMeta if meta has no usable name and OverlapError if the
    normalized range touches an existing slot. A new slot that sits right
    next to a slot of the same name is merged into it, at most one hop on
    each side. The input sequence and its entries are left untouched.
    """
    _validate_meta(meta)
    check_invariant(timeslots)

    s, e = normalize_range(start, end)

    # first entry whose start is greater than s
    starts = [slot.start for slot in timeslots]
    pos = bisect.bisect_right(starts, s)

    if pos > 0 and timeslots[pos - 1].end >= s:
        raise OverlapError("previous", timeslots[pos - 1])
    if pos < len(timeslots) and timeslots[pos].start <= e:
        raise OverlapError("next", timeslots[pos])

    result = [slot.copy() for slot in timeslots]
    result.insert(pos, TimeRange(s, e, copy.deepcopy(meta)))

    # merge left: the left neighbour survives and keeps its meta
    if pos > 0 and _mergeable(result[pos - 1], result[pos]):
        left = result[pos - 1]
        result[pos - 1] = TimeRange(left.start, result[pos].end, left.meta)
        result.pop(pos)
        pos -= 1

    # merge right: the entry at pos survives and keeps its meta
    if pos < len(result) - 1 and _mergeable(result[pos], result[pos + 1]):
        current = result[pos]
        result[pos] = TimeRange(current.start, result[pos + 1].end, current.meta)
        result.pop(pos + 1)

    check_invariant(result)
    return result


def find_active_slot(timeslots: Sequence[TimeRange], now_seconds: int) -> Optional[TimeRange]:
    """First slot with start <= now_seconds <= end, or None."""
    for slot in timeslots:
        if slot.contains(now_seconds):
            return slot
    return None


class IntervalStore:
    """
    Timeslots valid for a single calendar day.

    `extra` holds any top-level fields found in the persisted blob so they
    survive a load/save cycle.
    """
    def __init__(self, date: DateKey, timeslots: Optional[List[TimeRange]] = None, extra: Optional[Dict[str, Any]] = None):
        self.date = tuple(date)
        self.timeslots = list(timeslots or [])
        self.extra = dict(extra or {})

    @classmethod
    def fresh(cls, now: datetime) -> "IntervalStore":
        return cls(today_key(now))

    def is_stale(self, now: datetime) -> bool:
        return self.date != today_key(now)

    def with_timeslots(self, timeslots: List[TimeRange]) -> "IntervalStore":
        return IntervalStore(self.date, timeslots, self.extra)

    def insert(self, start: int, end: int, meta: Dict[str, Any]) -> "IntervalStore":
        return self.with_timeslots(insert(self.timeslots, start, end, meta))

    def active_slot(self, now_seconds: int) -> Optional[TimeRange]:
        return find_active_slot(self.timeslots, now_seconds)

    def snapshot(self) -> List[TimeRange]:
        return [slot.copy() for slot in self.timeslots]

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extra)
        data["date"] = list(self.date)
        data["timeslots"] = [slot.to_dict() for slot in self.timeslots]
        return data

    def __eq__(self, other):
        if not isinstance(other, IntervalStore):
            return NotImplemented
        return (self.date, self.timeslots, self.extra) == (other.date, other.timeslots, other.extra)

    def __repr__(self):
        day, month, year = self.date
        return f"IntervalStore({year:04d}-{month:02d}-{day:02d}, {len(self.timeslots)} slots)"
