"""
Timeslot representation: a named, inclusive second-range within one day.
"""

import copy
from typing import Any, Dict

from .constants import LAST_SECOND
from .errors import MalformedPersistedData


def _fmt(seconds: int) -> str:
    return f"{seconds // 3600:02d}:{(seconds % 3600) // 60:02d}:{seconds % 60:02d}"


class TimeRange:
    """
    A single timeslot. `start` and `end` are inclusive seconds since midnight.
    `meta` always carries a `name`; any other keys ride along untouched.
    """
    def __init__(self, start: int, end: int, meta: Dict[str, Any]):
        self.start = start
        self.end = end
        self.meta = meta

    @property
    def name(self) -> str:
        return self.meta["name"]

    def duration(self) -> int:
        return self.end - self.start + 1

    def contains(self, seconds: int) -> bool:
        return self.start <= seconds <= self.end

    def copy(self) -> "TimeRange":
        return TimeRange(self.start, self.end, copy.deepcopy(self.meta))

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end, "meta": copy.deepcopy(self.meta)}

    @classmethod
    def from_dict(cls, data: Any) -> "TimeRange":
        """Build a TimeRange from its persisted form, rejecting anything off-shape."""
        if not isinstance(data, dict):
            raise MalformedPersistedData(f"timeslot entry is not an object: {data!r}")
        start = data.get("start")
        end = data.get("end")
        meta = data.get("meta")
        for value in (start, end):
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= LAST_SECOND:
                raise MalformedPersistedData(f"timeslot bound out of range: {data!r}")
        if start > end:
            raise MalformedPersistedData(f"timeslot start after end: {data!r}")
        if not isinstance(meta, dict) or not isinstance(meta.get("name"), str):
            raise MalformedPersistedData(f"timeslot meta has no name: {data!r}")
        return cls(start, end, copy.deepcopy(meta))

    def __eq__(self, other):
        if not isinstance(other, TimeRange):
            return NotImplemented
        return (self.start, self.end, self.meta) == (other.start, other.end, other.meta)

    def __repr__(self):
        return f"TimeRange({_fmt(self.start)} - {_fmt(self.end)}, {self.meta.get('name')!r})"
