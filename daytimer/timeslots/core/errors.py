"""
Errors raised by the timeslot core.

InvalidMeta, OverlapError and InvalidRange are meant for the user.
MalformedPersistedData and StaleDate never leave the persistence layer.
"""


class TimeslotError(Exception):
    """Base class for all timeslot errors."""


class InvalidMeta(TimeslotError, TypeError):
    def __init__(self, message: str = "meta must be an object with meta.name (string)"):
        super().__init__(message)


class OverlapError(TimeslotError, ValueError):
    """Requested range intersects an existing slot."""

    def __init__(self, side: str, conflicting):
        self.side = side
        self.conflicting = conflicting
        super().__init__(f"overlap with {side} range")


class InvalidRange(TimeslotError, ValueError):
    def __init__(self, message: str = "End time must be after start time."):
        super().__init__(message)


class InvariantError(TimeslotError):
    """Timeslot list is not sorted or has overlapping entries."""


class MalformedPersistedData(TimeslotError):
    pass


class StaleDate(TimeslotError):
    pass
