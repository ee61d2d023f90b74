"""Single-day visual timer with named, non-overlapping timeslots."""

__version__ = "1.0.0"
