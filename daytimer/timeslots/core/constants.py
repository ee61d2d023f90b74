"""
Constants shared by the timeslot core.
"""

SECONDS_PER_DAY = 86400
LAST_SECOND = SECONDS_PER_DAY - 1

# Viewport starts: whole day or from 06:00
VIEWPORT_START_MIDNIGHT = 0
VIEWPORT_START_SIX = 6 * 3600

# Slot states used by color derivation
UPCOMING = "UPCOMING"
PAST = "PAST"
RUNNING = "RUNNING"

IDLE_TITLE = "Timeslots"
