"""
Settings for the day timer, read from the environment (and a .env file if present).
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./daytimer.db")
TIMESLOTS_KEY = os.getenv("TIMESLOTS_KEY", "timeslots")

# Default viewport: start the bar at 06:00 instead of midnight
VIEWPORT_START_AT_SIX = _flag("VIEWPORT_START_AT_SIX", "true")

ENABLE_TICKER = _flag("ENABLE_TICKER", "true")
TICK_INTERVAL_SECONDS = int(os.getenv("TICK_INTERVAL_SECONDS", "1"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
