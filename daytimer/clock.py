"""
Clock source for the day timer: "now" on demand, plus a 1 Hz background tick
that keeps the derived view state current.
"""

import logging
from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .config import TICK_INTERVAL_SECONDS
from .database import SessionLocal
from .services.day_store import load_for_today
from .services.view_state import publisher
from .storage import SQLStorage
from .timeslots.utils.time_utils import now_local

logger = logging.getLogger(__name__)

TICK_JOB_ID = "clock_tick"

# Global scheduler instance
scheduler = BackgroundScheduler()


def get_now() -> datetime:
    """Current local wall-clock instant; overridden in tests."""
    return now_local()


def tick():
    publisher.tick(now_local())


def seed_publisher():
    """Hand today's stored timeslots to the publisher so ticks have something to show"""
    db = SessionLocal()
    try:
        now = now_local()
        store = load_for_today(SQLStorage(db), now)
        publisher.set_timeslots(store.snapshot(), now)
        logger.info(f"Seeded view state with {len(store.timeslots)} timeslots for {store.date}")
    finally:
        db.close()


def start_ticker():
    """Start the background tick if it is not running yet"""
    scheduler.add_job(
        func=tick,
        trigger=IntervalTrigger(seconds=TICK_INTERVAL_SECONDS),
        id=TICK_JOB_ID,
        replace_existing=True,
        name="Day timer clock tick",
    )
    if not scheduler.running:
        scheduler.start()
        logger.info(f"Clock tick started, every {TICK_INTERVAL_SECONDS}s")


def stop_ticker():
    """Stop the background tick"""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Clock tick stopped")
