"""
Day-scoped persistence for the interval store.

The whole store lives in one JSON blob under a single key. Anything that
cannot be used for today (missing, corrupt, or written on another day) is
replaced by a fresh empty store; those problems never reach the caller.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..config import TIMESLOTS_KEY
from ..storage import KeyValueStorage
from ..timeslots.core.errors import InvalidRange, InvariantError, MalformedPersistedData, StaleDate
from ..timeslots.core.interval_store import IntervalStore, check_invariant, today_key
from ..timeslots.core.time_range import TimeRange
from ..timeslots.utils.time_utils import from_hhmm

logger = logging.getLogger(__name__)


def _parse_blob(raw: str) -> Dict[str, Any]:
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedPersistedData(f"persisted timeslots are not JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedPersistedData(f"persisted timeslots are a {type(data).__name__}, not an object")
    return data


def _check_date(data: Dict[str, Any], now: datetime) -> None:
    date = data.get("date")
    if not isinstance(date, (list, tuple)) or len(date) != 3:
        raise MalformedPersistedData(f"persisted date has the wrong shape: {date!r}")
    if tuple(date) != today_key(now):
        raise StaleDate(f"persisted date {date!r} is not today {today_key(now)!r}")


def _parse_timeslots(value: Any):
    if not isinstance(value, list):
        raise MalformedPersistedData(f"timeslots is not a list: {type(value).__name__}")
    timeslots = [TimeRange.from_dict(entry) for entry in value]
    try:
        check_invariant(timeslots)
    except InvariantError as e:
        raise MalformedPersistedData(str(e)) from e
    return timeslots


def load_for_today(storage: KeyValueStorage, now: datetime) -> IntervalStore:
    """
    Return today's store.

    Passthrough fields are kept and the date is forced to today. A timeslot
    list that is missing or unusable is replaced by an empty one.
    """
    raw = storage.get(TIMESLOTS_KEY)
    if not raw:
        return IntervalStore.fresh(now)

    try:
        data = _parse_blob(raw)
        _check_date(data, now)
    except StaleDate as e:
        logger.info(f"Discarding stale timeslots: {e}")
        return IntervalStore.fresh(now)
    except MalformedPersistedData as e:
        logger.warning(f"Discarding malformed timeslots: {e}")
        return IntervalStore.fresh(now)

    extra = {k: v for k, v in data.items() if k not in ("date", "timeslots")}
    try:
        timeslots = _parse_timeslots(data.get("timeslots", []))
    except MalformedPersistedData as e:
        logger.warning(f"Ignoring unusable timeslot list: {e}")
        timeslots = []

    return IntervalStore(today_key(now), timeslots, extra)


def save(storage: KeyValueStorage, store: IntervalStore) -> None:
    storage.set(TIMESLOTS_KEY, json.dumps(store.to_dict()))


def reset(storage: KeyValueStorage, now: datetime) -> IntervalStore:
    store = IntervalStore.fresh(now)
    save(storage, store)
    logger.info(f"Reset timeslots for {store.date}")
    return store


def raw_blob(storage: KeyValueStorage) -> str:
    return storage.get(TIMESLOTS_KEY) or "{}"


def insert_for_today(storage: KeyValueStorage, now: datetime, start: int, end: int, meta: Dict[str, Any]) -> IntervalStore:
    """Read today's store, insert the range and write it back. Errors leave storage untouched."""
    store = load_for_today(storage, now)
    updated = store.insert(start, end, meta)
    save(storage, updated)
    logger.info(f"Added timeslot {meta.get('name')!r} [{start}, {end}], {len(updated.timeslots)} slots today")
    return updated


def create_from_picker(storage: KeyValueStorage, now: datetime, name: Optional[str], start_text: str, end_text: str) -> Optional[IntervalStore]:
    """
    Create a slot from a name and two "HH:MM" picker values.

    The end picker is an exclusive boundary, so the stored end is one second
    earlier. A blank name abandons the create and returns None.
    """
    name = (name or "").strip()
    if not name:
        return None

    start = from_hhmm(start_text)
    end_exclusive = from_hhmm(end_text)
    if end_exclusive <= start:
        raise InvalidRange()

    return insert_for_today(storage, now, start, max(0, end_exclusive - 1), {"name": name})
