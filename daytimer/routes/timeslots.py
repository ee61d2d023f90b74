"""Timeslot API: today's store, insert, picker-style create, reset and active slot."""

import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Body
from fastapi.responses import PlainTextResponse

from ..clock import get_now
from ..schemas import ActiveSlotOut, TimeslotCreate, TimeslotCreateResult, TimeslotInsert, TimeslotStoreOut
from ..services import day_store
from ..services.view_state import publisher
from ..storage import KeyValueStorage, get_storage
from ..timeslots import IntervalStore, InvalidMeta, InvalidRange, OverlapError
from ..timeslots.utils.time_utils import seconds_since_midnight

logger = logging.getLogger(__name__)

router = APIRouter()


def store_out(store: IntervalStore) -> dict:
    return {
        "date": store.date,
        "timeslots": [slot.to_dict() for slot in store.timeslots],
        "extra": store.extra,
    }


def _publish(store: IntervalStore, now: datetime):
    publisher.set_timeslots(store.snapshot(), now)


@router.get("/", response_model=TimeslotStoreOut)
async def get_timeslots(
    storage: KeyValueStorage = Depends(get_storage),
    now: datetime = Depends(get_now),
):
    """Today's timeslots; a store from another day comes back empty."""
    store = day_store.load_for_today(storage, now)
    _publish(store, now)
    return store_out(store)


@router.get("/raw", response_class=PlainTextResponse)
async def get_raw_timeslots(storage: KeyValueStorage = Depends(get_storage)):
    return day_store.raw_blob(storage)


@router.get("/active", response_model=ActiveSlotOut)
async def get_active_slot(
    storage: KeyValueStorage = Depends(get_storage),
    now: datetime = Depends(get_now),
):
    store = day_store.load_for_today(storage, now)
    now_seconds = seconds_since_midnight(now)
    active = store.active_slot(now_seconds)
    return {
        "now_seconds": now_seconds,
        "active_slot": active.to_dict() if active else None,
    }


@router.post("/", response_model=TimeslotStoreOut)
async def insert_timeslot(
    storage: KeyValueStorage = Depends(get_storage),
    now: datetime = Depends(get_now),
    slot_in: TimeslotInsert = Body(...),
):
    try:
        store = day_store.insert_for_today(storage, now, slot_in.start, slot_in.end, slot_in.meta)
    except InvalidMeta as e:
        raise HTTPException(status_code=422, detail=str(e))
    except OverlapError as e:
        raise HTTPException(status_code=409, detail=str(e))

    _publish(store, now)
    return store_out(store)


@router.post("/create", response_model=TimeslotCreateResult)
async def create_timeslot(
    storage: KeyValueStorage = Depends(get_storage),
    now: datetime = Depends(get_now),
    slot_in: TimeslotCreate = Body(...),
):
    """
    Create a slot from a name and two HH:MM picker values.
    A blank name is not an error: nothing is created and today's store is returned as is.
    """
    try:
        store = day_store.create_from_picker(storage, now, slot_in.name, slot_in.start, slot_in.end)
    except InvalidRange as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidMeta as e:
        raise HTTPException(status_code=422, detail=str(e))
    except OverlapError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if store is None:
        logger.debug("Create abandoned, no name given")
        return {"created": False, "store": store_out(day_store.load_for_today(storage, now))}

    _publish(store, now)
    return {"created": True, "store": store_out(store)}


@router.post("/reset", response_model=TimeslotStoreOut)
async def reset_timeslots(
    storage: KeyValueStorage = Depends(get_storage),
    now: datetime = Depends(get_now),
):
    store = day_store.reset(storage, now)
    _publish(store, now)
    return store_out(store)
