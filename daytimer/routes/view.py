"""Clock and derived view state for the day bar."""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..clock import get_now
from ..config import VIEWPORT_START_AT_SIX
from ..schemas import ClockOut, ViewStateOut
from ..services import day_store
from ..services.view_state import derive_view_state, publisher
from ..storage import KeyValueStorage, get_storage
from ..timeslots.utils.time_utils import clock_state, viewport_start_for

router = APIRouter()


def _viewport_start(start_at_six: Optional[bool]) -> int:
    return viewport_start_for(VIEWPORT_START_AT_SIX if start_at_six is None else start_at_six)


@router.get("/clock", response_model=ClockOut)
async def get_clock(
    now: datetime = Depends(get_now),
    start_at_six: Optional[bool] = Query(None, description="Start the viewport at 06:00 instead of 00:00"),
):
    return clock_state(now, _viewport_start(start_at_six))


@router.get("/view", response_model=ViewStateOut)
async def get_view_state(
    storage: KeyValueStorage = Depends(get_storage),
    now: datetime = Depends(get_now),
    start_at_six: Optional[bool] = Query(None, description="Start the viewport at 06:00 instead of 00:00"),
):
    """
    Everything a renderer needs: clock, active slot, title, favicon and bands.
    The publisher's viewport is refreshed and pushed to subscribers; any other
    viewport is computed for this request only.
    """
    store = day_store.load_for_today(storage, now)
    viewport_start = _viewport_start(start_at_six)
    if viewport_start == publisher.viewport_start:
        return publisher.set_timeslots(store.snapshot(), now)
    return derive_view_state(store.timeslots, now, viewport_start)


@router.get("/view/latest", response_model=ViewStateOut)
async def get_latest_view_state(now: datetime = Depends(get_now)):
    """View state from the most recent clock tick or store change."""
    if publisher.latest is None:
        return publisher.tick(now)
    return publisher.latest
