from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Tuple

# ----------------- Timeslot Schemas ---------------------


class TimeslotOut(BaseModel):
    start: int
    end: int
    meta: Dict[str, Any]

    class Config:
        from_attributes = True


class TimeslotInsert(BaseModel):
    """Raw insert: inclusive seconds since midnight."""
    start: int
    end: int
    meta: Dict[str, Any]


class TimeslotCreate(BaseModel):
    """Picker-style create: end is an exclusive HH:MM boundary."""
    name: Optional[str] = ""
    start: str = Field(..., description="Start time, HH:MM")
    end: str = Field(..., description="End time (exclusive), HH:MM")


class TimeslotStoreOut(BaseModel):
    date: Tuple[int, int, int]
    timeslots: List[TimeslotOut]
    extra: Dict[str, Any] = {}


class TimeslotCreateResult(BaseModel):
    created: bool
    store: TimeslotStoreOut


class ActiveSlotOut(BaseModel):
    now_seconds: int
    active_slot: Optional[TimeslotOut] = None


# ----------------- Clock / View Schemas ---------------------


class HMSParts(BaseModel):
    hh: str
    mm: str
    ss: str


class ClockOut(BaseModel):
    now_seconds: int
    remaining_seconds: int
    remaining_label: str
    remaining_parts: HMSParts
    day_progress_percent: float
    day_remaining_percent: float
    viewport_start: int
    viewport_progress_percent: float
    viewport_remaining_percent: float


class BandOut(BaseModel):
    name: str
    start: int
    end: int
    left_pct: float
    width_pct: float
    is_past: bool
    is_running: bool
    color: str
    progress_pct: Optional[float] = None
    progress_color: Optional[str] = None


class ViewStateOut(BaseModel):
    clock: ClockOut
    active_slot: Optional[TimeslotOut] = None
    title: str
    favicon_color: str
    favicon: str
    bands: List[BandOut]
