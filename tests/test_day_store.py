"""Tests for day-scoped persistence."""

import json
from datetime import datetime, timedelta

import pytest

from daytimer.config import TIMESLOTS_KEY
from daytimer.services import day_store
from daytimer.timeslots import IntervalStore, InvalidRange, OverlapError, TimeRange


def _write(storage, data):
    storage.set(TIMESLOTS_KEY, data if isinstance(data, str) else json.dumps(data))


def _today(now):
    return [now.day, now.month, now.year]


# ---- load_for_today ----


def test_load_missing_returns_fresh(storage, now):
    store = day_store.load_for_today(storage, now)
    assert store.date == (now.day, now.month, now.year)
    assert store.timeslots == []


def test_load_does_not_write(storage, now):
    day_store.load_for_today(storage, now)
    assert storage.get(TIMESLOTS_KEY) is None


@pytest.mark.parametrize("raw", ["not json {{{", "[1, 2, 3]", '"text"', "null"])
def test_load_malformed_returns_fresh(storage, now, raw):
    _write(storage, raw)
    store = day_store.load_for_today(storage, now)
    assert store == IntervalStore.fresh(now)


def test_load_bad_date_shape_returns_fresh(storage, now):
    _write(storage, {"date": "today", "timeslots": [{"start": 0, "end": 1, "meta": {"name": "a"}}]})
    assert day_store.load_for_today(storage, now).timeslots == []


def test_load_yesterday_returns_empty_today(storage, now):
    yesterday = now - timedelta(days=1)
    _write(storage, {
        "date": _today(yesterday),
        "timeslots": [{"start": 0, "end": 100, "meta": {"name": "a"}}],
        "theme": "dark",
    })
    store = day_store.load_for_today(storage, now)
    assert store.date == (now.day, now.month, now.year)
    assert store.timeslots == []
    assert store.extra == {}


def test_load_keeps_passthrough_fields(storage, now):
    _write(storage, {"date": _today(now), "timeslots": [], "theme": "dark", "version": 2})
    store = day_store.load_for_today(storage, now)
    assert store.extra == {"theme": "dark", "version": 2}


def test_load_missing_timeslots_defaults_to_empty(storage, now):
    _write(storage, {"date": _today(now), "theme": "dark"})
    store = day_store.load_for_today(storage, now)
    assert store.timeslots == []
    assert store.extra == {"theme": "dark"}


@pytest.mark.parametrize("timeslots", [
    "nope",
    [{"start": 0, "end": 10}],
    [{"start": 0, "end": 90000, "meta": {"name": "a"}}],
    [{"start": 50, "end": 10, "meta": {"name": "a"}}],
    [{"start": 0, "end": 10, "meta": {"name": "a"}}, {"start": 5, "end": 20, "meta": {"name": "b"}}],
])
def test_load_unusable_timeslots_defaults_to_empty(storage, now, timeslots):
    _write(storage, {"date": _today(now), "timeslots": timeslots, "theme": "dark"})
    store = day_store.load_for_today(storage, now)
    assert store.timeslots == []
    assert store.extra == {"theme": "dark"}


# ---- save / round-trip ----


def test_save_then_load_roundtrip(storage, now):
    store = IntervalStore.fresh(now).insert(0, 3599, {"name": "focus", "color": "teal"})
    store = store.insert(7200, 7299, {"name": "lunch"})
    day_store.save(storage, store)
    loaded = day_store.load_for_today(storage, now)
    assert loaded.timeslots == store.timeslots
    assert loaded == store


def test_save_overwrites(storage, now):
    day_store.save(storage, IntervalStore.fresh(now).insert(0, 10, {"name": "a"}))
    day_store.save(storage, IntervalStore.fresh(now))
    assert json.loads(storage.get(TIMESLOTS_KEY))["timeslots"] == []


def test_saved_blob_layout(storage, now):
    day_store.save(storage, IntervalStore.fresh(now).insert(5, 10, {"name": "a"}))
    assert json.loads(day_store.raw_blob(storage)) == {
        "date": [14, 3, 2026],
        "timeslots": [{"start": 5, "end": 10, "meta": {"name": "a"}}],
    }


def test_raw_blob_empty(storage):
    assert day_store.raw_blob(storage) == "{}"


# ---- reset ----


def test_reset_writes_fresh_store(storage, now):
    day_store.insert_for_today(storage, now, 0, 10, {"name": "a"})
    store = day_store.reset(storage, now)
    assert store.timeslots == []
    assert day_store.load_for_today(storage, now).timeslots == []


# ---- insert_for_today ----


def test_insert_for_today_persists(storage, now):
    day_store.insert_for_today(storage, now, 0, 3599, {"name": "focus"})
    day_store.insert_for_today(storage, now, 3600, 7199, {"name": "focus"})
    loaded = day_store.load_for_today(storage, now)
    assert loaded.timeslots == [TimeRange(0, 7199, {"name": "focus"})]


def test_insert_for_today_failure_leaves_storage(storage, now):
    day_store.insert_for_today(storage, now, 0, 3599, {"name": "focus"})
    before = storage.get(TIMESLOTS_KEY)
    with pytest.raises(OverlapError):
        day_store.insert_for_today(storage, now, 1000, 2000, {"name": "x"})
    assert storage.get(TIMESLOTS_KEY) == before


def test_insert_for_today_starts_over_on_new_day(storage, now):
    day_store.insert_for_today(storage, now, 0, 100, {"name": "a"})
    tomorrow = now + timedelta(days=1)
    store = day_store.insert_for_today(storage, tomorrow, 0, 100, {"name": "b"})
    assert [s.name for s in store.timeslots] == ["b"]
    assert store.date == (tomorrow.day, tomorrow.month, tomorrow.year)


# ---- create_from_picker ----


def test_create_from_picker_end_is_exclusive(storage, now):
    store = day_store.create_from_picker(storage, now, "  focus  ", "09:00", "10:00")
    assert store.timeslots == [TimeRange(32400, 35999, {"name": "focus"})]


def test_create_from_picker_blank_name_is_noop(storage, now):
    assert day_store.create_from_picker(storage, now, "   ", "09:00", "10:00") is None
    assert day_store.create_from_picker(storage, now, None, "09:00", "10:00") is None
    assert storage.get(TIMESLOTS_KEY) is None


@pytest.mark.parametrize("start,end", [("10:00", "10:00"), ("10:00", "09:00"), ("10:00", "garbage")])
def test_create_from_picker_rejects_empty_range(storage, now, start, end):
    with pytest.raises(InvalidRange):
        day_store.create_from_picker(storage, now, "focus", start, end)


def test_create_from_picker_back_to_back_merges(storage, now):
    day_store.create_from_picker(storage, now, "focus", "09:00", "10:00")
    store = day_store.create_from_picker(storage, now, "focus", "10:00", "11:00")
    assert store.timeslots == [TimeRange(32400, 39599, {"name": "focus"})]
