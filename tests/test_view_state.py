"""Tests for the derived view state and its publisher."""

from datetime import datetime
from urllib.parse import unquote

import pytest

from daytimer.services.view_state import (
    ViewStatePublisher,
    derive_view_state,
    document_title,
    favicon_color,
    favicon_svg,
    layout_bands,
)
from daytimer.timeslots import TimeRange, color_for
from daytimer.timeslots.utils.color_utils import IDLE_COLOR, solid_color_for

SIX = 6 * 3600


@pytest.fixture()
def slots():
    return [
        TimeRange(0, 3599, {"name": "sleep"}),
        TimeRange(5 * 3600, 7 * 3600 - 1, {"name": "gym"}),
        TimeRange(9 * 3600, 10 * 3600 - 1, {"name": "focus"}),
    ]


# ---- layout_bands ----


def test_bands_before_viewport_are_dropped(slots):
    bands = layout_bands(slots, 9 * 3600, SIX)
    assert [b["name"] for b in bands] == ["gym", "focus"]


def test_band_clipped_to_viewport(slots):
    gym = layout_bands(slots, 9 * 3600, SIX)[0]
    span = 86400 - SIX
    assert gym["left_pct"] == 0.0
    assert gym["width_pct"] == pytest.approx(3600 / span * 100)


def test_band_from_midnight_keeps_everything(slots):
    bands = layout_bands(slots, 0, 0)
    assert len(bands) == 3
    assert bands[1]["left_pct"] == pytest.approx(5 * 3600 / 86400 * 100)


def test_band_states(slots):
    now = 9 * 3600 + 900
    gym, focus = layout_bands(slots, now, SIX)
    assert gym["is_past"] and not gym["is_running"]
    assert gym["color"] == color_for("gym", True)
    assert focus["is_running"] and not focus["is_past"]
    assert focus["color"] == color_for("focus", False)
    assert focus["progress_pct"] == pytest.approx(25.0)
    assert focus["progress_color"] == color_for("focus", True, True)


def test_no_overlay_on_last_second(slots):
    focus = layout_bands(slots, 10 * 3600 - 1, SIX)[-1]
    assert not focus["is_running"]
    assert focus["progress_pct"] is None


# ---- title / favicon ----


def test_document_title():
    assert document_title(None) == "Timeslots"
    assert document_title(TimeRange(32400, 35999, {"name": "focus"})) == "focus · 09:00–09:59"


def test_favicon_color():
    assert favicon_color(None) == IDLE_COLOR
    assert favicon_color(TimeRange(0, 1, {"name": "focus"})) == solid_color_for("focus")


def test_favicon_svg_is_data_url():
    url = favicon_svg("red")
    assert url.startswith("data:image/svg+xml,")
    assert 'fill="red"' in unquote(url)


# ---- derive_view_state ----


def test_derive_view_state_with_active(slots):
    state = derive_view_state(slots, datetime(2026, 3, 14, 9, 15, 0), SIX)
    assert state["active_slot"] == {"start": 32400, "end": 35999, "meta": {"name": "focus"}}
    assert state["title"] == "focus · 09:00–09:59"
    assert state["favicon_color"] == solid_color_for("focus")
    assert state["clock"]["now_seconds"] == 33300


def test_derive_view_state_idle(slots):
    state = derive_view_state(slots, datetime(2026, 3, 14, 20, 0, 0), SIX)
    assert state["active_slot"] is None
    assert state["title"] == "Timeslots"
    assert state["favicon_color"] == IDLE_COLOR


# ---- publisher ----


def test_publisher_notifies_subscribers(slots):
    publisher = ViewStatePublisher(SIX)
    seen = []
    publisher.subscribe(seen.append)
    publisher.set_timeslots(slots, datetime(2026, 3, 14, 9, 15, 0))
    publisher.tick(datetime(2026, 3, 14, 9, 15, 1))
    assert len(seen) == 2
    assert seen[-1]["clock"]["now_seconds"] == 33301
    assert publisher.latest is seen[-1]


def test_publisher_unsubscribe(slots):
    publisher = ViewStatePublisher(SIX)
    seen = []
    unsubscribe = publisher.subscribe(seen.append)
    unsubscribe()
    publisher.tick(datetime(2026, 3, 14, 9, 15, 0))
    assert seen == []


def test_publisher_survives_failing_subscriber(slots):
    publisher = ViewStatePublisher(SIX)
    seen = []

    def broken(state):
        raise RuntimeError("boom")

    publisher.subscribe(broken)
    publisher.subscribe(seen.append)
    publisher.tick(datetime(2026, 3, 14, 9, 15, 0))
    assert len(seen) == 1


def test_publisher_holds_its_own_copy(slots):
    publisher = ViewStatePublisher(SIX)
    publisher.set_timeslots(slots, datetime(2026, 3, 14, 9, 15, 0))
    slots[2].meta["name"] = "renamed"
    state = publisher.tick(datetime(2026, 3, 14, 9, 15, 0))
    assert state["title"].startswith("focus")


def test_tick_after_midnight_drops_yesterdays_slots():
    publisher = ViewStatePublisher(SIX)
    publisher.set_timeslots([TimeRange(0, 3599, {"name": "focus"})], datetime(2026, 3, 14, 23, 0, 0))
    state = publisher.tick(datetime(2026, 3, 15, 0, 10, 0))
    assert state["title"] == "Timeslots"
    assert state["active_slot"] is None
    assert state["bands"] == []
    assert publisher.timeslots == []
    assert publisher.date == (15, 3, 2026)


def test_tick_same_day_keeps_slots(slots):
    publisher = ViewStatePublisher(0)
    publisher.set_timeslots(slots, datetime(2026, 3, 14, 0, 10, 0))
    state = publisher.tick(datetime(2026, 3, 14, 0, 20, 0))
    assert state["title"] == "sleep · 00:00–00:59"
    assert len(state["bands"]) == 3
