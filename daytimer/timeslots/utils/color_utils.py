"""
Deterministic colors for timeslots, derived from the slot name.

The hue depends on the name only, so a slot keeps its color whether it is
upcoming, running or past; the state just changes saturation, lightness
and alpha.
"""

from ..core.constants import PAST, RUNNING, UPCOMING

IDLE_COLOR = "rgba(120,120,120,0.9)"

# state -> (saturation %, lightness %, alpha)
STATE_PALETTE = {
    RUNNING: (5, 30, 0.8),
    PAST: (15, 25, 0.35),
    UPCOMING: (70, 55, 0.7),
}


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _utf16_code_units(text: str):
    raw = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(raw), 2):
        yield raw[i] | (raw[i + 1] << 8)


def hue_for(name: str) -> int:
    """DJB2-style hash (seed 5381, h = ((h << 5) + h) ^ c) folded onto 0..359."""
    h = 5381
    for code in _utf16_code_units(name):
        h = _to_int32(_to_int32(h << 5) + h) ^ code
    return abs(h) % 360


def state_for(is_past: bool, is_running: bool = False) -> str:
    if is_running:
        return RUNNING
    if is_past:
        return PAST
    return UPCOMING


def color_for(name: str, is_past: bool, is_running: bool = False) -> str:
    saturation, lightness, alpha = STATE_PALETTE[state_for(is_past, is_running)]
    return f"hsla({hue_for(name)}, {saturation}%, {lightness}%, {alpha})"


def solid_color_for(name: str) -> str:
    """Upcoming palette at full opacity; used for the favicon."""
    saturation, lightness, _ = STATE_PALETTE[UPCOMING]
    return f"hsla({hue_for(name)}, {saturation}%, {lightness}%, 1)"
