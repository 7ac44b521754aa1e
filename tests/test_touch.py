import io
import struct

import pytest

from omokboard.canvas import Canvas
from omokboard.display import BOARD_LEFT, BOARD_TOP, CELL, BoardView
from omokboard.protocol import COLOR_RED, GameStatus
from omokboard.touch import (
    ORIGINAL_MAX,
    ORIGINAL_MIN,
    TARGET_HEIGHT,
    TARGET_WIDTH,
    InputEvent,
    TouchSelector,
    read_events,
    scale_x,
    scale_y,
)


def _raw(ev_type, code, value):
    return struct.pack("@llHHi", 0, 0, ev_type, code, value)


def _tap(x, y):
    return [InputEvent(3, 0, x), InputEvent(3, 1, y), InputEvent(1, 330, 0)]


def _view():
    return BoardView(Canvas(800, 480))


def test_input_event_from_bytes():
    data = struct.pack("@llHHi", 7, 9, 3, 1, 2000)
    event = InputEvent.from_bytes(data)
    assert event == InputEvent(3, 1, 2000, 7, 9)


def test_input_event_too_short():
    with pytest.raises(ValueError):
        InputEvent.from_bytes(b"\0" * (InputEvent.SIZE - 1))


def test_read_events_stops_at_end_and_drops_partial():
    data = _raw(3, 0, 1000) + _raw(1, 330, 0) + b"\0\0\0"
    events = list(read_events(io.BytesIO(data)))
    assert [(e.type, e.code, e.value) for e in events] == [(3, 0, 1000), (1, 330, 0)]


def test_scale_limits():
    assert scale_x(ORIGINAL_MIN) == 0
    assert scale_y(ORIGINAL_MIN) == 0
    assert scale_x(ORIGINAL_MAX) == TARGET_WIDTH
    assert scale_y(ORIGINAL_MAX) == TARGET_HEIGHT


def test_scale_truncates_toward_zero():
    assert scale_x(ORIGINAL_MIN - 1) == 0


def test_scale_is_monotonic():
    values = [scale_x(v) for v in range(0, 4200, 37)]
    assert values == sorted(values)


def test_button_without_selection_plays_first_cell():
    view = _view()
    selector = TouchSelector(view)
    move = selector.get_click(iter(_tap(ORIGINAL_MAX, ORIGINAL_MAX)))
    assert (move.i, move.j, move.game_status) == (0, 0, GameStatus.PLAYING)
    assert view.client_map.get(0, 0) == 1


def test_select_then_press_button():
    view = _view()
    selector = TouchSelector(view)
    events = iter(_tap(2000, 2000) + _tap(ORIGINAL_MAX, ORIGINAL_MAX))
    move = selector.get_click(events)
    x, y = scale_x(2000), scale_y(2000)
    assert BOARD_LEFT + CELL * move.i <= x < BOARD_LEFT + CELL * (move.i + 1)
    assert BOARD_TOP + CELL * move.j <= y < BOARD_TOP + CELL * (move.j + 1)
    assert view.client_map.get(move.j, move.i) == 1
    marker = view.canvas.pixel(BOARD_LEFT + CELL * move.i - 15, BOARD_TOP + CELL * move.j - 15)
    assert marker == COLOR_RED


def test_feed_returns_none_until_button():
    selector = TouchSelector(_view())
    results = [selector.feed(e) for e in _tap(2000, 2000)]
    assert results == [None, None, None]


def test_get_click_runs_out_of_events():
    selector = TouchSelector(_view())
    with pytest.raises(EOFError):
        selector.get_click(iter(_tap(2000, 2000)))