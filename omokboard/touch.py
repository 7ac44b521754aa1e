"""Touch-screen input: raw events, coordinate scaling and cell selection."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, ClassVar, Iterable, Iterator

from .display import BOARD_LEFT, BOARD_TOP, CELL, BoardView
from .protocol import GameInfo, GameStatus

ORIGINAL_MIN = 150
ORIGINAL_MAX = 4000
TARGET_WIDTH = 800
TARGET_HEIGHT = 480

EV_KEY = 1
EV_ABS = 3
BTN_TOUCH = 330
ABS_X = 0
ABS_Y = 1

LAST_CELL = 8
BUTTON_LEFT = 700
BUTTON_TOP = 380


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


@dataclass(frozen=True)
class InputEvent:
    """One kernel input event."""

    type: int
    code: int
    value: int
    sec: int = 0
    usec: int = 0

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("@llHHi")
    SIZE: ClassVar[int] = _FORMAT.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "InputEvent":
        """Decode one native ``struct input_event``."""
        if len(data) < cls.SIZE:
            raise ValueError(f"input event needs {cls.SIZE} bytes, got {len(data)}")
        sec, usec, ev_type, code, value = cls._FORMAT.unpack_from(data)
        return cls(ev_type, code, value, sec, usec)


def read_events(stream: BinaryIO) -> Iterator[InputEvent]:
    """Yield events from a binary stream until it ends."""
    while True:
        chunk = stream.read(InputEvent.SIZE)
        if not chunk or len(chunk) < InputEvent.SIZE:
            return
        yield InputEvent.from_bytes(chunk)


def scale_x(value: int) -> int:
    """Map a raw touch x reading onto screen pixels."""
    return _trunc_div((value - ORIGINAL_MIN) * TARGET_WIDTH, ORIGINAL_MAX - ORIGINAL_MIN)


def scale_y(value: int) -> int:
    """Map a raw touch y reading onto screen pixels."""
    return _trunc_div((value - ORIGINAL_MIN) * TARGET_HEIGHT, ORIGINAL_MAX - ORIGINAL_MIN)


class TouchSelector:
    """Turns touches into a chosen cell, marked on the view, and a move."""

    def __init__(self, view: BoardView) -> None:
        self.view = view
        self.x_scaled = 0
        self.y_scaled = 0
        self.x_selected = 0
        self.y_selected = 0
        self._reset()

    def _reset(self) -> None:
        self._before = (0, 0)
        self._chosen = (0, 0)

    def feed(self, event: InputEvent) -> GameInfo | None:
        """Process one event; return the move when the place button is tapped."""
        if event.type == EV_KEY and event.code == BTN_TOUCH and event.value == 0:
            return self._release()
        if event.type == EV_ABS and event.code == ABS_X:
            self.x_scaled = scale_x(event.value)
        elif event.type == EV_ABS and event.code == ABS_Y:
            self.y_scaled = scale_y(event.value)
        return None

    def _release(self) -> GameInfo | None:
        col = _trunc_div(self.x_scaled - BOARD_LEFT, CELL)
        row = _trunc_div(self.y_scaled - BOARD_TOP, CELL)
        self.x_selected, self.y_selected = col, row

        if 0 <= col <= LAST_CELL and 0 <= row <= LAST_CELL:
            self._chosen = (col, row)
            if self.view.client_map.get(row, col) == 0:
                self.view.draw_target(col, row, *self._before)
                self._before = (BOARD_LEFT + CELL * col, BOARD_TOP + CELL * row)

        if self.x_scaled >= BUTTON_LEFT and self.y_scaled >= BUTTON_TOP:
            col, row = self._chosen
            self.view.client_map.place(row, col, 1)
            return GameInfo(col, row, GameStatus.PLAYING)
        return None

    def get_click(self, events: Iterable[InputEvent]) -> GameInfo:
        """Consume events until a move is made; raise EOFError if they run out."""
        self._reset()
        for event in events:
            move = self.feed(event)
            if move is not None:
                return move
        raise EOFError("touch input ended before a move was made")