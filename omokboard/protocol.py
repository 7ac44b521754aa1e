"""Wire format and shared constants of the omok game."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

SERVER_PORT = 25000
MAX_BUF = 256
MAPSIZE = 10 + 10
WINNING_NUM = 3

COLOR_RED = 0xFF0000
COLOR_GREEN = 0x00FF00
COLOR_BLUE = 0x0000FF
COLOR_BLACK = 0x00000F
COLOR_WHITE = 0xFFFFFF
COLOR_BROWN = 0xC68A12
COLOR_GOLD = 0xFFD700


class GameStatus(IntEnum):
    """States of the shared game state machine and of a move message."""

    C1_WAITING = 0
    C1_RCVD = 1
    C1_SEND = 2
    C1_SENT = 3
    C2_WAITING = 4
    C2_RCVD = 5
    C2_SEND = 6
    C2_SENT = 7
    SEND = 8
    GAMEOVER = 9
    ENDGAME = 10
    C1_GAMEOVER = 11
    C2_GAMEOVER = 12
    PLAYING = 13


class Turn(IntEnum):
    """Which of the two players is meant."""

    C1 = 0
    C2 = 1


@dataclass
class GameInfo:
    """A move message: board position, game status and stone colour."""

    i: int
    j: int
    game_status: int = GameStatus.PLAYING
    color: int = 0

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<4i")
    SIZE: ClassVar[int] = _FORMAT.size

    def to_bytes(self) -> bytes:
        """Encode as four little-endian 32-bit signed integers."""
        return self._FORMAT.pack(
            int(self.i), int(self.j), int(self.game_status), int(self.color)
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "GameInfo":
        """Decode the first message in ``data``; trailing bytes are ignored."""
        if len(data) < cls.SIZE:
            raise ValueError(
                f"game info needs {cls.SIZE} bytes, got {len(data)}"
            )
        i, j, status, color = cls._FORMAT.unpack_from(data)
        try:
            status = GameStatus(status)
        except ValueError:
            pass
        return cls(i, j, status, color)