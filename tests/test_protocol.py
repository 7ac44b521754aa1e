import pytest

from omokboard.protocol import (
    COLOR_BLACK,
    COLOR_WHITE,
    GameInfo,
    GameStatus,
    Turn,
)


def test_to_bytes_layout():
    info = GameInfo(1, 2, GameStatus.PLAYING, COLOR_BLACK)
    assert info.to_bytes() == (
        b"\x01\x00\x00\x00\x02\x00\x00\x00\x0d\x00\x00\x00\x0f\x00\x00\x00"
    )


def test_size_matches_encoding():
    assert len(GameInfo(0, 0).to_bytes()) == GameInfo.SIZE


@pytest.mark.parametrize(
    "info",
    [
        GameInfo(3, 4, GameStatus.PLAYING, COLOR_WHITE),
        GameInfo(-100, -100, GameStatus.GAMEOVER, -1),
        GameInfo(10, 0, GameStatus.C1_WAITING, COLOR_BLACK),
    ],
)
def test_round_trip(info):
    assert GameInfo.from_bytes(info.to_bytes()) == info


def test_from_bytes_ignores_trailing_data():
    info = GameInfo(5, 6, GameStatus.PLAYING, COLOR_WHITE)
    data = info.to_bytes() + b"\xff" * 40
    assert GameInfo.from_bytes(data) == info


def test_from_bytes_status_becomes_enum():
    info = GameInfo.from_bytes(GameInfo(1, 1, GameStatus.GAMEOVER, -1).to_bytes())
    assert info.game_status is GameStatus.GAMEOVER


def test_from_bytes_too_short():
    with pytest.raises(ValueError):
        GameInfo.from_bytes(b"\x00" * (GameInfo.SIZE - 1))


def test_turn_toggles_between_players():
    assert Turn(1 - Turn.C1) is Turn.C2
    assert Turn(1 - Turn.C2) is Turn.C1