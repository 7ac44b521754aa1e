import socket

import pytest

from omokboard.canvas import Canvas
from omokboard.client import ClientGame, connect_to_server, main, read_role
from omokboard.display import BOARD_LEFT, BOARD_TOP, CELL, BoardView
from omokboard.protocol import (
    COLOR_BLACK,
    COLOR_BROWN,
    COLOR_WHITE,
    GameInfo,
    GameStatus,
    Turn,
)
from omokboard.touch import ORIGINAL_MAX, InputEvent


def _game(which=Turn.C1):
    ours, theirs = socket.socketpair()
    view = BoardView(Canvas(800, 480))
    game = ClientGame(ours, view, which, poll_interval=0, end_screen_delay=0)
    return game, theirs


def _gameover():
    return GameInfo(-100, -100, GameStatus.GAMEOVER, -1)


def test_read_role():
    assert read_role(b"C1") is Turn.C1
    assert read_role(b"C2") is Turn.C2
    assert read_role(b"C2x") is Turn.C1
    assert read_role(b"") is Turn.C1


def test_connect_to_server_reaches_listener():
    with socket.socket() as listener:
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        port = listener.getsockname()[1]
        with connect_to_server("127.0.0.1", port) as sock:
            assert sock.getpeername() == ("127.0.0.1", port)
            conn, peer = listener.accept()
            with conn:
                assert peer == sock.getsockname()
                sock.sendall(b"hi")
                assert conn.recv(2) == b"hi"


def test_connect_to_server_refused():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
    with pytest.raises(OSError):
        connect_to_server("127.0.0.1", port)


def test_handle_playing_message_draws_stone_and_flips_turn():
    game, theirs = _game()
    with game.sock, theirs:
        over = game.handle_message(GameInfo(2, 3, GameStatus.PLAYING, COLOR_WHITE))
        assert over is False
        assert game.turn is Turn.C2
        assert game.who_won == COLOR_WHITE
        assert game.view.canvas.pixel(BOARD_LEFT + 2 * CELL, BOARD_TOP + 3 * CELL) == COLOR_WHITE


def test_handle_gameover_message_clears_screen():
    game, theirs = _game()
    with game.sock, theirs:
        game.view.draw_map()
        assert game.view.canvas.pixel(200, 30) == COLOR_BROWN
        assert game.handle_message(_gameover()) is True
        assert game.view.canvas.pixel(200, 30) == COLOR_BLACK
        assert game.turn is Turn.C1


def test_receive_loop_until_gameover():
    game, theirs = _game()
    with game.sock, theirs:
        theirs.sendall(GameInfo(1, 1, GameStatus.PLAYING, COLOR_BLACK).to_bytes())
        theirs.sendall(_gameover().to_bytes())
        game.receive_loop()
        assert game.who_won == COLOR_BLACK
        assert game.turn is Turn.C2


def test_receive_loop_stops_when_server_hangs_up():
    game, theirs = _game()
    with game.sock:
        theirs.close()
        game.receive_loop()
        assert game.turn is Turn.C1


def test_sending_loop_sends_move_on_own_turn():
    game, theirs = _game(Turn.C1)
    with game.sock, theirs:
        events = [
            InputEvent(3, 0, ORIGINAL_MAX),
            InputEvent(3, 1, ORIGINAL_MAX),
            InputEvent(1, 330, 0),
        ]
        game.sending_loop(events)
        move = GameInfo.from_bytes(theirs.recv(GameInfo.SIZE))
        assert (move.i, move.j, move.game_status) == (0, 0, GameStatus.PLAYING)


def test_run_draws_board_and_ends_on_gameover():
    ours, theirs = socket.socketpair()
    view = BoardView(Canvas(800, 480))
    game = ClientGame(ours, view, Turn.C2, poll_interval=0.01, end_screen_delay=0)
    with ours, theirs:
        theirs.sendall(_gameover().to_bytes())
        game.run(iter([]))
        assert view.canvas.pixel(200, 30) == COLOR_BLACK
        assert game.who_won == 0


def test_main_requires_one_device():
    assert main([]) == 1
    assert main(["a", "b"]) == 1