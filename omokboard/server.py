"""The game server: pairs two players and relays their moves."""

from __future__ import annotations

import socket
import sys
import time
from typing import Iterable

from .board import Board, check_game_over
from .protocol import (
    COLOR_BLACK,
    COLOR_GREEN,
    COLOR_WHITE,
    MAX_BUF,
    SERVER_PORT,
    GameInfo,
    GameStatus,
    Turn,
)

LISTEN_BACKLOG = 5
START_MESSAGE = b"playStart"
PLAYER_COUNT = 2


def start_tcp(host: str = "", port: int = SERVER_PORT) -> socket.socket:
    """Create a listening TCP socket with address reuse enabled."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(LISTEN_BACKLOG)
    except BaseException:
        sock.close()
        raise
    return sock


class PlayerSession:
    """One connected player and the last move stored for it."""

    def __init__(self, sock: socket.socket, which_client: int) -> None:
        self.sock = sock
        self.which_client = Turn(which_client)
        self.turn = Turn.C1
        self.game_info = GameInfo(-1, -1, GameStatus.PLAYING, COLOR_GREEN)

    def send_start(self) -> None:
        """Tell the player that the game begins."""
        self.sock.sendall(START_MESSAGE)

    def send_role(self) -> None:
        """Tell the player whether it is C1 or C2."""
        self.sock.sendall(self.which_client.name.encode("ascii"))

    def receive_move(self, color: int) -> GameInfo:
        """Read a move from the player and store it with the given colour."""
        data = self.sock.recv(MAX_BUF)
        if len(data) < GameInfo.SIZE:
            raise ConnectionError(
                f"player {self.which_client.name} sent no complete move"
            )
        received = GameInfo.from_bytes(data)
        self.game_info.game_status = received.game_status
        self.game_info.i = received.i
        self.game_info.j = received.j
        self.game_info.color = color
        return self.game_info

    def send_move(self, info: GameInfo) -> None:
        """Send a move to the player as a PLAYING message."""
        message = GameInfo(info.i, info.j, GameStatus.PLAYING, info.color)
        self.sock.sendall(message.to_bytes())

    def send_game_over(self) -> None:
        """Send the game-over message."""
        message = GameInfo(-100, -100, GameStatus.GAMEOVER, -1)
        self.sock.sendall(message.to_bytes())

    def close(self) -> None:
        """Close the player's connection."""
        self.sock.close()


def _color_for(turn: int) -> int:
    return COLOR_BLACK if turn == Turn.C1 else COLOR_WHITE


class GameServer:
    """Runs the shared state machine of one two-player game."""

    def __init__(
        self,
        listener: socket.socket | None = None,
        *,
        sessions: Iterable[PlayerSession] = (),
        board: Board | None = None,
        start_delay: float = 1.0,
    ) -> None:
        self.listener = listener
        self.sessions = list(sessions)
        self.board = board if board is not None else Board()
        self.start_delay = start_delay
        self.status = GameStatus.C1_WAITING

    @property
    def c1(self) -> PlayerSession:
        return self.sessions[Turn.C1]

    @property
    def c2(self) -> PlayerSession:
        return self.sessions[Turn.C2]

    def accept_players(self) -> None:
        """Accept two players, then announce the start and their roles."""
        if self.listener is None:
            raise RuntimeError("server has no listening socket")
        while len(self.sessions) < PLAYER_COUNT:
            conn, _ = self.listener.accept()
            self.sessions.append(PlayerSession(conn, Turn(len(self.sessions))))
        for session in self.sessions:
            session.send_start()
        if self.start_delay:
            time.sleep(self.start_delay)
        for session in self.sessions:
            session.send_role()

    def _set_turn(self, turn: Turn) -> None:
        for session in self.sessions:
            session.turn = turn

    def _relay(self, source: PlayerSession, target: PlayerSession,
               turn: Turn, mark: int, check_bounds: bool) -> None:
        move = source.game_info
        if check_bounds and not self.board.in_bounds(move.i, move.j):
            raise ValueError(f"move ({move.i}, {move.j}) is off the board")
        self._set_turn(turn)
        self.board.place(move.i, move.j, mark)
        target.game_info.i = move.i
        target.game_info.j = move.j
        target.game_info.color = move.color

    def step(self) -> GameStatus:
        """Advance the game by one state and return the new state."""
        status = self.status
        if status == GameStatus.C1_WAITING:
            self.c1.receive_move(_color_for(self.c1.turn))
            self.status = GameStatus.C1_RCVD
        elif status == GameStatus.C2_WAITING:
            self.c2.receive_move(_color_for(self.c2.turn))
            self.status = GameStatus.C2_RCVD
        elif status == GameStatus.C1_RCVD:
            self._relay(self.c1, self.c2, Turn.C1, 1, check_bounds=True)
            self.status = GameStatus.SEND
        elif status == GameStatus.C2_RCVD:
            self._relay(self.c2, self.c1, Turn.C2, 2, check_bounds=False)
            self.status = GameStatus.SEND
        elif status == GameStatus.SEND:
            self.status = GameStatus.C1_SEND
        elif status == GameStatus.C1_SEND:
            self.c1.send_move(self.c1.game_info)
            self.status = GameStatus.C1_SENT
        elif status == GameStatus.C1_SENT:
            self.status = GameStatus.C2_SEND
        elif status == GameStatus.C2_SEND:
            self.c2.send_move(self.c2.game_info)
            self.status = GameStatus.C2_SENT
        elif status == GameStatus.C2_SENT:
            move = self.c2.game_info
            if check_game_over(self.board, move.i, move.j) == GameStatus.GAMEOVER:
                self.status = GameStatus.C1_GAMEOVER
            elif self.c1.turn == Turn.C1:
                self._set_turn(Turn.C2)
                self.status = GameStatus.C2_WAITING
            elif self.c2.turn == Turn.C2:
                self._set_turn(Turn.C1)
                self.status = GameStatus.C1_WAITING
        elif status == GameStatus.C1_GAMEOVER:
            self.c1.send_game_over()
            self.status = GameStatus.C2_GAMEOVER
        elif status == GameStatus.C2_GAMEOVER:
            self.c2.send_game_over()
            self.status = GameStatus.ENDGAME
        return self.status

    def run(self) -> None:
        """Step the game until it has ended."""
        while self.status != GameStatus.ENDGAME:
            self.step()

    def close(self) -> None:
        """Close the players' connections and the listening socket."""
        for session in self.sessions:
            session.close()
        if self.listener is not None:
            self.listener.close()
            self.listener = None

    def __enter__(self) -> "GameServer":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def main(argv=None) -> int:
    """Listen for two players and run one game."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        print("usage: omokboard-server", file=sys.stderr)
        return 1
    try:
        listener = start_tcp()
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    with GameServer(listener) as server:
        server.accept_players()
        server.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())