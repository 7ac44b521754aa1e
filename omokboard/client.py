"""The game client: connects, shows the board and plays touch moves."""

from __future__ import annotations

import socket
import sys
import threading
import time
from typing import Iterable

from .display import BoardView
from .framebuffer import Framebuffer
from .protocol import MAX_BUF, SERVER_PORT, GameInfo, GameStatus, Turn
from .touch import InputEvent, TouchSelector, read_events

SERVER_IP = "10.10.141.206"
START_MESSAGE = b"playStart"


def connect_to_server(host: str = SERVER_IP, port: int = SERVER_PORT) -> socket.socket:
    """Open a TCP connection to the game server."""
    return socket.create_connection((host, port))


def read_role(data: bytes) -> Turn:
    """Decode the role message; anything but an exact "C2" means C1."""
    if data == b"C2":
        return Turn.C2
    return Turn.C1


def _recv_exact(sock: socket.socket, size: int) -> bytes | None:
    chunks = bytearray()
    while len(chunks) < size:
        chunk = sock.recv(size - len(chunks))
        if not chunk:
            return None
        chunks += chunk
    return bytes(chunks)


class ClientGame:
    """One player's side of a game over an established connection."""

    def __init__(
        self,
        sock: socket.socket,
        view: BoardView,
        which_client: int,
        *,
        poll_interval: float = 1.0,
        end_screen_delay: float = 3.0,
    ) -> None:
        self.sock = sock
        self.view = view
        self.which_client = Turn(which_client)
        self.turn = Turn.C1
        self.who_won = 0
        self.poll_interval = poll_interval
        self.end_screen_delay = end_screen_delay
        self.selector = TouchSelector(view)
        self._done = threading.Event()

    def handle_message(self, info: GameInfo) -> bool:
        """Apply one server message; return True when the game is over."""
        if info.game_status == GameStatus.PLAYING:
            self.who_won = info.color
        if info.game_status == GameStatus.GAMEOVER:
            self.view.print_end_screen(self.who_won)
            return True
        self.view.print_rock(info.i, info.j, 22, info.color)
        self.view.print_whose_turn(info.color)
        self.turn = Turn.C2 if self.turn == Turn.C1 else Turn.C1
        return False

    def receive_loop(self) -> None:
        """Handle server messages until the game ends or the server hangs up."""
        try:
            while True:
                data = _recv_exact(self.sock, GameInfo.SIZE)
                if data is None:
                    return
                if self.handle_message(GameInfo.from_bytes(data)):
                    time.sleep(self.end_screen_delay)
                    return
        finally:
            self._done.set()

    def sending_loop(self, events: Iterable[InputEvent]) -> None:
        """On this player's turn, read a move from the touch events and send it."""
        events = iter(events)
        while not self._done.wait(self.poll_interval):
            if self.turn != self.which_client:
                continue
            try:
                move = self.selector.get_click(events)
            except EOFError:
                return
            self.sock.sendall(move.to_bytes())

    def run(self, events: Iterable[InputEvent]) -> None:
        """Draw the board, send moves in the background and receive until the end."""
        self.view.draw_map()
        self.view.draw_who_i_am(self.which_client)
        sender = threading.Thread(target=self.sending_loop, args=(events,), daemon=True)
        sender.start()
        self.receive_loop()


def main(argv=None) -> int:
    """Run the client with the touch input device given on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("touchtest: there is no input device", file=sys.stderr)
        return 1
    device = args[0]

    try:
        sock = connect_to_server()
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    with sock:
        if sock.recv(MAX_BUF) != START_MESSAGE:
            return 0
        which_client = read_role(sock.recv(MAX_BUF))
        with Framebuffer.open() as fb, open(device, "rb", buffering=0) as touch:
            game = ClientGame(sock, BoardView(fb.canvas), which_client)
            game.run(read_events(touch))
    return 0


if __name__ == "__main__":
    sys.exit(main())