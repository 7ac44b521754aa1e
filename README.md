# omokboard

A two-player omok game played over TCP. A server pairs two players
and relays their moves in turn. Each player runs a client on a Linux
device that has a framebuffer display and a touchscreen.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running a game

Start the server. It listens on port 25000 on all interfaces and waits
for two players:

```
omok-server
```

On each device, start the client and give it the touchscreen input
device:

```
omok-client /dev/input/event0
```

The client connects to the server at the fixed address
`10.10.141.206`, port 25000 (`omokboard.client.SERVER_IP` and
`omokboard.protocol.SERVER_PORT`). It draws on `/dev/fb0`.

The first client to connect is `C1` and plays black; the second is
`C2` and plays white. When both are connected, the server sends
`playStart` to each, waits one second, and then sends `C1` or `C2`.
Black moves first.

## Playing

- Touch a point on the board to select it. A red target marks the
  selection. Points on the 9 by 9 area starting at the top-left grid
  corner can be selected.
- Touch the red button in the lower right corner to send your move.
- The text on the right shows whose turn is next.
- When a move leaves exactly three like stones joined to it on one
  line (horizontal, vertical or either diagonal), both screens show
  `GAME OVER` and the winning colour. The server then closes the
  connections and exits.

Raw touch readings from 150 to 4000 are scaled onto an 800 by 480
screen.

## Library use

- `omokboard.protocol`: `GameInfo`, the 16-byte move message
  (four little-endian 32-bit integers: `i`, `j`, `game_status`,
  `color`) with `to_bytes()` and `from_bytes()`; the `GameStatus` and
  `Turn` enumerations; colour and size constants.
- `omokboard.board`: `Board` (`place`, `get`, `in_bounds`,
  `is_game_over`) and `check_game_over()`, which returns
  `GameStatus.GAMEOVER` or `GameStatus.PLAYING`.
- `omokboard.canvas`: `Canvas`, which fills rectangles and discs and
  draws block capitals and digits (`draw_text`) into a 16- or 32-bit
  pixel buffer, and `pack_color()`.
- `omokboard.display`: `BoardView`, which draws the board, stones,
  selection target, button and status text onto a `Canvas`.
- `omokboard.framebuffer`: `Framebuffer.open()` maps a Linux
  framebuffer device and exposes it as a `Canvas`; it is a context
  manager.
- `omokboard.touch`: `InputEvent`, `read_events()`, `scale_x()`,
  `scale_y()` and `TouchSelector`, which turns touch events into a
  selected cell and a move.
- `omokboard.server`: `start_tcp()`, `PlayerSession` and
  `GameServer`, whose `step()` advances the game state machine by one
  state.
- `omokboard.client`: `connect_to_server()`, `read_role()` and
  `ClientGame`.

## What it does not do

- Neither command takes options: the client's server address and the
  server's port are fixed.
- The server runs a single game and exits; it does not accept further
  players.
- The client has no display other than a Linux framebuffer and no
  input other than a touchscreen event device.
- The server does not reject a move onto an occupied point.