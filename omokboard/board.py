"""Server-side game board and the win check."""

from __future__ import annotations

from .protocol import MAPSIZE, WINNING_NUM, GameStatus

PLAY_LIMIT = MAPSIZE - 10

# Each direction is walked forwards and backwards from the new stone.
_DIRECTIONS = ((-1, 0), (-1, 1), (0, 1), (1, 1))


class Board:
    """A square grid of cells holding 0 for empty or a player's mark."""

    def __init__(self, size: int = MAPSIZE) -> None:
        self.size = size
        self._cells = [[0] * size for _ in range(size)]

    def _check(self, i: int, j: int) -> None:
        if not (0 <= i < self.size and 0 <= j < self.size):
            raise IndexError(f"cell ({i}, {j}) is outside the board")

    def place(self, i: int, j: int, value: int) -> None:
        """Store ``value`` at row ``i``, column ``j``."""
        self._check(i, j)
        self._cells[i][j] = value

    def get(self, i: int, j: int) -> int:
        """Return the value stored at row ``i``, column ``j``."""
        self._check(i, j)
        return self._cells[i][j]

    def in_bounds(self, i: int, j: int) -> bool:
        """Whether the cell lies on the playable part of the board."""
        return 0 <= i <= PLAY_LIMIT and 0 <= j <= PLAY_LIMIT and i < self.size and j < self.size

    def is_game_over(self, i: int, j: int) -> bool:
        """Whether the stone at (i, j) completes a winning line."""
        return check_game_over(self, i, j) is GameStatus.GAMEOVER

    def _run(self, i: int, j: int, di: int, dj: int, color: int) -> int:
        count = 0
        i += di
        j += dj
        while self.in_bounds(i, j) and self.get(i, j) == color:
            count += 1
            i += di
            j += dj
        return count


def check_game_over(board: Board, new_i: int, new_j: int) -> GameStatus:
    """GAMEOVER if exactly WINNING_NUM like stones adjoin (i, j) on one line."""
    color = board.get(new_i, new_j)
    for di, dj in _DIRECTIONS:
        connected = board._run(new_i, new_j, di, dj, color) + board._run(
            new_i, new_j, -di, -dj, color
        )
        if connected == WINNING_NUM:
            return GameStatus.GAMEOVER
    return GameStatus.PLAYING