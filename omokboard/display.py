"""The client's board screen: grid, stones, cursor and status text."""

from __future__ import annotations

from .board import Board
from .canvas import Canvas
from .protocol import (
    COLOR_BLACK,
    COLOR_BROWN,
    COLOR_RED,
    COLOR_WHITE,
    Turn,
)

BOARD_LEFT = 220
BOARD_TOP = 60
CELL = 45
BOARD_EXTENT = 360

_STAR_POINTS = ((310, 150), (490, 150), (400, 240), (310, 330), (490, 330))
_TARGET_DX = (-15, -10, -15, -15, -15, -10, 5, 10, 10, 5, 10, 10)
_TARGET_DY = (-15, -15, -10, 5, 10, 10, 10, 5, 10, -15, -15, -10)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class BoardView:
    """Draws the game on a canvas and tracks the locally occupied cells."""

    def __init__(self, canvas: Canvas, client_map: Board | None = None) -> None:
        self.canvas = canvas
        self.client_map = client_map if client_map is not None else Board()
        self.color = COLOR_BLACK

    def draw_map(self) -> None:
        """Clear the screen and draw the board, grid, star points and button."""
        c = self.canvas
        c.fill_rect(0, 0, c.xres, c.yres, COLOR_BLACK)
        c.fill_rect(175, 15, 450, 450, COLOR_BROWN)
        for n in range(10):
            c.fill_rect(BOARD_LEFT, BOARD_TOP + n * CELL, BOARD_EXTENT, 1, COLOR_BLACK)
        for n in range(10):
            c.fill_rect(BOARD_LEFT + n * CELL, BOARD_TOP, 1, BOARD_EXTENT, COLOR_BLACK)
        for x, y in _STAR_POINTS:
            c.draw_circle(x, y, 5, COLOR_BLACK)
        self.draw_button()

    def draw_button(self) -> None:
        """Draw the red place-stone button."""
        self.canvas.fill_rect(700, 380, 100, 100, COLOR_RED)

    def draw_turn(self) -> None:
        """Draw a disc in the colour of the next stone."""
        if self.color in (COLOR_BLACK, COLOR_WHITE):
            self.canvas.draw_circle(750, 430, 30, self.color)

    def draw_target(self, x_selected: int, y_selected: int, x_before: int, y_before: int) -> None:
        """Mark the selected cell and erase the mark at the previous position."""
        x_coord = x_selected * CELL + BOARD_LEFT
        y_coord = y_selected * CELL + BOARD_TOP
        if (
            BOARD_LEFT <= x_coord <= BOARD_LEFT + BOARD_EXTENT
            and BOARD_TOP <= y_coord <= BOARD_TOP + BOARD_EXTENT
        ):
            has_before = not (x_before == 0 and y_before == 0)
            before_row = _trunc_div(y_before - BOARD_TOP, CELL)
            before_col = _trunc_div(x_before - BOARD_LEFT, CELL)
            for dx, dy in zip(_TARGET_DX, _TARGET_DY):
                if has_before and self.client_map.get(before_row, before_col) == 0:
                    self.canvas.fill_rect(x_before + dx, y_before + dy, 5, 5, COLOR_BROWN)
                self.canvas.fill_rect(x_coord + dx, y_coord + dy, 5, 5, COLOR_RED)
        self.draw_button()

    def add_stone(self, x_selected: int, y_selected: int, x_coordinate: int, y_coordinate: int) -> None:
        """Draw a stone in the current colour unless the cell is taken, then swap colours."""
        if self.client_map.get(y_selected, x_selected) == 1:
            return
        if self.color == COLOR_BLACK:
            self.canvas.draw_circle(x_coordinate, y_coordinate, 22, COLOR_BLACK)
            self.color = COLOR_WHITE
        elif self.color == COLOR_WHITE:
            self.canvas.draw_circle(x_coordinate, y_coordinate, 22, COLOR_WHITE)
            self.color = COLOR_BLACK

    def draw_who_i_am(self, which_client: int) -> None:
        """Show which colour this player has."""
        text = "I AM BLACK" if which_client == Turn.C1 else "I AM WHITE"
        self.canvas.draw_text(text, 640, 0, 4, COLOR_WHITE)

    def print_rock(self, i: int, j: int, radius: int, color: int) -> None:
        """Draw a stone at board column ``i``, row ``j``."""
        self.canvas.draw_circle(i * CELL + BOARD_LEFT, j * CELL + BOARD_TOP, radius, color)

    def print_end_screen(self, who_won: int) -> None:
        """Clear the screen and show the result."""
        c = self.canvas
        c.fill_rect(0, 0, c.xres, c.yres, COLOR_BLACK)
        c.draw_text("GAME OVER", 320, 200, 4, COLOR_RED)
        if who_won == COLOR_BLACK:
            c.draw_text("BLACK WIN", 320, 250, 4, COLOR_RED)
        elif who_won == COLOR_WHITE:
            c.draw_text("WHITE WIN", 320, 250, 4, COLOR_RED)

    def print_whose_turn(self, whose_turn: int) -> None:
        """Show whose move is next, given the colour of the last stone played."""
        c = self.canvas
        c.draw_text("WHITE TURN", 640, 300, 4, COLOR_BLACK)
        c.draw_text("BLACK TURN", 640, 300, 4, COLOR_BLACK)
        if whose_turn == COLOR_BLACK:
            c.draw_text("WHITE TURN", 640, 300, 4, COLOR_WHITE)
        elif whose_turn == COLOR_WHITE:
            c.draw_text("BLACK TURN", 640, 300, 4, COLOR_WHITE)