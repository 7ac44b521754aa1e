"""Drawing primitives over a raw pixel buffer."""

from __future__ import annotations

import math

FONT_LETTERS = (
    (0b010, 0b101, 0b111, 0b101, 0b101, 0b101, 0b101),
    (0b110, 0b101, 0b110, 0b101, 0b101, 0b101, 0b110),
    (0b011, 0b100, 0b100, 0b100, 0b100, 0b100, 0b011),
    (0b110, 0b101, 0b101, 0b101, 0b101, 0b101, 0b110),
    (0b111, 0b100, 0b100, 0b110, 0b100, 0b100, 0b111),
    (0b111, 0b100, 0b100, 0b110, 0b100, 0b100, 0b100),
    (0b011, 0b100, 0b100, 0b101, 0b101, 0b101, 0b011),
    (0b101, 0b101, 0b101, 0b111, 0b101, 0b101, 0b101),
    (0b111, 0b010, 0b010, 0b010, 0b010, 0b010, 0b111),
    (0b111, 0b010, 0b010, 0b010, 0b010, 0b110, 0b100),
    (0b101, 0b101, 0b110, 0b100, 0b110, 0b101, 0b101),
    (0b100, 0b100, 0b100, 0b100, 0b100, 0b100, 0b111),
    (0b101, 0b111, 0b101, 0b101, 0b101, 0b101, 0b101),
    (0b101, 0b111, 0b111, 0b111, 0b111, 0b111, 0b101),
    (0b010, 0b101, 0b101, 0b101, 0b101, 0b101, 0b010),
    (0b110, 0b101, 0b101, 0b110, 0b100, 0b100, 0b100),
    (0b011, 0b100, 0b100, 0b101, 0b101, 0b101, 0b011),
    (0b110, 0b101, 0b101, 0b110, 0b101, 0b101, 0b101),
    (0b011, 0b100, 0b100, 0b010, 0b001, 0b001, 0b110),
    (0b111, 0b010, 0b010, 0b010, 0b010, 0b010, 0b010),
    (0b101, 0b101, 0b101, 0b101, 0b101, 0b101, 0b011),
    (0b101, 0b101, 0b101, 0b101, 0b101, 0b010, 0b010),
    (0b101, 0b101, 0b101, 0b101, 0b111, 0b111, 0b101),
    (0b101, 0b101, 0b010, 0b010, 0b010, 0b101, 0b101),
    (0b101, 0b101, 0b101, 0b101, 0b010, 0b010, 0b010),
    (0b111, 0b001, 0b010, 0b010, 0b100, 0b100, 0b111),
)

FONT_DIGITS = (
    (0b111, 0b101, 0b101, 0b101, 0b111),
    (0b010, 0b110, 0b010, 0b010, 0b111),
    (0b111, 0b001, 0b111, 0b100, 0b111),
    (0b111, 0b001, 0b111, 0b001, 0b111),
    (0b101, 0b101, 0b111, 0b001, 0b001),
    (0b111, 0b100, 0b111, 0b001, 0b111),
    (0b111, 0b100, 0b111, 0b101, 0b111),
    (0b111, 0b001, 0b001, 0b010, 0b010),
    (0b111, 0b101, 0b111, 0b101, 0b111),
    (0b111, 0b101, 0b111, 0b001, 0b111),
)

# Circles whose centre lies outside this area are refused.
_CIRCLE_MAX_X = 800
_CIRCLE_MAX_Y = 480


def pack_color(color: int, bits_per_pixel: int) -> bytes:
    """Encode a 0xRRGGBB colour as pixel bytes: 32-bit or RGB565."""
    color &= 0xFFFFFFFF
    if bits_per_pixel == 32:
        return color.to_bytes(4, "little")
    r = (color >> 16) & 0xFFFF
    g = (color >> 8) & 0xFF
    b = color & 0xFF
    value = (((r >> 3) << 11) | ((g >> 2) << 5) | (b >> 3)) & 0xFFFF
    return value.to_bytes(2, "little")


class Canvas:
    """A pixel surface over a writable buffer such as a mapped framebuffer."""

    def __init__(
        self,
        xres: int,
        yres: int,
        bits_per_pixel: int = 32,
        line_length: int | None = None,
        buffer=None,
    ) -> None:
        self.xres = xres
        self.yres = yres
        self.bits_per_pixel = bits_per_pixel
        self.bytes_per_pixel = bits_per_pixel // 8
        self.line_length = (
            line_length if line_length is not None else xres * self.bytes_per_pixel
        )
        self.buffer = (
            buffer if buffer is not None else bytearray(self.line_length * yres)
        )

    def _offset(self, x: int, y: int) -> int:
        return x * self.bytes_per_pixel + y * self.line_length

    def fill_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        """Fill a rectangle, clipped to the surface."""
        x0, x1 = max(x, 0), min(x + w, self.xres)
        y0, y1 = max(y, 0), min(y + h, self.yres)
        if x0 >= x1 or y0 >= y1:
            return
        packed = pack_color(color, self.bits_per_pixel)
        if len(packed) == self.bytes_per_pixel:
            row = packed * (x1 - x0)
            for yy in range(y0, y1):
                start = self._offset(x0, yy)
                self.buffer[start:start + len(row)] = row
        else:
            for yy in range(y0, y1):
                for xx in range(x0, x1):
                    start = self._offset(xx, yy)
                    self.buffer[start:start + len(packed)] = packed

    def draw_circle(self, cx: int, cy: int, r: int, color: int) -> bool:
        """Fill a disc; return False without drawing if the centre is off-screen."""
        if cx < 0 or cx > _CIRCLE_MAX_X or cy < 0 or cy > _CIRCLE_MAX_Y:
            return False
        for dy in range(-r, r + 1):
            dx = math.isqrt(r * r - dy * dy)
            self.fill_rect(cx - dx, cy + dy, 2 * dx + 1, 1, color)
        return True

    def _draw_glyph(self, rows, x: int, y: int, scale: int, color: int) -> None:
        for row, bits in enumerate(rows):
            for col in range(3):
                if (bits >> (2 - col)) & 1:
                    self.fill_rect(
                        x + col * scale, y + row * scale, scale, scale, color
                    )

    def draw_letter(self, letter: str, x: int, y: int, scale: int, color: int) -> None:
        """Draw one capital letter; anything else is ignored."""
        if len(letter) != 1 or not "A" <= letter <= "Z":
            return
        self._draw_glyph(FONT_LETTERS[ord(letter) - ord("A")], x, y, scale, color)

    def draw_number(self, num: int, x: int, y: int, scale: int, color: int) -> None:
        """Draw one decimal digit; values outside 0..9 are ignored."""
        if not 0 <= num <= 9:
            return
        self._draw_glyph(FONT_DIGITS[num], x, y, scale, color)

    def draw_text(self, text: str, x: int, y: int, scale: int, color: int) -> None:
        """Draw capitals, digits and spaces; other characters are skipped."""
        spacing = scale * 4
        for ch in text:
            if ch == " ":
                x += spacing
            elif "A" <= ch <= "Z":
                self.draw_letter(ch, x, y, scale, color)
                x += spacing
            elif "0" <= ch <= "9":
                self.draw_number(int(ch), x, y, int(scale * 1.5), color)
                x = int(x + spacing * 1.5)

    def pixel(self, x: int, y: int) -> int:
        """Return the raw stored value of one pixel."""
        if not (0 <= x < self.xres and 0 <= y < self.yres):
            raise IndexError(f"pixel ({x}, {y}) is outside the surface")
        size = 4 if self.bits_per_pixel == 32 else 2
        start = self._offset(x, y)
        return int.from_bytes(bytes(self.buffer[start:start + size]), "little")