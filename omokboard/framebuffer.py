"""Access to a Linux framebuffer device as a drawable canvas."""

from __future__ import annotations

import mmap
import os
import struct

from .canvas import Canvas

FBDEV = "/dev/fb0"

FBIOGET_VSCREENINFO = 0x4600
FBIOGET_FSCREENINFO = 0x4602

# struct fb_var_screeninfo is forty 32-bit fields.
_VAR_SIZE = 40 * 4
_VAR_XRES_YRES = struct.Struct("=II")
_VAR_BPP = struct.Struct("=I")
_VAR_BPP_OFFSET = 6 * 4

# struct fb_fix_screeninfo, laid out with native alignment.
_FIX_HEAD = "@16sLIIIIHHHI"
_FIX_SIZE = struct.calcsize("@16sLIIIIHHHILIIHHH0L")
_FIX_LINE_LENGTH_OFFSET = struct.calcsize(_FIX_HEAD) - 4
_FIX_LINE_LENGTH = struct.Struct("=I")


class Framebuffer:
    """A memory-mapped framebuffer together with a canvas drawing into it."""

    def __init__(self, canvas: Canvas, fd: int | None = None, mapping=None) -> None:
        self.canvas = canvas
        self.fd = fd
        self.mapping = mapping

    @classmethod
    def open(cls, path: str = FBDEV) -> "Framebuffer":
        """Open the device, read its geometry and map its memory."""
        import fcntl

        fd = os.open(path, os.O_RDWR)
        try:
            var = bytearray(_VAR_SIZE)
            fcntl.ioctl(fd, FBIOGET_VSCREENINFO, var, True)
            fix = bytearray(_FIX_SIZE)
            fcntl.ioctl(fd, FBIOGET_FSCREENINFO, fix, True)

            xres, yres = _VAR_XRES_YRES.unpack_from(var, 0)
            (bits_per_pixel,) = _VAR_BPP.unpack_from(var, _VAR_BPP_OFFSET)
            (line_length,) = _FIX_LINE_LENGTH.unpack_from(fix, _FIX_LINE_LENGTH_OFFSET)

            size = max(xres * yres * bits_per_pixel // 8, line_length * yres)
            mapping = mmap.mmap(
                fd, size, mmap.MAP_SHARED, mmap.PROT_READ | mmap.PROT_WRITE
            )
        except BaseException:
            os.close(fd)
            raise
        canvas = Canvas(xres, yres, bits_per_pixel, line_length, mapping)
        return cls(canvas, fd, mapping)

    def close(self) -> None:
        """Unmap the memory and close the device; safe to call twice."""
        if self.mapping is not None:
            self.mapping.close()
            self.mapping = None
        if self.fd is not None:
            os.close(self.fd)
            self.fd = None

    def __enter__(self) -> "Framebuffer":
        return self

    def __exit__(self, *args) -> None:
        self.close()