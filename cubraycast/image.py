"""In-memory 32-bit pixel images and colour conversion for shallow displays."""

from __future__ import annotations

import sys
from array import array
from collections.abc import Sequence

_TYPECODE = next(code for code in "IL" if array(code).itemsize == 4)
_MASK = 0xFFFFFFFF


def convert_color(color: int, depth: int, channel_shifts: Sequence[int]) -> int:
    """Convert a 0xRRGGBB colour to a pixel value for a display of ``depth`` bits.

    Displays of 24 bits or more take the colour unchanged. Shallower displays
    pack each channel according to ``channel_shifts``: six integers giving,
    for red, green and blue in turn, the bit offset and the bit count of the
    channel in the pixel.
    """
    if depth >= 24:
        return color
    shifts = tuple(channel_shifts)
    if len(shifts) != 6:
        raise ValueError("channel_shifts must hold six integers")
    red_off, red_bits, green_off, green_bits, blue_off, blue_bits = shifts
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - red_bits)) << red_off)
        + ((green >> (16 - green_bits)) << green_off)
        + ((blue >> (16 - blue_bits)) << blue_off)
    )


class Image:
    """A width x height grid of 32-bit pixels stored little-endian."""

    bits_per_pixel = 32
    endian = 0

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self.size_line = width * (self.bits_per_pixel // 8)
        self._pixels = array(_TYPECODE, [0]) * (width * height)

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height})"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.width + x

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` (truncated to 32 bits) at column ``x``, row ``y``."""
        self._pixels[self._offset(x, y)] = color & _MASK

    def get_pixel(self, x: int, y: int) -> int:
        """Return the 32-bit value stored at column ``x``, row ``y``."""
        return self._pixels[self._offset(x, y)]

    def fill(self, color: int) -> None:
        """Set every pixel to ``color``."""
        value = color & _MASK
        self._pixels = array(_TYPECODE, [value]) * (self.width * self.height)

    def to_bytes(self) -> bytes:
        """Return the pixel data row by row, each pixel as 4 little-endian bytes."""
        if sys.byteorder == "little":
            return self._pixels.tobytes()
        swapped = array(_TYPECODE, self._pixels)
        swapped.byteswap()
        return swapped.tobytes()