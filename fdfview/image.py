"""In-memory 32-bit images and colour conversion for a display visual."""

from __future__ import annotations

BITS_PER_PIXEL = 32
_BYTES_PER_PIXEL = BITS_PER_PIXEL // 8


class Image:
    """A 32 bits-per-pixel image held in a byte buffer, one row after another."""

    def __init__(self, width: int, height: int, big_endian: bool = False) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.big_endian = bool(big_endian)
        self.bits_per_pixel = BITS_PER_PIXEL
        self.size_line = width * _BYTES_PER_PIXEL
        self.data = bytearray(self.size_line * height)

    @property
    def endian(self) -> int:
        """Byte order of the pixel data: 0 for little endian, 1 for big endian."""
        return int(self.big_endian)

    @property
    def _byteorder(self) -> str:
        return "big" if self.big_endian else "little"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.size_line + x * _BYTES_PER_PIXEL

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store a 32-bit colour at (x, y) in the image's byte order."""
        offset = self._offset(x, y)
        value = color & 0xFFFFFFFF
        self.data[offset:offset + _BYTES_PER_PIXEL] = value.to_bytes(
            _BYTES_PER_PIXEL, self._byteorder
        )

    def get_pixel(self, x: int, y: int) -> int:
        """Return the 32-bit colour stored at (x, y)."""
        offset = self._offset(x, y)
        return int.from_bytes(self.data[offset:offset + _BYTES_PER_PIXEL], self._byteorder)

    def __repr__(self) -> str:
        return (
            f"Image(width={self.width}, height={self.height}, "
            f"big_endian={self.big_endian})"
        )


def _shift_and_bits(mask: int) -> tuple[int, int]:
    if mask <= 0:
        raise ValueError(f"colour mask must be a positive bit field, got {mask:#x}")
    shift = (mask & -mask).bit_length() - 1
    rest = mask >> shift
    bits = (rest ^ (rest + 1)).bit_length() - 1
    return shift, bits


def mask_shifts(red_mask: int, green_mask: int, blue_mask: int) -> tuple[int, int, int, int, int, int]:
    """Return (red shift, red bits, green shift, green bits, blue shift, blue bits)."""
    red = _shift_and_bits(red_mask)
    green = _shift_and_bits(green_mask)
    blue = _shift_and_bits(blue_mask)
    return (*red, *green, *blue)


def color_value(color: int, depth: int, shifts: tuple[int, int, int, int, int, int]) -> int:
    """Convert a 0xRRGGBB colour to a pixel value for a visual of the given depth.

    Depths of 24 bits and more take the colour unchanged; shallower visuals
    keep the top bits of each channel placed as the shifts describe.
    """
    if depth >= 24:
        return color
    red_shift, red_bits, green_shift, green_bits, blue_shift, blue_bits = shifts
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - red_bits)) << red_shift)
        + ((green >> (16 - green_bits)) << green_shift)
        + ((blue >> (16 - blue_bits)) << blue_shift)
    )