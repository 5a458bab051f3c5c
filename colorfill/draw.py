"""
Bitmap fill utilities using a flat RGBA pixel buffer.

`PixelBuffer` treats `data` as a flat, mutable `bytearray` representing a
`width` by `height` bitmap in row-major order, 4 bytes (r, g, b, a) per pixel.
Pixel (x, y) starts at byte `(y * width + x) * 4`.
"""

from dataclasses import dataclass, field
from typing import Final

from .colors import (
    DEFAULT_TOLERANCE,
    TRANSPARENT,
    Color,
    colors_match,
    is_valid_color,
    within_tolerance,
)
from .errors import InvalidBuffer, InvalidSeed


@dataclass(frozen=True)
class Point:
    x: int
    y: int


class PixelBuffer:
    """A minimal RGBA bitmap backed by a 1D byte buffer.

    - `data` is modified in-place and never changes length.
    - Coordinates are 0-based, with origin at top-left.
    """

    def __init__(
        self, w: int, h: int, data: bytes | bytearray | None = None
    ) -> None:
        if w <= 0 or h <= 0:
            raise InvalidBuffer(f"Bad buffer size {w}x{h}")
        if data is None:
            data = bytearray(w * h * 4)
        elif len(data) != w * h * 4:
            raise InvalidBuffer(
                f"{w}x{h} buffer needs {w * h * 4} bytes, got {len(data)}"
            )
        self.data: Final = data if isinstance(data, bytearray) else bytearray(data)
        self.width: Final = w
        self.height: Final = h

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self.width, self.height, self.data) == (
            other.width,
            other.height,
            other.data,
        )

    __hash__ = None  # pyright: ignore[reportAssignmentType]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _offset(self, x: int, y: int) -> int:
        return (y * self.width + x) * 4

    def _check(self, x: int, y: int):
        if not self.in_bounds(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height}")

    def get_pixel(self, x: int, y: int) -> Color:
        self._check(x, y)
        o = self._offset(x, y)
        r, g, b, a = self.data[o : o + 4]
        return (r, g, b, a)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        self._check(x, y)
        o = self._offset(x, y)
        self.data[o : o + 4] = bytes(color)

    def clear(self, color: Color = TRANSPARENT):
        self.data[:] = bytes(color) * (self.width * self.height)

    def set_pixels(self, pixels: bytes | bytearray):
        if len(pixels) != len(self.data):
            raise InvalidBuffer(
                f"Expected {len(self.data)} bytes of pixel data, got {len(pixels)}"
            )
        self.data[:] = pixels

    def to_bytes(self) -> bytes:
        return bytes(self.data)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, bytearray(self.data))

    def flood_fill(
        self, x: int, y: int, color: Color, tolerance: float = DEFAULT_TOLERANCE
    ) -> None:
        flood_fill(self, Point(x, y), color, tolerance)


@dataclass
class _Region:
    """State of a single fill call; dropped when the call returns."""

    buffer: PixelBuffer
    target: Color
    fill_color: Color
    tolerance: float
    painted: bytearray = field(init=False)

    def __post_init__(self):
        self.painted = bytearray(self.buffer.width * self.buffer.height)

    def matches(self, x: int, y: int) -> bool:
        # Checked against the original target color, never the fill color.
        if not self.buffer.in_bounds(x, y):
            return False
        if self.painted[y * self.buffer.width + x]:
            return False
        return within_tolerance(self.buffer.get_pixel(x, y), self.target, self.tolerance)

    def paint(self, x: int, y: int):
        self.buffer.set_pixel(x, y, self.fill_color)
        self.painted[y * self.buffer.width + x] = 1

    def fill_from(self, seed: Point):
        stack: list[Point] = [seed]

        while stack:
            p = stack.pop()
            if not self.matches(p.x, p.y):
                continue

            # Find left edge of the run
            x = p.x
            while self.matches(x - 1, p.y):
                x -= 1

            # Fill to the right, seeding each new run above and below once
            span_above = span_below = False
            while self.matches(x, p.y):
                self.paint(x, p.y)

                above = self.matches(x, p.y - 1)
                if above and not span_above:
                    stack.append(Point(x, p.y - 1))
                span_above = above

                below = self.matches(x, p.y + 1)
                if below and not span_below:
                    stack.append(Point(x, p.y + 1))
                span_below = below

                x += 1


def flood_fill(
    buffer: PixelBuffer,
    seed: Point,
    fill_color: Color,
    tolerance: float = DEFAULT_TOLERANCE,
) -> None:
    """Flood-fill using a stack-based scanline algorithm with color tolerance.

    - Repaints the 4-connected region around `seed` whose pixels lie within
      `tolerance` (euclidean RGBA distance) of the seed's original color.
    - Does nothing if the seed already has exactly `fill_color`.
    - Validates everything before the first write, so a rejected call leaves
      `buffer` untouched.
    """

    if not buffer.in_bounds(seed.x, seed.y):
        raise InvalidSeed(seed.x, seed.y, buffer.width, buffer.height)
    if not is_valid_color(fill_color):
        raise ValueError(f"Bad fill color {fill_color!r}")
    if tolerance < 0:
        raise ValueError("tolerance must be >= 0")

    target = buffer.get_pixel(seed.x, seed.y)
    if colors_match(target, fill_color):
        return

    _Region(buffer, target, tuple(fill_color), tolerance).fill_from(seed)


@dataclass
class FillRequest:
    buffer: PixelBuffer
    seed: Point
    fill_color: Color
    tolerance: float = DEFAULT_TOLERANCE

    def run(self) -> None:
        flood_fill(self.buffer, self.seed, self.fill_color, self.tolerance)
