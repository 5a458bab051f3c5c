"""RGBA color helpers: hex parsing and tolerance matching.

Colors are plain `(r, g, b, a)` tuples with every channel in 0..255.
"""

import re
from typing import Final

from .errors import InvalidColorString

type Color = tuple[int, int, int, int]

WHITE: Final[Color] = (255, 255, 255, 255)
BLACK: Final[Color] = (0, 0, 0, 255)
TRANSPARENT: Final[Color] = (0, 0, 0, 0)

DEFAULT_TOLERANCE: Final = 20

_HEX_COLOR: Final = re.compile(r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


def parse_hex_color(text: str, alpha: int = 255) -> Color:
    """Parse `#RGB` / `#RRGGBB` (leading '#' optional) into an RGBA tuple.

    The short form is expanded by doubling each nibble, so `abc` is read as
    `aabbcc`. `alpha` is used for the alpha channel as-is.
    """
    m = _HEX_COLOR.fullmatch(text.strip())
    if m is None:
        raise InvalidColorString(text)
    if not 0 <= alpha <= 255:
        raise InvalidColorString(text, f"alpha {alpha} out of range")

    digits = m.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return (r, g, b, alpha)


def format_hex_color(color: Color) -> str:
    r, g, b, _ = color
    return f"#{r:02x}{g:02x}{b:02x}"


def is_valid_color(color: Color) -> bool:
    return len(color) == 4 and all(
        isinstance(c, int) and 0 <= c <= 255 for c in color
    )


def colors_match(c1: Color, c2: Color) -> bool:
    return tuple(c1) == tuple(c2)


def distance_sq(c1: Color, c2: Color) -> int:
    """Squared euclidean distance over all four channels, alpha included."""
    dr = c1[0] - c2[0]
    dg = c1[1] - c2[1]
    db = c1[2] - c2[2]
    da = c1[3] - c2[3]
    return dr * dr + dg * dg + db * db + da * da


def within_tolerance(color: Color, target: Color, tolerance: float) -> bool:
    return distance_sq(color, target) <= tolerance * tolerance
