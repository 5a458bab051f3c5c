"""Errors raised by the fill engine and the color parser.

All of them derive from `ValueError`, so code that already guards a call with
`except ValueError` keeps working.
"""


class ColorFillError(ValueError):
    pass


class InvalidSeed(ColorFillError):
    """Seed point lies outside the pixel buffer."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"Seed ({x}, {y}) outside {width}x{height} buffer")
        self.x: int = x
        self.y: int = y
        self.width: int = width
        self.height: int = height


class InvalidBuffer(ColorFillError):
    """Buffer dimensions don't agree with the length of its pixel data."""


class InvalidColorString(ColorFillError):
    def __init__(self, text: str, reason: str = "malformed hex color") -> None:
        super().__init__(f"Invalid color '{text}': {reason}")
        self.text: str = text
