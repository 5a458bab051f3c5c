from logging import getLogger
from pathlib import Path

from PIL import Image

from .colors import WHITE, Color
from .draw import PixelBuffer

logger = getLogger(__name__)


def from_image(img: Image.Image) -> PixelBuffer:
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    w, h = img.size
    return PixelBuffer(w, h, bytearray(img.tobytes()))


def to_image(buffer: PixelBuffer) -> Image.Image:
    return Image.frombytes("RGBA", (buffer.width, buffer.height), buffer.to_bytes())


def load_image(path: Path | str) -> PixelBuffer:
    """Decode any image Pillow can read into an RGBA pixel buffer."""
    path = Path(path)
    with Image.open(path) as img:
        buffer = from_image(img)
    logger.debug(f"Loaded {path} ({buffer.width}x{buffer.height})")
    return buffer


def save_image(buffer: PixelBuffer, path: Path | str) -> Path:
    path = Path(path)
    to_image(buffer).save(path)
    logger.debug(f"Saved {buffer.width}x{buffer.height} image to {path}")
    return path


def blank_buffer(width: int, height: int, color: Color = WHITE) -> PixelBuffer:
    buffer = PixelBuffer(width, height)
    buffer.clear(color)
    return buffer
