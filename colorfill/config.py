from dataclasses import dataclass, field
from pathlib import Path

from .colors import DEFAULT_TOLERANCE


class HexInt(int):
    def __repr__(self) -> str:  # used in help default printing
        return f"{int(self):06x}"

    __str__ = __repr__


@dataclass
class ColorFillConfig:
    image: Path | None = None
    """Image to color; required unless `category` is given"""

    output: Path | None = None
    """Where to write the result (default: <image>-filled.png)"""

    fills: list[str] = field(default_factory=list[str])
    """Click points as 'x,y' in image pixels, applied in order"""

    mode: str = "fill"
    """'fill' paints with `color`, 'erase' paints white"""

    color: int = HexInt(0xFF0000)
    """Fill color as 0xRRGGBB"""

    tolerance: float = DEFAULT_TOLERANCE
    """Max RGBA distance for a pixel to count as the clicked color"""

    canvas_width: int = 800
    canvas_height: int = 600

    asset_file: Path | None = None
    """yaml catalog of line-art images"""

    category: str | None = None
    """Pick the image from the asset catalog instead of `image`"""

    asset: str | None = None
    """Image file within `category` (default: its first image)"""

    list_assets: bool = False
    """Print the asset catalog and exit"""

    def color_hex(self) -> str:
        return f"#{int(self.color) & 0xFFFFFF:06x}"
