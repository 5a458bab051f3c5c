"""Interactive coloring state kept outside the fill engine.

`ColoringSession` plays the role of the UI: it owns the canvas, the snapshot
used by "reset", the fill/erase mode and the picked color, and translates
clicks in display space into fill calls on the canvas.
"""

import math
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import Final, Literal, get_args

from .assets import AssetCatalog
from .colors import DEFAULT_TOLERANCE, WHITE, Color, format_hex_color, parse_hex_color
from .draw import PixelBuffer, Point, flood_fill
from .errors import ColorFillError
from .image_io import blank_buffer, load_image, save_image

logger = getLogger(__name__)

Mode = Literal["fill", "erase"]
StatusState = Literal["info", "success", "error"]

ERASE_COLOR: Final[Color] = WHITE


@dataclass
class Status:
    message: str = ""
    state: StatusState = "info"


class ColoringSession:
    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        color: str = "#ff0000",
        tolerance: float = DEFAULT_TOLERANCE,
    ):
        if tolerance < 0:
            raise ValueError("tolerance must be >= 0")
        self.mode: Mode = "fill"
        self.color: str = color
        self.fill_color: Color = parse_hex_color(color)
        self.tolerance: float = tolerance
        self.status: Status = Status()
        self.canvas: PixelBuffer = blank_buffer(width, height)
        self.original: PixelBuffer | None = None
        self.image_loaded: bool = False

    def set_status(self, message: str, state: StatusState = "info"):
        self.status = Status(message, state)
        if state == "error":
            logger.error(message)
        else:
            logger.info(message)

    def set_mode(self, mode: str):
        if mode not in get_args(Mode):
            raise ValueError(f"Unknown mode '{mode}'")
        self.mode = mode  # pyright: ignore[reportAttributeAccessIssue]

    def set_color(self, color: str):
        self.fill_color = parse_hex_color(color)
        self.color = color

    def clear(self):
        """Blank white canvas; nothing is loaded afterwards."""
        self.canvas = blank_buffer(self.canvas.width, self.canvas.height)
        self.image_loaded = False
        self.original = None

    def load(self, path: Path | str) -> bool:
        path = Path(path)
        self.image_loaded = False
        self.set_status("Loading image...")
        try:
            canvas = load_image(path)
        except OSError as e:
            logger.debug(f"Failed to load {path}: {e}")
            self.clear()
            self.set_status("Could not load the selected image.", "error")
            return False

        self.canvas = canvas
        self.original = canvas.copy()
        self.image_loaded = True
        self.set_status(f"Image ready: {path.name}", "success")
        return True

    def load_asset(
        self, catalog: AssetCatalog, category: str, file: str | None = None
    ) -> bool:
        """Load an image from the catalog, by default the category's first one."""
        assets = catalog.assets(category)
        if not assets:
            self.clear()
            self.set_status("No images in this category.", "error")
            return False
        return self.load(catalog.path_for(category, file or assets[0].file))

    def open_catalog(self, catalog: AssetCatalog) -> bool:
        """Start on the first image of the first category."""
        categories = catalog.categories()
        if not categories:
            self.clear()
            self.set_status("No images configured in assets.", "error")
            return False
        return self.load_asset(catalog, categories[0])

    def to_buffer_coords(
        self,
        x: float,
        y: float,
        display_width: float | None = None,
        display_height: float | None = None,
    ) -> Point:
        """Map a position on the displayed (possibly scaled) image to a pixel."""
        sx = self.canvas.width / display_width if display_width else 1.0
        sy = self.canvas.height / display_height if display_height else 1.0
        return Point(math.floor(x * sx), math.floor(y * sy))

    def click(
        self,
        x: float,
        y: float,
        display_width: float | None = None,
        display_height: float | None = None,
    ) -> bool:
        """Fill (or erase) the region under a click. Returns True if a fill ran."""
        if not self.image_loaded:
            return False

        seed = self.to_buffer_coords(x, y, display_width, display_height)
        color = self.fill_color if self.mode == "fill" else ERASE_COLOR
        try:
            flood_fill(self.canvas, seed, color, self.tolerance)
        except ColorFillError as e:
            self.set_status(str(e), "error")
            return False
        logger.debug(f"{self.mode} at ({seed.x}, {seed.y}) with {format_hex_color(color)}")
        return True

    def reset(self) -> bool:
        if not self.image_loaded or self.original is None:
            return False
        self.canvas = self.original.copy()
        self.set_status("Image restored.")
        return True

    def save(self, path: Path | str) -> Path:
        return save_image(self.canvas, path)
