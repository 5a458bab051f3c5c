#!/usr/bin/env python
import logging
from pathlib import Path
from typing import cast

import jsonargparse

from .assets import AssetCatalog
from .config import ColorFillConfig
from .session import ColoringSession

logger = logging.getLogger(__name__)


def parse_point(text: str) -> tuple[int, int]:
    """Parse an 'x,y' click point."""
    parts = text.replace(" ", "").split(",")
    if len(parts) != 2:
        raise ValueError(f"Bad point '{text}', expected 'x,y'")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as e:
        raise ValueError(f"Bad point '{text}', expected 'x,y'") from e


def default_output(config: ColorFillConfig) -> Path:
    source = config.image or Path(config.asset or "canvas.png")
    return source.with_name(f"{source.stem}-filled.png")


def load_catalog(config: ColorFillConfig) -> AssetCatalog:
    if config.asset_file is not None:
        return AssetCatalog.load(config.asset_file)
    return AssetCatalog.default()


def describe_catalog(catalog: AssetCatalog) -> list[str]:
    lines: list[str] = []
    for category, label in catalog.category_labels().items():
        lines.append(f"{label} ({category})")
        lines.extend(f"  {a.file}: {a.label}" for a in catalog.assets(category))
    return lines


def run(config: ColorFillConfig) -> Path:
    points = [parse_point(p) for p in config.fills]

    session = ColoringSession(
        config.canvas_width,
        config.canvas_height,
        color=config.color_hex(),
        tolerance=config.tolerance,
    )
    session.set_mode(config.mode)

    if config.category is not None:
        loaded = session.load_asset(load_catalog(config), config.category, config.asset)
    elif config.image is not None:
        loaded = session.load(config.image)
    else:
        raise ValueError("Need an image or an asset category")

    if not loaded:
        raise RuntimeError(session.status.message)

    for x, y in points:
        if not session.click(x, y):
            raise RuntimeError(session.status.message)

    output = session.save(config.output or default_output(config))
    logger.info(f"Applied {len(points)} fills, wrote {output}")
    return output


def main(args: list[str] | None = None):
    jsonargparse.set_parsing_settings(docstring_parse_attribute_docstrings=True)

    config = cast(
        "ColorFillConfig",
        jsonargparse.auto_cli(ColorFillConfig, args=args, parser_mode="toml"),  # pyright: ignore[reportUnknownMemberType]
    )
    if config.list_assets:
        print("\n".join(describe_catalog(load_catalog(config))))
        return
    output = run(config)
    print(output)


if __name__ == "__main__":
    main()
