"""Tests for the coloring session, image io and asset catalog"""

import logging
from pathlib import Path

import pytest
from PIL import Image

from colorfill.assets import AssetCatalog, format_label
from colorfill.colors import BLACK, WHITE
from colorfill.config import ColorFillConfig
from colorfill.draw import PixelBuffer
from colorfill.image_io import blank_buffer, load_image, save_image, to_image
from colorfill.main import default_output, describe_catalog, parse_point, run
from colorfill.session import ColoringSession, Status

RED = (255, 0, 0, 255)


@pytest.fixture
def split_image(tmp_path: Path) -> Path:
    """10x4 white image with a black wall at x=5."""
    img = Image.new("RGB", (10, 4), (255, 255, 255))
    for y in range(4):
        img.putpixel((5, y), (0, 0, 0))
    path = tmp_path / "split.png"
    img.save(path)
    return path


@pytest.fixture
def catalog(tmp_path: Path, split_image: Path) -> AssetCatalog:
    (tmp_path / "formas").mkdir()
    split_image.rename(tmp_path / "formas" / "split.png")
    yaml_path = tmp_path / "assets.yaml"
    yaml_path.write_text(
        "formas:\n  - file: split.png\n    label: Split\nvacio: []\n", encoding="utf-8"
    )
    return AssetCatalog.load(yaml_path)


class TestImageIO:
    def test_load_converts_to_rgba(self, split_image: Path):
        buf = load_image(split_image)
        assert (buf.width, buf.height) == (10, 4)
        assert buf.get_pixel(0, 0) == WHITE
        assert buf.get_pixel(5, 2) == BLACK

    def test_save_and_load(self, tmp_path: Path):
        buf = blank_buffer(3, 2)
        buf.set_pixel(1, 1, (10, 20, 30, 40))
        path = save_image(buf, tmp_path / "out.png")
        assert load_image(path) == buf

    def test_to_image(self):
        img = to_image(blank_buffer(2, 2, RED))
        assert img.mode == "RGBA"
        assert img.getpixel((1, 1)) == RED


class TestAssetCatalog:
    def test_load(self, catalog: AssetCatalog, tmp_path: Path):
        assert catalog.categories() == ["formas", "vacio"]
        assert catalog.assets("formas")[0].label == "Split"
        assert catalog.assets("vacio") == []
        assert catalog.assets("missing") == []
        assert catalog.path_for("formas", "split.png") == tmp_path / "formas" / "split.png"

    def test_default_catalog(self):
        catalog = AssetCatalog.default()
        assert catalog.categories() == ["formas", "mandalas"]
        assert [a.file for a in catalog.assets("formas")] == ["casa.png", "estrella.png"]

    def test_format_label(self):
        assert format_label("mandalas") == "Mandalas"
        assert format_label("") == ""

    def test_category_labels(self, catalog: AssetCatalog):
        assert catalog.category_labels() == {"formas": "Formas", "vacio": "Vacio"}


class TestColoringSession:
    def test_click_ignored_before_load(self):
        session = ColoringSession(4, 4)
        assert not session.click(1, 1)
        assert session.canvas == blank_buffer(4, 4)

    def test_fill_then_reset(self, split_image: Path):
        session = ColoringSession(color="#f00")
        assert session.load(split_image)
        assert session.status.state == "success"

        assert session.click(1, 1)
        assert session.canvas.get_pixel(4, 3) == RED
        assert session.canvas.get_pixel(5, 3) == BLACK
        assert session.canvas.get_pixel(6, 0) == WHITE

        assert session.reset()
        assert session.canvas == load_image(split_image)
        assert session.status.message == "Image restored."

    def test_erase_paints_white(self, split_image: Path):
        session = ColoringSession()
        session.load(split_image)
        session.click(0, 0)
        session.set_mode("erase")
        session.click(0, 0)
        assert session.canvas == load_image(split_image)

    def test_erase_black_wall(self, split_image: Path):
        session = ColoringSession()
        session.load(split_image)
        session.set_mode("erase")
        session.click(5, 0)
        assert session.canvas == blank_buffer(10, 4)

    def test_display_scaling(self, split_image: Path):
        session = ColoringSession()
        session.load(split_image)
        # Displayed at twice the size: (14, 2) on screen is pixel (7, 1)
        assert session.to_buffer_coords(14, 2, 20, 8).x == 7
        session.click(14, 2, 20, 8)
        assert session.canvas.get_pixel(9, 0) == RED
        assert session.canvas.get_pixel(0, 0) == WHITE

    def test_click_outside_sets_error(self, split_image: Path):
        session = ColoringSession()
        session.load(split_image)
        before = session.canvas.copy()
        assert not session.click(10, 0)
        assert session.status.state == "error"
        assert session.canvas == before

    def test_load_failure_clears(self, tmp_path: Path):
        session = ColoringSession(6, 5)
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"not an image")
        assert not session.load(bad)
        assert not session.image_loaded
        assert session.status.state == "error"
        assert session.canvas == blank_buffer(6, 5)
        assert not session.reset()

    def test_load_asset(self, catalog: AssetCatalog):
        session = ColoringSession()
        assert session.load_asset(catalog, "formas", "split.png")
        assert session.status.message == "Image ready: split.png"
        assert not session.load_asset(catalog, "vacio", "x.png")
        assert session.status.state == "error"

    def test_mode_and_color_validation(self):
        session = ColoringSession()
        with pytest.raises(ValueError):
            session.set_mode("spray")
        with pytest.raises(ValueError):
            session.set_color("#12")
        session.set_color("00ff00")
        assert session.fill_color == (0, 255, 0, 255)

    def test_load_asset_defaults_to_first_image(self, catalog: AssetCatalog):
        session = ColoringSession()
        assert session.load_asset(catalog, "formas")
        assert session.image_loaded
        assert session.status.message == "Image ready: split.png"

    def test_open_catalog_loads_first_category(self, catalog: AssetCatalog):
        session = ColoringSession()
        assert session.open_catalog(catalog)
        assert (session.canvas.width, session.canvas.height) == (10, 4)

    def test_open_empty_catalog(self, tmp_path: Path):
        session = ColoringSession(3, 3)
        assert not session.open_catalog(AssetCatalog(tmp_path))
        assert session.status == Status("No images configured in assets.", "error")
        assert not session.image_loaded
        assert session.canvas == blank_buffer(3, 3)

    def test_negative_tolerance_rejected(self):
        with pytest.raises(ValueError, match="tolerance"):
            ColoringSession(tolerance=-1)

    def test_fill_logged_as_hex(self, split_image: Path, caplog: pytest.LogCaptureFixture):
        session = ColoringSession(color="#0a0b0c")
        session.load(split_image)
        with caplog.at_level(logging.DEBUG, logger="colorfill.session"):
            session.click(0, 0)
        assert "fill at (0, 0) with #0a0b0c" in caplog.text


class TestMain:
    def test_parse_point(self):
        assert parse_point("3,4") == (3, 4)
        assert parse_point(" 3, 4 ") == (3, 4)
        with pytest.raises(ValueError):
            parse_point("3")
        with pytest.raises(ValueError):
            parse_point("a,b")

    def test_run(self, split_image: Path, tmp_path: Path):
        config = ColorFillConfig(
            image=split_image,
            output=tmp_path / "done.png",
            fills=["0,0", "9,3"],
            color=0x0000FF,
        )
        out = run(config)
        buf = load_image(out)
        assert buf.get_pixel(2, 2) == (0, 0, 255, 255)
        assert buf.get_pixel(8, 1) == (0, 0, 255, 255)
        assert buf.get_pixel(5, 1) == BLACK

    def test_run_bad_point_leaves_no_output(self, split_image: Path, tmp_path: Path):
        config = ColorFillConfig(image=split_image, output=tmp_path / "x.png", fills=["0,99"])
        with pytest.raises(RuntimeError):
            run(config)
        assert not (tmp_path / "x.png").exists()

    def test_default_output(self, split_image: Path):
        assert default_output(ColorFillConfig(image=split_image)) == split_image.with_name(
            "split-filled.png"
        )

    def test_needs_image(self):
        with pytest.raises(ValueError, match="Need an image or an asset category"):
            run(ColorFillConfig())

    def test_pixel_buffer_type(self, split_image: Path):
        assert isinstance(load_image(split_image), PixelBuffer)

    def test_negative_tolerance_from_config(self, split_image: Path):
        with pytest.raises(ValueError, match="tolerance"):
            run(ColorFillConfig(image=split_image, tolerance=-5))

    def test_run_category_uses_first_asset(self, catalog: AssetCatalog, tmp_path: Path):
        config = ColorFillConfig(
            asset_file=tmp_path / "assets.yaml",
            category="formas",
            output=tmp_path / "out.png",
            fills=["9,0"],
        )
        buf = load_image(run(config))
        assert buf.get_pixel(9, 0) == RED
        assert buf.get_pixel(0, 0) == WHITE

    def test_describe_catalog(self, catalog: AssetCatalog):
        assert describe_catalog(catalog) == [
            "Formas (formas)",
            "  split.png: Split",
            "Vacio (vacio)",
        ]
