from dataclasses import dataclass, field
from importlib import resources
from logging import getLogger
from pathlib import Path
from typing import Any

import yaml

logger = getLogger(__name__)


@dataclass
class Asset:
    file: str
    label: str


def format_label(text: str) -> str:
    return text[:1].upper() + text[1:]


@dataclass
class AssetCatalog:
    """Line-art images available for coloring, grouped by category.

    Images are stored as `root/<category>/<file>`.
    """

    root: Path = Path("assets")
    entries: dict[str, list[Asset]] = field(default_factory=dict[str, list[Asset]])

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None, root: Path | str) -> "AssetCatalog":
        entries: dict[str, list[Asset]] = {}
        for category, items in (data or {}).items():
            assets: list[Asset] = []
            for item in items or []:
                if "file" not in item:
                    logger.warning(f"Skipping asset without file in '{category}'")
                    continue
                assets.append(Asset(item["file"], item.get("label", item["file"])))
            entries[str(category)] = assets
        return cls(Path(root), entries)

    @classmethod
    def load(cls, path: Path | str, root: Path | str | None = None) -> "AssetCatalog":
        """Read a catalog from yaml. `root` defaults to the yaml file's directory."""
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data, root if root is not None else path.parent)

    @classmethod
    def default(cls, root: Path | str = "assets") -> "AssetCatalog":
        data = resources.files("colorfill.data") / "assets.yaml"
        return cls.from_dict(yaml.safe_load(data.read_text(encoding="utf-8")), root)

    def categories(self) -> list[str]:
        return list(self.entries)

    def category_labels(self) -> dict[str, str]:
        """Display label for each category, in catalog order."""
        return {c: format_label(c) for c in self.entries}

    def assets(self, category: str) -> list[Asset]:
        return self.entries.get(category, [])

    def path_for(self, category: str, file: str) -> Path:
        return self.root / category / file
