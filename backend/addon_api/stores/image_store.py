"""Poster and background artwork lookup by event category."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Artwork:
    poster: str = ""
    background: str = ""


@dataclass(frozen=True, slots=True)
class ImageMaps:
    """Artwork per category, with a default used for unknown categories."""

    default: Artwork = field(default_factory=Artwork)
    categories: Mapping[str, Artwork] = field(default_factory=dict)

    def artwork_for(self, category: str | None) -> Artwork:
        if category:
            found = self.categories.get(category.strip().lower())
            if found is not None:
                return found
        return self.default


def _parse_artwork(raw: object, source: Path) -> Artwork:
    if not isinstance(raw, dict):
        raise ValueError(f"Artwork entries in {source} must be objects")
    return Artwork(
        poster=str(raw.get("poster") or ""),
        background=str(raw.get("background") or ""),
    )


def init_image_maps(path: Path) -> ImageMaps:
    """Load the artwork mapping from ``path``.

    Raises ``OSError`` or ``ValueError`` when the file is missing or malformed.
    """

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")

    categories_raw = data.get("categories", {})
    if not isinstance(categories_raw, dict):
        raise ValueError(f"'categories' in {path} must be an object")

    categories = {
        str(name).strip().lower(): _parse_artwork(raw, path)
        for name, raw in categories_raw.items()
    }
    maps = ImageMaps(default=_parse_artwork(data.get("default", {}), path), categories=categories)
    logger.info("Loaded artwork for %d categories from %s", len(categories), path)
    return maps
