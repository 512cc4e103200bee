"""Addon identity, startup context and manifest construction."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from backend.resolver.models import EventGroup

from ..schemas import Manifest, ManifestCatalog, ManifestCatalogExtra
from ..stores.event_store import CATEGORY_ALL, STATUS_ALL, STATUS_FILTERS

ADDON_ID = "com.stremio.sports.live.addon"
ADDON_VERSION = "1.0.0"
CONTENT_TYPE = "tv"
ID_PREFIX = "sportslive:"
CATALOG_ID = "sportslive_events_direct"


@dataclass(frozen=True, slots=True)
class AddonContext:
    """Process-wide values computed once while the service starts."""

    categories: tuple[str, ...] = ()


def derive_categories(groups: Iterable[EventGroup]) -> tuple[str, ...]:
    """Return the sorted, de-duplicated categories present in ``groups``."""

    return tuple(sorted({group.category for group in groups if group.category}))


def build_manifest(context: AddonContext) -> Manifest:
    return Manifest(
        id=ADDON_ID,
        version=ADDON_VERSION,
        name="Sports Live",
        description="Live sporting events",
        logo="https://i.imgur.com/eo6sbBO.png",
        types=[CONTENT_TYPE],
        resources=["catalog", "meta", "stream"],
        id_prefixes=[ID_PREFIX],
        catalogs=[
            ManifestCatalog(
                id=CATALOG_ID,
                name="Eventos Deportivos",
                type=CONTENT_TYPE,
                extra=[
                    ManifestCatalogExtra(
                        name="estado",
                        options=list(STATUS_FILTERS),
                        default=STATUS_ALL,
                    ),
                    ManifestCatalogExtra(
                        name="categoria",
                        options=[CATEGORY_ALL, *context.categories],
                        default=CATEGORY_ALL,
                    ),
                ],
            )
        ],
        behavior_hints={"configurable": True},
    )
