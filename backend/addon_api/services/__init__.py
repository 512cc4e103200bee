"""Service layer for the addon API."""

from .handlers import AddonHandlers, AddonRequest
from .manifest import AddonContext, build_manifest, derive_categories

__all__ = [
    "AddonContext",
    "AddonHandlers",
    "AddonRequest",
    "build_manifest",
    "derive_categories",
]
