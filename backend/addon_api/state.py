"""Shared state container for the addon API."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from backend.resolver.engine import StreamResolutionEngine
from backend.resolver.registry import ProviderRegistry, build_default_registry

from .errors import EventStoreError, StartupError
from .schemas import Manifest
from .services import AddonContext, AddonHandlers, build_manifest, derive_categories
from .settings import AddonSettings
from .stores.event_store import EventStore, JsonEventStore
from .stores.image_store import ImageMaps, init_image_maps

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppState:
    """Everything the routers need, built once during startup.

    Raises ``StartupError`` when the artwork or the initial event listings
    cannot be loaded.
    """

    settings: AddonSettings
    image_maps: ImageMaps
    event_store: EventStore
    context: AddonContext
    manifest: Manifest
    registry: ProviderRegistry
    engine: StreamResolutionEngine
    handlers: AddonHandlers

    def __init__(
        self,
        settings: AddonSettings,
        *,
        registry: ProviderRegistry | None = None,
        event_store: EventStore | None = None,
    ) -> None:
        self.settings = settings

        try:
            self.image_maps = init_image_maps(Path(settings.images_path))
        except (OSError, ValueError) as exc:
            raise StartupError(f"Could not load image maps from {settings.images_path}: {exc}") from exc

        if event_store is None:
            event_store = JsonEventStore(Path(settings.events_path), self.image_maps)
        self.event_store = event_store
        try:
            all_events = self.event_store.fetch_all_events()
        except EventStoreError as exc:
            raise StartupError(f"Could not load the initial event listings: {exc}") from exc

        self.context = AddonContext(categories=derive_categories(all_events))
        self.manifest = build_manifest(self.context)

        if registry is None:
            registry = build_default_registry(
                settings.provider_page_templates(),
                timeout=settings.scraper_timeout_seconds,
                user_agent=settings.user_agent,
            )
        self.registry = registry
        self.engine = StreamResolutionEngine(
            self.registry,
            logger=logging.getLogger("backend.resolver.engine"),
            timeout=settings.resolver_timeout_seconds,
            max_concurrency=settings.resolver_max_concurrency,
        )
        self.handlers = AddonHandlers(self.event_store, self.engine, self.context)
        logger.info(
            "Addon ready: %d event group(s), %d categories, providers: %s",
            len(all_events),
            len(self.context.categories),
            ", ".join(self.registry.ids()) or "none",
        )
