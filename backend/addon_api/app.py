"""Application factory for the Sports Live addon."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.resolver.registry import ProviderRegistry

from .routers import addon, health
from .services.manifest import ADDON_VERSION
from .settings import AddonSettings
from .state import AppState
from .stores.event_store import EventStore


def create_app(
    settings: AddonSettings | None = None,
    *,
    registry: ProviderRegistry | None = None,
    event_store: EventStore | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Loads artwork and the initial event listings eagerly, so a ``StartupError``
    propagates before any request can be served.
    """

    resolved_settings = settings or AddonSettings()
    app_state = AppState(settings=resolved_settings, registry=registry, event_store=event_store)

    app = FastAPI(title="Sports Live", version=ADDON_VERSION)
    app.state.app_state = app_state
    app.state.settings = app_state.settings

    # Addon clients fetch resources cross-origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    for router in (health.router, addon.router):
        app.include_router(router)

    return app
