"""Health and provider listing endpoints."""
from fastapi import APIRouter, Depends

from backend.resolver.registry import ProviderRegistry

from ..dependencies import get_app_state, get_registry
from ..schemas import HealthStatus, ProviderModel
from ..services.manifest import ADDON_VERSION
from ..state import AppState

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
def get_health(app_state: AppState = Depends(get_app_state)) -> HealthStatus:
    """Return service heartbeat information."""

    events = app_state.event_store.get_grouped_events()
    return HealthStatus(
        version=ADDON_VERSION,
        events=len(events),
        providers=len(app_state.registry),
    )


@router.get("/providers", response_model=list[ProviderModel])
def list_providers(registry: ProviderRegistry = Depends(get_registry)) -> list[ProviderModel]:
    """List registered stream providers in the order they are attempted."""

    return [ProviderModel(id=provider.id, name=provider.name) for provider in registry]
