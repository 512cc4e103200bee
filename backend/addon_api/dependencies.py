"""FastAPI dependencies for the addon API."""
from fastapi import Depends, Request

from backend.resolver.registry import ProviderRegistry

from .services import AddonHandlers
from .state import AppState


def get_app_state(request: Request) -> AppState:
    """Resolve the shared application state from the FastAPI request."""
    return request.app.state.app_state


def get_handlers(app_state: AppState = Depends(get_app_state)) -> AddonHandlers:
    return app_state.handlers


def get_registry(app_state: AppState = Depends(get_app_state)) -> ProviderRegistry:
    return app_state.registry
