"""Sports Live addon HTTP service."""

from .app import create_app
from .errors import EventStoreError, StartupError
from .settings import AddonSettings

__all__ = ["AddonSettings", "EventStoreError", "StartupError", "create_app"]
