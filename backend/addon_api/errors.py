"""Exceptions raised by the addon service."""
from __future__ import annotations


class StartupError(RuntimeError):
    """Raised when the initial dataset cannot be loaded; the service must not start."""


class EventStoreError(RuntimeError):
    """Raised when the event listings cannot be read or are malformed."""
