"""
Stream resolution backend for the Sports Live addon.

This package bundles the provider registry, the link helpers and the
engine that turns an event group's raw links into playable streams.
"""

from .engine import StreamResolutionEngine, resolve_enabled_providers
from .links import InvalidLinkError, parse_channel_name
from .models import (
    STATUS_FINISHED,
    STATUS_LIVE,
    STATUS_UPCOMING,
    EventGroup,
    ResolvedStream,
)
from .registry import Provider, ProviderRegistry, StreamResolver, UnknownProviderError

__all__ = [
    "EventGroup",
    "InvalidLinkError",
    "Provider",
    "ProviderRegistry",
    "ResolvedStream",
    "STATUS_FINISHED",
    "STATUS_LIVE",
    "STATUS_UPCOMING",
    "StreamResolutionEngine",
    "StreamResolver",
    "UnknownProviderError",
    "parse_channel_name",
    "resolve_enabled_providers",
]
