"""Helpers for reading channel information out of raw provider links."""
from __future__ import annotations

from urllib.parse import parse_qs, urlparse

UNKNOWN_CHANNEL = "Canal Desconocido"
CHANNEL_PARAM = "stream"


class InvalidLinkError(ValueError):
    """Raised when a raw provider link is not an absolute URL."""


def channel_slug(link: str) -> str | None:
    """Return the raw ``stream`` query value of ``link`` or ``None`` when missing."""

    try:
        parsed = urlparse(link)
    except ValueError as exc:
        raise InvalidLinkError(f"Malformed link: {link!r}") from exc

    if not parsed.scheme or not parsed.netloc:
        raise InvalidLinkError(f"Malformed link: {link!r}")

    values = parse_qs(parsed.query).get(CHANNEL_PARAM)
    if not values:
        return None
    return values[0] or None


def parse_channel_name(link: str) -> str:
    """Return the display name of the channel a link points to.

    ``https://host/?stream=canal_uno`` becomes ``CANAL UNO``; links without a
    ``stream`` parameter fall back to the unknown channel placeholder.
    """

    slug = channel_slug(link) or UNKNOWN_CHANNEL
    return slug.replace("_", " ").upper()
