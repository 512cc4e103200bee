"""File-backed store for the scraped sporting event listings."""
from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Iterable, Protocol

from backend.resolver.models import (
    STATUS_FINISHED,
    STATUS_LIVE,
    STATUS_UPCOMING,
    EventGroup,
)

from ..errors import EventStoreError
from .image_store import ImageMaps

logger = logging.getLogger(__name__)

STATUS_ALL = "Todos"
CATEGORY_ALL = "Todas"

STATUS_FILTERS: dict[str, str | None] = {
    STATUS_ALL: None,
    "En vivo": STATUS_LIVE,
    "Pronto": STATUS_UPCOMING,
    "Finalizados": STATUS_FINISHED,
}

_STATUS_ALIASES = {
    "EN VIVO": STATUS_LIVE,
    "LIVE": STATUS_LIVE,
    "UPCOMING": STATUS_UPCOMING,
    "FINISHED": STATUS_FINISHED,
    "FINALIZADOS": STATUS_FINISHED,
}


class EventStore(Protocol):
    """Source of event groups consumed by the addon handlers."""

    def fetch_all_events(self) -> list[EventGroup]:
        ...

    def get_grouped_events(
        self, status_filter: str = STATUS_ALL, category_filter: str = CATEGORY_ALL
    ) -> list[EventGroup]:
        ...


def normalize_status(raw: object) -> str:
    """Canonical form of a listing status.

    Known aliases map onto the live, upcoming and finished states; any other
    value is kept, uppercased with spaces turned into underscores.
    """

    value = str(raw or "").strip().upper()
    if not value:
        raise ValueError("entry is missing a status")
    return _STATUS_ALIASES.get(value, value.replace(" ", "_"))


def group_id(title: str, time: str) -> str:
    digest = hashlib.sha1(f"{title}|{time}".encode("utf-8")).hexdigest()
    return digest[:12]


def _entry_links(entry: dict[str, Any]) -> list[str]:
    links = entry.get("links")
    if isinstance(links, list):
        return [str(link) for link in links if link]
    link = entry.get("link")
    return [str(link)] if link else []


def _entry_category(entry: dict[str, Any]) -> str | None:
    category = str(entry.get("category") or "").strip()
    return category or None


def _entry_identity(entry: object) -> tuple[str, str, str]:
    if not isinstance(entry, dict):
        raise ValueError("entry is not an object")
    title = str(entry.get("title") or "").strip()
    if not title:
        raise ValueError("entry is missing a title")
    time = str(entry.get("time") or "").strip()
    return title, time, normalize_status(entry.get("status"))


def group_events(entries: Iterable[dict[str, Any]], image_maps: ImageMaps | None = None) -> list[EventGroup]:
    """Merge listings sharing a title and start time into event groups.

    Groups keep the order in which they first appear; links are concatenated
    in file order with duplicates dropped. Entries without a title or status
    are skipped.
    """

    images = image_maps or ImageMaps()
    order: list[str] = []
    merged: dict[str, dict[str, Any]] = {}

    for position, entry in enumerate(entries):
        try:
            title, time, status = _entry_identity(entry)
        except ValueError as exc:
            logger.warning("Skipping event entry #%d: %s", position + 1, exc)
            continue
        key = group_id(title, time)

        current = merged.get(key)
        if current is None:
            current = {
                "title": title,
                "time": time,
                "status": status,
                "category": _entry_category(entry),
                "description": str(entry.get("description") or "").strip(),
                "links": [],
            }
            merged[key] = current
            order.append(key)
        elif not current["category"]:
            current["category"] = _entry_category(entry)

        for link in _entry_links(entry):
            if link not in current["links"]:
                current["links"].append(link)

    groups = []
    for key in order:
        data = merged[key]
        artwork = images.artwork_for(data["category"])
        groups.append(
            EventGroup(
                id=key,
                title=data["title"],
                display_status=data["status"],
                time=data["time"],
                description=data["description"] or data["title"],
                poster=artwork.poster,
                background=artwork.background,
                category=data["category"],
                links=tuple(data["links"]),
            )
        )
    return groups


def filter_events(
    groups: Iterable[EventGroup],
    status_filter: str = STATUS_ALL,
    category_filter: str = CATEGORY_ALL,
) -> list[EventGroup]:
    """Apply the catalog's status and category filters.

    An unrecognized status label matches nothing.
    """

    if status_filter not in STATUS_FILTERS:
        return []
    wanted_status = STATUS_FILTERS[status_filter]
    wanted_category = None if category_filter in ("", CATEGORY_ALL) else category_filter.lower()

    result = []
    for group in groups:
        if wanted_status is not None and group.display_status != wanted_status:
            continue
        if wanted_category is not None and (group.category or "").lower() != wanted_category:
            continue
        result.append(group)
    return result


class JsonEventStore:
    """Serve event groups from a JSON listings file, reloading it when it changes."""

    def __init__(self, path: Path, image_maps: ImageMaps | None = None) -> None:
        self.path = path
        self.image_maps = image_maps or ImageMaps()
        self._lock = Lock()
        self._groups: tuple[EventGroup, ...] = ()
        self._mtime: float | None = None

    def _read(self) -> tuple[list[EventGroup], float]:
        try:
            mtime = self.path.stat().st_mtime
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError(f"{self.path} must contain a JSON array")
            return group_events(data, self.image_maps), mtime
        except (OSError, ValueError) as exc:
            raise EventStoreError(f"Failed to load events from {self.path}: {exc}") from exc

    def fetch_all_events(self) -> list[EventGroup]:
        """Re-read the listings file and replace the current snapshot."""

        groups, mtime = self._read()
        with self._lock:
            self._groups = tuple(groups)
            self._mtime = mtime
        logger.info("Loaded %d event group(s) from %s", len(groups), self.path)
        return list(groups)

    def _refresh_if_changed(self) -> None:
        try:
            mtime = self.path.stat().st_mtime
        except OSError:
            return
        if mtime == self._mtime:
            return
        try:
            self.fetch_all_events()
        except EventStoreError as exc:
            logger.warning("Keeping previous event snapshot: %s", exc)

    def get_grouped_events(
        self, status_filter: str = STATUS_ALL, category_filter: str = CATEGORY_ALL
    ) -> list[EventGroup]:
        self._refresh_if_changed()
        return filter_events(self._groups, status_filter, category_filter)
