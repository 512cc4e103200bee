"""Catalog, meta and stream request handling for the addon."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Literal, Mapping, Union

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from backend.resolver.engine import StreamResolutionEngine
from backend.resolver.models import EventGroup

from ..schemas import (
    CatalogResponse,
    MetaPreview,
    MetaResponse,
    StreamModel,
    StreamResponse,
    UserConfig,
)
from ..stores.event_store import CATEGORY_ALL, STATUS_ALL, EventStore
from .manifest import CATALOG_ID, CONTENT_TYPE, ID_PREFIX, AddonContext

logger = logging.getLogger(__name__)

Resource = Literal["catalog", "meta", "stream"]
AddonResponse = Union[CatalogResponse, MetaResponse, StreamResponse]

EMPTY_RESPONSES: dict[str, Callable[[], AddonResponse]] = {
    "catalog": CatalogResponse,
    "meta": MetaResponse,
    "stream": StreamResponse,
}


@dataclass(frozen=True, slots=True)
class AddonRequest:
    """An inbound addon request, keyed by resource kind and content type."""

    resource: Resource
    type: str
    id: str
    extra: Mapping[str, Any] = field(default_factory=dict)


def to_meta(group: EventGroup) -> MetaPreview:
    return MetaPreview(
        id=f"{ID_PREFIX}{group.id}",
        type=CONTENT_TYPE,
        name=group.title,
        poster=group.poster,
        background=group.background,
        description=group.description,
        release_info=group.release_info,
    )


def strip_prefix(addon_id: str) -> str | None:
    """Return the event group id behind an addon id, or ``None`` if it is not ours."""

    if not addon_id.startswith(ID_PREFIX):
        return None
    return addon_id[len(ID_PREFIX):]


class AddonHandlers:
    """Dispatch addon requests to their handler via a ``(resource, type)`` table.

    Handlers never raise; unexpected failures degrade to the resource's empty
    response.
    """

    def __init__(
        self,
        store: EventStore,
        engine: StreamResolutionEngine,
        context: AddonContext,
    ) -> None:
        self.store = store
        self.engine = engine
        self.context = context
        self._routes: dict[tuple[str, str], Callable[[AddonRequest], Awaitable[AddonResponse]]] = {
            ("catalog", CONTENT_TYPE): self._catalog,
            ("meta", CONTENT_TYPE): self._meta,
            ("stream", CONTENT_TYPE): self._stream,
        }

    async def dispatch(self, request: AddonRequest) -> AddonResponse:
        empty = EMPTY_RESPONSES.get(request.resource)
        if empty is None:
            raise ValueError(f"Unsupported addon resource: {request.resource}")

        handler = self._routes.get((request.resource, request.type))
        if handler is None:
            logger.info("No %s handler for type=%s, id=%s", request.resource, request.type, request.id)
            return empty()

        try:
            return await handler(request)
        except Exception:
            logger.exception(
                "Unhandled error in %s handler for type=%s, id=%s",
                request.resource,
                request.type,
                request.id,
            )
            return empty()

    async def _grouped_events(self, status_filter: str, category_filter: str) -> list[EventGroup]:
        # Store reads touch the listings file; they run in the worker thread pool.
        return await run_in_threadpool(self.store.get_grouped_events, status_filter, category_filter)

    async def _find_group(self, addon_id: str) -> EventGroup | None:
        group_id = strip_prefix(addon_id)
        if group_id is None:
            return None
        groups = await self._grouped_events(STATUS_ALL, CATEGORY_ALL)
        return next((group for group in groups if group.id == group_id), None)

    async def _catalog(self, request: AddonRequest) -> CatalogResponse:
        if request.id != CATALOG_ID:
            return CatalogResponse()

        status_filter = request.extra.get("estado") or STATUS_ALL
        category_filter = request.extra.get("categoria") or CATEGORY_ALL
        groups = await self._grouped_events(status_filter, category_filter)
        logger.info(
            "Catalog status=%s category=%s -> %d event group(s)",
            status_filter,
            category_filter,
            len(groups),
        )
        return CatalogResponse(metas=[to_meta(group) for group in groups])

    async def _meta(self, request: AddonRequest) -> MetaResponse:
        group = await self._find_group(request.id)
        if group is None:
            logger.info("No event group for meta id=%s", request.id)
            return MetaResponse()
        return MetaResponse(meta=to_meta(group))

    async def _stream(self, request: AddonRequest) -> StreamResponse:
        group = await self._find_group(request.id)
        if group is None:
            logger.info("No event group for stream id=%s", request.id)
            return StreamResponse()

        config = self._user_config(request.extra.get("config"))
        streams = await self.engine.resolve_streams(group, config.enabled_providers)
        logger.info("Returning %d stream(s) for %s", len(streams), group.title)
        return StreamResponse(
            streams=[StreamModel(url=stream.url, title=stream.title) for stream in streams]
        )

    @staticmethod
    def _user_config(raw: object) -> UserConfig:
        if isinstance(raw, UserConfig):
            return raw
        if not raw:
            return UserConfig()
        try:
            return UserConfig.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Ignoring invalid user configuration: %s", exc)
            return UserConfig()
