"""Addon protocol endpoints: manifest, catalog, meta and stream."""
from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import parse_qsl, quote, unquote

from fastapi import APIRouter, Depends, Request

from ..dependencies import get_app_state, get_handlers
from ..schemas import CatalogResponse, Manifest, MetaResponse, StreamResponse
from ..services import AddonHandlers, AddonRequest
from ..state import AppState

logger = logging.getLogger(__name__)

router = APIRouter(tags=["addon"])


def parse_config(config: str | None) -> dict[str, Any]:
    """Decode the user configuration path segment; invalid input yields ``{}``."""

    if not config:
        return {}
    try:
        payload = json.loads(unquote(config))
    except ValueError:
        logger.warning("Ignoring undecodable config segment: %s", config)
        return {}
    return payload if isinstance(payload, dict) else {}


def parse_extra(extra: str | None) -> dict[str, str]:
    """Decode a still percent-encoded ``key=value&key=value`` catalog extra segment."""

    if not extra:
        return {}
    return dict(parse_qsl(extra, keep_blank_values=False))


def raw_extra_segment(request: Request, extra: str | None) -> str | None:
    """Return the catalog extra segment as the client encoded it.

    Path parameters arrive percent-decoded, so an encoded ``&`` or ``+`` inside
    a value would already read as a separator. The segment is taken from the
    undecoded request path instead, falling back to re-encoding ``extra``.
    """

    if not extra:
        return None
    raw_path = request.scope.get("raw_path")
    if raw_path:
        last = raw_path.decode("utf-8", "replace").rstrip("/").rsplit("/", 1)[-1]
        if last.endswith(".json"):
            return last[: -len(".json")]
    return quote(extra, safe="=&")


@router.get("/manifest.json", response_model=Manifest, summary="Addon manifest")
@router.get("/{config}/manifest.json", response_model=Manifest, include_in_schema=False)
def manifest(app_state: AppState = Depends(get_app_state)) -> Manifest:
    return app_state.manifest


@router.get("/catalog/{type}/{id}.json", response_model=CatalogResponse)
@router.get("/catalog/{type}/{id}/{extra}.json", response_model=CatalogResponse)
@router.get("/{config}/catalog/{type}/{id}.json", response_model=CatalogResponse, include_in_schema=False)
@router.get(
    "/{config}/catalog/{type}/{id}/{extra}.json",
    response_model=CatalogResponse,
    include_in_schema=False,
)
async def catalog(
    request: Request,
    type: str,
    id: str,
    extra: str | None = None,
    handlers: AddonHandlers = Depends(get_handlers),
):
    """List event groups, optionally filtered by ``estado`` and ``categoria``."""

    logger.info("Catalog request type=%s, id=%s, extra=%s", type, id, extra)
    filters = parse_extra(raw_extra_segment(request, extra))
    return await handlers.dispatch(AddonRequest(resource="catalog", type=type, id=id, extra=filters))


@router.get("/meta/{type}/{id}.json", response_model=MetaResponse)
@router.get("/{config}/meta/{type}/{id}.json", response_model=MetaResponse, include_in_schema=False)
async def meta(type: str, id: str, handlers: AddonHandlers = Depends(get_handlers)):
    """Return details for one event group, or a null meta."""

    logger.info("Meta request type=%s, id=%s", type, id)
    return await handlers.dispatch(AddonRequest(resource="meta", type=type, id=id))


@router.get("/stream/{type}/{id}.json", response_model=StreamResponse)
@router.get("/{config}/stream/{type}/{id}.json", response_model=StreamResponse, include_in_schema=False)
async def stream(
    type: str,
    id: str,
    config: str | None = None,
    handlers: AddonHandlers = Depends(get_handlers),
):
    """Resolve playable streams for one event group."""

    logger.info("Stream request type=%s, id=%s", type, id)
    return await handlers.dispatch(
        AddonRequest(resource="stream", type=type, id=id, extra={"config": parse_config(config)})
    )
