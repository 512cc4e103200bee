"""Command line interface for the Sports Live addon API."""
from __future__ import annotations

import json
from typing import List, Optional
from urllib.parse import quote, urlencode

import typer

from .client import create_client

DEFAULT_API_BASE = "http://localhost:7000"
ID_PREFIX = "sportslive:"
CATALOG_PATH = "/catalog/tv/sportslive_events_direct"

app = typer.Typer(help="Query a running Sports Live addon.")


def _api_base_option() -> typer.Option:
    return typer.Option(
        DEFAULT_API_BASE,
        "--api-base",
        help="Base URL for the addon service.",
        show_default=True,
        envvar="SPORTSLIVE_API_BASE",
    )


def _addon_id(event_id: str) -> str:
    return event_id if event_id.startswith(ID_PREFIX) else f"{ID_PREFIX}{event_id}"


def _get(api_base: str, path: str) -> None:
    with create_client(api_base) as client:
        response = client.get(path)
        response.raise_for_status()
        typer.echo(json.dumps(response.json(), indent=2, ensure_ascii=False))


@app.command()
def health(api_base: str = _api_base_option()) -> None:
    """Call the /health endpoint and pretty-print the response."""

    _get(api_base, "/health")


@app.command()
def providers(api_base: str = _api_base_option()) -> None:
    """List registered stream providers in attempt order."""

    _get(api_base, "/providers")


@app.command()
def manifest(api_base: str = _api_base_option()) -> None:
    """Display the addon manifest."""

    _get(api_base, "/manifest.json")


@app.command()
def catalog(
    status: Optional[str] = typer.Option(
        None, "--status", help="Status filter (Todos, En vivo, Pronto, Finalizados)."
    ),
    category: Optional[str] = typer.Option(None, "--category", help="Category filter."),
    api_base: str = _api_base_option(),
) -> None:
    """List event groups from the addon catalog."""

    extra: dict[str, str] = {}
    if status:
        extra["estado"] = status
    if category:
        extra["categoria"] = category

    path = CATALOG_PATH
    if extra:
        path = f"{path}/{urlencode(extra, quote_via=quote)}"
    _get(api_base, f"{path}.json")


@app.command()
def meta(
    event_id: str = typer.Argument(..., help="Event group id, with or without the addon prefix."),
    api_base: str = _api_base_option(),
) -> None:
    """Show details for a single event group."""

    _get(api_base, f"/meta/tv/{_addon_id(event_id)}.json")


@app.command()
def streams(
    event_id: str = typer.Argument(..., help="Event group id, with or without the addon prefix."),
    providers: Optional[List[str]] = typer.Option(
        None,
        "--provider",
        help="Restrict resolution to these provider ids (repeat the flag).",
    ),
    api_base: str = _api_base_option(),
) -> None:
    """Resolve playable streams for an event group."""

    path = f"/stream/tv/{_addon_id(event_id)}.json"
    if providers:
        config = json.dumps({"enabledProviders": providers}, separators=(",", ":"))
        path = f"/{quote(config, safe='')}{path}"
    _get(api_base, path)
