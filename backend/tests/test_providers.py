"""Tests for the provider registry and the player page scraper."""
from __future__ import annotations

import asyncio
import base64
import sys
from pathlib import Path

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.resolver.registry import (  # noqa: E402
    Provider,
    ProviderRegistry,
    StreamResolver,
    UnknownProviderError,
    build_default_registry,
)
from backend.resolver.scrapers.page import (  # noqa: E402
    PageScrapeResolver,
    extract_playlist_url,
)


class NullResolver:
    async def resolve(self, link: str) -> str | None:
        return None


def make_registry() -> ProviderRegistry:
    return ProviderRegistry(
        [
            Provider(id="streamtp", resolver=NullResolver(), display_name="StreamTP"),
            Provider(id="custom", resolver=NullResolver()),
            Provider(id="la12hd", resolver=NullResolver(), display_name="La12HD"),
        ]
    )


def test_registry_preserves_registration_order() -> None:
    registry = make_registry()

    assert registry.ids() == ("streamtp", "custom", "la12hd")
    assert [provider.id for provider in registry] == ["streamtp", "custom", "la12hd"]
    assert len(registry) == 3
    assert "custom" in registry
    assert "missing" not in registry


def test_display_name_falls_back_to_identifier() -> None:
    registry = make_registry()

    assert registry.display_name("streamtp") == "StreamTP"
    assert registry.display_name("custom") == "custom"
    assert registry.display_name("unregistered") == "unregistered"


def test_select_keeps_registration_order() -> None:
    registry = make_registry()

    selected = registry.select(["la12hd", "streamtp", "unknown"])

    assert [provider.id for provider in selected] == ["streamtp", "la12hd"]


def test_get_unknown_provider_raises() -> None:
    with pytest.raises(UnknownProviderError):
        make_registry().get("nope")


def test_duplicate_registration_is_rejected() -> None:
    with pytest.raises(ValueError):
        ProviderRegistry([Provider(id="a", resolver=NullResolver()), Provider(id="a", resolver=NullResolver())])


def test_default_registry_contains_builtin_providers() -> None:
    registry = build_default_registry(
        {
            "streamtp": "https://streamtp.example/?stream={channel}",
            "la12hd": "https://la12hd.example/?stream={channel}",
            "1envivo": "",
        }
    )

    assert registry.ids() == ("streamtp", "la12hd")
    assert registry.display_name("la12hd") == "La12HD"
    assert all(isinstance(provider.resolver, StreamResolver) for provider in registry)


def test_page_url_formats_channel_and_link() -> None:
    resolver = PageScrapeResolver("https://player.example/{channel}?ref={link}")

    assert (
        resolver.page_url("https://src/?stream=espn_premium")
        == "https://player.example/espn_premium?ref=https%3A%2F%2Fsrc%2F%3Fstream%3Despn_premium"
    )


def test_page_url_requires_channel_when_template_needs_it() -> None:
    resolver = PageScrapeResolver("https://player.example/?stream={channel}")

    assert resolver.page_url("https://src/no-channel") is None
    assert asyncio.run(resolver.resolve("https://src/no-channel")) is None


def test_extract_absolute_playlist_url() -> None:
    body = '<script>var src = "https:\\/\\/cdn.example\\/live\\/espn.m3u8?token=abc";</script>'

    assert extract_playlist_url(body, "https://player.example/") == "https://cdn.example/live/espn.m3u8?token=abc"


def test_extract_base64_encoded_playlist_url() -> None:
    encoded = base64.b64encode(b"https://cdn.example/hidden/index.m3u8").decode("ascii")
    body = f'<script>player.load(atob("{encoded}"));</script>'

    assert extract_playlist_url(body, "https://player.example/") == "https://cdn.example/hidden/index.m3u8"


def test_extract_relative_playlist_url() -> None:
    body = "<video data-src='/hls/tnt/index.m3u8'></video>"

    assert extract_playlist_url(body, "https://player.example/canal.php") == "https://player.example/hls/tnt/index.m3u8"


def test_extract_returns_none_without_playlist() -> None:
    assert extract_playlist_url("<html>offline</html>", "https://player.example/") is None
    assert extract_playlist_url("", "https://player.example/") is None


def test_page_scraper_fetches_player_page() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text='<source src="https://cdn.example/foo.m3u8">')

    resolver = PageScrapeResolver(
        "https://player.example/canal.php?stream={channel}",
        transport=httpx.MockTransport(handler),
    )

    url = asyncio.run(resolver.resolve("https://src/?stream=foo"))

    assert url == "https://cdn.example/foo.m3u8"
    assert str(seen[0].url) == "https://player.example/canal.php?stream=foo"
    assert seen[0].headers["Referer"] == "https://src/?stream=foo"
    assert "Firefox" in seen[0].headers["User-Agent"]


def test_page_scraper_raises_on_http_error() -> None:
    resolver = PageScrapeResolver(
        "https://player.example/?stream={channel}",
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(resolver.resolve("https://src/?stream=foo"))
