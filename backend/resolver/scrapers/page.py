"""
Player page scraper shared by the built-in stream providers.
"""
from __future__ import annotations

import base64
import binascii
import re
from urllib.parse import quote, urljoin

import httpx

from ..links import channel_slug

PLAYLIST_PATTERN = re.compile(r'https?://[^\s"\'<>\\]+?\.m3u8[^\s"\'<>\\]*', re.IGNORECASE)
RELATIVE_PLAYLIST_PATTERN = re.compile(r'["\'](/[^"\'\s<>]+?\.m3u8[^"\'\s<>]*)["\']', re.IGNORECASE)
ENCODED_PATTERN = re.compile(r'atob\(\s*["\']([A-Za-z0-9+/=]{8,})["\']\s*\)')


def _decode_base64(token: str) -> str:
    try:
        return base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return ""


def extract_playlist_url(body: str, base_url: str) -> str | None:
    """Find the first HLS playlist URL referenced by a player page."""

    if not body:
        return None

    # JSON-escaped slashes are common in inline player configs.
    text = body.replace("\\/", "/")

    match = PLAYLIST_PATTERN.search(text)
    if match:
        return match.group(0)

    for token in ENCODED_PATTERN.findall(text):
        decoded = _decode_base64(token).strip()
        if decoded.lower().startswith("http") and ".m3u8" in decoded.lower():
            return decoded

    match = RELATIVE_PLAYLIST_PATTERN.search(text)
    if match:
        return urljoin(base_url, match.group(1))

    return None


class PageScrapeResolver:
    """Fetch a provider's player page for a link and pull the playlist out of it.

    ``page_url_template`` may reference ``{channel}`` (the link's ``stream``
    value) and ``{link}`` (the whole raw link, URL-encoded).
    """

    DEFAULT_USER_AGENT = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) "
        "Gecko/20100101 Firefox/121.0"
    )

    def __init__(
        self,
        page_url_template: str,
        *,
        timeout: float = 10.0,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.page_url_template = page_url_template
        self.timeout = timeout
        self.user_agent = user_agent or self.DEFAULT_USER_AGENT
        self._transport = transport

    def page_url(self, link: str) -> str | None:
        slug = channel_slug(link)
        if "{channel}" in self.page_url_template and not slug:
            return None
        return self.page_url_template.format(
            channel=quote(slug or ""),
            link=quote(link, safe=""),
        )

    async def resolve(self, link: str) -> str | None:
        page_url = self.page_url(link)
        if page_url is None:
            return None

        headers = {"User-Agent": self.user_agent, "Referer": link}
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = await client.get(page_url)
            response.raise_for_status()

        return extract_playlist_url(response.text, str(response.url))
