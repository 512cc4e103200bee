"""
Concurrent stream resolution for a single event group.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from .links import InvalidLinkError, parse_channel_name
from .models import EventGroup, ResolvedStream
from .registry import Provider, ProviderRegistry

DEFAULT_TIMEOUT_SECONDS = 15.0

STREAM_TITLE_TEMPLATE = "{channel} (Opción {option})\nDesde {provider}"


@dataclass(frozen=True, slots=True)
class _Attempt:
    link_index: int
    link: str
    channel: str
    provider: Provider


def _log_context(event_group: EventGroup, attempt: _Attempt) -> dict[str, object]:
    return {
        "provider_id": attempt.provider.id,
        "event_id": event_group.id,
        "event_title": event_group.title,
        "link_index": attempt.link_index,
        "link": attempt.link,
    }


def resolve_enabled_providers(
    selection: Iterable[str] | None, registry: ProviderRegistry
) -> tuple[str, ...]:
    """Return the caller's provider selection, or every registered id when empty."""

    chosen = tuple(selection or ())
    return chosen if chosen else registry.ids()


class StreamResolutionEngine:
    """Resolve every (link, provider) pair of an event group into streams.

    Resolver calls run concurrently; the returned list and its option numbers
    are always assembled in link order, then provider registration order.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        *,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
        max_concurrency: int = 0,
    ) -> None:
        self.registry = registry
        self.logger = logger or logging.getLogger(__name__)
        self.timeout = timeout if timeout and timeout > 0 else None
        self.max_concurrency = max_concurrency

    async def resolve_streams(
        self,
        event_group: EventGroup | None,
        enabled_providers: Iterable[str] | None = None,
    ) -> list[ResolvedStream]:
        if event_group is None:
            return []
        if event_group.is_finished:
            self.logger.debug("Event %s is finished, no streams", event_group.id)
            return []
        if not event_group.links:
            self.logger.debug("Event %s has no links", event_group.id)
            return []

        enabled = resolve_enabled_providers(enabled_providers, self.registry)
        providers = self.registry.select(enabled)
        attempts = self._plan(event_group, providers)
        if not attempts:
            return []

        self.logger.info(
            "Resolving %d attempt(s) for event %s across providers: %s",
            len(attempts),
            event_group.id,
            ", ".join(provider.id for provider in providers),
        )

        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency > 0 else None
        urls = await asyncio.gather(
            *(self._attempt(event_group, attempt, semaphore) for attempt in attempts)
        )
        return self._assemble(attempts, urls)

    def _plan(self, event_group: EventGroup, providers: Sequence[Provider]) -> list[_Attempt]:
        attempts: list[_Attempt] = []
        for index, link in enumerate(event_group.links, start=1):
            try:
                channel = parse_channel_name(link)
            except InvalidLinkError as exc:
                self.logger.warning(
                    "Skipping malformed link #%d for event %s: %s",
                    index,
                    event_group.title,
                    exc,
                    extra={"event_id": event_group.id, "link_index": index, "link": link},
                )
                continue
            for provider in providers:
                attempts.append(
                    _Attempt(link_index=index, link=link, channel=channel, provider=provider)
                )
        return attempts

    async def _attempt(
        self,
        event_group: EventGroup,
        attempt: _Attempt,
        semaphore: asyncio.Semaphore | None,
    ) -> str | None:
        try:
            if semaphore is None:
                url = await self._call(attempt)
            else:
                async with semaphore:
                    url = await self._call(attempt)
        except Exception as exc:
            if isinstance(exc, asyncio.TimeoutError):
                reason = f"timed out after {self.timeout}s"
            else:
                reason = f"{type(exc).__name__}: {exc}"
            self.logger.warning(
                "Error with provider=%s, event=%s, linkIndex=%d, url=%s: %s",
                attempt.provider.id,
                event_group.title,
                attempt.link_index,
                attempt.link,
                reason,
                extra=_log_context(event_group, attempt),
            )
            return None
        if not url:
            self.logger.debug(
                "No stream from provider=%s, event=%s, linkIndex=%d, url=%s",
                attempt.provider.id,
                event_group.title,
                attempt.link_index,
                attempt.link,
                extra=_log_context(event_group, attempt),
            )
        return url

    async def _call(self, attempt: _Attempt) -> str | None:
        call = attempt.provider.resolver.resolve(attempt.link)
        if self.timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout=self.timeout)

    def _assemble(self, attempts: Sequence[_Attempt], urls: Sequence[str | None]) -> list[ResolvedStream]:
        streams: list[ResolvedStream] = []
        for attempt, url in zip(attempts, urls):
            if not url:
                continue
            title = STREAM_TITLE_TEMPLATE.format(
                channel=attempt.channel,
                option=len(streams) + 1,
                provider=attempt.provider.name,
            )
            streams.append(ResolvedStream(url=url, title=title))
            self.logger.debug("Added stream option %d: %s", len(streams), title)
        return streams
