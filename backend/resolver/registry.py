"""Registry of stream providers available to the resolution engine."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Protocol, runtime_checkable

from .scrapers.page import PageScrapeResolver

# Registration order is the order providers are attempted for every link.
DEFAULT_PROVIDERS: tuple[tuple[str, str], ...] = (
    ("streamtp", "StreamTP"),
    ("la12hd", "La12HD"),
    ("1envivo", "1EnVivo"),
)


@runtime_checkable
class StreamResolver(Protocol):
    """Turns a raw provider link into a playable URL.

    Returns ``None`` (or an empty string) when the provider has nothing for
    the link; any raised exception is treated as a failed attempt.
    """

    async def resolve(self, link: str) -> str | None:
        ...


class UnknownProviderError(LookupError):
    """Raised when a provider identifier is not registered."""


@dataclass(frozen=True, slots=True)
class Provider:
    id: str
    resolver: StreamResolver
    display_name: str | None = None

    @property
    def name(self) -> str:
        return self.display_name or self.id


class ProviderRegistry:
    """Immutable, ordered mapping of provider id to resolver."""

    def __init__(self, providers: Iterable[Provider]) -> None:
        entries: dict[str, Provider] = {}
        for provider in providers:
            if provider.id in entries:
                raise ValueError(f"Provider '{provider.id}' registered twice")
            entries[provider.id] = provider
        self._providers = entries

    def __iter__(self) -> Iterator[Provider]:
        return iter(tuple(self._providers.values()))

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    def ids(self) -> tuple[str, ...]:
        """Return provider identifiers in registration order."""

        return tuple(self._providers)

    def get(self, provider_id: str) -> Provider:
        try:
            return self._providers[provider_id]
        except KeyError as exc:
            raise UnknownProviderError(f"Provider '{provider_id}' is not registered") from exc

    def display_name(self, provider_id: str) -> str:
        provider = self._providers.get(provider_id)
        return provider.name if provider else provider_id

    def select(self, enabled: Iterable[str]) -> list[Provider]:
        """Return registered providers whose id is in ``enabled``, in registration order."""

        wanted = set(enabled)
        return [provider for provider in self._providers.values() if provider.id in wanted]


def build_default_registry(
    page_templates: Mapping[str, str],
    *,
    timeout: float = 10.0,
    user_agent: str | None = None,
) -> ProviderRegistry:
    """Create the built-in providers, each scraping its own player page."""

    providers = []
    for provider_id, display_name in DEFAULT_PROVIDERS:
        template = page_templates.get(provider_id)
        if not template:
            continue
        resolver = PageScrapeResolver(template, timeout=timeout, user_agent=user_agent)
        providers.append(Provider(id=provider_id, resolver=resolver, display_name=display_name))
    return ProviderRegistry(providers)
