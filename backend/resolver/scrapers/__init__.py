"""Provider page scrapers."""

from .page import PageScrapeResolver, extract_playlist_url

__all__ = ["PageScrapeResolver", "extract_playlist_url"]
