"""Runtime configuration for the Sports Live addon."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AddonSettings(BaseSettings):
    """Environment-aware settings for the addon service."""

    host: str = Field(default="0.0.0.0", description="Interface the HTTP server binds to.")
    port: int = Field(default=7000, description="Port the HTTP server listens on.")
    log_level: str = Field(default="INFO", description="Root logging level.")
    events_path: str = Field(
        default="./data/events.json",
        description="JSON file holding the scraped event listings.",
    )
    images_path: str = Field(
        default="./data/images.json",
        description="JSON file mapping categories to poster and background images.",
    )
    resolver_timeout_seconds: float = Field(
        default=15.0,
        description="Upper bound for a single provider attempt; 0 disables the limit.",
    )
    resolver_max_concurrency: int = Field(
        default=0,
        ge=0,
        description="Maximum provider attempts in flight per request; 0 means unbounded.",
    )
    scraper_timeout_seconds: float = Field(
        default=10.0, description="HTTP timeout used by the built-in page scrapers."
    )
    user_agent: str | None = Field(
        default=None, description="Override for the scrapers' User-Agent header."
    )
    streamtp_page_url: str = Field(
        default="https://streamtp.live/global1.php?stream={channel}",
        description="Player page template for the StreamTP provider.",
    )
    la12hd_page_url: str = Field(
        default="https://la12hd.com/vivo/canal.php?stream={channel}",
        description="Player page template for the La12HD provider.",
    )
    envivo_page_url: str = Field(
        default="https://1envivo.com/canal.php?stream={channel}",
        description="Player page template for the 1EnVivo provider.",
    )

    model_config = SettingsConfigDict(
        env_prefix="SPORTSLIVE_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    def provider_page_templates(self) -> dict[str, str]:
        """Map built-in provider ids to their player page templates."""

        return {
            "streamtp": self.streamtp_page_url,
            "la12hd": self.la12hd_page_url,
            "1envivo": self.envivo_page_url,
        }
