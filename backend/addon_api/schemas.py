"""Pydantic models exposed by the addon API."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(BaseModel):
    """Service health payload."""

    status: Literal["ok"] = Field(default="ok")
    version: str = Field(default="1.0.0", description="Semantic version of the addon.")
    events: int = Field(default=0, description="Number of event groups currently loaded.")
    providers: int = Field(default=0, description="Number of registered stream providers.")


class ProviderModel(BaseModel):
    """A registered stream provider, as offered to configuration UIs."""

    id: str
    name: str


class MetaPreview(BaseModel):
    """Event group projected into the addon's meta object."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: Literal["tv"] = Field(default="tv")
    name: str
    poster: str = ""
    background: str = ""
    description: str = ""
    poster_shape: str = Field(default="tv", alias="posterShape")
    release_info: str = Field(default="", alias="releaseInfo")


class StreamModel(BaseModel):
    """A playable stream returned to the client."""

    url: str
    title: str


class CatalogResponse(BaseModel):
    metas: list[MetaPreview] = Field(default_factory=list)


class MetaResponse(BaseModel):
    meta: MetaPreview | None = None


class StreamResponse(BaseModel):
    streams: list[StreamModel] = Field(default_factory=list)


class UserConfig(BaseModel):
    """Per-user configuration carried in the addon URL."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    enabled_providers: list[str] = Field(default_factory=list, alias="enabledProviders")


class ManifestCatalogExtra(BaseModel):
    name: str
    options: list[str] = Field(default_factory=list)
    is_required: bool = Field(default=False, alias="isRequired")
    default: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class ManifestCatalog(BaseModel):
    id: str
    name: str
    type: str
    extra: list[ManifestCatalogExtra] = Field(default_factory=list)


class Manifest(BaseModel):
    """Addon manifest describing the resources this service answers."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    version: str
    name: str
    description: str
    logo: str | None = None
    types: list[str]
    resources: list[str]
    id_prefixes: list[str] = Field(alias="idPrefixes")
    catalogs: list[ManifestCatalog]
    behavior_hints: dict[str, Any] = Field(default_factory=dict, alias="behaviorHints")
