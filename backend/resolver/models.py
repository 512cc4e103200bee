"""Value objects shared by the resolver and the addon API."""
from __future__ import annotations

from dataclasses import dataclass, field

STATUS_LIVE = "EN_VIVO"
STATUS_UPCOMING = "PRONTO"
STATUS_FINISHED = "FINALIZADO"


@dataclass(frozen=True, slots=True)
class EventGroup:
    """One sporting event (or cluster of listings for it) with its raw links."""

    id: str
    title: str
    display_status: str
    time: str = ""
    description: str = ""
    poster: str = ""
    background: str = ""
    category: str | None = None
    links: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_finished(self) -> bool:
        return self.display_status == STATUS_FINISHED

    @property
    def release_info(self) -> str:
        return f"{self.time} - {self.display_status}"


@dataclass(frozen=True, slots=True)
class ResolvedStream:
    url: str
    title: str
