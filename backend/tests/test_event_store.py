"""Tests for event grouping, filtering and the JSON-backed store."""
from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.addon_api.errors import EventStoreError  # noqa: E402
from backend.addon_api.stores.event_store import (  # noqa: E402
    JsonEventStore,
    filter_events,
    group_events,
    group_id,
    normalize_status,
)
from backend.addon_api.stores.image_store import Artwork, ImageMaps, init_image_maps  # noqa: E402
from backend.resolver.models import STATUS_FINISHED, STATUS_LIVE, STATUS_UPCOMING  # noqa: E402

RAW_EVENTS = [
    {"title": "River vs Boca", "time": "21:00", "category": "Fútbol", "status": "EN VIVO",
     "link": "https://a/?stream=espn"},
    {"title": "River vs Boca", "time": "21:00", "status": "EN VIVO", "link": "https://b/?stream=tnt"},
    {"title": "River vs Boca", "time": "21:00", "status": "EN VIVO", "link": "https://a/?stream=espn"},
    {"title": "Lakers vs Celtics", "time": "23:30", "category": "Básquet", "status": "PRONTO",
     "links": ["https://a/?stream=espn2"]},
    {"title": "Nadal vs Alcaraz", "time": "14:00", "category": "Tenis", "status": "FINALIZADO"},
]


def write_events(path: Path, events: list[dict[str, object]]) -> None:
    path.write_text(json.dumps(events), encoding="utf-8")


def test_group_events_merges_listings_for_same_event() -> None:
    groups = group_events(RAW_EVENTS)

    assert [group.title for group in groups] == ["River vs Boca", "Lakers vs Celtics", "Nadal vs Alcaraz"]
    river = groups[0]
    assert river.id == group_id("River vs Boca", "21:00")
    assert river.links == ("https://a/?stream=espn", "https://b/?stream=tnt")
    assert river.category == "Fútbol"
    assert river.display_status == STATUS_LIVE
    assert river.description == "River vs Boca"
    assert river.release_info == "21:00 - EN_VIVO"
    assert groups[2].links == ()


def test_group_events_applies_category_artwork() -> None:
    images = ImageMaps(
        default=Artwork(poster="default.png", background="default-bg.png"),
        categories={"fútbol": Artwork(poster="futbol.png", background="futbol-bg.png")},
    )

    groups = group_events(RAW_EVENTS, images)

    assert groups[0].poster == "futbol.png"
    assert groups[0].background == "futbol-bg.png"
    assert groups[1].poster == "default.png"


def test_group_events_skips_entries_without_title_or_status(caplog: pytest.LogCaptureFixture) -> None:
    entries = [
        {"time": "10:00", "status": "PRONTO"},
        {"title": "Sin estado", "time": "11:00"},
        "not an object",
        {"title": "Nadal vs Alcaraz", "time": "14:00", "status": "FINALIZADO"},
    ]

    with caplog.at_level("WARNING", logger="backend.addon_api.stores.event_store"):
        groups = group_events(entries)

    assert [group.title for group in groups] == ["Nadal vs Alcaraz"]
    assert len([r for r in caplog.records if "Skipping event entry" in r.getMessage()]) == 3


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("EN VIVO", STATUS_LIVE),
        ("en_vivo", STATUS_LIVE),
        ("Pronto", STATUS_UPCOMING),
        ("FINALIZADO", STATUS_FINISHED),
        ("finished", STATUS_FINISHED),
    ],
)
def test_normalize_status(raw: str, expected: str) -> None:
    assert normalize_status(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("POSTPONED", "POSTPONED"), ("suspendido", "SUSPENDIDO"), ("en pausa", "EN_PAUSA")],
)
def test_normalize_status_keeps_unlisted_values(raw: str, expected: str) -> None:
    assert normalize_status(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_normalize_status_rejects_missing_value(raw: object) -> None:
    with pytest.raises(ValueError):
        normalize_status(raw)


def test_unlisted_status_is_shown_but_only_under_all_filter() -> None:
    groups = group_events(
        RAW_EVENTS + [{"title": "Final suspendida", "time": "18:00", "status": "suspendido", "category": "Fútbol"}]
    )

    suspended = groups[-1]
    assert suspended.display_status == "SUSPENDIDO"
    assert suspended.release_info == "18:00 - SUSPENDIDO"
    assert not suspended.is_finished
    assert suspended in filter_events(groups)
    assert suspended in filter_events(groups, "Todos", "Fútbol")
    for label in ("En vivo", "Pronto", "Finalizados"):
        assert suspended not in filter_events(groups, label)


def test_filter_events_by_status_and_category() -> None:
    groups = group_events(RAW_EVENTS)

    assert len(filter_events(groups)) == 3
    assert [g.title for g in filter_events(groups, "En vivo")] == ["River vs Boca"]
    assert [g.title for g in filter_events(groups, "Pronto")] == ["Lakers vs Celtics"]
    assert [g.title for g in filter_events(groups, "Finalizados")] == ["Nadal vs Alcaraz"]
    assert [g.title for g in filter_events(groups, "Todos", "básquet")] == ["Lakers vs Celtics"]
    assert filter_events(groups, "En vivo", "Tenis") == []


def test_filter_events_with_unknown_status_matches_nothing() -> None:
    assert filter_events(group_events(RAW_EVENTS), "Suspendidos") == []


def test_json_store_loads_and_filters(tmp_path: Path) -> None:
    path = tmp_path / "events.json"
    write_events(path, RAW_EVENTS)
    store = JsonEventStore(path)

    all_events = store.fetch_all_events()

    assert len(all_events) == 3
    assert [g.title for g in store.get_grouped_events("En vivo", "Todas")] == ["River vs Boca"]


def test_json_store_reloads_changed_file(tmp_path: Path) -> None:
    path = tmp_path / "events.json"
    write_events(path, RAW_EVENTS)
    store = JsonEventStore(path)
    store.fetch_all_events()

    write_events(path, [{"title": "Nuevo", "time": "09:00", "status": "PRONTO"}])
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + 10))

    assert [g.title for g in store.get_grouped_events()] == ["Nuevo"]


def test_json_store_keeps_snapshot_when_reload_fails(tmp_path: Path) -> None:
    path = tmp_path / "events.json"
    write_events(path, RAW_EVENTS)
    store = JsonEventStore(path)
    store.fetch_all_events()

    path.write_text("{not json", encoding="utf-8")
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + 10))

    assert len(store.get_grouped_events()) == 3


def test_json_store_loads_file_with_unlisted_status_and_bad_entry(tmp_path: Path) -> None:
    path = tmp_path / "events.json"
    write_events(
        path,
        RAW_EVENTS
        + [
            {"title": "Final suspendida", "time": "18:00", "status": "SUSPENDIDO"},
            {"title": "Sin estado", "time": "19:00"},
        ],
    )
    store = JsonEventStore(path)

    titles = [g.title for g in store.fetch_all_events()]

    assert titles == ["River vs Boca", "Lakers vs Celtics", "Nadal vs Alcaraz", "Final suspendida"]
    assert [g.title for g in store.get_grouped_events("En vivo")] == ["River vs Boca"]


@pytest.mark.parametrize("content", [None, "{not json", '{"events": []}'])
def test_json_store_raises_on_unreadable_file(tmp_path: Path, content: str | None) -> None:
    path = tmp_path / "events.json"
    if content is not None:
        path.write_text(content, encoding="utf-8")

    with pytest.raises(EventStoreError):
        JsonEventStore(path).fetch_all_events()


def test_init_image_maps_reads_categories(tmp_path: Path) -> None:
    path = tmp_path / "images.json"
    path.write_text(
        json.dumps(
            {
                "default": {"poster": "d.png", "background": "d-bg.png"},
                "categories": {"Fútbol": {"poster": "f.png"}},
            }
        ),
        encoding="utf-8",
    )

    maps = init_image_maps(path)

    assert maps.artwork_for("FÚTBOL") == Artwork(poster="f.png", background="")
    assert maps.artwork_for("Tenis") == Artwork(poster="d.png", background="d-bg.png")
    assert maps.artwork_for(None).poster == "d.png"


@pytest.mark.parametrize(
    "content",
    [
        '{"categories": []}',
        '{"categories": ""}',
        '{"categories": false}',
        '{"default": []}',
        '{"default": ""}',
        '{"default": 0}',
        '{"categories": {"Tenis": "t.png"}}',
        "[]",
    ],
)
def test_init_image_maps_rejects_malformed_file(tmp_path: Path, content: str) -> None:
    path = tmp_path / "images.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        init_image_maps(path)
