"""Shared pytest fixtures for the reelscout test suite."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest

from reelscout.config import Settings
from reelscout.shared.enums import SearchSource
from reelscout.shared.models import EnrichmentResult, Entry, Variant

CATALOG_URL = "https://catalog.test/api/v2"
INDEX_URL = "https://index.test/service/search"
METADATA_URL = "http://omdb.test/"


@pytest.fixture()
def settings() -> Settings:
    """Return a Settings instance pointing at test hosts, enrichment disabled."""
    return Settings(
        catalog_url=CATALOG_URL,
        index_url=INDEX_URL,
        metadata_url=METADATA_URL,
        omdb_api_key="",
        http_timeout_seconds=5,
    )


@pytest.fixture()
async def client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=5) as http:
        yield http


@pytest.fixture()
def catalog_movie() -> dict[str, Any]:
    return {
        "id": 3175,
        "imdb_code": "tt1375666",
        "title": "Inception",
        "year": 2010,
        "rating": 8.8,
        "runtime": 148,
        "genres": ["Action", "Sci-Fi"],
        "summary": "A thief who steals corporate secrets.",
        "description_full": "Dom Cobb is a skilled thief.",
        "torrents": [
            {
                "url": "https://catalog.test/torrent/download/AAA",
                "hash": "AAA111",
                "quality": "720p",
                "type": "bluray",
                "size": "1.08 GB",
                "seeds": 300,
                "peers": 20,
            },
            {
                "url": "https://catalog.test/torrent/download/BBB",
                "hash": "BBB222",
                "quality": "1080p",
                "type": "bluray",
                "size": "1.85 GB",
                "seeds": 150,
                "peers": 12,
            },
        ],
    }


def _make_entry(title: str, *, votes: str | None = None, **fields: Any) -> Entry:
    """Build an entry, optionally carrying metadata with the given vote string."""
    metadata = EnrichmentResult(title=title, imdb_votes=votes) if votes is not None else None
    fields.setdefault("variants", [Variant(quality_label="1080p", content_hash="HASH")])
    fields.setdefault("source", SearchSource.CATALOG)
    return Entry(title=title, metadata=metadata, **fields)


@pytest.fixture()
def make_entry() -> Callable[..., Entry]:
    """Factory fixture: ``make_entry("Title", votes="1,234", year=2010)``."""
    return _make_entry
