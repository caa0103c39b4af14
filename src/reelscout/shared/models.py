"""Frozen Pydantic domain models shared by all modules."""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from reelscout.shared.enums import SearchSource


class Variant(BaseModel):
    """One downloadable rendition of an entry."""

    model_config = {"frozen": True}

    quality_label: str = ""
    release_type: str = ""
    size_label: str = ""
    seed_count: int = 0
    peer_count: int = 0
    content_hash: str = ""
    file_url: str = ""


class EnrichmentResult(BaseModel):
    """Third-party metadata attached to an entry after the source fetch.

    Field aliases follow the metadata service's JSON keys so a response body
    can be validated directly.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    title: str = Field("", alias="Title")
    year: str = Field("", alias="Year")
    rated: str = Field("", alias="Rated")
    runtime: str = Field("", alias="Runtime")
    genre: str = Field("", alias="Genre")
    director: str = Field("", alias="Director")
    writer: str = Field("", alias="Writer")
    actors: str = Field("", alias="Actors")
    plot: str = Field("", alias="Plot")
    imdb_rating: str = Field("", alias="imdbRating")
    imdb_votes: str = Field("", alias="imdbVotes")
    imdb_id: str = Field("", alias="imdbID")
    media_type: str = Field("", alias="Type")
    total_seasons: str = Field("", alias="totalSeasons")

    @property
    def vote_count(self) -> int:
        """Vote count as an integer; missing or unparseable values count as zero."""
        raw = self.imdb_votes.replace(",", "").strip()
        try:
            votes = int(raw)
        except ValueError:
            return 0
        return max(votes, 0)


class Entry(BaseModel):
    """A normalized search result, independent of the source that produced it."""

    model_config = {"frozen": True}

    id: str = ""
    title: str
    year: int = 0
    rating: float = 0.0
    runtime: int = 0
    genres: list[str] = Field(default_factory=list)
    summary: str = ""
    description: str = ""
    imdb_id: str = ""
    variants: list[Variant] = Field(default_factory=list)
    source: SearchSource = SearchSource.CATALOG

    # Index-only fields
    infohash: str = ""
    raw_name: str = ""
    seeders: int = 0
    leechers: int = 0
    size_label: str = ""

    metadata: EnrichmentResult | None = None

    @property
    def vote_count(self) -> int:
        if self.metadata is None:
            return 0
        return self.metadata.vote_count


class SearchPage(BaseModel):
    """One page of ranked search results."""

    model_config = {"frozen": True}

    entries: list[Entry] = Field(default_factory=list)
    page: int = 1
    page_size: int
    total: int = 0
    total_pages: int = 1

    @classmethod
    def build(cls, entries: list[Entry], *, page: int, page_size: int, total: int) -> SearchPage:
        """Construct a page, deriving ``total_pages`` from ``total``."""
        total_pages = max(1, math.ceil(total / page_size)) if page_size > 0 else 1
        return cls(entries=entries, page=page, page_size=page_size, total=total, total_pages=total_pages)

    @property
    def is_empty(self) -> bool:
        return not self.entries
