"""Catalog source: the curated, ID-addressable movie API (YTS v2 layout)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from reelscout.shared.enums import SearchSource
from reelscout.shared.exceptions import DecodeError, TransportError
from reelscout.shared.http import get_json
from reelscout.shared.models import Entry, Variant
from reelscout.shared.names import extract_year

logger = logging.getLogger(__name__)


class CatalogSource:
    """Search the movie catalog with server-side pagination.

    Implements the ``SourceAdapter`` protocol.
    """

    name = "catalog"

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def fetch(self, query: str, page: int, page_size: int) -> tuple[list[Entry], int]:
        """Query ``list_movies.json`` for one page of movies.

        Returns:
            Tuple of (entries, ``data.movie_count``).

        Raises:
            TransportError: On request failure or a non-``ok`` status.
            DecodeError: If the body does not have the catalog layout.
        """
        params: dict[str, Any] = {
            "query_term": query,
            "limit": page_size,
            "page": page,
        }
        body = await get_json(self._client, f"{self._base_url}/list_movies.json", params=params, service="catalog")
        data = _unwrap(body)

        movies = data.get("movies") or []
        if not isinstance(movies, list):
            raise DecodeError(f"catalog 'movies' is not a list: {type(movies).__name__}")

        entries = [_movie_to_entry(movie) for movie in movies]
        total = _coerce_int(data.get("movie_count"))

        logger.info("catalog returned %d/%d movies for query=%r page=%d", len(entries), total, query, page)
        return entries, total

    async def get_details(self, movie_id: int | str) -> Entry:
        """Fetch a single movie from ``movie_details.json``.

        Raises:
            TransportError: On request failure or a non-``ok`` status.
            DecodeError: If the body has no movie object.
        """
        params = {"movie_id": str(movie_id), "with_images": "true", "with_cast": "true"}
        body = await get_json(self._client, f"{self._base_url}/movie_details.json", params=params, service="catalog")
        data = _unwrap(body)

        movie = data.get("movie")
        if not isinstance(movie, dict):
            raise DecodeError(f"catalog returned no movie for id={movie_id}")
        return _movie_to_entry(movie)


def _unwrap(body: Any) -> dict[str, Any]:
    """Check the catalog envelope and return its ``data`` object."""
    if not isinstance(body, dict):
        raise DecodeError(f"catalog body is not an object: {type(body).__name__}")

    status = body.get("status")
    if not isinstance(status, str):
        raise DecodeError(f"catalog body has no 'status' string: {status!r}")
    if status != "ok":
        message = body.get("status_message", "unknown error")
        raise TransportError(f"catalog error ({status}): {message}")

    data = body.get("data")
    if not isinstance(data, dict):
        raise DecodeError("catalog body has no 'data' object")
    return data


def _movie_to_entry(movie: Any) -> Entry:
    if not isinstance(movie, dict):
        raise DecodeError(f"catalog movie is not an object: {type(movie).__name__}")

    title = str(movie.get("title") or movie.get("title_english") or "")
    torrents = movie.get("torrents") or []
    if not isinstance(torrents, list):
        raise DecodeError(f"catalog torrents for {title!r} is not a list")

    variants = [_torrent_to_variant(t) for t in torrents if isinstance(t, dict)]
    if not variants:
        # Keep the at-least-one-variant invariant for movies listed without torrents.
        variants = [Variant(quality_label="Unknown")]

    genres = movie.get("genres") or []
    return Entry(
        id=str(movie.get("id") or ""),
        title=title,
        year=_coerce_int(movie.get("year")) or extract_year(title),
        rating=_coerce_float(movie.get("rating")),
        runtime=_coerce_int(movie.get("runtime")),
        genres=[str(g) for g in genres] if isinstance(genres, list) else [],
        summary=str(movie.get("summary") or ""),
        description=str(movie.get("description_full") or ""),
        imdb_id=str(movie.get("imdb_code") or ""),
        variants=variants,
        source=SearchSource.CATALOG,
    )


def _torrent_to_variant(torrent: dict[str, Any]) -> Variant:
    return Variant(
        quality_label=str(torrent.get("quality") or ""),
        release_type=str(torrent.get("type") or ""),
        size_label=str(torrent.get("size") or ""),
        seed_count=_coerce_int(torrent.get("seeds")),
        peer_count=_coerce_int(torrent.get("peers")),
        content_hash=str(torrent.get("hash") or ""),
        file_url=str(torrent.get("url") or ""),
    )


def _coerce_int(value: Any) -> int:
    """Convert unknown input to int, defaulting to 0 on invalid values."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _coerce_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
