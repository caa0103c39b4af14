"""Index source: free-text torrent-name search (torrents-csv layout)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from reelscout.shared.enums import SearchSource
from reelscout.shared.exceptions import DecodeError
from reelscout.shared.http import get_json
from reelscout.shared.models import Entry, Variant
from reelscout.shared.names import clean_display_title, extract_imdb_id, extract_year, format_size

logger = logging.getLogger(__name__)

# The index only offers a forward cursor, so one batch is fetched and paged locally.
DEFAULT_BATCH_SIZE = 200


class IndexSource:
    """Search the torrent-name index and paginate the fetched batch locally.

    Implements the ``SourceAdapter`` protocol. Pages beyond the fetched batch
    are empty rather than triggering another request.
    """

    name = "index"

    def __init__(self, client: httpx.AsyncClient, base_url: str, *, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        self._client = client
        self._base_url = base_url
        self._batch_size = batch_size

    async def fetch(self, query: str, page: int, page_size: int) -> tuple[list[Entry], int]:
        """Fetch one batch and return the slice for ``page``.

        Returns:
            Tuple of (entries in the requested slice, number of hits in the batch).

        Raises:
            TransportError: If the request fails.
            DecodeError: If the body does not have the index layout.
        """
        entries = await self.fetch_batch(query)
        total = len(entries)

        start = min(max((page - 1) * page_size, 0), total)
        end = min(max(start + page_size, 0), total)

        logger.info(
            "index returned %d hits for query=%r, serving [%d:%d] for page=%d", total, query, start, end, page
        )
        return entries[start:end], total

    async def fetch_batch(self, query: str) -> list[Entry]:
        """Fetch the full batch of hits for ``query`` as normalized entries."""
        params: dict[str, Any] = {"q": query, "size": self._batch_size}
        body = await get_json(self._client, self._base_url, params=params, service="index")

        if not isinstance(body, dict):
            raise DecodeError(f"index body is not an object: {type(body).__name__}")
        torrents = body.get("torrents") or []
        if not isinstance(torrents, list):
            raise DecodeError(f"index 'torrents' is not a list: {type(torrents).__name__}")

        return [_hit_to_entry(hit) for hit in torrents]


def _hit_to_entry(hit: Any) -> Entry:
    if not isinstance(hit, dict):
        raise DecodeError(f"index hit is not an object: {type(hit).__name__}")
    # Every fetched hit counts toward the total, even without a name or infohash.
    name = str(hit.get("name") or "").strip()
    infohash = str(hit.get("infohash") or "").strip()

    size_label = format_size(_coerce_int(hit.get("size_bytes")))
    seeders = max(0, _coerce_int(hit.get("seeders")))
    leechers = max(0, _coerce_int(hit.get("leechers")))

    return Entry(
        title=clean_display_title(name) or name,
        year=extract_year(name),
        imdb_id=extract_imdb_id(name),
        source=SearchSource.INDEX,
        infohash=infohash,
        raw_name=name,
        seeders=seeders,
        leechers=leechers,
        size_label=size_label,
        # The index only reports aggregate counts; expose them as a single variant.
        variants=[
            Variant(
                quality_label="Full",
                size_label=size_label,
                seed_count=seeders,
                peer_count=leechers,
                content_hash=infohash,
            )
        ],
    )


def _coerce_int(value: Any) -> int:
    """Convert unknown input to int, defaulting to 0 on invalid values."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
