"""Best-effort metadata enrichment for normalized entries."""

from __future__ import annotations

import logging

from reelscout.enrichment.interfaces import MetadataLookup
from reelscout.shared.enums import MediaType
from reelscout.shared.exceptions import ReelscoutError
from reelscout.shared.models import EnrichmentResult, Entry
from reelscout.shared.names import extract_series_name, looks_like_series

logger = logging.getLogger(__name__)


class MetadataEnricher:
    """Attach third-party metadata to an entry.

    Implements the ``Enricher`` protocol. Lookup order, stopping at the first match:

    1. By external id, when the entry carries one.
    2. By title and year with no type restriction. Series-looking titles are
       reduced to the show name first.
    3. For series-looking titles, the same title lookup restricted to ``series``.

    Upstream failures are logged and turned into ``None`` so that one entry can
    never fail a whole search.
    """

    def __init__(self, lookup: MetadataLookup) -> None:
        self._lookup = lookup

    async def enrich(self, entry: Entry) -> EnrichmentResult | None:
        try:
            return await self._resolve(entry)
        except ReelscoutError as exc:
            logger.warning("enrichment failed for %r: %s", entry.title, exc)
            return None

    async def _resolve(self, entry: Entry) -> EnrichmentResult | None:
        if entry.imdb_id:
            result = await self._lookup.lookup_by_id(entry.imdb_id)
            if result is not None:
                return result

        is_series = looks_like_series(entry.title)
        query_title = extract_series_name(entry.title) if is_series else entry.title

        result = await self._lookup.lookup_by_title(query_title, entry.year)
        if result is None and is_series:
            result = await self._lookup.lookup_by_title(query_title, entry.year, MediaType.SERIES)

        if result is None:
            logger.debug("no metadata for %r (year=%d, series=%s)", entry.title, entry.year, is_series)
        return result
