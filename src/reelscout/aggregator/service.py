"""Search service: fetch, enrich, rank and page results from one source."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from reelscout.aggregator.ranking import rank_by_votes
from reelscout.enrichment.enricher import MetadataEnricher
from reelscout.enrichment.interfaces import Enricher
from reelscout.enrichment.omdb_client import OmdbClient
from reelscout.shared.enums import SearchSource
from reelscout.shared.exceptions import InvalidRequestError
from reelscout.shared.models import EnrichmentResult, Entry, SearchPage
from reelscout.sources.catalog import CatalogSource
from reelscout.sources.index import IndexSource
from reelscout.sources.interfaces import SourceAdapter

if TYPE_CHECKING:
    import httpx

    from reelscout.config import Settings

logger = logging.getLogger(__name__)


class SearchService:
    """Aggregation pipeline for a single search call.

    1. Validate the request and pick the source adapter.
    2. Fetch one page of normalized entries.
    3. If an enricher is configured, enrich every entry of the page
       concurrently and wait for all of them.
    4. Rank the page by descending vote count (stable).

    Each call is independent; nothing is cached between calls.
    """

    def __init__(
        self,
        *,
        catalog: CatalogSource,
        index: SourceAdapter,
        enricher: Enricher | None = None,
        default_page_size: int = 20,
        max_page_size: int = 100,
        default_source: SearchSource = SearchSource.CATALOG,
    ) -> None:
        self._catalog = catalog
        self._sources: dict[SearchSource, SourceAdapter] = {
            SearchSource.CATALOG: catalog,
            SearchSource.INDEX: index,
        }
        self._enricher = enricher
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._default_source = default_source

    @classmethod
    def from_settings(cls, settings: Settings, client: httpx.AsyncClient) -> SearchService:
        """Wire sources and the optional enricher around a shared HTTP client."""
        enricher = None
        if settings.enrichment_enabled:
            enricher = MetadataEnricher(OmdbClient(client, settings.metadata_url, settings.omdb_api_key))
        else:
            logger.info("no metadata API key configured, enrichment disabled")

        return cls(
            catalog=CatalogSource(client, settings.catalog_url),
            index=IndexSource(client, settings.index_url, batch_size=settings.index_batch_size),
            enricher=enricher,
            default_page_size=settings.search_limit,
            max_page_size=settings.max_page_size,
            default_source=settings.default_source,
        )

    @property
    def enrichment_enabled(self) -> bool:
        return self._enricher is not None

    async def search(
        self,
        query: str,
        page: int = 1,
        page_size: int | None = None,
        source: SearchSource | str | None = None,
    ) -> SearchPage:
        """Run one search and return a ranked page.

        Args:
            query: Free-text query.
            page: 1-based page number.
            page_size: Entries per page; defaults to the configured search limit
                and is capped at the configured maximum.
            source: Source to query; defaults to the configured source.

        Returns:
            A ``SearchPage``; an empty page means "no results".

        Raises:
            InvalidRequestError: If the query or paging arguments are invalid.
            TransportError: If the source request fails.
            DecodeError: If the source response cannot be decoded.
        """
        query = query.strip()
        if not query:
            raise InvalidRequestError("query must not be empty")
        if page < 1:
            raise InvalidRequestError(f"page must be >= 1, got {page}")

        size = self._default_page_size if page_size is None else page_size
        if size < 1:
            raise InvalidRequestError(f"page_size must be >= 1, got {size}")
        if size > self._max_page_size:
            logger.debug("clamping page_size %d to %d", size, self._max_page_size)
            size = self._max_page_size

        selected = self._resolve_source(source)
        logger.info("searching %s for %r (page=%d, page_size=%d)", selected.value, query, page, size)

        entries, total = await self._sources[selected].fetch(query, page, size)

        if self._enricher is not None and entries:
            entries = await self._enrich_all(self._enricher, entries)

        return SearchPage.build(rank_by_votes(entries), page=page, page_size=size, total=total)

    async def get_details(self, movie_id: int | str) -> Entry:
        """Fetch one catalog movie, enriched when an enricher is configured.

        Raises:
            TransportError: If the catalog request fails.
            DecodeError: If the catalog response cannot be decoded.
        """
        entry = await self._catalog.get_details(movie_id)
        if self._enricher is None:
            return entry

        result = await self._enricher.enrich(entry)
        return _attach(entry, result)

    def _resolve_source(self, source: SearchSource | str | None) -> SearchSource:
        if source is None:
            return self._default_source
        try:
            return SearchSource.parse(source)
        except ValueError as exc:
            raise InvalidRequestError(f"unknown source {source!r}, use 'catalog' or 'index'") from exc

    @staticmethod
    async def _enrich_all(enricher: Enricher, entries: list[Entry]) -> list[Entry]:
        """Enrich every entry concurrently, one task per entry.

        Tasks never share state: each returns its own result and the gather is
        the barrier before anything reads metadata.
        """
        results = await asyncio.gather(
            *(enricher.enrich(entry) for entry in entries),
            return_exceptions=True,
        )

        enriched: list[Entry] = []
        for entry, result in zip(entries, results):
            if isinstance(result, BaseException):
                logger.warning("enrichment task for %r crashed: %r", entry.title, result)
                result = None
            enriched.append(_attach(entry, result))

        hits = sum(1 for entry in enriched if entry.metadata is not None)
        logger.info("enriched %d/%d entries", hits, len(entries))
        return enriched


def _attach(entry: Entry, result: EnrichmentResult | None) -> Entry:
    if result is None:
        return entry
    return entry.model_copy(update={"metadata": result, "imdb_id": entry.imdb_id or result.imdb_id})
