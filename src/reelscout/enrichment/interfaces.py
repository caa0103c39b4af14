"""Interfaces for the metadata enrichment module."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from reelscout.shared.enums import MediaType
from reelscout.shared.models import EnrichmentResult, Entry


@runtime_checkable
class MetadataLookup(Protocol):
    """Protocol for a metadata service that can be queried by id or title."""

    async def lookup_by_id(self, imdb_id: str) -> EnrichmentResult | None:
        """Look up a title by its external identifier.

        Returns:
            The matched metadata, or ``None`` if the service reported no match.
        """
        ...

    async def lookup_by_title(
        self, title: str, year: int = 0, media_type: MediaType | None = None
    ) -> EnrichmentResult | None:
        """Look up a title by name, optionally narrowed by year and type.

        Returns:
            The matched metadata, or ``None`` if the service reported no match.
        """
        ...


@runtime_checkable
class Enricher(Protocol):
    """Protocol for best-effort per-entry enrichment."""

    async def enrich(self, entry: Entry) -> EnrichmentResult | None:
        """Return metadata for ``entry`` or ``None``; never raises for upstream failures."""
        ...
