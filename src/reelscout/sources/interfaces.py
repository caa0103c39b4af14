"""Interfaces for the search source adapters."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from reelscout.shared.models import Entry


@runtime_checkable
class SourceAdapter(Protocol):
    """Protocol for a single upstream search service."""

    async def fetch(self, query: str, page: int, page_size: int) -> tuple[list[Entry], int]:
        """Fetch one page of normalized entries.

        Args:
            query: Free-text search query.
            page: 1-based page number.
            page_size: Maximum entries to return.

        Returns:
            Tuple of (entries for the requested page, total result count
            reported or observed by the source).

        Raises:
            TransportError: If the upstream request fails.
            DecodeError: If the upstream body cannot be decoded.
        """
        ...
