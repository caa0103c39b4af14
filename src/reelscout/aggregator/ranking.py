"""Popularity ranking for search pages."""

from __future__ import annotations

from collections.abc import Iterable

from reelscout.shared.models import Entry


def rank_by_votes(entries: Iterable[Entry]) -> list[Entry]:
    """Order entries by descending vote count.

    The sort is stable: entries with equal votes (including those without
    metadata, which count as zero) keep their relative order.
    """
    return sorted(entries, key=lambda entry: -entry.vote_count)
