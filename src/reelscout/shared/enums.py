"""Domain enumerations used across all modules."""

from __future__ import annotations

from enum import Enum, unique


@unique
class SearchSource(str, Enum):
    """Which upstream service produced an entry."""

    CATALOG = "catalog"
    INDEX = "index"

    @classmethod
    def parse(cls, value: str) -> SearchSource:
        """Accept the canonical names plus the upstream service aliases."""
        normalized = value.strip().lower()
        aliases = {"yts": cls.CATALOG, "torrents-csv": cls.INDEX, "tcsv": cls.INDEX}
        if normalized in aliases:
            return aliases[normalized]
        return cls(normalized)


@unique
class MediaType(str, Enum):
    """Type restriction accepted by the metadata service title lookup."""

    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"
