"""Centralised configuration via Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from reelscout.shared.enums import SearchSource


class Settings(BaseSettings):
    """Application-wide configuration loaded from environment variables."""

    model_config = {"env_prefix": "REELSCOUT_", "frozen": True}

    # Catalog source (YTS-style movie API)
    catalog_url: str = "https://yts.bz/api/v2"

    # Index source (torrents-csv style free-text search)
    index_url: str = "https://torrents-csv.com/service/search"
    # The index has no server-side page cursor; one batch is fetched and sliced locally.
    index_batch_size: int = 200

    # Metadata enrichment (OMDb). Leave the key blank to disable enrichment entirely.
    metadata_url: str = "http://www.omdbapi.com/"
    omdb_api_key: str = ""

    # Search defaults
    search_limit: int = 20
    max_page_size: int = 100
    default_source: SearchSource = SearchSource.CATALOG

    # HTTP
    http_timeout_seconds: float = 15.0
    user_agent: str = "reelscout/0.1"

    @property
    def enrichment_enabled(self) -> bool:
        return bool(self.omdb_api_key)


def get_settings() -> Settings:
    """Build settings from the environment; patch this in tests."""
    return Settings()
