"""OMDb API client for rating, vote and plot metadata."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from reelscout.shared.enums import MediaType
from reelscout.shared.exceptions import DecodeError
from reelscout.shared.http import get_json
from reelscout.shared.models import EnrichmentResult

logger = logging.getLogger(__name__)


class OmdbClient:
    """Look up titles on OMDb.

    Implements the ``MetadataLookup`` protocol. An explicit
    ``"Response": "False"`` is a miss and yields ``None``; transport and decode
    failures raise.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str, api_key: str) -> None:
        self._client = client
        self._base_url = base_url
        self._api_key = api_key

    async def lookup_by_id(self, imdb_id: str) -> EnrichmentResult | None:
        """Fetch metadata by IMDb id (``?i=``).

        Raises:
            TransportError: If the request fails.
            DecodeError: If the response is not an OMDb object.
        """
        if not imdb_id:
            return None
        return await self._query({"i": imdb_id}, label=imdb_id)

    async def lookup_by_title(
        self, title: str, year: int = 0, media_type: MediaType | None = None
    ) -> EnrichmentResult | None:
        """Fetch metadata by exact title (``?t=``), narrowed by ``y`` and ``type`` when given.

        Raises:
            TransportError: If the request fails.
            DecodeError: If the response is not an OMDb object.
        """
        if not title:
            return None
        params: dict[str, Any] = {"t": title}
        if year > 0:
            params["y"] = str(year)
        if media_type is not None:
            params["type"] = media_type.value
        return await self._query(params, label=f"{title} ({year or '?'})")

    async def _query(self, params: dict[str, Any], *, label: str) -> EnrichmentResult | None:
        body = await get_json(self._client, self._base_url, params={**params, "apikey": self._api_key}, service="omdb")
        if not isinstance(body, dict):
            raise DecodeError(f"omdb body is not an object: {type(body).__name__}")

        if body.get("Response") == "False":
            logger.debug("omdb has no match for %s: %s", label, body.get("Error", ""))
            return None

        try:
            result = EnrichmentResult.model_validate(body)
        except ValidationError as exc:
            raise DecodeError(f"omdb returned an unexpected shape for {label}: {exc}") from exc

        logger.debug("omdb matched %s -> %s (%s votes)", label, result.imdb_id, result.imdb_votes or "n/a")
        return result
