"""Shared async HTTP client and JSON fetch helper."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from reelscout.shared.exceptions import DecodeError, TransportError

if TYPE_CHECKING:
    from reelscout.config import Settings

logger = logging.getLogger(__name__)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the process-wide async HTTP client.

    The same client is reused by every source, the enricher and all concurrent
    enrichment tasks of a search; callers own its lifetime and must ``aclose()`` it.
    """
    return httpx.AsyncClient(
        timeout=settings.http_timeout_seconds,
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        limits=httpx.Limits(max_keepalive_connections=20, max_connections=settings.max_page_size + 10),
    )


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    service: str = "upstream",
) -> Any:
    """GET ``url`` and decode the JSON body.

    Raises:
        TransportError: On connection failures, timeouts and non-2xx statuses.
        DecodeError: If the body is not valid JSON.
    """
    logger.debug("GET %s (%s)", url, service)
    try:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise TransportError(f"{service} returned {exc.response.status_code}: {exc.response.text[:200]}") from exc
    except httpx.HTTPError as exc:
        raise TransportError(f"{service} request failed: {exc!r}") from exc

    try:
        return resp.json()
    except ValueError as exc:
        raise DecodeError(f"{service} returned invalid JSON: {resp.text[:200]!r}") from exc
