"""One-shot search runner that logs a ranked page."""

from __future__ import annotations

import argparse
import asyncio
import logging

from reelscout.aggregator.service import SearchService
from reelscout.config import Settings, get_settings
from reelscout.shared.enums import SearchSource
from reelscout.shared.http import create_http_client
from reelscout.shared.models import SearchPage
from reelscout.torrents.magnet import magnet_for
from reelscout.torrents.selector import select_best

logger = logging.getLogger(__name__)


async def run_once(
    settings: Settings,
    query: str,
    *,
    source: SearchSource | str | None = None,
    page: int = 1,
) -> SearchPage:
    """Run a single search and log one line per entry.

    Returns:
        The ranked page.
    """
    async with create_http_client(settings) as client:
        service = SearchService.from_settings(settings, client)
        result = await service.search(query, page=page, source=source)

    if result.is_empty:
        logger.info("no results for %r", query)
        return result

    logger.info("page %d/%d (%d total)", result.page, result.total_pages, result.total)
    for entry in result.entries:
        best = select_best(entry.variants)
        logger.info(
            "%s (%s) votes=%d best=%s seeds=%d",
            entry.title,
            entry.year or "?",
            entry.vote_count,
            best.quality_label if best else "-",
            best.seed_count if best else 0,
        )
        if best is not None and (best.content_hash or entry.infohash):
            logger.debug("magnet: %s", magnet_for(entry, best))
    return result


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="reelscout", description="Search movie catalogs and torrent indexes.")
    parser.add_argument("query")
    parser.add_argument("--source", choices=[s.value for s in SearchSource], default=None)
    parser.add_argument("--page", type=int, default=1)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Entry point for ``python -m reelscout.aggregator.runner``."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = _parse_args(argv)
    settings = get_settings()
    asyncio.run(run_once(settings, args.query, source=args.source, page=args.page))


if __name__ == "__main__":
    main()
