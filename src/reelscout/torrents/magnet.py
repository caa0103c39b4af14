"""Magnet links and ``.torrent`` file downloads for a chosen variant."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from urllib.parse import quote_plus

import httpx

from reelscout.shared.exceptions import TransportError
from reelscout.shared.models import Entry, Variant
from reelscout.shared.names import sanitize_filename

logger = logging.getLogger(__name__)

DEFAULT_TRACKERS = (
    "udp://open.demonii.com:1337/announce",
    "udp://tracker.openbittorrent.com:80/announce",
    "udp://tracker.coppersurfer.tk:6969/announce",
    "udp://glotorrents.pw:6969/announce",
    "udp://tracker.opentrackr.org:1337/announce",
)

_BTIH_PATTERN = re.compile(r"xt=urn:btih:([a-zA-Z0-9]+)")


@dataclass(frozen=True)
class TorrentFile:
    """A downloaded ``.torrent`` payload; writing it to disk is up to the caller."""

    filename: str
    content: bytes


def build_magnet(info_hash: str, name: str, trackers: tuple[str, ...] = DEFAULT_TRACKERS) -> str:
    """Build a magnet URI with a display name and the default tracker list."""
    tr = "".join(f"&tr={quote_plus(t)}" for t in trackers)
    return f"magnet:?xt=urn:btih:{info_hash}&dn={quote_plus(name)}{tr}"


def magnet_for(entry: Entry, variant: Variant) -> str:
    """Magnet URI for one variant, named ``"<title> <quality>"``."""
    info_hash = variant.content_hash or entry.infohash
    return build_magnet(info_hash, f"{entry.title} {variant.quality_label}".strip())


def extract_info_hash(magnet_uri: str) -> str | None:
    """Extract info_hash from magnet URI."""
    match = _BTIH_PATTERN.search(magnet_uri)
    if match:
        return match.group(1).lower()
    return None


def torrent_filename(title: str, quality: str) -> str:
    return f"{sanitize_filename(title)}.{quality}.torrent"


async def fetch_torrent_file(client: httpx.AsyncClient, url: str, title: str, quality: str) -> TorrentFile:
    """Download a variant's ``.torrent`` file.

    Raises:
        TransportError: If the request fails or the server does not answer 200.
    """
    try:
        resp = await client.get(url)
    except httpx.HTTPError as exc:
        raise TransportError(f"torrent download failed: {exc!r}") from exc

    if resp.status_code != httpx.codes.OK:
        raise TransportError(f"torrent download failed with status: {resp.status_code}")

    filename = torrent_filename(title, quality)
    logger.info("downloaded %s (%d bytes)", filename, len(resp.content))
    return TorrentFile(filename=filename, content=resp.content)
