"""Heuristics for deriving display titles, years and series names from torrent names.

Everything here is pure and deterministic so presentation layers can reuse it.
"""

from __future__ import annotations

import re

# Release tags stripped from display titles. Longer tags come first so that
# e.g. ``YTS.MX`` is removed as a whole before ``YTS`` is considered.
_RELEASE_TAGS = (
    "1080p", "720p", "480p", "2160p", "4K",
    "BluRay", "BRRip", "WEB-DL", "WEBRip", "HDTV", "DVDRip", "BDRip",
    "x264", "x265", "HEVC", "H.264", "H.265", "H264", "H265", "AVC",
    "AAC", "DTS", "AC3", "FLAC", "TrueHD", "Atmos",
    "5.1", "7.1", "10bit",
    "YIFY", "YTS.MX", "YTS", "RARBG", "FGT", "EVO", "SPARKS",
)  # fmt: skip

_TAG_PATTERN = re.compile(
    r"(?<![a-z0-9])(?:"
    + "|".join(re.escape(tag) for tag in sorted(_RELEASE_TAGS, key=len, reverse=True))
    + r")(?![a-z0-9])",
    re.IGNORECASE,
)
_EXTENSION_PATTERN = re.compile(r"\.(?:mkv|mp4|avi)(?![a-z0-9])", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")

_YEAR_PATTERN = re.compile(r"(?:^|[\s(\[._\-])((?:19|20)\d{2})(?!\d)")
_IMDB_ID_PATTERN = re.compile(r"tt\d{7,}")

# Ordered (marker, pattern) table. looks_like_series() reports the first hit;
# extract_series_name() cuts the title at the earliest hit of any marker.
_SERIES_MARKERS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("episode_code", re.compile(r"(?<![a-z0-9])s\d{1,2}e\d{1,2}(?!\d)", re.IGNORECASE)),
    ("season_code", re.compile(r"(?<![a-z0-9])s\d{1,2}(?!\d)", re.IGNORECASE)),
    ("season_word", re.compile(r"(?<![a-z0-9])season\s*\d", re.IGNORECASE)),
    ("episode_word", re.compile(r"(?<![a-z0-9])episode\s*\d", re.IGNORECASE)),
    ("cross_code", re.compile(r"(?<![a-z0-9])\d{1,2}x\d{1,2}(?!\d)", re.IGNORECASE)),
    ("complete_series", re.compile(r"complete\s*series", re.IGNORECASE)),
    ("complete_season", re.compile(r"complete\s*season", re.IGNORECASE)),
    ("all_seasons", re.compile(r"all\s*seasons", re.IGNORECASE)),
)

_SIZE_UNITS = ("KB", "MB", "GB", "TB", "PB", "EB")

_FILENAME_UNSAFE = str.maketrans({ch: "-" for ch in '/\\:*?"<>|'})


def extract_year(name: str) -> int:
    """Return the first plausible release year in ``name``, or 0.

    A year is a ``19xx``/``20xx`` token at the start of the string or right
    after a separator (space, bracket, dot, underscore, dash).
    """
    for match in _YEAR_PATTERN.finditer(name):
        year = int(match.group(1))
        if 1900 <= year <= 2100:
            return year
    return 0


def extract_imdb_id(name: str) -> str:
    """Return an embedded ``tt1234567`` identifier, or an empty string."""
    match = _IMDB_ID_PATTERN.search(name)
    return match.group(0) if match else ""


def series_marker(name: str) -> str | None:
    """Name of the first series marker that matches ``name``."""
    for marker, pattern in _SERIES_MARKERS:
        if pattern.search(name):
            return marker
    return None


def looks_like_series(name: str) -> bool:
    return series_marker(name) is not None


def extract_series_name(title: str) -> str:
    """Strip season/episode markers and everything after them.

    ``"Show Name S01E02 1080p"`` becomes ``"Show Name"``. A title that starts
    with a marker is returned trimmed but otherwise unchanged.
    """
    starts = [m.start() for _, pattern in _SERIES_MARKERS if (m := pattern.search(title))]
    if not starts:
        return title.strip()
    series = title[: min(starts)].rstrip(" .-_")
    return series.strip() or title.strip()


def clean_display_title(raw_name: str) -> str:
    """Turn a noisy torrent name into a display title.

    Removes resolution, codec, audio and release-group tags, converts dots and
    underscores to spaces, strips trailing ``[...]`` blocks and collapses
    whitespace. Applying it twice gives the same result as applying it once.
    """
    result = _TAG_PATTERN.sub("", raw_name)
    result = _EXTENSION_PATTERN.sub("", result)
    result = result.replace(".", " ").replace("_", " ")

    # Cut from the last "[" backward; a leading bracket is kept.
    while (idx := result.rfind("[")) > 0:
        result = result[:idx]

    return _WHITESPACE.sub(" ", result).strip()


def format_size(num_bytes: int) -> str:
    """Format a byte count using 1024-based units (``1536`` -> ``"1.50 KB"``)."""
    num_bytes = max(0, int(num_bytes))
    if num_bytes < 1024:
        return f"{num_bytes} B"

    value = float(num_bytes)
    for unit in _SIZE_UNITS:
        value /= 1024
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            return f"{value:.2f} {unit}"
    raise AssertionError("unreachable")


def sanitize_filename(name: str) -> str:
    """Replace characters that are not allowed in file names with ``-``."""
    return name.translate(_FILENAME_UNSAFE)
