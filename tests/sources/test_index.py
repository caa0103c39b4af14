"""Tests for IndexSource."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
import respx

from reelscout.shared.enums import SearchSource
from reelscout.shared.exceptions import DecodeError, TransportError
from reelscout.sources.index import IndexSource

URL = "https://index.test/service/search"


def _hits(count: int) -> dict[str, Any]:
    return {
        "torrents": [
            {
                "infohash": f"{i:040x}",
                "name": f"Release.{i}.2015.1080p.x264",
                "size_bytes": 1073741824,
                "seeders": 100 - i,
                "leechers": i,
            }
            for i in range(count)
        ]
    }


@pytest.fixture
def source(client: httpx.AsyncClient) -> IndexSource:
    return IndexSource(client, URL)


class TestIndexSource:
    @respx.mock
    async def test_normalizes_hits(self, source: IndexSource) -> None:
        body = {
            "torrents": [
                {
                    "infohash": "abcdef0123456789abcdef0123456789abcdef01",
                    "name": "Inception.2010.tt1375666.1080p.BluRay.x264",
                    "size_bytes": 1610612736,
                    "seeders": 42,
                    "leechers": 7,
                }
            ]
        }
        route = respx.get(URL).mock(return_value=httpx.Response(200, json=body))

        entries, total = await source.fetch("inception", page=1, page_size=20)

        assert total == 1
        entry = entries[0]
        assert entry.id == ""
        assert entry.title == "Inception 2010 tt1375666"
        assert entry.year == 2010
        assert entry.imdb_id == "tt1375666"
        assert entry.source == SearchSource.INDEX
        assert entry.infohash == "abcdef0123456789abcdef0123456789abcdef01"
        assert entry.raw_name == "Inception.2010.tt1375666.1080p.BluRay.x264"
        assert entry.seeders == 42
        assert entry.leechers == 7
        assert entry.size_label == "1.50 GB"

        assert len(entry.variants) == 1
        variant = entry.variants[0]
        assert variant.quality_label == "Full"
        assert variant.seed_count == 42
        assert variant.peer_count == 7
        assert variant.content_hash == entry.infohash
        assert variant.size_label == "1.50 GB"

        params = route.calls.last.request.url.params
        assert params["q"] == "inception"
        assert params["size"] == "200"

    @respx.mock
    async def test_slices_batch_locally(self, source: IndexSource) -> None:
        route = respx.get(URL).mock(return_value=httpx.Response(200, json=_hits(30)))

        first, total = await source.fetch("release", page=1, page_size=20)
        second, _ = await source.fetch("release", page=2, page_size=20)

        assert total == 30
        assert len(first) == 20
        assert len(second) == 10
        assert second[0].infohash == f"{20:040x}"
        assert route.call_count == 2

    @respx.mock
    async def test_page_past_batch_is_empty(self, source: IndexSource) -> None:
        respx.get(URL).mock(return_value=httpx.Response(200, json=_hits(30)))

        entries, total = await source.fetch("release", page=2, page_size=50)

        assert entries == []
        assert total == 30

    @respx.mock
    async def test_batch_size_is_configurable(self, client: httpx.AsyncClient) -> None:
        route = respx.get(URL).mock(return_value=httpx.Response(200, json={"torrents": []}))

        await IndexSource(client, URL, batch_size=50).fetch("x", page=1, page_size=10)

        assert route.calls.last.request.url.params["size"] == "50"

    @respx.mock
    async def test_hits_without_name_or_hash_still_count(self, source: IndexSource) -> None:
        body = {
            "torrents": [
                {"infohash": "", "name": "No Hash 2001"},
                {"infohash": "aa" * 20, "name": ""},
                {"infohash": "bb" * 20, "name": "Kept 2002", "seeders": "oops"},
            ]
        }
        respx.get(URL).mock(return_value=httpx.Response(200, json=body))

        entries, total = await source.fetch("x", page=1, page_size=20)

        assert total == 3
        assert [e.title for e in entries] == ["No Hash 2001", "", "Kept 2002"]
        assert entries[0].infohash == ""
        assert entries[0].variants[0].content_hash == ""
        assert entries[1].raw_name == ""
        assert entries[1].infohash == "aa" * 20
        assert entries[2].seeders == 0

    @respx.mock
    async def test_non_object_hit_raises_decode_error(self, source: IndexSource) -> None:
        respx.get(URL).mock(return_value=httpx.Response(200, json={"torrents": ["oops"]}))

        with pytest.raises(DecodeError, match="hit is not an object"):
            await source.fetch("x", page=1, page_size=20)

    @respx.mock
    async def test_null_torrents_is_empty(self, source: IndexSource) -> None:
        respx.get(URL).mock(return_value=httpx.Response(200, json={"torrents": None}))

        entries, total = await source.fetch("x", page=1, page_size=20)

        assert entries == []
        assert total == 0

    @respx.mock
    async def test_unexpected_shape_raises_decode_error(self, source: IndexSource) -> None:
        respx.get(URL).mock(return_value=httpx.Response(200, json={"torrents": {"a": 1}}))

        with pytest.raises(DecodeError, match="not a list"):
            await source.fetch("x", page=1, page_size=20)

    @respx.mock
    async def test_connection_error_raises_transport_error(self, source: IndexSource) -> None:
        respx.get(URL).mock(side_effect=httpx.ConnectError("Connection refused"))

        with pytest.raises(TransportError, match="index request failed"):
            await source.fetch("x", page=1, page_size=20)
