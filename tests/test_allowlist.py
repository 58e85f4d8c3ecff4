# tests/test_allowlist.py
from __future__ import annotations

import asyncio

import pytest

from lanscout.domain.allowlist import AllowlistCache, normalize_host, parse_status_document
from lanscout.domain.models import AllowlistEntry
from tests.fakes import FakeStatusSource

DOC = {
    "publicGroupList": [
        {
            "name": "Core",
            "monitorList": [
                {"name": "NAS", "url": "https://nas.lan/dashboard"},
                {"name": "Router", "hostname": "192.168.1.1"},
                {"name": "", "hostname": "10.0.0.1"},
                {"name": "Ghost"},
            ],
        },
        None,
    ],
    "monitors": [{"name": "nas", "ip": "192.168.1.50"}],
}


@pytest.mark.parametrize(
    "raw,host",
    [("https://nas.lan/x/y", "nas.lan"), ("http://10.0.0.1", "10.0.0.1"), ("printer", "printer"), ("http://nas.lan:8080/ui", "nas.lan"), (None, "")],
)
def test_normalize_host(raw, host) -> None:
    assert normalize_host(raw) == host


def test_parse_document_dedupes_by_lowercase_name() -> None:
    entries = parse_status_document(DOC)
    assert entries == [AllowlistEntry("nas", "192.168.1.50"), AllowlistEntry("Router", "192.168.1.1")]


@pytest.mark.asyncio
async def test_refresh_and_lookup() -> None:
    cache = AllowlistCache(FakeStatusSource(DOC))
    assert len(cache) == 0
    await cache.refresh()

    by_name = cache.resolve_target("ROUTER")
    assert (by_name.hit, by_name.value, by_name.name) == ("name", "192.168.1.1", "Router")
    by_host = cache.resolve_target("192.168.1.50")
    assert (by_host.hit, by_host.name) == ("host", "nas")
    miss = cache.resolve_target("example.org")
    assert (miss.hit, miss.value, miss.name) == (None, "example.org", "example.org")
    assert cache.find_by_name("nope") is None


@pytest.mark.asyncio
async def test_refresh_error_empties_cache() -> None:
    cache = AllowlistCache(FakeStatusSource(error=OSError("down")), entries=[AllowlistEntry("a", "b")])
    await cache.refresh()
    assert cache.entries == []


@pytest.mark.asyncio
async def test_periodic_refresh_lifecycle() -> None:
    source = FakeStatusSource(DOC)
    cache = AllowlistCache(source)
    await cache.start(interval=0.01)
    assert source.fetches == 1
    await asyncio.sleep(0.05)
    await cache.stop()
    assert source.fetches >= 2
    assert source.closed


@pytest.mark.asyncio
async def test_no_source_stays_empty() -> None:
    cache = AllowlistCache()
    await cache.start(interval=0.01)
    await cache.stop()
    assert cache.entries == []
