# tests/test_discovery_and_status.py
from __future__ import annotations

from contextlib import asynccontextmanager

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer as LocalServer
from zeroconf import IPVersion

from lanscout.adapters.discovery.zeroconf_browser import record_service, service_label
from lanscout.adapters.http.aiohttp_status_source import AiohttpStatusSource


class StubServiceInfo:
    def __init__(self, server: str | None, addresses: list[str]) -> None:
        self.server = server
        self.addresses = addresses
        self.versions: list[IPVersion] = []

    def parsed_addresses(self, version: IPVersion) -> list[str]:
        self.versions.append(version)
        return list(self.addresses)


def test_label_prefers_server_name() -> None:
    info = StubServiceInfo("nas-01.local.", ["192.168.1.50"])
    assert service_label(info, "NAS Share._smb._tcp.local.") == "nas-01.local"


@pytest.mark.parametrize("server", [None, "", "."])
def test_label_falls_back_to_instance_name(server) -> None:
    info = StubServiceInfo(server, ["192.168.1.60"])
    assert service_label(info, "Living Room TV._googlecast._tcp.local.") == "Living Room TV"


def test_first_label_seen_wins() -> None:
    found: dict[str, str] = {}
    record_service(found, StubServiceInfo("printer.local.", ["192.168.1.70", "192.168.1.71"]), "p._ipp._tcp.local.")
    record_service(found, StubServiceInfo("other.local.", ["192.168.1.70"]), "o._http._tcp.local.")
    assert found == {"192.168.1.70": "printer.local", "192.168.1.71": "printer.local"}


def test_only_ipv4_addresses_are_requested() -> None:
    info = StubServiceInfo("cam.local.", ["192.168.1.80"])
    record_service({}, info, "cam._http._tcp.local.")
    assert info.versions == [IPVersion.V4Only]


@asynccontextmanager
async def serve(handler):
    app = web.Application()
    app.router.add_get("/status", handler)
    server = LocalServer(app)
    await server.start_server()
    try:
        yield str(server.make_url("/status"))
    finally:
        await server.close()


@pytest.mark.asyncio
async def test_fetch_retries_then_succeeds() -> None:
    calls = []

    async def handler(request: web.Request) -> web.Response:
        calls.append(request.path)
        if len(calls) == 1:
            return web.Response(status=503)
        return web.json_response({"monitors": [{"name": "nas", "ip": "192.168.1.50"}]})

    async with serve(handler) as url:
        source = AiohttpStatusSource(url, retries=1, backoff_ms=1)
        try:
            doc = await source.fetch()
        finally:
            await source.close()
    assert doc == {"monitors": [{"name": "nas", "ip": "192.168.1.50"}]}
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_fetch_rejects_non_object_body() -> None:
    calls = []

    async def handler(request: web.Request) -> web.Response:
        calls.append(request.path)
        return web.json_response([{"name": "nas"}])

    async with serve(handler) as url:
        source = AiohttpStatusSource(url, retries=3, backoff_ms=1)
        try:
            with pytest.raises(ValueError):
                await source.fetch()
        finally:
            await source.close()
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_fetch_gives_up_after_retries() -> None:
    calls = []

    async def handler(request: web.Request) -> web.Response:
        calls.append(request.path)
        return web.Response(status=500)

    async with serve(handler) as url:
        source = AiohttpStatusSource(url, retries=2, backoff_ms=1)
        try:
            with pytest.raises(aiohttp.ClientResponseError) as exc:
                await source.fetch()
        finally:
            await source.close()
    assert exc.value.status == 500
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_close_is_idempotent() -> None:
    source = AiohttpStatusSource("http://127.0.0.1:9/status")
    await source.close()
    await source.close()
