# tests/test_resolver.py
from __future__ import annotations

import pytest

from lanscout.domain.models import UNRESOLVED
from lanscout.domain.resolver import NameResolver
from tests.fakes import FakeMulticast, FakeStrategy


@pytest.mark.asyncio
async def test_first_success_wins_in_priority_order() -> None:
    first = FakeStrategy("echo", {"10.0.0.1": "alpha"})
    second = FakeStrategy("netbios", {"10.0.0.1": "ALPHA-NB", "10.0.0.2": "BETA"})
    resolver = NameResolver([first, second], None)

    out = await resolver.resolve_all(["10.0.0.1", "10.0.0.2"])

    assert out["10.0.0.1"].name == "alpha"
    assert out["10.0.0.2"].name == "BETA"
    assert second.calls == ["10.0.0.2"]


@pytest.mark.asyncio
async def test_failures_fall_through_to_sentinel() -> None:
    broken = FakeStrategy("nmap", {"10.0.0.1": TimeoutError()})
    empty = FakeStrategy("ptr", {"10.0.0.1": "   "})
    echo = FakeStrategy("self", {"10.0.0.1": "10.0.0.1"})
    out = await NameResolver([broken, empty, echo]).resolve_all(["10.0.0.1"])
    assert out["10.0.0.1"].name == UNRESOLVED
    assert not out["10.0.0.1"].resolved


@pytest.mark.asyncio
async def test_multicast_fills_only_gaps() -> None:
    ptr = FakeStrategy("ptr", {"10.0.0.1": "router.lan."})
    mdns = FakeMulticast({"10.0.0.1": "ignored.local", "10.0.0.2": "tv.local"})
    resolver = NameResolver([ptr], mdns, multicast_window=0.5)

    out = await resolver.resolve_all(["10.0.0.1", "10.0.0.2", "10.0.0.3"])

    assert out["10.0.0.1"].name == "router.lan"
    assert out["10.0.0.2"].name == "tv.local"
    assert out["10.0.0.3"].name == UNRESOLVED
    assert mdns.windows == [0.5]


@pytest.mark.asyncio
async def test_multicast_failure_is_swallowed() -> None:
    resolver = NameResolver([FakeStrategy("ptr")], FakeMulticast(error=OSError("no multicast")))
    out = await resolver.resolve_all(["10.0.0.1"])
    assert out["10.0.0.1"].name == UNRESOLVED


@pytest.mark.asyncio
async def test_disabled_skips_every_strategy() -> None:
    s = FakeStrategy("ptr", {"10.0.0.1": "x"})
    mdns = FakeMulticast({"10.0.0.1": "y"})
    resolver = NameResolver([s], mdns, enabled=False)

    assert await resolver.resolve_all([]) == {}
    out = await resolver.resolve_all(["10.0.0.1", "10.0.0.2"])

    assert {a: r.name for a, r in out.items()} == {"10.0.0.1": UNRESOLVED, "10.0.0.2": UNRESOLVED}
    assert s.calls == [] and mdns.windows == []


@pytest.mark.asyncio
async def test_multicast_flag_off_keeps_other_strategies() -> None:
    s = FakeStrategy("ptr", {"10.0.0.1": "nas"})
    mdns = FakeMulticast({"10.0.0.2": "tv.local"})
    out = await NameResolver([s], mdns, multicast_enabled=False).resolve_all(["10.0.0.1", "10.0.0.2"])
    assert out["10.0.0.1"].name == "nas"
    assert out["10.0.0.2"].name == UNRESOLVED
    assert mdns.windows == []
