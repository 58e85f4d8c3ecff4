# tests/test_prober.py
from __future__ import annotations

import pytest

from lanscout.domain.models import ProbeResult
from lanscout.domain.prober import LivenessProber
from tests.fakes import FakeProber


@pytest.mark.asyncio
async def test_only_reachable_sorted_by_latency_unknown_last() -> None:
    fake = FakeProber(
        {
            "10.0.0.1": ProbeResult("10.0.0.1", True, 5.0),
            "10.0.0.2": ProbeResult("10.0.0.2", True, None),
            "10.0.0.3": ProbeResult("10.0.0.3", False),
            "10.0.0.4": ProbeResult("10.0.0.4", True, 0.4),
            "10.0.0.5": RuntimeError("ping exploded"),
        }
    )
    hosts = [f"10.0.0.{i}" for i in range(1, 7)]
    out = await LivenessProber(fake).probe_all(hosts, concurrency=3, timeout_seconds=1)

    assert [r.address for r in out] == ["10.0.0.4", "10.0.0.1", "10.0.0.2"]
    assert sorted(fake.calls) == sorted(hosts)  # each attempted exactly once


@pytest.mark.asyncio
async def test_no_responders_is_empty() -> None:
    out = await LivenessProber(FakeProber()).probe_all(["10.0.0.1", "10.0.0.2"])
    assert out == []


@pytest.mark.asyncio
async def test_empty_candidates() -> None:
    fake = FakeProber()
    assert await LivenessProber(fake).probe_all([]) == []
    assert fake.calls == []


@pytest.mark.asyncio
async def test_all_reachable() -> None:
    hosts = [f"192.168.1.{i}" for i in range(1, 21)]
    fake = FakeProber({h: ProbeResult(h, True, float(21 - i)) for i, h in enumerate(hosts, start=1)})
    out = await LivenessProber(fake).probe_all(hosts, concurrency=64)
    assert len(out) == 20
    assert [r.latency_ms for r in out] == sorted(r.latency_ms for r in out)


@pytest.mark.asyncio
async def test_concurrency_is_bounded() -> None:
    hosts = [f"192.168.1.{i}" for i in range(1, 31)]
    fake = FakeProber(delay=0.01)
    await LivenessProber(fake).probe_all(hosts, concurrency=4)
    assert fake.max_in_flight <= 4
    assert len(fake.calls) == 30
