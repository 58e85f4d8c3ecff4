# /lanscout/domain/prober.py
from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from lanscout.domain.models import ProbeResult
from lanscout.ports.address_prober import AddressProberPort

LOG = logging.getLogger("domain.prober")


def _latency_key(result: ProbeResult) -> tuple[bool, float]:
    # unknown latency sorts last
    return (result.latency_ms is None, result.latency_ms or 0.0)


class LivenessProber:
    """Bounded-concurrency sweep over a candidate list."""

    def __init__(self, prober: AddressProberPort) -> None:
        self.prober = prober

    async def probe_all(
        self,
        candidates: Sequence[str],
        concurrency: int = 64,
        timeout_seconds: float = 1,
    ) -> list[ProbeResult]:
        """Probe every candidate exactly once; return responders sorted by latency."""
        hosts = list(candidates)
        alive: list[ProbeResult] = []
        if not hosts:
            return alive

        cursor = 0

        async def worker() -> None:
            nonlocal cursor
            while cursor < len(hosts):
                host = hosts[cursor]
                cursor += 1
                try:
                    res = await self.prober.probe(host, timeout_seconds)
                except Exception as e:
                    LOG.debug("probe.failed", extra={"extra": {"host": host, "error": type(e).__name__}})
                    continue
                if res.reachable:
                    alive.append(res)

        workers = min(max(concurrency, 1), len(hosts))
        async with asyncio.TaskGroup() as tg:
            for _ in range(workers):
                tg.create_task(worker())

        LOG.info("sweep.done", extra={"extra": {"candidates": len(hosts), "alive": len(alive)}})
        return sorted(alive, key=_latency_key)
