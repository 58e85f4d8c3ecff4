# /lanscout/domain/resolver.py
from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from lanscout.domain.models import UNRESOLVED, ResolvedName
from lanscout.ports.multicast_browser import MulticastBrowserPort
from lanscout.ports.name_strategy import NameStrategyPort

LOG = logging.getLogger("domain.resolver")


def _clean(name: str | None, address: str) -> str | None:
    if not name:
        return None
    name = name.strip().rstrip(".")
    if not name or name == address:
        return None
    return name


class NameResolver:
    """
    Best-effort hostname resolution for responding addresses.

    Strategies run in priority order per address and the first non-empty answer
    wins. A multicast browser runs alongside the bounded pool for a fixed window;
    once the pool drains, addresses still unresolved are filled from its map.
    """

    def __init__(
        self,
        strategies: Sequence[NameStrategyPort],
        multicast: MulticastBrowserPort | None = None,
        *,
        enabled: bool = True,
        multicast_enabled: bool = True,
        multicast_window: float = 4.0,
    ) -> None:
        self.strategies = list(strategies)
        self.multicast = multicast
        self.enabled = enabled
        self.multicast_enabled = multicast_enabled
        self.multicast_window = multicast_window

    async def resolve_one(self, address: str) -> str | None:
        for strategy in self.strategies:
            try:
                name = _clean(await strategy.attempt(address), address)
            except Exception as e:
                LOG.debug(
                    "strategy.failed",
                    extra={"extra": {"strategy": strategy.name, "address": address, "error": repr(e)}},
                )
                continue
            if name:
                LOG.debug(
                    "strategy.hit",
                    extra={"extra": {"strategy": strategy.name, "address": address, "name": name}},
                )
                return name
        return None

    async def _collect_multicast(self, browser: MulticastBrowserPort) -> dict[str, str]:
        try:
            return await browser.collect(self.multicast_window)
        except Exception as e:
            LOG.debug("multicast.failed", extra={"extra": {"error": repr(e)}})
            return {}

    async def resolve_all(self, addresses: Sequence[str], concurrency: int = 12) -> dict[str, ResolvedName]:
        hosts = list(addresses)
        if not self.enabled:
            return {a: ResolvedName(a, UNRESOLVED) for a in hosts}

        names: dict[str, str] = {}
        if not hosts:
            return {}

        mdns_task: asyncio.Task[dict[str, str]] | None = None
        if self.multicast_enabled and self.multicast is not None:
            mdns_task = asyncio.create_task(self._collect_multicast(self.multicast))

        cursor = 0

        async def worker() -> None:
            nonlocal cursor
            while cursor < len(hosts):
                address = hosts[cursor]
                cursor += 1
                name = await self.resolve_one(address)
                if name:
                    names[address] = name

        try:
            async with asyncio.TaskGroup() as tg:
                for _ in range(min(max(concurrency, 1), len(hosts))):
                    tg.create_task(worker())
        except BaseException:
            if mdns_task is not None:
                mdns_task.cancel()
            raise

        if mdns_task is not None:
            discovered = await mdns_task
            for address in hosts:
                if address not in names:
                    label = _clean(discovered.get(address), address)
                    if label:
                        names[address] = label

        LOG.info(
            "resolve.done",
            extra={"extra": {"addresses": len(hosts), "resolved": len(names)}},
        )
        return {a: ResolvedName(a, names.get(a, UNRESOLVED)) for a in hosts}
