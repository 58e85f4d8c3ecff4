# /lanscout/domain/allowlist.py
from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Iterable
from typing import Any

from lanscout.domain.models import AllowlistEntry, TargetMatch
from lanscout.ports.status_source import StatusSourcePort

LOG = logging.getLogger("domain.allowlist")

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


def normalize_host(value: Any) -> str:
    """Strip scheme, path and port, leaving host or address."""
    if not value:
        return ""
    return _SCHEME.sub("", str(value)).split("/", 1)[0].split(":", 1)[0]


def _monitor_entry(monitor: Any) -> AllowlistEntry | None:
    if not isinstance(monitor, dict):
        return None
    name = monitor.get("name")
    host = normalize_host(
        monitor.get("hostname") or monitor.get("url") or monitor.get("ip") or monitor.get("addr")
    )
    if not name or not host:
        return None
    return AllowlistEntry(name=str(name), host=host)


def parse_status_document(doc: dict[str, Any]) -> list[AllowlistEntry]:
    """Collect monitors from a status page JSON; later duplicates (by name) win."""
    monitors: list[Any] = []
    for group in doc.get("publicGroupList") or []:
        monitors.extend((group or {}).get("monitorList") or [])
    monitors.extend(doc.get("monitors") or [])

    uniq: dict[str, AllowlistEntry] = {}
    for m in monitors:
        entry = _monitor_entry(m)
        if entry:
            uniq[entry.name.lower()] = entry
    return list(uniq.values())


class AllowlistCache:
    """
    Read-through cache of named hosts fed by a status page.

    Starts empty; ``refresh()`` replaces the contents, ``start()`` keeps it
    fresh on an interval until ``stop()``.
    """

    def __init__(self, source: StatusSourcePort | None = None, entries: Iterable[AllowlistEntry] = ()) -> None:
        self._source = source
        self._entries: list[AllowlistEntry] = list(entries)
        self._task: asyncio.Task[None] | None = None

    @property
    def entries(self) -> list[AllowlistEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    async def refresh(self) -> None:
        if self._source is None:
            return
        try:
            doc = await self._source.fetch()
            self._entries = parse_status_document(doc)
            LOG.info("allowlist.loaded", extra={"extra": {"entries": len(self._entries)}})
        except Exception as e:
            self._entries = []
            LOG.error("allowlist.error", extra={"extra": {"error": str(e)}})

    async def _loop(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            await self.refresh()

    async def start(self, interval: float) -> None:
        await self.refresh()
        if self._source is not None and self._task is None:
            self._task = asyncio.create_task(self._loop(interval))

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            finally:
                self._task = None
        if self._source is not None:
            await self._source.close()

    def find_by_name(self, name: str) -> AllowlistEntry | None:
        key = name.lower()
        return next((e for e in self._entries if e.name.lower() == key), None)

    def resolve_target(self, query: str) -> TargetMatch:
        by_name = self.find_by_name(query)
        if by_name:
            return TargetMatch(hit="name", value=by_name.host, name=by_name.name)
        key = query.lower()
        as_host = next((e for e in self._entries if e.host.lower() == key), None)
        if as_host:
            return TargetMatch(hit="host", value=as_host.host, name=as_host.name)
        return TargetMatch(hit=None, value=query, name=query)
