# /lanscout/adapters/discovery/zeroconf_browser.py
from __future__ import annotations

import asyncio
import logging
import threading
import time

from zeroconf import IPVersion, ServiceBrowser, ServiceStateChange, Zeroconf

LOG = logging.getLogger("adapter.mdns")

SERVICE_TYPES = (
    "_workstation._tcp.local.",
    "_device-info._tcp.local.",
    "_smb._tcp.local.",
    "_http._tcp.local.",
    "_ssh._tcp.local.",
    "_ipp._tcp.local.",
    "_googlecast._tcp.local.",
    "_airplay._tcp.local.",
)


def service_label(info, name: str) -> str:
    """Host label for a resolved service: its server name, else the instance name."""
    return (info.server or "").rstrip(".") or name.split(".", 1)[0]


def record_service(found: dict[str, str], info, name: str) -> None:
    label = service_label(info, name)
    for ip in info.parsed_addresses(IPVersion.V4Only):
        found.setdefault(ip, label)


class ZeroconfBrowser:
    """
    Browses a fixed set of service types for a collection window and maps
    IPv4 address -> host label (service server name, else instance name).
    The first label seen for an address is kept.
    """

    def __init__(self, service_types: tuple[str, ...] = SERVICE_TYPES, *, info_timeout_ms: int = 1500) -> None:
        self.service_types = service_types
        self.info_timeout_ms = info_timeout_ms

    async def collect(self, window_seconds: float) -> dict[str, str]:
        return await asyncio.to_thread(self._collect_blocking, window_seconds)

    def _collect_blocking(self, window_seconds: float) -> dict[str, str]:
        found: dict[str, str] = {}
        lock = threading.Lock()

        def on_change(zeroconf: Zeroconf, service_type: str, name: str, state_change: ServiceStateChange) -> None:
            if state_change is not ServiceStateChange.Added:
                return
            try:
                info = zeroconf.get_service_info(service_type, name, timeout=self.info_timeout_ms)
            except Exception as e:
                LOG.debug("mdns.info_failed", extra={"extra": {"service": name, "error": repr(e)}})
                return
            if not info:
                return
            with lock:
                record_service(found, info, name)

        zc = Zeroconf(ip_version=IPVersion.V4Only)
        try:
            browsers = [ServiceBrowser(zc, t, handlers=[on_change]) for t in self.service_types]
            time.sleep(window_seconds)
            for b in browsers:
                b.cancel()
        finally:
            zc.close()

        with lock:
            LOG.info("mdns.collected", extra={"extra": {"hosts": len(found)}})
            return dict(found)
