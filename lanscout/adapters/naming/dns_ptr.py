# /lanscout/adapters/naming/dns_ptr.py
from __future__ import annotations

import asyncio
import socket


class DnsPtrStrategy:
    """PTR lookup through the OS resolver, off the event loop and under a timeout."""

    name = "dns-ptr"

    def __init__(self, *, timeout_seconds: float = 3.0) -> None:
        self.timeout_seconds = timeout_seconds

    async def attempt(self, address: str) -> str | None:
        loop = asyncio.get_running_loop()
        try:
            async with asyncio.timeout(self.timeout_seconds):
                hostname, _aliases, _addrs = await loop.run_in_executor(None, socket.gethostbyaddr, address)
        except (socket.herror, socket.gaierror):
            return None
        return hostname or None
