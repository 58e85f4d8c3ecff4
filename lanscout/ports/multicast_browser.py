# /lanscout/ports/multicast_browser.py
from __future__ import annotations

from typing import Protocol


class MulticastBrowserPort(Protocol):
    async def collect(self, window_seconds: float) -> dict[str, str]:
        """Listen for window_seconds; return address -> discovered host label."""
