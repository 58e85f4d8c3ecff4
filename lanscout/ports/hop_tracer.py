# /lanscout/ports/hop_tracer.py
from __future__ import annotations

from typing import Protocol


class HopTracerPort(Protocol):
    async def trace(self, host: str, max_hops: int) -> str:
        """Run the platform traceroute tool; return its raw text (or error text)."""
