# /lanscout/ports/name_strategy.py
from __future__ import annotations

from typing import Protocol


class NameStrategyPort(Protocol):
    name: str

    async def attempt(self, address: str) -> str | None:
        """Return a hostname for address, or None when this strategy has no answer."""
