# /lanscout/ports/status_source.py
from __future__ import annotations

from typing import Any, Protocol


class StatusSourcePort(Protocol):
    async def fetch(self) -> dict[str, Any]:
        """Fetch the status page JSON document."""

    async def close(self) -> None:
        """Release any client resources."""
