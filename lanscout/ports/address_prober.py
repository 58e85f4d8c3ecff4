# /lanscout/ports/address_prober.py
from __future__ import annotations

from typing import Protocol

from lanscout.domain.models import ProbeResult


class AddressProberPort(Protocol):
    async def probe(self, address: str, timeout_seconds: float) -> ProbeResult:
        """Issue one reachability probe (with its own echo retries) for address."""
