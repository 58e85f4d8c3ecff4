# /lanscout/ports/interface_lister.py
from __future__ import annotations

from typing import Protocol


class InterfaceListerPort(Protocol):
    def ipv4_addresses(self) -> list[str]:
        """Return IPv4 addresses of up, non-loopback interfaces in enumeration order."""
