# /lanscout/adapters/naming/scanner_dns.py
from __future__ import annotations

import logging
import re

from lanscout.ports.command_runner import CommandRunnerPort

LOG = logging.getLogger("adapter.naming.nmap")

_IPV4 = r"\d{1,3}(?:\.\d{1,3}){3}"
# "Nmap scan report for printer.lan (192.168.1.40)"
_NAME_ADDR = re.compile(rf"Nmap scan report for (\S+) \(({_IPV4})\)")
# "192.168.1.40 (printer.lan)"
_ADDR_NAME = re.compile(rf"({_IPV4}) \(([^)\s]+)\)")
_RDNS_FIELD = re.compile(rf"(?:reverse dns name|rdns record for {_IPV4})\s*:\s*(\S+)", re.IGNORECASE)
_DOTTED = re.compile(rf"^{_IPV4}$")


def parse_scanner_name(output: str) -> str | None:
    m = _NAME_ADDR.search(output)
    if m and not _DOTTED.match(m.group(1)):
        return m.group(1)
    m = _ADDR_NAME.search(output)
    if m and not _DOTTED.match(m.group(2)):
        return m.group(2)
    m = _RDNS_FIELD.search(output)
    return m.group(1) if m else None


class ScannerReverseDnsStrategy:
    """Reverse DNS through ``nmap -sL -R`` (list scan, no packets to the host)."""

    name = "nmap"

    def __init__(self, runner: CommandRunnerPort, *, timeout_seconds: float = 5.0) -> None:
        self.runner = runner
        self.timeout_seconds = timeout_seconds
        self._available: bool | None = None

    @property
    def available(self) -> bool:
        if self._available is None:
            self._available = self.runner.which("nmap") is not None
            LOG.info("nmap.detected", extra={"extra": {"available": self._available}})
        return self._available

    async def attempt(self, address: str) -> str | None:
        if not self.available:
            return None
        out = await self.runner.run(["nmap", "-sL", "-R", address], self.timeout_seconds)
        return parse_scanner_name(out.stdout)
