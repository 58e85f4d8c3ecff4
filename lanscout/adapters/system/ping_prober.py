# /lanscout/adapters/system/ping_prober.py
from __future__ import annotations

import logging
import re

from lanscout.domain.address_range import is_host_token
from lanscout.domain.models import ProbeResult
from lanscout.ports.command_runner import CommandRunnerPort

LOG = logging.getLogger("adapter.ping")

# Linux "rtt min/avg/max/mdev = 0.041/0.052/0.061/0.008 ms"
# macOS "round-trip min/avg/max/stddev = 1.1/2.2/3.3/0.4 ms"
_POSIX_AVG = re.compile(r"(?:rtt|round-trip)[^=]*=\s*[\d.]+/([\d.]+)/")
# Windows "Minimum = 1ms, Maximum = 3ms, Average = 2ms"
_WINDOWS_AVG = re.compile(r"Average\s*=\s*(\d+)\s*ms", re.IGNORECASE)


def parse_average_ms(output: str) -> float | None:
    m = _POSIX_AVG.search(output) or _WINDOWS_AVG.search(output)
    if not m:
        return None
    try:
        return float(m.group(1))
    except ValueError:
        return None


class PingProber:
    """ICMP echo through the system ``ping`` binary; no raw-socket privileges needed."""

    def __init__(self, runner: CommandRunnerPort, system: str, *, count: int = 3) -> None:
        self.runner = runner
        self.system = system.lower()
        self.count = count

    def build_argv(self, address: str, timeout_seconds: float) -> list[str]:
        if not is_host_token(address):
            raise ValueError(f"not a host or address: {address!r}")
        if self.system == "windows":
            return ["ping", "-n", str(self.count), "-w", str(int(timeout_seconds * 1000)), address]
        if self.system == "darwin":
            # macOS -W is per-reply wait in milliseconds
            return ["ping", "-c", str(self.count), "-W", str(int(timeout_seconds * 1000)), address]
        return ["ping", "-c", str(self.count), "-W", str(max(1, int(timeout_seconds))), address]

    def _alive(self, returncode: int | None, stdout: str) -> bool:
        if returncode != 0:
            return False
        if self.system == "windows":
            # "Destination host unreachable" replies exit 0 on Windows
            return "TTL=" in stdout.upper()
        return True

    async def probe(self, address: str, timeout_seconds: float) -> ProbeResult:
        argv = self.build_argv(address, timeout_seconds)
        out = await self.runner.run(argv, self.count * timeout_seconds + 2)
        if not self._alive(out.returncode, out.stdout):
            return ProbeResult(address=address, reachable=False)
        return ProbeResult(address=address, reachable=True, latency_ms=parse_average_ms(out.stdout))
