# /lanscout/adapters/naming/probe_echo.py
from __future__ import annotations

import re

from lanscout.ports.command_runner import CommandRunnerPort

# "Pinging DESKTOP-ABC [192.168.1.20] with 32 bytes of data:"
_PINGING = re.compile(r"Pinging\s+(\S+)\s+\[", re.IGNORECASE)


def parse_echo_name(output: str) -> str | None:
    m = _PINGING.search(output)
    return m.group(1) if m else None


class ProbeEchoReverseStrategy:
    """Windows ``ping -a`` prints the reverse-resolved name in its banner."""

    name = "probe-echo"

    def __init__(self, runner: CommandRunnerPort, *, timeout_seconds: float = 5.0) -> None:
        self.runner = runner
        self.timeout_seconds = timeout_seconds

    async def attempt(self, address: str) -> str | None:
        out = await self.runner.run(["ping", "-a", "-n", "1", "-w", "1000", address], self.timeout_seconds)
        return parse_echo_name(out.stdout)
