# /lanscout/adapters/naming/netbios.py
from __future__ import annotations

import re

from lanscout.ports.command_runner import CommandRunnerPort

# nbtstat:   "    DESKTOP-ABC    <00>  UNIQUE      Registered"
_NBTSTAT = re.compile(r"^\s*([A-Za-z0-9_\-]{1,15})\s+<00>\s+UNIQUE\s+Registered", re.MULTILINE)
# nmblookup: "	NAS01           <00> -         B <ACTIVE>"
_NMBLOOKUP = re.compile(r"^\s*([A-Za-z0-9_\-]{1,15})\s+<00>\s+-\s+(?:[BHMP]\s+)?<ACTIVE>", re.MULTILINE)


def parse_netbios_name(output: str) -> str | None:
    m = _NBTSTAT.search(output) or _NMBLOOKUP.search(output)
    return m.group(1) if m else None


class NetbiosStrategy:
    name = "netbios"

    def __init__(self, runner: CommandRunnerPort, system: str, *, timeout_seconds: float = 5.0) -> None:
        self.runner = runner
        self.binary = "nbtstat" if system.lower() == "windows" else "nmblookup"
        self.timeout_seconds = timeout_seconds

    async def attempt(self, address: str) -> str | None:
        if self.runner.which(self.binary) is None:
            return None
        out = await self.runner.run([self.binary, "-A", address], self.timeout_seconds)
        return parse_netbios_name(out.stdout)
