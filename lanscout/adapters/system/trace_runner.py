# /lanscout/adapters/system/trace_runner.py
from __future__ import annotations

import logging

from lanscout.domain.address_range import is_host_token
from lanscout.ports.command_runner import CommandRunnerPort

LOG = logging.getLogger("adapter.traceroute")


class TracerouteRunner:
    """Platform hop tracer: ``tracert`` on Windows, ``traceroute`` elsewhere.

    Never raises; failures come back as text so the caller's raw-line fallback
    can show them.
    """

    def __init__(self, runner: CommandRunnerPort, system: str, *, timeout_seconds: float = 45) -> None:
        self.runner = runner
        self.system = system.lower()
        self.timeout_seconds = timeout_seconds

    @property
    def binary(self) -> str:
        return "tracert" if self.system == "windows" else "traceroute"

    def build_argv(self, host: str, max_hops: int) -> list[str]:
        if not is_host_token(host):
            raise ValueError(f"not a host or address: {host!r}")
        if self.system == "windows":
            return [self.binary, "-d", "-h", str(max_hops), host]
        return [self.binary, "-n", "-m", str(max_hops), host]

    async def trace(self, host: str, max_hops: int) -> str:
        if self.runner.which(self.binary) is None:
            LOG.warning("traceroute.missing", extra={"extra": {"binary": self.binary}})
            return f"Traceroute failed: {self.binary} not found"

        try:
            argv = self.build_argv(host, max_hops)
        except ValueError as e:
            LOG.warning("traceroute.rejected", extra={"extra": {"host": host}})
            return f"Traceroute failed: {e}"
        try:
            out = await self.runner.run(argv, self.timeout_seconds)
        except TimeoutError:
            LOG.warning("traceroute.timeout", extra={"extra": {"host": host}})
            return f"Traceroute failed: timed out after {self.timeout_seconds:g}s"
        except OSError as e:
            LOG.warning("traceroute.error", extra={"extra": {"host": host, "error": str(e)}})
            return f"Traceroute failed: {e}"

        return out.stdout or out.stderr or "no output"
