# tests/fakes.py
from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field

from lanscout.domain.models import CommandOutput, ProbeResult


class FakeRunner:
    """
    Scripted command runner keyed by binary name (argv[0]).
    A value may be a CommandOutput or an exception instance to raise.
    """

    def __init__(self, outputs: dict | None = None, installed: Sequence[str] = ()) -> None:
        self.outputs = dict(outputs or {})
        self.installed = set(installed) | set(self.outputs)
        self.calls: list[list[str]] = []

    def which(self, binary: str) -> str | None:
        return f"/usr/bin/{binary}" if binary in self.installed else None

    async def run(self, argv, timeout_seconds):
        self.calls.append(list(argv))
        out = self.outputs.get(argv[0])
        if isinstance(out, BaseException):
            raise out
        if out is None:
            raise FileNotFoundError(argv[0])
        return out


class FakeProber:
    """address -> ProbeResult | Exception; anything unknown is unreachable."""

    def __init__(self, script: dict | None = None, delay: float = 0.0) -> None:
        self.script = dict(script or {})
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def probe(self, address: str, timeout_seconds: float) -> ProbeResult:
        self.calls.append(address)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            res = self.script.get(address)
            if isinstance(res, BaseException):
                raise res
            return res or ProbeResult(address=address, reachable=False)
        finally:
            self.in_flight -= 1


@dataclass
class FakeStrategy:
    name: str
    answers: dict = field(default_factory=dict)
    calls: list = field(default_factory=list)

    async def attempt(self, address: str) -> str | None:
        self.calls.append(address)
        ans = self.answers.get(address)
        if isinstance(ans, BaseException):
            raise ans
        return ans


class FakeMulticast:
    def __init__(self, found: dict | None = None, error: Exception | None = None) -> None:
        self.found = dict(found or {})
        self.error = error
        self.windows: list[float] = []

    async def collect(self, window_seconds: float) -> dict[str, str]:
        self.windows.append(window_seconds)
        if self.error:
            raise self.error
        return dict(self.found)


class FakeInterfaces:
    def __init__(self, addresses: Sequence[str] = ()) -> None:
        self.addresses = list(addresses)

    def ipv4_addresses(self) -> list[str]:
        return list(self.addresses)


class FakeTracer:
    def __init__(self, text: str) -> None:
        self.text = text
        self.calls: list[tuple[str, int]] = []

    async def trace(self, host: str, max_hops: int) -> str:
        self.calls.append((host, max_hops))
        return self.text


class FakeStatusSource:
    def __init__(self, doc: dict | None = None, error: Exception | None = None) -> None:
        self.doc = doc or {}
        self.error = error
        self.fetches = 0
        self.closed = False

    async def fetch(self) -> dict:
        self.fetches += 1
        if self.error:
            raise self.error
        return self.doc

    async def close(self) -> None:
        self.closed = True


def ok(stdout: str, returncode: int = 0) -> CommandOutput:
    return CommandOutput(returncode=returncode, stdout=stdout)
