# /lanscout/domain/models.py
from __future__ import annotations

from dataclasses import dataclass, field

UNRESOLVED = "unresolved"
NO_DATA = "-"
TIMEOUT_MARK = "*"


@dataclass(slots=True, frozen=True)
class ProbeResult:
    address: str
    reachable: bool
    latency_ms: float | None = None


@dataclass(slots=True, frozen=True)
class ResolvedName:
    address: str
    name: str = UNRESOLVED

    @property
    def resolved(self) -> bool:
        return self.name != UNRESOLVED


@dataclass(slots=True, frozen=True)
class HopRecord:
    hop: int
    ip: str = NO_DATA
    t1: str = TIMEOUT_MARK
    t2: str = TIMEOUT_MARK
    t3: str = TIMEOUT_MARK


@dataclass(slots=True, frozen=True)
class CommandOutput:
    returncode: int | None
    stdout: str
    stderr: str = ""


@dataclass(slots=True, frozen=True)
class AllowlistEntry:
    name: str
    host: str


@dataclass(slots=True, frozen=True)
class TargetMatch:
    hit: str | None  # "name" | "host" | None
    value: str
    name: str


@dataclass(slots=True)
class CommandReply:
    """Text for the two caller sinks: direct reply and channel broadcast."""

    reply: list[str] = field(default_factory=list)
    broadcast: list[str] = field(default_factory=list)
