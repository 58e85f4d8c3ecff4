# /lanscout/ports/command_runner.py
from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from lanscout.domain.models import CommandOutput


class CommandRunnerPort(Protocol):
    def which(self, binary: str) -> str | None:
        """Return the resolved path of binary, or None if it is not installed."""

    async def run(self, argv: Sequence[str], timeout_seconds: float) -> CommandOutput:
        """Run argv to completion; raise TimeoutError or OSError on failure."""
