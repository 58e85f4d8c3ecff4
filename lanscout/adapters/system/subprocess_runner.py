# /lanscout/adapters/system/subprocess_runner.py
from __future__ import annotations

import asyncio
import logging
import shutil
from collections.abc import Sequence

from lanscout.domain.models import CommandOutput

LOG = logging.getLogger("adapter.subprocess")


class AsyncSubprocessRunner:
    """Runs external tools on the event loop; every call carries a hard timeout."""

    def which(self, binary: str) -> str | None:
        return shutil.which(binary)

    async def run(self, argv: Sequence[str], timeout_seconds: float) -> CommandOutput:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            out, err = await asyncio.wait_for(proc.communicate(), timeout_seconds)
        except TimeoutError:
            # reap the child so no zombie outlives the call
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()
            LOG.debug("subprocess.timeout", extra={"extra": {"argv": list(argv), "timeout": timeout_seconds}})
            raise

        return CommandOutput(
            returncode=proc.returncode,
            stdout=out.decode(errors="ignore"),
            stderr=err.decode(errors="ignore"),
        )
