# /lanscout/adapters/http/aiohttp_status_source.py
from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

LOG = logging.getLogger("adapter.status_source")


class AiohttpStatusSource:
    """
    Loop-aware aiohttp client for a status page JSON document.
    The session is rebuilt if the running loop changes, so a session tied to a
    closed loop is never reused.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 10.0,
        retries: int = 1,
        backoff_ms: int = 250,
    ) -> None:
        self.url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._retries = retries
        self._backoff_ms = backoff_ms
        self._session: aiohttp.ClientSession | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        loop = asyncio.get_running_loop()
        if self._loop is not None and self._loop is not loop:
            try:
                if self._session and not self._session.closed:
                    await self._session.close()
            finally:
                self._session = None
                self._loop = None

        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._loop = loop
        return self._session

    async def fetch(self) -> dict[str, Any]:
        """GET the document; retries transport errors with exponential backoff."""
        sess = await self._ensure_session()
        attempt = 0
        while True:
            try:
                LOG.info("status.fetching", extra={"extra": {"url": self.url}})
                async with sess.get(self.url) as resp:
                    resp.raise_for_status()
                    data = await resp.json(content_type=None)
                    if not isinstance(data, dict):
                        raise ValueError("status document is not a JSON object")
                    return data
            except (TimeoutError, aiohttp.ClientError):
                if attempt >= self._retries:
                    raise
                await asyncio.sleep((self._backoff_ms / 1000.0) * (2**attempt))
                attempt += 1

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._loop = None
