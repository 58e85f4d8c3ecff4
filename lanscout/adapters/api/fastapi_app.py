# /lanscout/adapters/api/fastapi_app.py
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException
from pydantic import BaseModel

from lanscout.adapters.system.logging_cfg import configure_logger
from lanscout.adapters.system.service_factory import build_service
from lanscout.config import settings
from lanscout.domain.diagnostics_service import SCAN_EXAMPLES, DiagnosticsService
from lanscout.domain.errors import InvalidTarget, NoLocalNetwork, NotAllowed, RangeTooLarge
from lanscout.domain.models import CommandReply

LOG = logging.getLogger("adapter.api")
configure_logger(settings.LOG_LEVEL)

_service: DiagnosticsService | None = None


def get_service() -> DiagnosticsService:
    """Build the service on first use (the event loop is running by then)."""
    global _service
    if _service is None:
        _service = build_service(settings)
    return _service


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    svc = get_service()
    await svc.allowlist.start(settings.ALLOWLIST_REFRESH_SECONDS)
    try:
        yield
    finally:
        await svc.allowlist.stop()


app = FastAPI(title="lanscout", lifespan=lifespan)


class ScanRequestModel(BaseModel):
    pattern: Optional[str] = None


class TargetRequestModel(BaseModel):
    target: str


class ReplyModel(BaseModel):
    reply: list[str]
    broadcast: list[str]


def _check_key(x_api_key: str | None) -> None:
    if settings.API_KEY and x_api_key != settings.API_KEY:
        raise HTTPException(status_code=401, detail="invalid api key")


def _out(reply: CommandReply) -> ReplyModel:
    return ReplyModel(reply=reply.reply, broadcast=reply.broadcast)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/help")
def help_text(svc: DiagnosticsService = Depends(get_service)) -> ReplyModel:
    return _out(svc.help())


@app.post("/scan")
async def scan(
    payload: ScanRequestModel,
    x_api_key: str | None = Header(default=None),
    svc: DiagnosticsService = Depends(get_service),
) -> ReplyModel:
    _check_key(x_api_key)
    try:
        reply = await svc.scan(payload.pattern)
    except NoLocalNetwork:
        raise HTTPException(
            status_code=400,
            detail=f"no private network interface found; give a pattern. {SCAN_EXAMPLES}",
        )
    except InvalidTarget:
        raise HTTPException(status_code=400, detail=f"invalid range or not a private network. {SCAN_EXAMPLES}")
    except RangeTooLarge as e:
        raise HTTPException(status_code=400, detail=f"range too large (over {e.limit} addresses), narrow it")
    LOG.info("scan.done", extra={"extra": {"pattern": payload.pattern}})
    return _out(reply)


@app.post("/ping")
async def ping(
    payload: TargetRequestModel,
    x_api_key: str | None = Header(default=None),
    svc: DiagnosticsService = Depends(get_service),
) -> ReplyModel:
    _check_key(x_api_key)
    try:
        return _out(await svc.ping(payload.target))
    except NotAllowed:
        raise HTTPException(status_code=403, detail="target not in status page list")
    except InvalidTarget:
        raise HTTPException(status_code=400, detail="target must be a host name or IPv4 address")


@app.post("/traceroute")
async def traceroute(
    payload: TargetRequestModel,
    x_api_key: str | None = Header(default=None),
    svc: DiagnosticsService = Depends(get_service),
) -> ReplyModel:
    _check_key(x_api_key)
    try:
        return _out(await svc.traceroute(payload.target))
    except NotAllowed:
        raise HTTPException(status_code=403, detail="target not in status page list")
    except InvalidTarget:
        raise HTTPException(status_code=400, detail="target must be a host name or IPv4 address")


@app.get("/status/{name}")
def status(
    name: str,
    x_api_key: str | None = Header(default=None),
    svc: DiagnosticsService = Depends(get_service),
) -> ReplyModel:
    _check_key(x_api_key)
    reply = svc.status(name)
    return _out(reply)
