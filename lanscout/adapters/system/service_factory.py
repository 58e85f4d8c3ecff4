# /lanscout/adapters/system/service_factory.py
from __future__ import annotations

import logging

from lanscout.adapters.discovery.zeroconf_browser import ZeroconfBrowser
from lanscout.adapters.http.aiohttp_status_source import AiohttpStatusSource
from lanscout.adapters.system.interfaces import PsutilInterfaceLister
from lanscout.adapters.system.platform_tools import build_toolset
from lanscout.adapters.system.subprocess_runner import AsyncSubprocessRunner
from lanscout.config import Settings, settings
from lanscout.domain.address_range import AddressRangeParser
from lanscout.domain.allowlist import AllowlistCache
from lanscout.domain.diagnostics_service import DiagnosticsOptions, DiagnosticsService
from lanscout.domain.resolver import NameResolver

LOG = logging.getLogger("adapter.service_factory")


def options_from(cfg: Settings) -> DiagnosticsOptions:
    return DiagnosticsOptions(
        max_targets=cfg.MAX_TARGETS,
        ping_concurrency=cfg.PING_CONCURRENCY,
        ping_timeout=cfg.PING_TIMEOUT_SECONDS,
        single_ping_timeout=cfg.SINGLE_PING_TIMEOUT_SECONDS,
        resolve_concurrency=cfg.RESOLVE_CONCURRENCY,
        max_rows=cfg.MAX_ROWS,
        message_max_lines=cfg.MESSAGE_MAX_LINES,
        trace_max_hops=cfg.TRACE_MAX_HOPS,
        trace_fallback_lines=cfg.TRACE_FALLBACK_LINES,
        allowlist_only=cfg.ALLOWLIST_ONLY,
    )


def build_service(cfg: Settings = settings) -> DiagnosticsService:
    """Wire the real adapters for the running platform."""
    runner = AsyncSubprocessRunner()
    tools = build_toolset(runner, cfg)

    source = None
    if cfg.STATUS_JSON_URL:
        source = AiohttpStatusSource(
            cfg.STATUS_JSON_URL,
            timeout_seconds=cfg.HTTP_TIMEOUT_SECONDS,
            retries=cfg.RETRIES,
            backoff_ms=cfg.RETRY_BACKOFF_MS,
        )

    resolver = NameResolver(
        tools.strategies,
        ZeroconfBrowser(),
        enabled=cfg.RESOLVE_NAMES,
        multicast_enabled=cfg.ENABLE_MDNS,
        multicast_window=cfg.MDNS_WINDOW_SECONDS,
    )
    LOG.info(
        "service.built",
        extra={"extra": {"resolve_names": cfg.RESOLVE_NAMES, "mdns": cfg.ENABLE_MDNS, "allowlist": bool(source)}},
    )
    return DiagnosticsService(
        parser=AddressRangeParser(PsutilInterfaceLister(), max_size=cfg.MAX_TARGETS),
        prober=tools.prober,
        resolver=resolver,
        tracer=tools.tracer,
        allowlist=AllowlistCache(source),
        options=options_from(cfg),
    )
