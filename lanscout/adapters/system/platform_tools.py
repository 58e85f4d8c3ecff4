# /lanscout/adapters/system/platform_tools.py
from __future__ import annotations

import logging
import platform
from dataclasses import dataclass, field

from lanscout.adapters.naming.dns_ptr import DnsPtrStrategy
from lanscout.adapters.naming.netbios import NetbiosStrategy
from lanscout.adapters.naming.probe_echo import ProbeEchoReverseStrategy
from lanscout.adapters.naming.scanner_dns import ScannerReverseDnsStrategy
from lanscout.adapters.system.ping_prober import PingProber
from lanscout.adapters.system.trace_runner import TracerouteRunner
from lanscout.config import Settings
from lanscout.ports.command_runner import CommandRunnerPort
from lanscout.ports.name_strategy import NameStrategyPort

LOG = logging.getLogger("adapter.platform")


@dataclass(slots=True)
class Toolset:
    """Per-platform external tool adapters, chosen once at startup."""

    system: str
    prober: PingProber
    tracer: TracerouteRunner
    strategies: list[NameStrategyPort] = field(default_factory=list)


def build_toolset(runner: CommandRunnerPort, cfg: Settings, system: str | None = None) -> Toolset:
    system = (system or platform.system()).lower()
    tool_timeout = cfg.TOOL_TIMEOUT_SECONDS

    # priority order: echo banner, NetBIOS, scanner rDNS, PTR
    strategies: list[NameStrategyPort] = []
    if system == "windows":
        strategies.append(ProbeEchoReverseStrategy(runner, timeout_seconds=tool_timeout))
    strategies.append(NetbiosStrategy(runner, system, timeout_seconds=tool_timeout))
    strategies.append(ScannerReverseDnsStrategy(runner, timeout_seconds=tool_timeout))
    strategies.append(DnsPtrStrategy(timeout_seconds=cfg.DNS_TIMEOUT_SECONDS))

    LOG.info(
        "toolset.selected",
        extra={"extra": {"system": system, "strategies": [s.name for s in strategies]}},
    )
    return Toolset(
        system=system,
        prober=PingProber(runner, system, count=cfg.PING_COUNT),
        tracer=TracerouteRunner(runner, system, timeout_seconds=cfg.TRACE_TIMEOUT_SECONDS),
        strategies=strategies,
    )
