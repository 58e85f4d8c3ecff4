# /lanscout/domain/diagnostics_service.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from lanscout.domain.address_range import AddressRangeParser, is_host_token
from lanscout.domain.allowlist import AllowlistCache
from lanscout.domain.errors import InvalidTarget, NoLocalNetwork, NotAllowed, RangeTooLarge
from lanscout.domain.models import CommandReply, TargetMatch
from lanscout.domain.prober import LivenessProber
from lanscout.domain.report import code_block, render_scan_table
from lanscout.domain.resolver import NameResolver
from lanscout.domain.traceroute import render_traceroute
from lanscout.ports.address_prober import AddressProberPort
from lanscout.ports.hop_tracer import HopTracerPort

LOG = logging.getLogger("domain.diagnostics")

SCAN_EXAMPLES = "Examples: `192.168.1.*`, `192.168.1.0/24`, `192.168.1.10-50`, or no pattern for the local subnet"

# ==== Options ====


@dataclass(slots=True)
class DiagnosticsOptions:
    max_targets: int = 512
    ping_concurrency: int = 64
    ping_timeout: float = 1
    single_ping_timeout: float = 2
    resolve_concurrency: int = 12
    max_rows: int = 50
    message_max_lines: int = 60
    trace_max_hops: int = 15
    trace_fallback_lines: int = 20
    allowlist_only: bool = False


# ==== Service ====


class DiagnosticsService:
    """Application service wiring scan, ping, traceroute and status over injected ports."""

    def __init__(
        self,
        parser: AddressRangeParser,
        prober: AddressProberPort,
        resolver: NameResolver,
        tracer: HopTracerPort,
        allowlist: AllowlistCache,
        *,
        options: DiagnosticsOptions | None = None,
    ) -> None:
        self.parser = parser
        self.prober = prober
        self.sweeper = LivenessProber(prober)
        self.resolver = resolver
        self.tracer = tracer
        self.allowlist = allowlist
        self.options = options or DiagnosticsOptions()

    # --- helpers ---

    def expand_targets(self, pattern: str | None) -> list[str]:
        """Expand pattern, raising InvalidTarget / RangeTooLarge before any probing."""
        targets = self.parser.parse(pattern)
        if not targets:
            if not (pattern or "").strip():
                raise NoLocalNetwork()
            raise InvalidTarget(pattern or "")
        if len(targets) > self.options.max_targets:
            raise RangeTooLarge(len(targets), self.options.max_targets)
        return targets

    def _match(self, query: str) -> TargetMatch:
        match = self.allowlist.resolve_target(query)
        if self.options.allowlist_only and not match.hit:
            raise NotAllowed(query)
        if not is_host_token(match.value):
            raise InvalidTarget(match.value)
        return match

    # --- commands ---

    async def scan(self, pattern: str | None) -> CommandReply:
        targets = self.expand_targets(pattern)
        rounds = math.ceil(len(targets) / max(self.options.ping_concurrency, 1))
        out = CommandReply(reply=[f"Scanning {len(targets)} addresses ... about {rounds} round(s)"])
        LOG.info("scan.start", extra={"extra": {"pattern": pattern, "targets": len(targets)}})

        online = await self.sweeper.probe_all(
            targets,
            concurrency=self.options.ping_concurrency,
            timeout_seconds=self.options.ping_timeout,
        )
        if not online:
            out.broadcast.append("No devices responded.")
            return out

        names = await self.resolver.resolve_all(
            [r.address for r in online], concurrency=self.options.resolve_concurrency
        )
        table = render_scan_table(online, names, max_rows=self.options.max_rows)
        out.broadcast.append(
            f"**Devices online:** {len(online)}\n" + code_block(table, self.options.message_max_lines)
        )
        return out

    async def ping(self, query: str) -> CommandReply:
        query = (query or "").strip()
        if not query:
            return CommandReply(reply=["Usage: ping <name|host>"])
        match = self._match(query)
        try:
            res = await self.prober.probe(match.value, self.options.single_ping_timeout)
        except Exception as e:
            LOG.warning("ping.error", extra={"extra": {"target": match.value, "error": str(e)}})
            return CommandReply(reply=[f"Ping failed: {e}"])

        if res.reachable:
            avg = "-" if res.latency_ms is None else f"{res.latency_ms:g}"
            return CommandReply(reply=[f"{match.name} ({match.value}) responded avg={avg}ms"])
        return CommandReply(reply=[f"{match.name} ({match.value}) did not respond"])

    async def traceroute(self, query: str) -> CommandReply:
        query = (query or "").strip()
        if not query:
            return CommandReply(reply=["Usage: traceroute <name|host>"])
        match = self._match(query)
        out = CommandReply(reply=[f"Tracing route to {match.value} ..."])

        raw = await self.tracer.trace(match.value, self.options.trace_max_hops)
        text = render_traceroute(raw, self.options.trace_fallback_lines)
        out.broadcast.append(code_block(text, self.options.message_max_lines))
        return out

    def status(self, name: str) -> CommandReply:
        name = (name or "").strip()
        if not name:
            return CommandReply(reply=["Usage: status <service-name>"])
        found = self.allowlist.find_by_name(name)
        if found is None:
            return CommandReply(reply=["Name not found in list"])
        return CommandReply(reply=[f"{found.name}: {found.host}"])

    def help(self) -> CommandReply:
        lines = [
            "**Commands**",
            "`status <name>` - show the host mapped from the status page",
            "`ping <name|host>` - ICMP echo",
            f"`traceroute <name|host>` - route ({self.options.trace_max_hops} hops)",
            "`scan [CIDR|x.x.x.*|x.x.x.a-b]` - LAN ping sweep",
        ]
        if self.options.allowlist_only:
            lines.append("_Targets are limited to the status page list_")
        return CommandReply(reply=["\n".join(lines)])
