# /lanscout/domain/address_range.py
from __future__ import annotations

import logging
import re
from ipaddress import IPv4Address, IPv4Network, ip_network

from lanscout.ports.interface_lister import InterfaceListerPort

LOG = logging.getLogger("domain.address_range")

MAX_RANGE_SIZE = 512

_PRIVATE_NETS = (
    ip_network("10.0.0.0/8"),
    ip_network("172.16.0.0/12"),
    ip_network("192.168.0.0/16"),
)

_OCTET = r"(25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)"
_BASE3 = rf"({_OCTET}\.{_OCTET}\.{_OCTET})"

_WILDCARD = re.compile(rf"^{_BASE3}\.\*$")
_DASH = re.compile(rf"^{_BASE3}\.(\d{{1,3}})-(\d{{1,3}})$")
_CIDR = re.compile(rf"^({_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET})/(\d{{1,2}})$")
_LITERAL = re.compile(rf"^{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}$")
_HOST_TOKEN = re.compile(r"^[A-Za-z0-9][\w.\-]*$")


def is_host_token(text: str) -> bool:
    """Hostname or dotted address safe to pass as a tool argument (never an option)."""
    return bool(_HOST_TOKEN.match(text or ""))


def is_private_ipv4(text: str) -> bool:
    """True only for dotted-quad RFC1918 addresses (10/8, 172.16/12, 192.168/16)."""
    if not _LITERAL.match(text or ""):
        return False
    addr = IPv4Address(text)
    return any(addr in net for net in _PRIVATE_NETS)


def _host_span(base: str, start: int = 1, end: int = 254) -> list[str]:
    return [f"{base}.{i}" for i in range(start, end + 1)]


class AddressRangeParser:
    """Expands a target pattern into an ordered list of private IPv4 addresses.

    Precedence is CIDR, wildcard, dash range, then single literal. Any input that
    matches no rule, or that falls outside private space, yields an empty list.
    """

    def __init__(self, interfaces: InterfaceListerPort, *, max_size: int = MAX_RANGE_SIZE) -> None:
        self.interfaces = interfaces
        self.max_size = max_size

    def parse(self, pattern: str | None) -> list[str]:
        s = (pattern or "").strip()
        if not s:
            return self.local_subnet()

        for rule in (self._cidr, self._wildcard, self._dash):
            hosts = rule(s)
            if hosts is not None:
                return hosts

        if is_private_ipv4(s):
            return [s]
        return []

    def local_subnet(self) -> list[str]:
        for addr in self.interfaces.ipv4_addresses():
            if is_private_ipv4(addr):
                base = addr.rsplit(".", 1)[0]
                LOG.info("local subnet detected", extra={"extra": {"address": addr, "base": base}})
                return _host_span(base)
        LOG.warning("no private IPv4 interface found")
        return []

    # --- individual forms; None means "pattern is not of this form" ---

    def _wildcard(self, s: str) -> list[str] | None:
        m = _WILDCARD.match(s)
        if not m:
            return None
        base = m.group(1)
        if not is_private_ipv4(f"{base}.1"):
            return []
        return _host_span(base)

    def _dash(self, s: str) -> list[str] | None:
        m = _DASH.match(s)
        if not m:
            return None
        base = m.group(1)
        start, end = int(m.group(5)), int(m.group(6))
        if start < 1 or end > 254 or end < start:
            return []
        if not is_private_ipv4(f"{base}.1"):
            return []
        return _host_span(base, start, end)

    def _cidr(self, s: str) -> list[str] | None:
        m = _CIDR.match(s)
        if not m:
            return None
        ip, mask = m.group(1), int(m.group(6))
        if mask < 24 or mask > 32:
            return []
        if not is_private_ipv4(ip):
            return []

        net = IPv4Network(f"{ip}/{mask}", strict=False)
        if net.num_addresses > self.max_size:
            return []

        # strictly between network and broadcast, so /31 and /32 yield nothing
        first = int(net.network_address) + 1
        last = int(net.broadcast_address) - 1
        hosts = [str(IPv4Address(n)) for n in range(first, last + 1)]
        return [h for h in hosts if is_private_ipv4(h)]
