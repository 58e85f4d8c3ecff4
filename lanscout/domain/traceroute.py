# /lanscout/domain/traceroute.py
from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from lanscout.domain.models import NO_DATA, TIMEOUT_MARK, HopRecord
from lanscout.domain.report import render_table

LOG = logging.getLogger("domain.traceroute")

_LINE_SPLIT = re.compile(r"\r?\n")

# tracert:  "  2    12 ms    <1 ms     *     10.0.0.1"
_RTT = r"(<?\d+\s*ms|\*)"
_WINDOWS = re.compile(rf"^\s*(\d+)\s+{_RTT}\s+{_RTT}\s+{_RTT}\s+(\S.*?)\s*$")

# traceroute: "  3  host (10.0.0.1)  0.512 ms  * 0.388 ms"
_UNIX = re.compile(r"^\s*(\d+)\s+(.*\S)\s*$")
_ALL_STARS = re.compile(r"^\*(\s+\*)*$")
_PAREN_ADDR = re.compile(r"\((\d{1,3}(?:\.\d{1,3}){3})\)")
_BRACKET_ADDR = re.compile(r"\[([^\]]+)\]")
_DOTTED = re.compile(r"^\d{1,3}(?:\.\d{1,3}){3}$")
_HOSTLIKE = re.compile(r"^[A-Za-z0-9][\w.\-]*$")
_SAMPLE = re.compile(r"\*|(?<![\d.])(\d+(?:\.\d+)?)\s*ms\b")


def _windows_rtt(token: str) -> str:
    if token == TIMEOUT_MARK:
        return TIMEOUT_MARK
    return re.sub(r"\s*ms$", " ms", token)


def _windows_destination(field: str) -> str:
    m = _BRACKET_ADDR.search(field)
    if m:
        return m.group(1)
    tokens = field.split()
    if not tokens:
        return NO_DATA
    return tokens[0] if _DOTTED.match(tokens[0]) else NO_DATA


def _parse_windows(line: str) -> HopRecord | None:
    m = _WINDOWS.match(line)
    if not m:
        return None
    hop = int(m.group(1))
    if hop < 1:
        return None
    t1, t2, t3 = (_windows_rtt(m.group(i)) for i in (2, 3, 4))
    return HopRecord(hop=hop, ip=_windows_destination(m.group(5)), t1=t1, t2=t2, t3=t3)


def _parse_unix(line: str) -> HopRecord | None:
    m = _UNIX.match(line)
    if not m:
        return None
    hop, rest = int(m.group(1)), m.group(2)
    if hop < 1:
        return None
    if _ALL_STARS.match(rest):
        return HopRecord(hop=hop)

    paren = _PAREN_ADDR.search(rest)
    if paren:
        ip = paren.group(1)
    else:
        first = next((t for t in rest.split() if t != TIMEOUT_MARK), "")
        if not _HOSTLIKE.match(first):
            return None
        ip = first

    samples = []
    for sm in _SAMPLE.finditer(rest):
        samples.append(TIMEOUT_MARK if sm.group(0) == TIMEOUT_MARK else f"{sm.group(1)} ms")
    samples = (samples + [TIMEOUT_MARK] * 3)[:3]
    return HopRecord(hop=hop, ip=ip, t1=samples[0], t2=samples[1], t3=samples[2])


def parse_traceroute(raw: str) -> list[HopRecord]:
    """Parse tracert or traceroute text into hop records ordered by hop number."""
    hops: list[HopRecord] = []
    dropped = 0
    for line in _LINE_SPLIT.split(raw or ""):
        if not line.strip():
            continue
        rec = _parse_windows(line) or _parse_unix(line)
        if rec is None:
            dropped += 1
            continue
        hops.append(rec)

    LOG.debug("traceroute.parsed", extra={"extra": {"hops": len(hops), "dropped": dropped}})
    return sorted(hops, key=lambda h: h.hop)


def format_hops(hops: Sequence[HopRecord]) -> str:
    rows = [[str(h.hop), h.ip or NO_DATA, h.t1, h.t2, h.t3] for h in hops]
    return render_table(["Hop", "IP", "T1", "T2", "T3"], rows, [True, False, True, True, True])


def render_traceroute(raw: str, fallback_lines: int = 20) -> str:
    """Table of parsed hops, or the first raw lines verbatim when nothing parsed."""
    hops = parse_traceroute(raw)
    if hops:
        return format_hops(hops)
    lines = _LINE_SPLIT.split(raw or "")[:fallback_lines]
    return "\n".join(lines).strip("\n") or "no output"
