# /lanscout/domain/report.py
from __future__ import annotations

from collections.abc import Mapping, Sequence

from lanscout.domain.models import NO_DATA, UNRESOLVED, ProbeResult, ResolvedName

FENCE = "```"


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]], right_align: Sequence[bool]) -> str:
    """Fixed-width table: header row, dash separator, one row per entry.

    Each column is padded to the widest cell observed in it (header included).
    """
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: Sequence[str]) -> str:
        out = []
        for cell, width, right in zip(cells, widths, right_align):
            out.append(cell.rjust(width) if right else cell.ljust(width))
        return "  ".join(out).rstrip()

    sep = "  ".join("-" * w for w in widths)
    return "\n".join([line(headers), sep, *(line(r) for r in rows)])


def _latency(ms: float | None) -> str:
    if ms is None:
        return NO_DATA
    return f"{round(ms)}ms"


def render_scan_table(
    responders: Sequence[ProbeResult],
    names: Mapping[str, ResolvedName],
    max_rows: int = 50,
) -> str:
    rows = []
    for i, res in enumerate(responders[:max_rows], start=1):
        resolved = names.get(res.address)
        name = resolved.name if resolved and resolved.name != UNRESOLVED else NO_DATA
        rows.append([str(i), name, res.address, _latency(res.latency_ms)])

    table = render_table(["#", "Name", "IP", "Latency"], rows, [True, False, False, True])
    extra = len(responders) - max_rows
    if extra > 0:
        table += f"\n+{extra} more"
    return table


def code_block(text: str, max_lines: int = 60) -> str:
    """Wrap text in a fixed-width fence, keeping at most max_lines lines of it."""
    lines = text.splitlines()
    if len(lines) > max_lines:
        lines = lines[:max_lines]
    return FENCE + "\n" + "\n".join(lines) + "\n" + FENCE
