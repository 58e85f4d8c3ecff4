# /lanscout/domain/errors.py
from __future__ import annotations


class DiagnosticsError(Exception):
    """Base for errors surfaced to the caller as a rejection with guidance."""


class InvalidTarget(DiagnosticsError):
    def __init__(self, pattern: str) -> None:
        super().__init__(f"invalid or non-private target pattern: {pattern!r}")
        self.pattern = pattern


class NoLocalNetwork(InvalidTarget):
    def __init__(self) -> None:
        super().__init__("")
        self.args = ("no private IPv4 interface found to derive a default range",)


class RangeTooLarge(DiagnosticsError):
    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"range too large: {count} > {limit}")
        self.count = count
        self.limit = limit


class NotAllowed(DiagnosticsError):
    def __init__(self, query: str) -> None:
        super().__init__(f"target not in allowlist: {query!r}")
        self.query = query
