# /lanscout/config.py
from __future__ import annotations

import os

from pydantic import BaseModel


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings(BaseModel):
    API_KEY: str | None = os.getenv("API_KEY")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Name resolution switches
    RESOLVE_NAMES: bool = _flag("RESOLVE_NAMES", "true")
    ENABLE_MDNS: bool = _flag("ENABLE_MDNS", "true")

    # Sweep / limits
    PING_CONCURRENCY: int = int(os.getenv("PING_CONCURRENCY", "64"))
    PING_TIMEOUT_SECONDS: float = float(os.getenv("PING_TIMEOUT_SECONDS", "1"))
    PING_COUNT: int = int(os.getenv("PING_COUNT", "3"))  # echo attempts per host
    SINGLE_PING_TIMEOUT_SECONDS: float = float(os.getenv("SINGLE_PING_TIMEOUT_SECONDS", "2"))
    MAX_TARGETS: int = int(os.getenv("MAX_TARGETS", "512"))

    # Resolver
    RESOLVE_CONCURRENCY: int = int(os.getenv("RESOLVE_CONCURRENCY", "12"))
    MDNS_WINDOW_SECONDS: float = float(os.getenv("MDNS_WINDOW_SECONDS", "4.0"))
    TOOL_TIMEOUT_SECONDS: float = float(os.getenv("TOOL_TIMEOUT_SECONDS", "5.0"))
    DNS_TIMEOUT_SECONDS: float = float(os.getenv("DNS_TIMEOUT_SECONDS", "3.0"))

    # Traceroute
    TRACE_MAX_HOPS: int = int(os.getenv("TRACE_MAX_HOPS", "15"))
    TRACE_TIMEOUT_SECONDS: float = float(os.getenv("TRACE_TIMEOUT_SECONDS", "45"))
    TRACE_FALLBACK_LINES: int = int(os.getenv("TRACE_FALLBACK_LINES", "20"))

    # Output
    MAX_ROWS: int = int(os.getenv("MAX_ROWS", "50"))
    MESSAGE_MAX_LINES: int = int(os.getenv("MESSAGE_MAX_LINES", "60"))

    # Status page allowlist
    STATUS_JSON_URL: str | None = os.getenv("STATUS_JSON_URL")
    ALLOWLIST_ONLY: bool = _flag("ALLOWLIST_ONLY", "false")
    ALLOWLIST_REFRESH_SECONDS: float = float(os.getenv("ALLOWLIST_REFRESH_SECONDS", "60"))
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10.0"))
    RETRIES: int = int(os.getenv("RETRIES", "1"))
    RETRY_BACKOFF_MS: int = int(os.getenv("RETRY_BACKOFF_MS", "250"))


settings = Settings()
