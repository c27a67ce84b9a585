"""Timeout configuration for the HTTP transport.

The streaming decoder implements no timeout logic: a slow or stalled body
surfaces as whatever the transport raises (``httpx.ReadTimeout``), which the
decoder wraps as ``TransportReadError``. This module only decides the values
handed to ``httpx``.

Supported environment variables (all optional, positive floats):
    OPENAI_HTTP_TIMEOUT_SECONDS          read/write/pool timeout
    OPENAI_HTTP_CONNECT_TIMEOUT_SECONDS  connect timeout

Values are parsed once and cached; the cache refreshes when the variables
change so tests can adjust them with ``monkeypatch``.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Timeout for reads, writes and pool acquisition.
            For streamed responses this bounds the wait for each next chunk.
        connect_timeout_seconds: Timeout for establishing the connection.
    """

    http_timeout_seconds: float = 60.0
    connect_timeout_seconds: float = 10.0

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(
        [
            os.getenv("OPENAI_HTTP_TIMEOUT_SECONDS", ""),
            os.getenv("OPENAI_HTTP_CONNECT_TIMEOUT_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("OPENAI_HTTP_TIMEOUT_SECONDS", defaults.http_timeout_seconds),
        connect_timeout_seconds=_parse_env_float(
            "OPENAI_HTTP_CONNECT_TIMEOUT_SECONDS", defaults.connect_timeout_seconds
        ),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
