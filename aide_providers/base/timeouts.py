"""Transport timeout configuration.

The adapter imposes no timeout of its own: callers bound a call through the
cancellation token they pass in. Deployments that want a transport-level
ceiling anyway can set ``AIDE_HTTP_TIMEOUT_SECONDS``. The pool in
:mod:`aide_providers.base.http.client` keys clients by this config, so a
changed value takes effect on the next client lookup.

Environment variables (all optional):
    AIDE_HTTP_TIMEOUT_SECONDS
    AIDE_CONNECT_TIMEOUT_SECONDS
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Read/write/pool ceiling for gateway and identity
            requests. ``None`` disables the ceiling.
        connect_timeout_seconds: Ceiling for establishing a connection.
            ``None`` falls back to ``http_timeout_seconds``.
    """

    http_timeout_seconds: Optional[float] = None
    connect_timeout_seconds: Optional[float] = None

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        connect = self.connect_timeout_seconds
        if connect is None:
            connect = self.http_timeout_seconds
        return httpx.Timeout(self.http_timeout_seconds, connect=connect)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: Tuple[str, str] | None = None


def _parse_env_float(name: str) -> float | None:
    """Parse a positive float from the environment, ``None`` when unset/invalid."""
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        val = float(raw)
    except ValueError:
        return None
    return val if val > 0 else None


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached ``TimeoutConfig``.

    The cache is recomputed when the relevant environment variables change so
    tests can adjust them with ``monkeypatch``.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = (
        os.getenv("AIDE_HTTP_TIMEOUT_SECONDS", ""),
        os.getenv("AIDE_CONNECT_TIMEOUT_SECONDS", ""),
    )
    if _CACHED is not None and guard == _ENV_GUARD:
        return _CACHED
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("AIDE_HTTP_TIMEOUT_SECONDS"),
        connect_timeout_seconds=_parse_env_float("AIDE_CONNECT_TIMEOUT_SECONDS"),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
