"""Shared HTTP client pool.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so the gateway adapter and the token fetcher do not allocate a
    connection pool per call. Timeouts derive exclusively from
    :func:`get_timeout_config`, read on every lookup.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose, timeout)``. Purposes keep
      distinct pools for the gateway (``"gateway"``) and the identity provider
      (``"identity"``). A changed ``AIDE_*_TIMEOUT_SECONDS`` value yields a
      fresh client; the superseded one stays open for requests still using it
      until :func:`close_all_clients`.
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import TimeoutConfig, get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str, TimeoutConfig], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional base URL set on the client so callers can issue
            relative requests. ``None`` groups clients under a shared key.
        purpose: Short string discriminating separate pools.

    Returns:
        A reusable ``httpx.Client`` instance.
    """
    config = get_timeout_config()
    key = (base_url, purpose, config)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = config.to_httpx()
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            with contextlib.suppress(httpx.HTTPError, RuntimeError):  # best-effort shutdown
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
