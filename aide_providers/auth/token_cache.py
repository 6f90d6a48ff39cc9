"""
Single-flight bearer token cache.

Holds one ``(token, expires_at)`` pair. ``get_token`` returns the cached value
while ``now < expires_at`` without touching the network; otherwise exactly one
caller performs the fetch while concurrent callers wait for and share its
outcome. ``expires_at`` is ``now + expires_in - buffer`` (buffer 5 minutes).

Thread-safety:
    All state transitions happen under ``self._lock``. The fetch itself runs
    outside the lock; waiters block on a per-flight ``threading.Event``.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Tuple

from ..base.cancellation import CancellationToken
from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, get_logger, log_event
from ..config.defaults import TOKEN_EXPIRY_BUFFER_SECONDS
from ..config.settings import AzureCredentials
from .azure import TokenGrant, azure_fetcher

_logger = get_logger("aide.auth")

# Waiters re-check cancellation at this interval while another thread fetches.
_WAIT_POLL_SECONDS = 0.05


@dataclass(frozen=True)
class CachedToken:
    token: str
    expires_at: float


class _Flight:
    """One in-progress fetch shared by every caller that arrives during it."""

    def __init__(self) -> None:
        self.done = threading.Event()
        self.token: Optional[str] = None
        self.error: Optional[BaseException] = None


class TokenCache:
    """Cache a bearer token obtained from ``fetcher``.

    Parameters:
        fetcher: Callable performing one token grant.
        clock: Wall-clock source in seconds (injectable for tests).
        buffer_seconds: Safety margin subtracted from the server lifetime.
    """

    def __init__(
        self,
        fetcher: Callable[[], TokenGrant],
        *,
        clock: Callable[[], float] = time.time,
        buffer_seconds: float = TOKEN_EXPIRY_BUFFER_SECONDS,
    ) -> None:
        self._fetcher = fetcher
        self._clock = clock
        self._buffer = buffer_seconds
        self._lock = threading.Lock()
        self._cached: Optional[CachedToken] = None
        self._flight: Optional[_Flight] = None

    def _valid(self, cached: Optional[CachedToken]) -> bool:
        return cached is not None and self._clock() < cached.expires_at

    def get_token(self, cancellation_token: Optional[CancellationToken] = None) -> str:
        """Return a valid bearer token, fetching at most once per expiry window.

        Raises:
            CancelledError: When ``cancellation_token`` is cancelled before a
                token is available.
            ProviderError: Propagated from the fetcher; every caller waiting
                on the same flight receives the same error.
        """
        if cancellation_token is not None:
            cancellation_token.raise_if_cancelled()
        with self._lock:
            if self._valid(self._cached):
                log_event(_logger, "token.cache_hit", LogContext(provider="aide"))
                return self._cached.token  # type: ignore[union-attr]
            flight = self._flight
            leader = flight is None
            if leader:
                flight = self._flight = _Flight()

        if not leader:
            return self._wait(flight, cancellation_token)  # type: ignore[arg-type]

        try:
            grant = self._fetcher()
        except BaseException as exc:
            flight.error = exc  # type: ignore[union-attr]
            with self._lock:
                self._flight = None
            flight.done.set()  # type: ignore[union-attr]
            raise
        cached = CachedToken(
            token=grant.access_token,
            expires_at=self._clock() + grant.expires_in - self._buffer,
        )
        with self._lock:
            self._cached = cached
            self._flight = None
        flight.token = cached.token  # type: ignore[union-attr]
        flight.done.set()  # type: ignore[union-attr]
        return cached.token

    def _wait(self, flight: _Flight, cancellation_token: Optional[CancellationToken]) -> str:
        while not flight.done.wait(_WAIT_POLL_SECONDS):
            if cancellation_token is not None:
                cancellation_token.raise_if_cancelled()
        if flight.error is not None:
            raise flight.error
        if flight.token is None:
            raise ProviderError(code=ErrorCode.INTERNAL, message="token flight finished without a token")
        return flight.token

    __call__ = get_token

    def clear(self) -> None:
        """Drop the cached token so the next call fetches a fresh one."""
        with self._lock:
            self._cached = None

    def expiry_info(self) -> Dict[str, object]:
        """Return ``{has_token, expires_at, is_valid}`` for diagnostics."""
        with self._lock:
            cached = self._cached
        return {
            "has_token": cached is not None,
            "expires_at": (
                datetime.fromtimestamp(cached.expires_at, tz=timezone.utc) if cached is not None else None
            ),
            "is_valid": self._valid(cached),
        }


_SHARED: Dict[Tuple[Optional[str], ...], TokenCache] = {}
_SHARED_LOCK = threading.Lock()


def _cache_key(creds: Optional[AzureCredentials]) -> Tuple[Optional[str], ...]:
    if creds is None:
        return ("env",)
    return (creds.authority_host, creds.tenant_id, creds.client_id, creds.scope)


def shared_token_cache(creds: Optional[AzureCredentials] = None) -> TokenCache:
    """Process-wide cache for one credential set.

    Providers that do not inject their own cache share one per
    ``(authority, tenant, client, scope)``. ``None`` binds to the
    ``AIDE_AZURE_*`` environment at fetch time.
    """
    key = _cache_key(creds)
    with _SHARED_LOCK:
        cache = _SHARED.get(key)
        if cache is None:
            cache = _SHARED[key] = TokenCache(azure_fetcher(creds))
        return cache


def default_token_cache() -> TokenCache:
    return shared_token_cache(None)


def clear_token_cache() -> None:
    """Clear every shared cache."""
    with _SHARED_LOCK:
        caches = list(_SHARED.values())
    for cache in caches:
        cache.clear()


__all__ = [
    "CachedToken",
    "TokenCache",
    "clear_token_cache",
    "default_token_cache",
    "shared_token_cache",
]
