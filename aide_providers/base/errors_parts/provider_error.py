"""
Structured provider error exception type.

Wraps gateway, identity-provider, and configuration failures with a normalized
`ErrorCode` for consistent handling and structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (always ``"aide"``
            for errors raised by this package).
        model: Optional logical model id associated with the failure.
        retryable: Hint for upstream retry logic (not authoritative). The
            adapter itself never retries.
        status_code: HTTP status code when the failure came from an HTTP call.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str = "aide"
    model: Optional[str] = None
    retryable: bool = False
    status_code: Optional[int] = None
    raw: Optional[Exception] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
