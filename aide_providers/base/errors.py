"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``aide_providers.base.errors_parts`` to keep a stable import path.
"""

from __future__ import annotations

from .errors_parts.error_code import ErrorCode, RETRYABLE_CODES
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, code_for_status


def configuration_error(message: str, *, model: str | None = None) -> ProviderError:
    """Build a ``CONFIGURATION`` error (raised synchronously at construction)."""
    return ProviderError(code=ErrorCode.CONFIGURATION, message=message, model=model)


def wrap_exception(exc: Exception, prefix: str, *, model: str | None = None) -> ProviderError:
    """Wrap a transport exception into a classified ``ProviderError``."""
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    return ProviderError(
        code=code,
        message=f"{prefix}: {exc}",
        model=model,
        retryable=code in RETRYABLE_CODES,
        raw=exc,
    )


__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "classify_exception",
    "code_for_status",
    "configuration_error",
    "wrap_exception",
]
