"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `aide_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError
from .classification import classify_exception, code_for_status

__all__ = ["ErrorCode", "RETRYABLE_CODES", "ProviderError", "classify_exception", "code_for_status"]
