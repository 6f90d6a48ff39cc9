"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` is the caller-supplied cancellation signal propagated
into token fetches and gateway calls; ``CancelledError`` is raised by
operations that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
