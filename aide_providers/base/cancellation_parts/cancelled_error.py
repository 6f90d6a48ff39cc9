"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of a gateway call or token fetch.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinguishes caller-requested cancellation from transport failures so the
    streaming path can report it as a ``cancelled`` error event.
    """


__all__ = ["CancelledError"]
