"""
AIDE Provider Base Package

Exports the provider-agnostic pieces used by the gateway adapter:

- Models (DTOs): prompts, tools, call options, unified results
- Registry: logical model ids and their backend metadata
- Errors: the ``ProviderError`` taxonomy
- Streaming: simulated stream events and the simulator
"""

from .cancellation import CancellationToken, CancelledError
from .errors import ErrorCode, ProviderError
from .model_registry import AIDE_MODELS, lookup_model
from .models import (
    BackendFamily,
    CallOptions,
    Message,
    ModelInfo,
    ModelSettings,
    UnifiedResult,
)

__all__ = [
    "AIDE_MODELS",
    "BackendFamily",
    "CallOptions",
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "Message",
    "ModelInfo",
    "ModelSettings",
    "ProviderError",
    "UnifiedResult",
    "lookup_model",
]
