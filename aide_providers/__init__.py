"""aide_providers package

Adapter exposing a uniform ``generate`` / ``stream`` contract for models served
through the AIDE LLM gateway, which fronts Anthropic-style and OpenAI-style
backends behind one synchronous HTTP endpoint.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`, :class:`CancelledError`
    - Factory: :func:`create_aide`, :func:`aide`, :class:`AideProvider`
    - Models: :class:`Message`, :class:`CallOptions`, :class:`UnifiedResult`, ...

Example::

    from aide_providers import CallOptions, Message, create_aide

    provider = create_aide({"base_url": "...", "use_case_id": "...", "solma_id": "..."})
    model = provider.language_model("claude-sonnet-4.5")
    result = model.generate(CallOptions(prompt=[Message.user("Hi")]))
"""

from .auth import TokenCache
from .base.cancellation import CancellationToken, CancelledError
from .base.errors import ErrorCode, ProviderError
from .base.models import (
    BackendFamily,
    CallOptions,
    FilePart,
    Message,
    ModelInfo,
    ModelSettings,
    TextPart,
    ToolCallPart,
    ToolChoice,
    ToolDefinition,
    ToolResultOutput,
    ToolResultPart,
    UnifiedResult,
)
from .base.streaming import accumulate_events
from .config import AideProviderSettings, AzureCredentials, PolicyOptions
from .gateway import (
    AideLanguageModel,
    AideProvider,
    aide,
    create_aide,
    get_aide_model_display_names,
    get_aide_model_ids,
    is_aide_model,
)

__version__ = "0.1.0"

__all__ = [
    "AideLanguageModel",
    "AideProvider",
    "AideProviderSettings",
    "AzureCredentials",
    "BackendFamily",
    "CallOptions",
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "FilePart",
    "Message",
    "ModelInfo",
    "ModelSettings",
    "PolicyOptions",
    "ProviderError",
    "TextPart",
    "TokenCache",
    "ToolCallPart",
    "ToolChoice",
    "ToolDefinition",
    "ToolResultOutput",
    "ToolResultPart",
    "UnifiedResult",
    "__version__",
    "accumulate_events",
    "aide",
    "create_aide",
    "get_aide_model_display_names",
    "get_aide_model_ids",
    "is_aide_model",
]
