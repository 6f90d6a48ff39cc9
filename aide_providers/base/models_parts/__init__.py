"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`aide_providers.base.models_parts` if needed, while `aide_providers.base.models`
remains the primary stable import path.
"""

from .call_options import CallOptions, ModelSettings, SamplingParams
from .content_part import (
    ContentPart,
    FilePart,
    TextPart,
    ToolCallPart,
    ToolResultOutput,
    ToolResultPart,
)
from .message import Message, Prompt, Role
from .model_info import BackendFamily, ModelInfo
from .result import (
    CallWarning,
    ContentBlock,
    FinishReason,
    InputTokens,
    OutputTokens,
    TextBlock,
    ToolCallBlock,
    UnifiedResult,
    Usage,
)
from .tool import ToolChoice, ToolDefinition

__all__ = [
    "BackendFamily",
    "CallOptions",
    "CallWarning",
    "ContentBlock",
    "ContentPart",
    "FilePart",
    "FinishReason",
    "InputTokens",
    "Message",
    "ModelInfo",
    "ModelSettings",
    "OutputTokens",
    "Prompt",
    "Role",
    "SamplingParams",
    "TextBlock",
    "TextPart",
    "ToolCallBlock",
    "ToolCallPart",
    "ToolChoice",
    "ToolDefinition",
    "ToolResultOutput",
    "ToolResultPart",
    "UnifiedResult",
    "Usage",
]
