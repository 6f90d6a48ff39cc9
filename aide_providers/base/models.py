"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``aide_providers.base.models_parts`` so callers have a single stable import path.
"""

from .models_parts.call_options import CallOptions, ModelSettings, SamplingParams
from .models_parts.content_part import (
    ContentPart,
    FilePart,
    TextPart,
    ToolCallPart,
    ToolResultOutput,
    ToolResultPart,
)
from .models_parts.message import Message, Prompt, Role, skipped_file_warnings
from .models_parts.model_info import BackendFamily, ModelInfo
from .models_parts.result import (
    CallWarning,
    ContentBlock,
    FinishReason,
    FinishReasonType,
    InputTokens,
    OutputTokens,
    TextBlock,
    ToolCallBlock,
    UnifiedResult,
    Usage,
    WarningType,
)
from .models_parts.tool import ToolChoice, ToolDefinition

__all__ = [
    "BackendFamily",
    "CallOptions",
    "CallWarning",
    "ContentBlock",
    "ContentPart",
    "FilePart",
    "FinishReason",
    "FinishReasonType",
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
    "WarningType",
    "skipped_file_warnings",
]
