"""
Unified generation result.

``UnifiedResult`` is what ``generate`` returns and what the stream simulator
replays: ordered content blocks, a normalized finish reason, usage accounting,
the backend's native model and request ids, and any non-fatal warnings
produced while building the request. The original request and response bodies
ride along for observability and are excluded from ``to_dict``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

FinishReasonType = Literal["stop", "length", "tool-calls", "content-filter", "other"]
WarningType = Literal["unsupported-setting", "other"]


@dataclass(frozen=True)
class TextBlock:
    text: str
    type: Literal["text"] = "text"


@dataclass(frozen=True)
class ToolCallBlock:
    """A tool call issued by the model; ``input`` is the arguments' JSON text."""

    tool_call_id: str
    tool_name: str
    input: str
    type: Literal["tool-call"] = "tool-call"


ContentBlock = Union[TextBlock, ToolCallBlock]


@dataclass(frozen=True)
class FinishReason:
    unified: FinishReasonType
    raw: Optional[str] = None


@dataclass(frozen=True)
class InputTokens:
    total: int
    no_cache: int
    cache_read: Optional[int] = None
    cache_write: Optional[int] = None


@dataclass(frozen=True)
class OutputTokens:
    total: int
    text: int
    reasoning: Optional[int] = None


@dataclass(frozen=True)
class Usage:
    input_tokens: InputTokens
    output_tokens: OutputTokens

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_tokens": {
                "total": self.input_tokens.total,
                "no_cache": self.input_tokens.no_cache,
                "cache_read": self.input_tokens.cache_read,
                "cache_write": self.input_tokens.cache_write,
            },
            "output_tokens": {
                "total": self.output_tokens.total,
                "text": self.output_tokens.text,
                "reasoning": self.output_tokens.reasoning,
            },
        }


@dataclass(frozen=True)
class CallWarning:
    """Non-fatal issue found while building a request.

    Attributes:
        type: ``unsupported-setting`` when a sampling parameter was dropped,
            ``other`` for anything else.
        message: Human-readable description naming the setting.
        setting: Name of the dropped setting, when applicable.
    """

    type: WarningType
    message: str
    setting: Optional[str] = None

    def to_public(self) -> Dict[str, str]:
        """Translate to the caller-facing warning shape."""
        if self.type == "unsupported-setting":
            return {"type": "unsupported", "feature": self.message}
        return {"type": "other", "message": self.message}


@dataclass(frozen=True)
class UnifiedResult:
    content: Tuple[ContentBlock, ...]
    finish_reason: FinishReason
    usage: Usage
    backend_model_id: str
    backend_request_id: str
    warnings: Tuple[CallWarning, ...] = ()
    request_body: Optional[Dict[str, Any]] = field(default=None, compare=False, repr=False)
    response_body: Optional[Dict[str, Any]] = field(default=None, compare=False, repr=False)

    @property
    def text(self) -> str:
        return "".join(b.text for b in self.content if isinstance(b, TextBlock))

    @property
    def tool_calls(self) -> List[ToolCallBlock]:
        return [b for b in self.content if isinstance(b, ToolCallBlock)]

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view without request/response bodies."""
        content: List[Dict[str, Any]] = []
        for block in self.content:
            if isinstance(block, TextBlock):
                content.append({"type": "text", "text": block.text})
            else:
                content.append(
                    {
                        "type": "tool-call",
                        "tool_call_id": block.tool_call_id,
                        "tool_name": block.tool_name,
                        "input": block.input,
                    }
                )
        return {
            "content": content,
            "finish_reason": {"unified": self.finish_reason.unified, "raw": self.finish_reason.raw},
            "usage": self.usage.to_dict(),
            "backend_model_id": self.backend_model_id,
            "backend_request_id": self.backend_request_id,
            "warnings": [w.to_public() for w in self.warnings],
        }


__all__ = [
    "CallWarning",
    "ContentBlock",
    "FinishReason",
    "FinishReasonType",
    "InputTokens",
    "OutputTokens",
    "TextBlock",
    "ToolCallBlock",
    "UnifiedResult",
    "Usage",
    "WarningType",
]
