"""Simulated stream event types.

Each event is a small frozen dataclass tagged by its ``type`` field so callers
can dispatch on ``event.type`` or with ``isinstance``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Tuple, Union

from ..models import FinishReason, Usage


@dataclass(frozen=True)
class StreamStart:
    warnings: Tuple[Dict[str, str], ...] = ()
    type: Literal["stream-start"] = "stream-start"


@dataclass(frozen=True)
class TextStart:
    id: str
    type: Literal["text-start"] = "text-start"


@dataclass(frozen=True)
class TextDelta:
    id: str
    delta: str
    type: Literal["text-delta"] = "text-delta"


@dataclass(frozen=True)
class TextEnd:
    id: str
    type: Literal["text-end"] = "text-end"


@dataclass(frozen=True)
class ToolInputStart:
    id: str
    tool_name: str
    type: Literal["tool-input-start"] = "tool-input-start"


@dataclass(frozen=True)
class ToolInputDelta:
    id: str
    delta: str
    type: Literal["tool-input-delta"] = "tool-input-delta"


@dataclass(frozen=True)
class ToolInputEnd:
    id: str
    type: Literal["tool-input-end"] = "tool-input-end"


@dataclass(frozen=True)
class ToolCallEvent:
    tool_call_id: str
    tool_name: str
    input: str
    type: Literal["tool-call"] = "tool-call"


@dataclass(frozen=True)
class ResponseMetadata:
    """Backend model id and request id of the replayed response."""

    model_id: str
    id: str
    type: Literal["response-metadata"] = "response-metadata"


@dataclass(frozen=True)
class Finish:
    usage: Usage
    finish_reason: FinishReason
    type: Literal["finish"] = "finish"


@dataclass(frozen=True)
class StreamError:
    """In-band failure raised before a result existed.

    ``error`` is the original exception (usually a ``ProviderError``).
    """

    error: BaseException = field(compare=False)
    type: Literal["error"] = "error"

    @property
    def message(self) -> str:
        return getattr(self.error, "message", None) or str(self.error)

    def to_dict(self) -> Dict[str, Any]:
        code = getattr(self.error, "code", None)
        return {"type": self.type, "message": self.message, "code": getattr(code, "value", code)}


StreamEvent = Union[
    StreamStart,
    TextStart,
    TextDelta,
    TextEnd,
    ToolInputStart,
    ToolInputDelta,
    ToolInputEnd,
    ToolCallEvent,
    ResponseMetadata,
    Finish,
    StreamError,
]


__all__ = [
    "Finish",
    "ResponseMetadata",
    "StreamError",
    "StreamEvent",
    "StreamStart",
    "TextDelta",
    "TextEnd",
    "TextStart",
    "ToolCallEvent",
    "ToolInputDelta",
    "ToolInputEnd",
    "ToolInputStart",
]
