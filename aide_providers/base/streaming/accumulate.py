"""Fold a simulated event stream back into a summary.

Used by the CLI and tests to consume a stream without hand-written dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..models import FinishReason, ToolCallBlock, Usage
from .events import (
    Finish,
    ResponseMetadata,
    StreamError,
    StreamEvent,
    StreamStart,
    TextDelta,
    ToolCallEvent,
)


@dataclass
class AccumulatedStream:
    text: str = ""
    tool_calls: List[ToolCallBlock] = field(default_factory=list)
    warnings: List[Dict[str, str]] = field(default_factory=list)
    finish_reason: Optional[FinishReason] = None
    usage: Optional[Usage] = None
    model_id: Optional[str] = None
    request_id: Optional[str] = None
    error: Optional[BaseException] = None
    event_count: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and self.finish_reason is not None


def accumulate_events(events: Iterable[StreamEvent]) -> AccumulatedStream:
    """Consume ``events`` and return the accumulated text, tool calls and metadata."""
    acc = AccumulatedStream()
    text_parts: List[str] = []
    for evt in events:
        acc.event_count += 1
        if isinstance(evt, StreamStart):
            acc.warnings.extend(evt.warnings)
        elif isinstance(evt, TextDelta):
            text_parts.append(evt.delta)
        elif isinstance(evt, ToolCallEvent):
            acc.tool_calls.append(
                ToolCallBlock(tool_call_id=evt.tool_call_id, tool_name=evt.tool_name, input=evt.input)
            )
        elif isinstance(evt, ResponseMetadata):
            acc.model_id = evt.model_id
            acc.request_id = evt.id
        elif isinstance(evt, Finish):
            acc.finish_reason = evt.finish_reason
            acc.usage = evt.usage
        elif isinstance(evt, StreamError):
            acc.error = evt.error
    acc.text = "".join(text_parts)
    return acc


__all__ = ["AccumulatedStream", "accumulate_events"]
