"""
Replay a materialized ``UnifiedResult`` as a pull-driven event stream.

The gateway only answers whole responses, so streaming callers get a
deterministic sequence manufactured from the final result:

``stream-start -> [text-start, text-delta*, text-end] -> (tool-input-start,
tool-input-delta, tool-input-end, tool-call)* -> response-metadata -> finish``

``StreamSimulator`` is an explicit state machine driven by ``__next__``; it
performs no I/O and emits exactly one event per pull. The number of events is
``1 + (2 + chunks if text else 0) + 4 * tool_calls + 2``.
"""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Deque, Iterator, List

from ..models import UnifiedResult
from .events import (
    Finish,
    ResponseMetadata,
    StreamError,
    StreamEvent,
    StreamStart,
    TextDelta,
    TextEnd,
    TextStart,
    ToolCallEvent,
    ToolInputDelta,
    ToolInputEnd,
    ToolInputStart,
)
from .text_chunks import split_into_words


class Phase(str, Enum):
    START = "start"
    TEXT_START = "text-start"
    TEXT_DELTA = "text-delta"
    TEXT_END = "text-end"
    TOOLS = "tools"
    METADATA = "metadata"
    FINISH = "finish"
    DONE = "done"


class StreamSimulator(Iterator[StreamEvent]):
    """Single-use iterator over the simulated events of one result."""

    def __init__(self, result: UnifiedResult) -> None:
        self._result = result
        self._text = result.text
        self._text_id = f"text-{result.backend_request_id}"
        self._chunks: List[str] = split_into_words(self._text)
        self._chunk_index = 0
        self._tool_calls = result.tool_calls
        self._tool_index = 0
        self._pending: Deque[StreamEvent] = deque()
        self._phase = Phase.START

    @property
    def phase(self) -> Phase:
        return self._phase

    def __iter__(self) -> "StreamSimulator":
        return self

    def __next__(self) -> StreamEvent:
        if self._pending:
            return self._pending.popleft()
        if self._phase is Phase.START:
            self._phase = self._after_start()
            return StreamStart(warnings=tuple(w.to_public() for w in self._result.warnings))
        if self._phase is Phase.TEXT_START:
            self._phase = Phase.TEXT_DELTA if self._chunks else Phase.TEXT_END
            return TextStart(id=self._text_id)
        if self._phase is Phase.TEXT_DELTA:
            chunk = self._chunks[self._chunk_index]
            self._chunk_index += 1
            if self._chunk_index >= len(self._chunks):
                self._phase = Phase.TEXT_END
            return TextDelta(id=self._text_id, delta=chunk)
        if self._phase is Phase.TEXT_END:
            self._phase = Phase.TOOLS if self._tool_calls else Phase.METADATA
            return TextEnd(id=self._text_id)
        if self._phase is Phase.TOOLS:
            call = self._tool_calls[self._tool_index]
            self._tool_index += 1
            if self._tool_index >= len(self._tool_calls):
                self._phase = Phase.METADATA
            self._pending.extend(
                (
                    ToolInputDelta(id=call.tool_call_id, delta=call.input),
                    ToolInputEnd(id=call.tool_call_id),
                    ToolCallEvent(tool_call_id=call.tool_call_id, tool_name=call.tool_name, input=call.input),
                )
            )
            return ToolInputStart(id=call.tool_call_id, tool_name=call.tool_name)
        if self._phase is Phase.METADATA:
            self._phase = Phase.FINISH
            return ResponseMetadata(
                model_id=self._result.backend_model_id,
                id=self._result.backend_request_id,
            )
        if self._phase is Phase.FINISH:
            self._phase = Phase.DONE
            return Finish(usage=self._result.usage, finish_reason=self._result.finish_reason)
        raise StopIteration

    def _after_start(self) -> Phase:
        if self._text:
            return Phase.TEXT_START
        if self._tool_calls:
            return Phase.TOOLS
        return Phase.METADATA


def simulate_stream(result: UnifiedResult) -> StreamSimulator:
    return StreamSimulator(result)


def error_stream(error: BaseException) -> Iterator[StreamEvent]:
    """Two-event stream reporting a failure that happened before any result."""
    yield StreamStart(warnings=())
    yield StreamError(error=error)


def expected_event_count(result: UnifiedResult) -> int:
    text = result.text
    text_events = 2 + len(split_into_words(text)) if text else 0
    return 1 + text_events + 4 * len(result.tool_calls) + 2


__all__ = [
    "Phase",
    "StreamSimulator",
    "error_stream",
    "expected_event_count",
    "simulate_stream",
]
