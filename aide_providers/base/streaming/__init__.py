"""Streaming package for the AIDE provider.

Exposes the simulated stream event types, the simulator state machine, and
helpers under a single namespace.
"""

from .accumulate import AccumulatedStream, accumulate_events
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
from .simulator import Phase, StreamSimulator, error_stream, expected_event_count, simulate_stream
from .text_chunks import split_into_words

__all__ = [
    "AccumulatedStream",
    "Finish",
    "Phase",
    "ResponseMetadata",
    "StreamError",
    "StreamEvent",
    "StreamSimulator",
    "StreamStart",
    "TextDelta",
    "TextEnd",
    "TextStart",
    "ToolCallEvent",
    "ToolInputDelta",
    "ToolInputEnd",
    "ToolInputStart",
    "accumulate_events",
    "error_stream",
    "expected_event_count",
    "simulate_stream",
    "split_into_words",
]
