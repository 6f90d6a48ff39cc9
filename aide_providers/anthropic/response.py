"""Anthropic-family response parsing.

Validates the ``backend.anthropic`` sub-object of a gateway response with
pydantic and maps it onto a ``UnifiedResult``. Unknown content block types
are skipped; a structurally invalid payload is a malformed-response error.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from ..base.errors import ErrorCode, ProviderError
from ..base.models import (
    ContentBlock,
    FinishReason,
    FinishReasonType,
    InputTokens,
    OutputTokens,
    TextBlock,
    ToolCallBlock,
    UnifiedResult,
    Usage,
)

FINISH_REASONS: Dict[str, FinishReasonType] = {
    "end_turn": "stop",
    "stop_sequence": "stop",
    "max_tokens": "length",
    "tool_use": "tool-calls",
}


class AnthropicContentBlock(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    text: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None
    input: Any = None


class AnthropicUsage(BaseModel):
    model_config = ConfigDict(extra="allow")

    input_tokens: int
    output_tokens: int
    cache_read_input_tokens: Optional[int] = None
    cache_creation_input_tokens: Optional[int] = None


class AnthropicMessagesResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    model: str
    content: List[AnthropicContentBlock]
    stop_reason: Optional[str] = None
    usage: AnthropicUsage


def map_finish_reason(raw: Optional[str]) -> FinishReason:
    return FinishReason(unified=FINISH_REASONS.get(raw or "", "other"), raw=raw)


def map_usage(usage: AnthropicUsage) -> Usage:
    """No-cache input is the total minus cache reads; output has no reasoning split."""
    cache_read = usage.cache_read_input_tokens
    return Usage(
        input_tokens=InputTokens(
            total=usage.input_tokens,
            no_cache=usage.input_tokens - (cache_read or 0),
            cache_read=cache_read,
            cache_write=usage.cache_creation_input_tokens,
        ),
        output_tokens=OutputTokens(total=usage.output_tokens, text=usage.output_tokens, reasoning=None),
    )


def _content(blocks: List[AnthropicContentBlock]) -> List[ContentBlock]:
    out: List[ContentBlock] = []
    for block in blocks:
        if block.type == "text" and block.text is not None:
            out.append(TextBlock(text=block.text))
        elif block.type == "tool_use" and block.id and block.name:
            out.append(
                ToolCallBlock(
                    tool_call_id=block.id,
                    tool_name=block.name,
                    input=json.dumps(block.input if block.input is not None else {}),
                )
            )
    return out


def parse_response(payload: Any, request_id: str) -> UnifiedResult:
    """Parse the ``backend.anthropic`` payload.

    Raises:
        ProviderError: ``MALFORMED_RESPONSE`` when the payload fails validation.
    """
    try:
        resp = AnthropicMessagesResponse.model_validate(payload)
    except ValidationError as exc:
        raise ProviderError(
            code=ErrorCode.MALFORMED_RESPONSE,
            message=f"Invalid Anthropic response in AIDE envelope: {exc.error_count()} validation error(s)",
            raw=exc,
        ) from exc
    return UnifiedResult(
        content=tuple(_content(resp.content)),
        finish_reason=map_finish_reason(resp.stop_reason),
        usage=map_usage(resp.usage),
        backend_model_id=resp.model,
        backend_request_id=request_id,
    )


__all__ = [
    "AnthropicMessagesResponse",
    "FINISH_REASONS",
    "map_finish_reason",
    "map_usage",
    "parse_response",
]
