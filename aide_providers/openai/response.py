"""OpenAI-family response parsing.

Validates the ``backend.openai`` sub-object (a Chat Completions response) with
pydantic and maps its first choice onto a ``UnifiedResult``.
"""

from __future__ import annotations

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
    "stop": "stop",
    "length": "length",
    "content_filter": "content-filter",
    "tool_calls": "tool-calls",
}


class _Model(BaseModel):
    model_config = ConfigDict(extra="allow")


class FunctionCall(_Model):
    name: str
    arguments: str = ""


class ToolCall(_Model):
    id: str
    type: str = "function"
    function: FunctionCall


class ChoiceMessage(_Model):
    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class Choice(_Model):
    index: int = 0
    message: ChoiceMessage
    finish_reason: Optional[str] = None


class PromptTokensDetails(_Model):
    cached_tokens: Optional[int] = None


class CompletionTokensDetails(_Model):
    reasoning_tokens: Optional[int] = None


class CompletionUsage(_Model):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: Optional[int] = None
    prompt_tokens_details: Optional[PromptTokensDetails] = None
    completion_tokens_details: Optional[CompletionTokensDetails] = None


class ChatCompletionsResponse(_Model):
    id: Optional[str] = None
    model: str
    choices: List[Choice]
    usage: CompletionUsage


def map_finish_reason(raw: Optional[str]) -> FinishReason:
    return FinishReason(unified=FINISH_REASONS.get(raw or "", "other"), raw=raw)


def map_usage(usage: CompletionUsage) -> Usage:
    """Split cached prompt tokens and reasoning completion tokens out of the totals."""
    cached = usage.prompt_tokens_details.cached_tokens if usage.prompt_tokens_details else None
    reasoning = usage.completion_tokens_details.reasoning_tokens if usage.completion_tokens_details else None
    return Usage(
        input_tokens=InputTokens(
            total=usage.prompt_tokens,
            no_cache=usage.prompt_tokens - (cached or 0),
            cache_read=cached,
            cache_write=None,
        ),
        output_tokens=OutputTokens(
            total=usage.completion_tokens,
            text=usage.completion_tokens - (reasoning or 0),
            reasoning=reasoning,
        ),
    )


def _malformed(message: str, raw: Any = None) -> ProviderError:
    return ProviderError(code=ErrorCode.MALFORMED_RESPONSE, message=message, raw=raw)


def parse_response(payload: Any, request_id: str) -> UnifiedResult:
    """Parse the ``backend.openai`` payload (first choice only).

    Raises:
        ProviderError: ``MALFORMED_RESPONSE`` when the payload fails validation
            or carries no choices.
    """
    try:
        resp = ChatCompletionsResponse.model_validate(payload)
    except ValidationError as exc:
        raise _malformed(
            f"Invalid OpenAI response in AIDE envelope: {exc.error_count()} validation error(s)", exc
        ) from exc
    if not resp.choices:
        raise _malformed("Invalid OpenAI response in AIDE envelope: no choices")
    choice = resp.choices[0]
    content: List[ContentBlock] = []
    if choice.message.content:
        content.append(TextBlock(text=choice.message.content))
    for call in choice.message.tool_calls or ():
        content.append(
            ToolCallBlock(tool_call_id=call.id, tool_name=call.function.name, input=call.function.arguments)
        )
    return UnifiedResult(
        content=tuple(content),
        finish_reason=map_finish_reason(choice.finish_reason),
        usage=map_usage(resp.usage),
        backend_model_id=resp.model,
        backend_request_id=request_id,
    )


__all__ = [
    "ChatCompletionsResponse",
    "FINISH_REASONS",
    "map_finish_reason",
    "map_usage",
    "parse_response",
]
