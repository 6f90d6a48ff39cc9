"""Backend family codec table.

Every ``BackendFamily`` member maps to exactly one ``BackendCodec`` bundling
its request builder, its envelope placement, and its response parser. The
table is checked for completeness at import time, so adding a family without
a codec fails on first import instead of at request time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..anthropic import request as anthropic_request
from ..anthropic import response as anthropic_response
from ..base.models import (
    BackendFamily,
    CallWarning,
    Message,
    ModelInfo,
    SamplingParams,
    ToolChoice,
    ToolDefinition,
    UnifiedResult,
)
from ..config.defaults import OPENAI_API_VERSION
from ..openai import request as openai_request
from ..openai import response as openai_response

BuildBody = Callable[
    [Sequence[Message], SamplingParams, ModelInfo, Optional[Sequence[ToolDefinition]], Optional[ToolChoice]],
    Tuple[Dict[str, Any], List[CallWarning]],
]


@dataclass(frozen=True)
class BackendCodec:
    """Wire protocol bundle for one backend family.

    Attributes:
        key: Key of the family's sub-object under ``backend`` in both directions.
        path_to_prompt: JSONPath the gateway scrubs for prompt text.
        build_body: Builds the backend request body and warnings.
        wrap: Places the body into the ``backend.<key>`` request sub-object.
        parse: Parses the ``backend.<key>`` response sub-object.
    """

    key: str
    path_to_prompt: str
    build_body: BuildBody
    wrap: Callable[[ModelInfo, Dict[str, Any]], Dict[str, Any]]
    parse: Callable[[Any, str], UnifiedResult]


def _anthropic_body(prompt, sampling, model_info, tools, tool_choice):
    return anthropic_request.build_body(prompt, sampling, tools, tool_choice)


def _openai_body(prompt, sampling, model_info, tools, tool_choice):
    return openai_request.build_body(prompt, sampling, model_info, tools, tool_choice)


CODECS: Mapping[BackendFamily, BackendCodec] = {
    BackendFamily.ANTHROPIC: BackendCodec(
        key="anthropic",
        path_to_prompt="backend.anthropic.body.messages[*].content[*].text",
        build_body=_anthropic_body,
        wrap=lambda info, body: {"modelId": info.backend_model_id, "body": body},
        parse=anthropic_response.parse_response,
    ),
    BackendFamily.OPENAI: BackendCodec(
        key="openai",
        path_to_prompt="backend.openai.chatCompletions.create.messages[*].content",
        build_body=_openai_body,
        wrap=lambda info, body: {"apiVersion": OPENAI_API_VERSION, "chatCompletions": {"create": body}},
        parse=openai_response.parse_response,
    ),
}


def _check_exhaustive() -> None:
    missing = [family.value for family in BackendFamily if family not in CODECS]
    if missing:
        raise RuntimeError(f"no backend codec registered for: {', '.join(missing)}")


_check_exhaustive()


def codec_for(family: BackendFamily) -> BackendCodec:
    return CODECS[family]


__all__ = ["BackendCodec", "CODECS", "codec_for"]
