"""Gateway request envelope.

Every call carries the content-safety ``policy`` block, the fixed ``routing``
block (with the family's ``pathToPrompt`` and the logging id), and exactly one
backend sub-object matching the model's family.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..base.models import CallWarning, Message, ModelInfo, SamplingParams, ToolChoice, ToolDefinition
from ..config.defaults import (
    ROUTING_GUARDRAILS_ENABLED,
    ROUTING_SCRUB_INPUT,
    ROUTING_SCRUBBING_TIMEOUT_SECONDS,
)
from ..config.settings import PolicyOptions
from .codecs import codec_for


@dataclass(frozen=True)
class ConvertedRequest:
    body: Dict[str, Any]
    warnings: List[CallWarning]


def build_routing(path_to_prompt: str, solma_id: str) -> Dict[str, Any]:
    return {
        "guardrailsEnabled": ROUTING_GUARDRAILS_ENABLED,
        "scrubInput": ROUTING_SCRUB_INPUT,
        "scrubbingTimeoutSeconds": ROUTING_SCRUBBING_TIMEOUT_SECONDS,
        "pathToPrompt": path_to_prompt,
        "logMetadata": {"solmaId": solma_id},
    }


def convert_request(
    prompt: Sequence[Message],
    model_info: ModelInfo,
    sampling: SamplingParams,
    *,
    solma_id: str,
    policy: Optional[PolicyOptions] = None,
    tools: Optional[Sequence[ToolDefinition]] = None,
    tool_choice: Optional[ToolChoice] = None,
) -> ConvertedRequest:
    """Build the full gateway request body for ``model_info``'s family."""
    codec = codec_for(model_info.family)
    backend_body, warnings = codec.build_body(prompt, sampling, model_info, tools, tool_choice)
    body = {
        "policy": (policy or PolicyOptions()).to_wire(),
        "routing": build_routing(codec.path_to_prompt, solma_id),
        "backend": {codec.key: codec.wrap(model_info, backend_body)},
    }
    return ConvertedRequest(body=body, warnings=warnings)


__all__ = ["ConvertedRequest", "build_routing", "convert_request"]
