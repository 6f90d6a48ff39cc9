"""Anthropic-family request building.

Purpose:
- Translate a unified prompt, sampling parameters and tools into the body of
  an Anthropic Messages call (Bedrock flavour) as carried in the gateway
  envelope under ``backend.anthropic.body``.

Mapping notes:
- Anthropic has a single top-level ``system`` string; when a prompt holds
  several system messages the last one wins.
- Tool results have no dedicated role: every ``tool-result`` part of one tool
  message is packed into a single synthetic ``user`` message.
- ``tool_choice`` of ``none`` is expressed by omitting the field.
- ``frequency_penalty``/``presence_penalty`` are dropped with a warning.
- Only image files are sent; other file parts are dropped with a warning.

Pure functions; no I/O.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..base.models import (
    CallWarning,
    FilePart,
    Message,
    SamplingParams,
    TextPart,
    ToolCallPart,
    ToolChoice,
    ToolDefinition,
    ToolResultPart,
    skipped_file_warnings,
)
from ..config.defaults import ANTHROPIC_BEDROCK_VERSION


def _image_block(part: FilePart) -> Dict[str, Any]:
    return {
        "type": "image",
        "source": {"type": "base64", "media_type": part.media_type, "data": part.base64_data()},
    }


def _user_content(message: Message) -> List[Dict[str, Any]]:
    content: List[Dict[str, Any]] = []
    for part in message.parts():
        if isinstance(part, TextPart):
            content.append({"type": "text", "text": part.text})
        elif isinstance(part, FilePart) and part.is_image:
            content.append(_image_block(part))
    return content


def _assistant_content(message: Message) -> List[Dict[str, Any]]:
    content: List[Dict[str, Any]] = []
    for part in message.parts():
        if isinstance(part, TextPart):
            content.append({"type": "text", "text": part.text})
        elif isinstance(part, ToolCallPart):
            content.append(
                {
                    "type": "tool_use",
                    "id": part.tool_call_id,
                    "name": part.tool_name,
                    "input": part.input_object(),
                }
            )
    return content


def _tool_results(message: Message) -> List[Dict[str, Any]]:
    return [
        {"type": "tool_result", "tool_use_id": part.tool_call_id, "content": part.output.as_text()}
        for part in message.parts()
        if isinstance(part, ToolResultPart)
    ]


def convert_messages(prompt: Sequence[Message]) -> Tuple[Optional[str], List[Dict[str, Any]]]:
    """Return ``(system, messages)`` for the Anthropic wire format."""
    system: Optional[str] = None
    messages: List[Dict[str, Any]] = []
    for message in prompt:
        if message.role == "system":
            system = message.text()
        elif message.role == "user":
            messages.append({"role": "user", "content": _user_content(message)})
        elif message.role == "assistant":
            messages.append({"role": "assistant", "content": _assistant_content(message)})
        else:
            messages.append({"role": "user", "content": _tool_results(message)})
    return system, messages


def convert_tools(tools: Optional[Sequence[ToolDefinition]]) -> Optional[List[Dict[str, Any]]]:
    if not tools:
        return None
    out: List[Dict[str, Any]] = []
    for tool in tools:
        entry: Dict[str, Any] = {"name": tool.name, "input_schema": tool.input_schema}
        if tool.description is not None:
            entry["description"] = tool.description
        out.append(entry)
    return out


def convert_tool_choice(choice: Optional[ToolChoice]) -> Optional[Dict[str, Any]]:
    if choice is None or choice.type == "none":
        return None
    if choice.type == "auto":
        return {"type": "auto"}
    if choice.type == "required":
        return {"type": "any"}
    return {"type": "tool", "name": choice.tool_name}


def unsupported_warnings(sampling: SamplingParams) -> List[CallWarning]:
    warnings: List[CallWarning] = []
    if sampling.frequency_penalty is not None:
        warnings.append(
            CallWarning(
                type="unsupported-setting",
                setting="frequencyPenalty",
                message="frequencyPenalty is not supported by Anthropic models",
            )
        )
    if sampling.presence_penalty is not None:
        warnings.append(
            CallWarning(
                type="unsupported-setting",
                setting="presencePenalty",
                message="presencePenalty is not supported by Anthropic models",
            )
        )
    return warnings


def build_body(
    prompt: Sequence[Message],
    sampling: SamplingParams,
    tools: Optional[Sequence[ToolDefinition]] = None,
    tool_choice: Optional[ToolChoice] = None,
) -> Tuple[Dict[str, Any], List[CallWarning]]:
    """Build the Anthropic Messages body and the warnings for dropped settings and files."""
    system, messages = convert_messages(prompt)
    body: Dict[str, Any] = {
        "anthropic_version": ANTHROPIC_BEDROCK_VERSION,
        "max_tokens": sampling.max_tokens,
        "messages": messages,
    }
    if system:
        body["system"] = system
    if sampling.temperature is not None:
        body["temperature"] = sampling.temperature
    if sampling.top_p is not None:
        body["top_p"] = sampling.top_p
    if sampling.top_k is not None:
        body["top_k"] = sampling.top_k
    if sampling.stop_sequences:
        body["stop_sequences"] = list(sampling.stop_sequences)
    if (wire_tools := convert_tools(tools)) is not None:
        body["tools"] = wire_tools
    if (wire_choice := convert_tool_choice(tool_choice)) is not None:
        body["tool_choice"] = wire_choice
    return body, unsupported_warnings(sampling) + skipped_file_warnings(prompt)


__all__ = [
    "build_body",
    "convert_messages",
    "convert_tool_choice",
    "convert_tools",
    "unsupported_warnings",
]
