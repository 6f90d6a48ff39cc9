"""OpenAI-family request building.

Purpose:
- Translate a unified prompt, sampling parameters and tools into a Chat
  Completions ``create`` body as carried in the gateway envelope under
  ``backend.openai.chatCompletions.create``.

Mapping notes:
- System messages map 1:1 and keep their position.
- A user message consisting of exactly one text part is sent as a bare string;
  anything else becomes a content-part array with images as data URIs.
- Assistant text parts are concatenated; ``content`` is ``null`` when empty.
- Each ``tool-result`` part becomes its own ``tool`` message.
- ``top_k`` is dropped with a warning.
- Only image files are sent; other file parts are dropped with a warning.

Pure functions; no I/O.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..base.models import (
    CallWarning,
    FilePart,
    Message,
    ModelInfo,
    SamplingParams,
    TextPart,
    ToolCallPart,
    ToolChoice,
    ToolDefinition,
    ToolResultPart,
    skipped_file_warnings,
)


def _user_message(message: Message) -> Dict[str, Any]:
    parts: List[Dict[str, Any]] = []
    for part in message.parts():
        if isinstance(part, TextPart):
            parts.append({"type": "text", "text": part.text})
        elif isinstance(part, FilePart) and part.is_image:
            parts.append(
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{part.media_type};base64,{part.base64_data()}"},
                }
            )
    if len(parts) == 1 and parts[0]["type"] == "text":
        return {"role": "user", "content": parts[0]["text"]}
    return {"role": "user", "content": parts}


def _assistant_message(message: Message) -> Dict[str, Any]:
    text = ""
    tool_calls: List[Dict[str, Any]] = []
    for part in message.parts():
        if isinstance(part, TextPart):
            text += part.text
        elif isinstance(part, ToolCallPart):
            tool_calls.append(
                {
                    "id": part.tool_call_id,
                    "type": "function",
                    "function": {"name": part.tool_name, "arguments": part.input_json()},
                }
            )
    out: Dict[str, Any] = {"role": "assistant", "content": text or None}
    if tool_calls:
        out["tool_calls"] = tool_calls
    return out


def convert_messages(prompt: Sequence[Message]) -> List[Dict[str, Any]]:
    messages: List[Dict[str, Any]] = []
    for message in prompt:
        if message.role == "system":
            messages.append({"role": "system", "content": message.text()})
        elif message.role == "user":
            messages.append(_user_message(message))
        elif message.role == "assistant":
            messages.append(_assistant_message(message))
        else:
            messages.extend(
                {"role": "tool", "tool_call_id": part.tool_call_id, "content": part.output.as_text()}
                for part in message.parts()
                if isinstance(part, ToolResultPart)
            )
    return messages


def convert_tools(tools: Optional[Sequence[ToolDefinition]]) -> Optional[List[Dict[str, Any]]]:
    if not tools:
        return None
    out: List[Dict[str, Any]] = []
    for tool in tools:
        function: Dict[str, Any] = {"name": tool.name}
        if tool.description is not None:
            function["description"] = tool.description
        function["parameters"] = tool.input_schema
        if tool.strict is not None:
            function["strict"] = tool.strict
        out.append({"type": "function", "function": function})
    return out


def convert_tool_choice(choice: Optional[ToolChoice]) -> Union[str, Dict[str, Any], None]:
    if choice is None:
        return None
    if choice.type == "tool":
        return {"type": "function", "function": {"name": choice.tool_name}}
    return choice.type


def unsupported_warnings(sampling: SamplingParams) -> List[CallWarning]:
    if sampling.top_k is None:
        return []
    return [
        CallWarning(
            type="unsupported-setting",
            setting="topK",
            message="topK is not supported by OpenAI models",
        )
    ]


def build_body(
    prompt: Sequence[Message],
    sampling: SamplingParams,
    model_info: ModelInfo,
    tools: Optional[Sequence[ToolDefinition]] = None,
    tool_choice: Optional[ToolChoice] = None,
) -> Tuple[Dict[str, Any], List[CallWarning]]:
    """Build the Chat Completions body and the warnings for dropped settings and files."""
    body: Dict[str, Any] = {
        "model": model_info.backend_model_id,
        "messages": convert_messages(prompt),
        "max_tokens": sampling.max_tokens,
    }
    if sampling.temperature is not None:
        body["temperature"] = sampling.temperature
    if sampling.top_p is not None:
        body["top_p"] = sampling.top_p
    if sampling.frequency_penalty is not None:
        body["frequency_penalty"] = sampling.frequency_penalty
    if sampling.presence_penalty is not None:
        body["presence_penalty"] = sampling.presence_penalty
    if sampling.stop_sequences:
        body["stop"] = list(sampling.stop_sequences)
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
