"""
Prompt content parts.

A prompt message carries an ordered tuple of parts. Parts are a closed set of
frozen dataclasses discriminated by their ``type`` field:

* ``TextPart``: plain text.
* ``FilePart``: inline file data; only ``image/*`` media types are sent to the
  backends, other files are skipped by the converters.
* ``ToolCallPart``: a tool invocation previously issued by the assistant.
* ``ToolResultPart``: the caller-supplied outcome of a tool call.
"""
from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Union

ToolResultOutputType = Literal["text", "json", "error-text", "error-json"]


@dataclass(frozen=True)
class TextPart:
    text: str
    type: Literal["text"] = "text"


@dataclass(frozen=True)
class FilePart:
    """Inline file content (base64 string or raw bytes)."""

    media_type: str
    data: Union[str, bytes]
    type: Literal["file"] = "file"

    @property
    def is_image(self) -> bool:
        return self.media_type.startswith("image/")

    def base64_data(self) -> str:
        """Return the payload as base64 text (strings are assumed encoded already)."""
        if isinstance(self.data, str):
            return self.data
        return base64.b64encode(self.data).decode("ascii")


@dataclass(frozen=True)
class ToolCallPart:
    """An assistant tool call replayed in the prompt.

    ``input`` is either the JSON text of the arguments (as produced in results)
    or an already structured mapping.
    """

    tool_call_id: str
    tool_name: str
    input: Union[str, Mapping[str, Any]]
    type: Literal["tool-call"] = "tool-call"

    def input_object(self) -> Any:
        """Return the arguments as a structured object."""
        if isinstance(self.input, str):
            return json.loads(self.input) if self.input.strip() else {}
        return dict(self.input)

    def input_json(self) -> str:
        """Return the arguments as JSON text."""
        if isinstance(self.input, str):
            return self.input
        return json.dumps(dict(self.input))


@dataclass(frozen=True)
class ToolResultOutput:
    """Outcome payload of a tool call.

    ``value`` is a string for ``text``/``error-text`` and any JSON-compatible
    value for ``json``/``error-json``.
    """

    type: ToolResultOutputType
    value: Any

    @classmethod
    def text(cls, value: str) -> "ToolResultOutput":
        return cls(type="text", value=value)

    @classmethod
    def json(cls, value: Any) -> "ToolResultOutput":
        return cls(type="json", value=value)

    @classmethod
    def error_text(cls, value: str) -> "ToolResultOutput":
        return cls(type="error-text", value=value)

    @classmethod
    def error_json(cls, value: Any) -> "ToolResultOutput":
        return cls(type="error-json", value=value)

    @property
    def is_error(self) -> bool:
        return self.type in ("error-text", "error-json")

    def as_text(self) -> str:
        """Normalize the output to the string both backends receive.

        Error variants carry an ``Error: `` prefix for every backend family.
        """
        if self.type in ("json", "error-json"):
            body = json.dumps(self.value)
        else:
            body = str(self.value)
        return f"Error: {body}" if self.is_error else body


@dataclass(frozen=True)
class ToolResultPart:
    tool_call_id: str
    output: ToolResultOutput
    tool_name: str | None = None
    type: Literal["tool-result"] = "tool-result"


ContentPart = Union[TextPart, FilePart, ToolCallPart, ToolResultPart]


__all__ = [
    "ContentPart",
    "FilePart",
    "TextPart",
    "ToolCallPart",
    "ToolResultOutput",
    "ToolResultOutputType",
    "ToolResultPart",
]
