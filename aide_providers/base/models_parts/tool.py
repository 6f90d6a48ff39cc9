"""
Tool definitions and tool-choice directives.

``ToolDefinition`` is passed to both backend families; ``ToolChoice`` is a small
closed variant (``auto``, ``none``, ``required``, ``tool(name)``) that each
converter maps onto its own wire representation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

ToolChoiceType = Literal["auto", "none", "required", "tool"]


@dataclass(frozen=True)
class ToolDefinition:
    """A callable function exposed to the model.

    Attributes:
        name: Function name the model uses when calling the tool.
        input_schema: JSON-schema object describing the arguments.
        description: Optional natural-language description.
        strict: Optional strict-schema flag (OpenAI family only).
    """

    name: str
    input_schema: Dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})
    description: Optional[str] = None
    strict: Optional[bool] = None


@dataclass(frozen=True)
class ToolChoice:
    type: ToolChoiceType
    tool_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type == "tool" and not self.tool_name:
            raise ValueError("tool choice of type 'tool' requires a tool_name")

    @classmethod
    def auto(cls) -> "ToolChoice":
        return cls("auto")

    @classmethod
    def none(cls) -> "ToolChoice":
        return cls("none")

    @classmethod
    def required(cls) -> "ToolChoice":
        return cls("required")

    @classmethod
    def tool(cls, name: str) -> "ToolChoice":
        return cls("tool", name)


__all__ = ["ToolChoice", "ToolChoiceType", "ToolDefinition"]
