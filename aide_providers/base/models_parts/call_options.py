"""
Per-call options and per-model settings.

``CallOptions`` is the unified input of ``generate`` and ``stream``: the prompt,
optional tools, and sampling parameters. Unset parameters are ``None`` and
never reach the wire. ``ModelSettings`` supplies per-model defaults for the two
parameters a deployment commonly pins (temperature and completion budget).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from ..cancellation import CancellationToken
from .message import Message
from .tool import ToolChoice, ToolDefinition


@dataclass(frozen=True)
class ModelSettings:
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass(frozen=True)
class SamplingParams:
    """Sampling parameters after per-model defaults are applied."""

    max_tokens: int
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stop_sequences: Optional[Tuple[str, ...]] = None


@dataclass
class CallOptions:
    """Unified request for a single ``generate``/``stream`` call.

    Attributes:
        prompt: Ordered prompt messages.
        max_output_tokens: Completion budget; falls back to model settings,
            then to the registry's ``max_tokens``.
        temperature, top_p, top_k, frequency_penalty, presence_penalty,
        stop_sequences: Sampling parameters (``None`` means "not set").
        tools: Tool definitions offered to the model.
        tool_choice: Tool selection directive.
        headers: Extra HTTP headers for this call only.
        cancellation_token: Cooperative cancellation signal.
    """

    prompt: Sequence[Message]
    max_output_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stop_sequences: Optional[Sequence[str]] = None
    tools: Optional[Sequence[ToolDefinition]] = None
    tool_choice: Optional[ToolChoice] = None
    headers: Dict[str, str] = field(default_factory=dict)
    cancellation_token: Optional[CancellationToken] = None

    def sampling(self, settings: ModelSettings, default_max_tokens: int) -> SamplingParams:
        """Resolve sampling parameters against model settings and registry defaults."""
        max_tokens = self.max_output_tokens
        if max_tokens is None:
            max_tokens = settings.max_tokens if settings.max_tokens is not None else default_max_tokens
        temperature = self.temperature if self.temperature is not None else settings.temperature
        return SamplingParams(
            max_tokens=max_tokens,
            temperature=temperature,
            top_p=self.top_p,
            top_k=self.top_k,
            frequency_penalty=self.frequency_penalty,
            presence_penalty=self.presence_penalty,
            stop_sequences=tuple(self.stop_sequences) if self.stop_sequences is not None else None,
        )


__all__ = ["CallOptions", "ModelSettings", "SamplingParams"]
