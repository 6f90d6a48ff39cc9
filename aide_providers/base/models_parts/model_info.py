"""
ModelInfo DTO and backend family discriminator.

Each logical model id (``claude-sonnet-4.5``, ``gpt-4.1``...) resolves to one
immutable ``ModelInfo`` describing which gateway wire protocol it speaks and
the backend-specific model id placed in the request envelope.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict


class BackendFamily(str, Enum):
    """Downstream wire protocol spoken by a model behind the gateway."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"


@dataclass(frozen=True)
class ModelInfo:
    """Backend metadata for one logical model id.

    Attributes:
        family: Wire protocol family used to build requests and parse responses.
        backend_model_id: Model identifier understood by the backend.
        display_name: Human-friendly name for pickers and CLIs.
        max_tokens: Default completion budget when the caller sets none.
        supports_tools: Whether tool definitions may be sent.
        supports_vision: Whether image parts may be sent.
    """

    family: BackendFamily
    backend_model_id: str
    display_name: str
    max_tokens: int
    supports_tools: bool = True
    supports_vision: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        data = asdict(self)
        data["family"] = self.family.value
        return data


__all__ = ["BackendFamily", "ModelInfo"]
