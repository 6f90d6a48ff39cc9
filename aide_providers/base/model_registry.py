"""
Built-in model registry.

Maps logical model ids to the backend metadata used to route a request through
the gateway. Lookups are pure and in-memory.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .errors import configuration_error
from .models import BackendFamily, ModelInfo

AIDE_MODELS: Dict[str, ModelInfo] = {
    "claude-sonnet-4.5": ModelInfo(
        family=BackendFamily.ANTHROPIC,
        backend_model_id="us.anthropic.claude-sonnet-4-5-20250929-v1:0",
        display_name="Claude Sonnet 4.5",
        max_tokens=8192,
        supports_tools=True,
        supports_vision=True,
    ),
    "claude-haiku-4.5": ModelInfo(
        family=BackendFamily.ANTHROPIC,
        backend_model_id="us.anthropic.claude-haiku-4-5-20251001-v1:0",
        display_name="Claude Haiku 4.5",
        max_tokens=8192,
        supports_tools=True,
        supports_vision=True,
    ),
    "gpt-4.1": ModelInfo(
        family=BackendFamily.OPENAI,
        backend_model_id="gpt-4.1",
        display_name="GPT 4.1",
        max_tokens=4096,
        supports_tools=True,
        supports_vision=True,
    ),
}


def find_model(model_id: str) -> Optional[ModelInfo]:
    """Return the registry entry for ``model_id`` or ``None``."""
    return AIDE_MODELS.get(model_id)


def lookup_model(model_id: str) -> ModelInfo:
    """Return the registry entry for ``model_id``.

    Raises:
        ProviderError: ``CONFIGURATION`` when the id is unknown; the message
            lists every valid id.
    """
    info = AIDE_MODELS.get(model_id)
    if info is None:
        available = ", ".join(AIDE_MODELS)
        raise configuration_error(
            f"Unknown AIDE model: {model_id}. Available models: {available}",
            model=model_id,
        )
    return info


def list_model_ids() -> List[str]:
    return list(AIDE_MODELS)


__all__ = ["AIDE_MODELS", "find_model", "list_model_ids", "lookup_model"]
