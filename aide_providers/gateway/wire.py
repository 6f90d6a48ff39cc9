"""Gateway response and error envelopes.

The gateway answers every successful call with::

    {"meta": {"request_id", "trace_id", "filters"?, "caller"?, "usage"?},
     "routing": {"scrubbingRuleViolation"}?,
     "backend": {"anthropic": {...}} | {"openai": {...}}}

and failed calls with ``{"requestId", "error"}``. The backend sub-objects are
validated by the family parsers; this module only checks the outer shape.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..base.errors import ErrorCode, ProviderError
from ..base.models import ModelInfo, UnifiedResult
from .codecs import codec_for


class GatewayMeta(BaseModel):
    model_config = ConfigDict(extra="allow")

    request_id: str
    trace_id: Optional[str] = None
    filters: Optional[Any] = None
    caller: Optional[Any] = None
    usage: Optional[Any] = None


class GatewayRouting(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    scrubbing_rule_violation: Optional[Any] = Field(default=None, alias="scrubbingRuleViolation")


class GatewayResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    meta: GatewayMeta
    routing: Optional[GatewayRouting] = None
    backend: Dict[str, Any] = Field(default_factory=dict)


class GatewayErrorBody(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    request_id: Optional[str] = Field(default=None, alias="requestId")
    error: Any


def parse_envelope(payload: Any) -> GatewayResponse:
    """Validate the outer response envelope.

    Raises:
        ProviderError: ``MALFORMED_RESPONSE`` when ``meta``/``backend`` are unusable.
    """
    try:
        return GatewayResponse.model_validate(payload)
    except ValidationError as exc:
        raise ProviderError(
            code=ErrorCode.MALFORMED_RESPONSE,
            message=f"Invalid AIDE response envelope: {exc.error_count()} validation error(s)",
            raw=exc,
        ) from exc


def parse_response(payload: Any, model_info: ModelInfo) -> UnifiedResult:
    """Parse a successful gateway body for the family of ``model_info``.

    The backend sub-object matching the family must be present; a missing or
    null sub-object (including a body carrying only the other family's key)
    is a malformed response.
    """
    envelope = parse_envelope(payload)
    codec = codec_for(model_info.family)
    sub = envelope.backend.get(codec.key)
    if sub is None:
        raise ProviderError(
            code=ErrorCode.MALFORMED_RESPONSE,
            message=f"Invalid response from AIDE API: missing {codec.key} response",
            model=model_info.backend_model_id,
        )
    return codec.parse(sub, envelope.meta.request_id)


def parse_error_body(payload: Any) -> Optional[GatewayErrorBody]:
    """Return the structured error body, or ``None`` when it is not one."""
    if not isinstance(payload, dict) or "error" not in payload:
        return None
    try:
        return GatewayErrorBody.model_validate(payload)
    except ValidationError:
        return None


__all__ = [
    "GatewayErrorBody",
    "GatewayMeta",
    "GatewayResponse",
    "GatewayRouting",
    "parse_envelope",
    "parse_error_body",
    "parse_response",
]
