"""AIDE gateway adapter: request envelope, response parsing, model, provider."""

from .envelope import ConvertedRequest, convert_request
from .language_model import AideLanguageModel, GatewayConfig, StreamResponse
from .provider import (
    AideProvider,
    aide,
    create_aide,
    get_aide_model_display_names,
    get_aide_model_ids,
    is_aide_model,
)
from .wire import parse_response

__all__ = [
    "AideLanguageModel",
    "AideProvider",
    "ConvertedRequest",
    "GatewayConfig",
    "StreamResponse",
    "aide",
    "convert_request",
    "create_aide",
    "get_aide_model_display_names",
    "get_aide_model_ids",
    "is_aide_model",
    "parse_response",
]
