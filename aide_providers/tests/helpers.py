"""Shared builders for gateway payloads and mocked HTTP transports."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import httpx

from aide_providers.gateway.provider import AideProvider, create_aide

GATEWAY_SETTINGS: Dict[str, Any] = {
    "base_url": "https://aide.test/api",
    "use_case_id": "uc-1",
    "solma_id": "solma-9",
}

ANTHROPIC_MODEL = "claude-sonnet-4.5"
OPENAI_MODEL = "gpt-4.1"


def anthropic_payload(
    content: Optional[List[Dict[str, Any]]] = None,
    *,
    stop_reason: Optional[str] = "end_turn",
    usage: Optional[Dict[str, Any]] = None,
    model: str = "claude-sonnet-4-5-20250929",
) -> Dict[str, Any]:
    return {
        "id": "msg_01",
        "type": "message",
        "role": "assistant",
        "model": model,
        "content": content if content is not None else [{"type": "text", "text": "Hello there"}],
        "stop_reason": stop_reason,
        "usage": usage or {"input_tokens": 12, "output_tokens": 4},
    }


def openai_payload(
    *,
    content: Optional[str] = "Hi!",
    tool_calls: Optional[List[Dict[str, Any]]] = None,
    finish_reason: Optional[str] = "stop",
    usage: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "model": "gpt-4.1-2025-04-14",
        "choices": [{"index": 0, "message": message, "finish_reason": finish_reason}],
        "usage": usage or {"prompt_tokens": 20, "completion_tokens": 6, "total_tokens": 26},
    }


def envelope(backend: Dict[str, Any], request_id: str = "req-1") -> Dict[str, Any]:
    return {"meta": {"request_id": request_id, "trace_id": "trace-1"}, "backend": backend}


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


def json_handler(payload: Any, status: int = 200) -> RecordingHandler:
    return RecordingHandler(lambda _req: httpx.Response(status, json=payload))


def make_provider(handler: RecordingHandler, token: str = "tok-123", **overrides: Any) -> AideProvider:
    settings = {**GATEWAY_SETTINGS, "get_auth_token": lambda: token, **overrides}
    return create_aide(settings, client=handler.client())
