"""Tests for ``AideLanguageModel.generate`` against a mocked gateway.

Covers:
- OpenAI tool-call response surfaces as one tool-call block
- unsupported Anthropic penalties dropped from the body and reported
- request URL, headers (config and per-call overrides) and envelope
- per-model settings defaults
- gateway error bodies (JSON, text, JSON without ``error``)
- malformed success bodies and transport failures
- cancellation before the token fetch, before the POST and mid-body
- cancellation while the gateway has not answered yet
"""
from __future__ import annotations

import json
import threading
import time

import httpx
import pytest

from aide_providers.base.cancellation import CancellationToken, CancelledError
from aide_providers.base.errors import ErrorCode, ProviderError
from aide_providers.base.models import CallOptions, Message, ToolChoice, ToolDefinition

from .helpers import (
    ANTHROPIC_MODEL,
    OPENAI_MODEL,
    RecordingHandler,
    anthropic_payload,
    envelope,
    json_handler,
    make_provider,
    openai_payload,
)


def _options(**kwargs) -> CallOptions:
    return CallOptions(prompt=[Message.user("Hi")], **kwargs)


def test_openai_tool_call_generate():
    payload = openai_payload(
        content=None,
        tool_calls=[{"id": "call_9", "type": "function", "function": {"name": "list_projects", "arguments": "{}"}}],
        finish_reason="tool_calls",
    )
    handler = json_handler(envelope({"openai": payload}, request_id="req-b"))
    model = make_provider(handler).language_model(OPENAI_MODEL)
    result = model.generate(
        _options(tools=[ToolDefinition(name="list_projects")], tool_choice=ToolChoice.auto())
    )
    assert len(result.content) == 1  # nosec B101
    assert result.content[0].type == "tool-call"  # nosec B101
    assert result.content[0].tool_name == "list_projects"  # nosec B101
    assert result.finish_reason.unified == "tool-calls"  # nosec B101
    assert result.finish_reason.raw == "tool_calls"  # nosec B101
    assert result.backend_request_id == "req-b"  # nosec B101
    sent = handler.last_json["backend"]["openai"]["chatCompletions"]["create"]
    assert sent["tool_choice"] == "auto"  # nosec B101
    assert sent["tools"][0]["function"]["name"] == "list_projects"  # nosec B101


def test_anthropic_frequency_penalty_dropped_with_warning():
    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    model = make_provider(handler).language_model(ANTHROPIC_MODEL)
    result = model.generate(_options(frequency_penalty=0.7))
    body = handler.last_json["backend"]["anthropic"]["body"]
    assert "frequency_penalty" not in body  # nosec B101
    assert "frequencyPenalty" not in str(body)  # nosec B101
    assert len(result.warnings) == 1  # nosec B101
    assert result.warnings[0].setting == "frequencyPenalty"  # nosec B101
    assert result.to_dict()["warnings"][0]["type"] == "unsupported"  # nosec B101
    assert result.text == "Hello there"  # nosec B101


def test_request_url_headers_and_bodies():
    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    provider = make_provider(handler, headers={"X-Team": "config", "X-Trace": "on"})
    model = provider.language_model(ANTHROPIC_MODEL)
    result = model.generate(_options(headers={"X-Team": "call"}))
    req = handler.requests[0]
    assert str(req.url) == "https://aide.test/api/generate"  # nosec B101
    assert req.method == "POST"  # nosec B101
    assert req.headers["UseCaseID"] == "uc-1"  # nosec B101
    assert req.headers["Authorization"] == "Bearer tok-123"  # nosec B101
    assert req.headers["Content-Type"] == "application/json"  # nosec B101
    assert req.headers["X-Team"] == "call"  # nosec B101
    assert req.headers["X-Trace"] == "on"  # nosec B101
    assert handler.last_json["routing"]["logMetadata"] == {"solmaId": "solma-9"}  # nosec B101
    assert result.request_body == handler.last_json  # nosec B101
    assert result.response_body["meta"]["request_id"] == "req-1"  # nosec B101


def test_model_settings_supply_defaults():
    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    model = make_provider(handler).language_model(ANTHROPIC_MODEL, {"temperature": 0.1, "max_tokens": 256})
    model.generate(_options())
    body = handler.last_json["backend"]["anthropic"]["body"]
    assert body["temperature"] == 0.1  # nosec B101
    assert body["max_tokens"] == 256  # nosec B101
    model.generate(_options(max_output_tokens=32, temperature=0.9))
    body = handler.last_json["backend"]["anthropic"]["body"]
    assert (body["max_tokens"], body["temperature"]) == (32, 0.9)  # nosec B101


def test_registry_max_tokens_default():
    handler = json_handler(envelope({"openai": openai_payload()}))
    make_provider(handler).language_model(OPENAI_MODEL).generate(_options())
    assert handler.last_json["backend"]["openai"]["chatCompletions"]["create"]["max_tokens"] == 4096  # nosec B101


def test_json_error_body_message():
    handler = json_handler({"requestId": "r-1", "error": "Rate limit exceeded"}, status=429)
    model = make_provider(handler).language_model(ANTHROPIC_MODEL)
    with pytest.raises(ProviderError) as ei:
        model.generate(_options())
    err = ei.value
    assert err.message == "AIDE API error: Rate limit exceeded"  # nosec B101
    assert err.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert err.retryable is True  # nosec B101
    assert err.status_code == 429  # nosec B101
    assert err.model == ANTHROPIC_MODEL  # nosec B101


def test_text_error_body_appended_to_status():
    handler = RecordingHandler(lambda _req: httpx.Response(502, text="upstream exploded"))
    model = make_provider(handler).language_model(OPENAI_MODEL)
    with pytest.raises(ProviderError) as ei:
        model.generate(_options())
    assert ei.value.message == "AIDE API error: 502 Bad Gateway - upstream exploded"  # nosec B101
    assert ei.value.code is ErrorCode.TRANSIENT  # nosec B101


def test_json_error_body_without_error_key_uses_status():
    handler = json_handler({"detail": "nope"}, status=403)
    model = make_provider(handler).language_model(OPENAI_MODEL)
    with pytest.raises(ProviderError) as ei:
        model.generate(_options())
    assert ei.value.message == "AIDE API error: 403 Forbidden"  # nosec B101
    assert ei.value.code is ErrorCode.AUTH  # nosec B101
    assert ei.value.retryable is False  # nosec B101


def test_success_without_backend_is_malformed():
    handler = json_handler({"meta": {"request_id": "r"}, "backend": {}})
    model = make_provider(handler).language_model(ANTHROPIC_MODEL)
    with pytest.raises(ProviderError) as ei:
        model.generate(_options())
    assert ei.value.code is ErrorCode.MALFORMED_RESPONSE  # nosec B101


def test_success_with_non_json_body_is_malformed():
    handler = RecordingHandler(lambda _req: httpx.Response(200, text="<html>ok</html>"))
    model = make_provider(handler).language_model(ANTHROPIC_MODEL)
    with pytest.raises(ProviderError) as ei:
        model.generate(_options())
    assert ei.value.code is ErrorCode.MALFORMED_RESPONSE  # nosec B101


def test_transport_error_is_wrapped():
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    model = make_provider(RecordingHandler(boom)).language_model(ANTHROPIC_MODEL)
    with pytest.raises(ProviderError) as ei:
        model.generate(_options())
    assert ei.value.code is ErrorCode.TIMEOUT  # nosec B101
    assert ei.value.message.startswith("AIDE API request failed: ")  # nosec B101


def test_cancelled_before_token_fetch():
    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    fetched = []

    def supplier() -> str:
        fetched.append(1)
        return "tok"

    provider = make_provider(handler, get_auth_token=supplier)
    token = CancellationToken()
    token.cancel("stop")
    with pytest.raises(CancelledError):
        provider.language_model(ANTHROPIC_MODEL).generate(_options(cancellation_token=token))
    assert fetched == []  # nosec B101
    assert handler.requests == []  # nosec B101


def test_cancelled_between_token_and_post():
    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    token = CancellationToken()

    def supplier() -> str:
        token.cancel("user navigated away")
        return "tok"

    provider = make_provider(handler, get_auth_token=supplier)
    with pytest.raises(CancelledError):
        provider.language_model(ANTHROPIC_MODEL).generate(_options(cancellation_token=token))
    assert handler.requests == []  # nosec B101


def test_cancelled_while_reading_body():
    token = CancellationToken()

    def body():
        yield b'{"meta": {"request_id": "r"}, '
        token.cancel("mid-body")
        yield b'"backend": {}}'

    handler = RecordingHandler(lambda _req: httpx.Response(200, content=body()))
    model = make_provider(handler).language_model(ANTHROPIC_MODEL)
    with pytest.raises(CancelledError):
        model.generate(_options(cancellation_token=token))
    assert len(handler.requests) == 1  # nosec B101


def test_cancelled_while_waiting_for_headers():
    token = CancellationToken()
    release = threading.Event()
    answered = []

    def slow(_req: httpx.Request) -> httpx.Response:
        release.wait(5)
        raw = json.dumps(envelope({"anthropic": anthropic_payload()})).encode()
        response = httpx.Response(200, content=iter([raw]))
        answered.append(response)
        return response

    handler = RecordingHandler(slow)
    model = make_provider(handler).language_model(ANTHROPIC_MODEL)
    timer = threading.Timer(0.1, token.cancel, args=("user navigated away",))
    timer.start()
    t0 = time.monotonic()
    try:
        with pytest.raises(CancelledError):
            model.generate(_options(cancellation_token=token))
        elapsed = time.monotonic() - t0
    finally:
        release.set()
        timer.join()
    assert elapsed < 2  # nosec B101
    assert len(handler.requests) == 1  # nosec B101
    deadline = time.monotonic() + 2
    while not (answered and answered[0].is_closed) and time.monotonic() < deadline:
        time.sleep(0.01)
    assert answered and answered[0].is_closed  # nosec B101
