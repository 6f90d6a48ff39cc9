"""Tests for the gateway request envelope and the backend codec table."""
from __future__ import annotations

from aide_providers.base.model_registry import lookup_model
from aide_providers.base.models import BackendFamily, Message, SamplingParams
from aide_providers.config.settings import PolicyOptions
from aide_providers.gateway.codecs import CODECS, codec_for
from aide_providers.gateway.envelope import build_routing, convert_request


def test_every_family_has_a_codec():
    assert set(CODECS) == set(BackendFamily)  # nosec B101
    assert codec_for(BackendFamily.OPENAI).key == "openai"  # nosec B101


def test_anthropic_envelope_shape():
    converted = convert_request(
        [Message.user("hi")],
        lookup_model("claude-sonnet-4.5"),
        SamplingParams(max_tokens=10),
        solma_id="solma-1",
    )
    body = converted.body
    assert body["policy"] == {"scrubInput": True, "applyGuardrail": True, "failOnScrub": True}  # nosec B101
    assert body["routing"] == {  # nosec B101
        "guardrailsEnabled": False,
        "scrubInput": False,
        "scrubbingTimeoutSeconds": 8,
        "pathToPrompt": "backend.anthropic.body.messages[*].content[*].text",
        "logMetadata": {"solmaId": "solma-1"},
    }
    assert list(body["backend"]) == ["anthropic"]  # nosec B101
    anthropic = body["backend"]["anthropic"]
    assert anthropic["modelId"] == "us.anthropic.claude-sonnet-4-5-20250929-v1:0"  # nosec B101
    assert anthropic["body"]["messages"][0]["role"] == "user"  # nosec B101
    assert converted.warnings == []  # nosec B101


def test_openai_envelope_shape_and_policy_override():
    converted = convert_request(
        [Message.user("hi")],
        lookup_model("gpt-4.1"),
        SamplingParams(max_tokens=10, top_k=3),
        solma_id="solma-2",
        policy=PolicyOptions(fail_on_scrub=False),
    )
    body = converted.body
    assert body["policy"]["failOnScrub"] is False  # nosec B101
    assert body["policy"]["scrubInput"] is True  # nosec B101
    assert body["routing"]["pathToPrompt"] == "backend.openai.chatCompletions.create.messages[*].content"  # nosec B101
    openai = body["backend"]["openai"]
    assert openai["apiVersion"] == "2024-10-21"  # nosec B101
    assert openai["chatCompletions"]["create"]["model"] == "gpt-4.1"  # nosec B101
    assert [w.setting for w in converted.warnings] == ["topK"]  # nosec B101


def test_build_routing_uses_logging_id():
    assert build_routing("p", "abc")["logMetadata"] == {"solmaId": "abc"}  # nosec B101
