"""Tests for ``AideProvider`` construction and model discovery.

Covers:
- required gateway settings validated at construction (env or explicit)
- unknown model ids rejected by ``language_model``
- discovery helpers and the lazily-built default provider
- token source selection (custom supplier, injected cache)
"""
from __future__ import annotations

import pytest

from aide_providers import __version__
from aide_providers.auth import TokenCache, TokenGrant
from aide_providers.base.errors import ErrorCode, ProviderError
from aide_providers.base.models import CallOptions, Message
from aide_providers.config import AideProviderSettings, PolicyOptions
from aide_providers.gateway.provider import (
    AideProvider,
    aide,
    create_aide,
    get_aide_model_display_names,
    get_aide_model_ids,
    is_aide_model,
    reset_default_provider,
)

from .helpers import ANTHROPIC_MODEL, GATEWAY_SETTINGS, anthropic_payload, envelope, json_handler


def test_missing_base_url_names_variable(monkeypatch):
    monkeypatch.setenv("AIDE_USE_CASE_ID", "uc")
    monkeypatch.setenv("AIDE_SOLMA_ID", "s")
    with pytest.raises(ProviderError) as ei:
        AideProvider()
    assert ei.value.code is ErrorCode.CONFIGURATION  # nosec B101
    assert ei.value.message == "AIDE_BASE_URL is required"  # nosec B101


@pytest.mark.parametrize(
    "missing, var",
    [("use_case_id", "AIDE_USE_CASE_ID"), ("solma_id", "AIDE_SOLMA_ID")],
)
def test_missing_explicit_setting_names_variable(missing, var):
    settings = {k: v for k, v in GATEWAY_SETTINGS.items() if k != missing}
    with pytest.raises(ProviderError) as ei:
        create_aide(settings)
    assert var in ei.value.message  # nosec B101


def test_blank_env_value_counts_as_missing(gateway_env, monkeypatch):
    monkeypatch.setenv("AIDE_SOLMA_ID", "   ")
    with pytest.raises(ProviderError) as ei:
        AideProvider()
    assert "AIDE_SOLMA_ID" in ei.value.message  # nosec B101


def test_provider_from_env(gateway_env):
    provider = AideProvider()
    cfg = provider.gateway_config
    assert cfg.generate_url == "https://aide.test/api/generate"  # nosec B101
    assert (cfg.use_case_id, cfg.solma_id) == ("uc-env", "solma-env")  # nosec B101
    assert provider.provider_name == "aide"  # nosec B101


def test_explicit_settings_win_over_env(gateway_env):
    provider = create_aide(
        AideProviderSettings(base_url="https://explicit.test/", policy=PolicyOptions(scrub_input=False))
    )
    assert provider.gateway_config.generate_url == "https://explicit.test/generate"  # nosec B101
    assert provider.gateway_config.use_case_id == "uc-env"  # nosec B101
    assert provider.gateway_config.policy.scrub_input is False  # nosec B101
    assert provider.gateway_config.policy.fail_on_scrub is True  # nosec B101


def test_unknown_model_rejected():
    provider = create_aide(GATEWAY_SETTINGS)
    with pytest.raises(ProviderError) as ei:
        provider.language_model("gpt-5")
    assert ei.value.code is ErrorCode.CONFIGURATION  # nosec B101
    assert "claude-sonnet-4.5" in ei.value.message  # nosec B101


def test_discovery():
    provider = create_aide(GATEWAY_SETTINGS)
    assert provider.models == get_aide_model_ids() == ["claude-sonnet-4.5", "claude-haiku-4.5", "gpt-4.1"]  # nosec B101
    assert [m.backend_model_id for m in provider.list_models()][-1] == "gpt-4.1"  # nosec B101
    assert provider.get_model_info("nope") is None  # nosec B101
    assert provider.get_model_info("gpt-4.1").display_name == "GPT 4.1"  # nosec B101
    assert is_aide_model("claude-haiku-4.5") and not is_aide_model("llama")  # nosec B101
    assert get_aide_model_display_names()["claude-sonnet-4.5"] == "Claude Sonnet 4.5"  # nosec B101
    assert isinstance(__version__, str)  # nosec B101


def test_default_provider_is_lazy_and_cached(gateway_env):
    first = aide()
    assert aide() is first  # nosec B101
    reset_default_provider()
    assert aide() is not first  # nosec B101


def test_default_provider_fails_without_env():
    with pytest.raises(ProviderError):
        aide()


def test_injected_token_cache_is_used_once_per_window():
    grants = []

    def fetch() -> TokenGrant:
        grants.append(1)
        return TokenGrant(access_token="cached-tok", expires_in=3600)

    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    provider = create_aide(GATEWAY_SETTINGS, token_cache=TokenCache(fetch), client=handler.client())
    model = provider.language_model(ANTHROPIC_MODEL)
    options = CallOptions(prompt=[Message.user("Hi")])
    model.generate(options)
    model.generate(options)
    assert len(grants) == 1  # nosec B101
    assert [r.headers["Authorization"] for r in handler.requests] == ["Bearer cached-tok"] * 2  # nosec B101


def test_custom_supplier_called_every_request():
    calls = []

    def supplier() -> str:
        calls.append(1)
        return f"custom-{len(calls)}"

    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    provider = create_aide({**GATEWAY_SETTINGS, "get_auth_token": supplier}, client=handler.client())
    model = provider.language_model(ANTHROPIC_MODEL)
    options = CallOptions(prompt=[Message.user("Hi")])
    model.generate(options)
    model.generate(options)
    assert [r.headers["Authorization"] for r in handler.requests] == ["Bearer custom-1", "Bearer custom-2"]  # nosec B101


def test_missing_azure_credentials_fail_at_first_call():
    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    provider = create_aide(GATEWAY_SETTINGS, client=handler.client())
    with pytest.raises(ProviderError) as ei:
        provider.language_model(ANTHROPIC_MODEL).generate(CallOptions(prompt=[Message.user("Hi")]))
    assert ei.value.code is ErrorCode.CONFIGURATION  # nosec B101
    assert "AIDE_AZURE_TENANT_ID" in ei.value.message  # nosec B101
    assert handler.requests == []  # nosec B101
