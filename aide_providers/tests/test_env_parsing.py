from __future__ import annotations

import pytest

from aide_providers.base.errors import ErrorCode, ProviderError
from aide_providers.config.env import (
    AZURE_ENV_MAP,
    GATEWAY_ENV_MAP,
    POLICY_ENV_MAP,
    parse_bool,
    read_bool_env,
    read_env,
)


def test_env_maps_cover_configuration_surface():
    assert set(GATEWAY_ENV_MAP.values()) == {"AIDE_BASE_URL", "AIDE_USE_CASE_ID", "AIDE_SOLMA_ID"}  # nosec B101
    assert AZURE_ENV_MAP["client_secret"] == "AIDE_AZURE_CLIENT_SECRET"  # nosec B101
    assert POLICY_ENV_MAP["fail_on_scrub"] == "AIDE_FAIL_ON_SCRUB"  # nosec B101


def test_read_env_strips_and_treats_empty_as_unset(monkeypatch):
    monkeypatch.setenv("AIDE_BASE_URL", "  https://x.test  ")
    assert read_env("AIDE_BASE_URL") == "https://x.test"  # nosec B101
    monkeypatch.setenv("AIDE_BASE_URL", "")
    assert read_env("AIDE_BASE_URL") is None  # nosec B101
    assert read_env("AIDE_NOT_SET") is None  # nosec B101


@pytest.mark.parametrize("raw, expected", [("1", True), ("TRUE", True), ("on", True), ("0", False), ("No", False)])
def test_parse_bool(raw, expected):
    assert parse_bool("X", raw) is expected  # nosec B101


def test_parse_bool_rejects_garbage():
    assert parse_bool("X", None) is None  # nosec B101
    with pytest.raises(ProviderError) as ei:
        parse_bool("AIDE_APPLY_GUARDRAIL", "sometimes")
    assert ei.value.code is ErrorCode.CONFIGURATION  # nosec B101


def test_read_bool_env(monkeypatch):
    assert read_bool_env("AIDE_SCRUB_INPUT") is None  # nosec B101
    monkeypatch.setenv("AIDE_SCRUB_INPUT", "yes")
    assert read_bool_env("AIDE_SCRUB_INPUT") is True  # nosec B101
