"""Tests for the Azure AD client-credentials fetcher (mocked transport)."""
from __future__ import annotations

from urllib.parse import parse_qs

import httpx
import pytest

from aide_providers.auth import (
    TokenCache,
    azure_credentials_from_env,
    azure_fetcher,
    fetch_azure_token,
    token_endpoint,
)
from aide_providers.base.errors import ErrorCode, ProviderError
from aide_providers.config.settings import AzureCredentials

from .helpers import RecordingHandler

CREDS = AzureCredentials(
    tenant_id="tenant-1",
    client_id="client-1",
    client_secret="s3cret",  # pragma: allowlist secret
    scope="api://aide/.default",
)


def _token_handler(token: str = "az-token", expires_in: int = 3599) -> RecordingHandler:
    return RecordingHandler(
        lambda _req: httpx.Response(200, json={"access_token": token, "expires_in": expires_in, "token_type": "Bearer"})
    )


def test_token_endpoint_default_and_custom_host():
    assert token_endpoint(CREDS) == "https://login.microsoftonline.com/tenant-1/oauth2/v2.0/token"  # nosec B101
    custom = CREDS.model_copy(update={"authority_host": "https://login.example.net/"})
    assert token_endpoint(custom) == "https://login.example.net/tenant-1/oauth2/v2.0/token"  # nosec B101


def test_fetch_posts_form_encoded_grant():
    handler = _token_handler()
    grant = fetch_azure_token(CREDS, handler.client())
    assert grant.access_token == "az-token"  # nosec B101
    assert grant.expires_in == 3599  # nosec B101
    req = handler.requests[0]
    assert req.method == "POST"  # nosec B101
    assert req.headers["content-type"] == "application/x-www-form-urlencoded"  # nosec B101
    form = {k: v[0] for k, v in parse_qs(req.content.decode()).items()}
    assert form == {  # nosec B101
        "client_id": "client-1",
        "client_secret": "s3cret",  # pragma: allowlist secret
        "scope": "api://aide/.default",
        "grant_type": "client_credentials",
    }


def test_non_2xx_is_auth_error_with_status_and_body():
    handler = RecordingHandler(lambda _req: httpx.Response(401, text="invalid_client"))
    with pytest.raises(ProviderError) as ei:
        fetch_azure_token(CREDS, handler.client())
    err = ei.value
    assert err.code is ErrorCode.AUTH  # nosec B101
    assert err.status_code == 401  # nosec B101
    assert err.message == "Failed to fetch Azure token: 401 Unauthorized - invalid_client"  # nosec B101


def test_body_without_token_is_auth_error():
    handler = RecordingHandler(lambda _req: httpx.Response(200, json={"token_type": "Bearer"}))
    with pytest.raises(ProviderError) as ei:
        fetch_azure_token(CREDS, handler.client())
    assert ei.value.code is ErrorCode.AUTH  # nosec B101


def test_transport_failure_is_classified():
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError) as ei:
        fetch_azure_token(CREDS, RecordingHandler(boom).client())
    assert ei.value.code is ErrorCode.TRANSIENT  # nosec B101
    assert ei.value.retryable is True  # nosec B101
    assert ei.value.message.startswith("Failed to fetch Azure token: ")  # nosec B101


def test_incomplete_credentials_name_missing_variables():
    handler = _token_handler()
    with pytest.raises(ProviderError) as ei:
        fetch_azure_token(AzureCredentials(tenant_id="t", client_id="c"), handler.client())
    err = ei.value
    assert err.code is ErrorCode.CONFIGURATION  # nosec B101
    assert "AIDE_AZURE_CLIENT_SECRET" in err.message  # nosec B101
    assert "(missing: AIDE_AZURE_CLIENT_SECRET, AIDE_AZURE_SCOPE)" in err.message  # nosec B101
    assert handler.requests == []  # nosec B101


def test_fetcher_falls_back_to_environment(azure_env):
    creds = azure_credentials_from_env()
    assert creds.tenant_id == "tenant-1"  # nosec B101
    handler = _token_handler()
    cache = TokenCache(azure_fetcher(None, handler.client()))
    assert cache.get_token() == "az-token"  # nosec B101
    assert cache.get_token() == "az-token"  # nosec B101
    assert len(handler.requests) == 1  # nosec B101
    assert "/tenant-1/oauth2/v2.0/token" in str(handler.requests[0].url)  # nosec B101


def test_env_authority_host_override(azure_env, monkeypatch):
    monkeypatch.setenv("AIDE_AZURE_AUTHORITY_HOST", "https://login.sovereign.example")
    assert azure_credentials_from_env().authority_host == "https://login.sovereign.example"  # nosec B101
