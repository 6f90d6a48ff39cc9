"""
Azure AD client-credentials token acquisition.

One POST per call; caching lives in :mod:`aide_providers.auth.token_cache`.
Credential completeness is checked here, when a token is actually needed,
so providers configured with a custom token supplier never require Azure
settings.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from ..base.errors import ErrorCode, ProviderError, configuration_error, wrap_exception
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..config.env import AZURE_ENV_MAP, read_env
from ..config.settings import AzureCredentials

_logger = get_logger("aide.auth")


@dataclass(frozen=True)
class TokenGrant:
    """Access token plus its lifetime as reported by the identity provider."""

    access_token: str
    expires_in: float


def azure_credentials_from_env() -> AzureCredentials:
    values = {field: read_env(var) for field, var in AZURE_ENV_MAP.items()}
    if values.get("authority_host") is None:
        values.pop("authority_host")
    return AzureCredentials(**values)


def require_complete(creds: AzureCredentials) -> AzureCredentials:
    """Return ``creds`` unchanged or raise a configuration error listing what is missing."""
    missing = creds.missing_env_vars()
    if missing:
        raise configuration_error(
            "Missing Azure OAuth2 configuration. Required environment variables: "
            "AIDE_AZURE_TENANT_ID, AIDE_AZURE_CLIENT_ID, AIDE_AZURE_CLIENT_SECRET, AIDE_AZURE_SCOPE "
            f"(missing: {', '.join(missing)})"
        )
    return creds


def token_endpoint(creds: AzureCredentials) -> str:
    return f"{creds.authority_host.rstrip('/')}/{creds.tenant_id}/oauth2/v2.0/token"


def fetch_azure_token(creds: AzureCredentials, client: Optional[httpx.Client] = None) -> TokenGrant:
    """Perform one client-credentials grant.

    Raises:
        ProviderError: ``CONFIGURATION`` when credentials are incomplete,
            ``AUTH`` on a non-2xx answer (message carries status and body),
            a classified code on transport failures.
    """
    require_complete(creds)
    http = client or get_httpx_client(None, "identity")
    url = token_endpoint(creds)
    ctx = LogContext(provider="aide")
    normalized_log_event(_logger, "token.fetch.start", ctx, phase="start", attempt=1)
    t0 = time.perf_counter()
    try:
        response = http.post(
            url,
            data={
                "client_id": creds.client_id,
                "client_secret": creds.client_secret,
                "scope": creds.scope,
                "grant_type": "client_credentials",
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
    except httpx.HTTPError as exc:
        err = wrap_exception(exc, "Failed to fetch Azure token")
        normalized_log_event(
            _logger, "token.fetch.error", ctx, phase="finalize", attempt=1,
            error_code=err.code.value, emitted=False,
        )
        raise err from exc

    if not response.is_success:
        normalized_log_event(
            _logger, "token.fetch.error", ctx, phase="finalize", attempt=1,
            error_code=ErrorCode.AUTH.value, emitted=False, status_code=response.status_code,
        )
        raise ProviderError(
            code=ErrorCode.AUTH,
            message=(
                f"Failed to fetch Azure token: {response.status_code} "
                f"{response.reason_phrase} - {response.text}"
            ),
            status_code=response.status_code,
        )

    try:
        data = response.json()
        grant = TokenGrant(access_token=str(data["access_token"]), expires_in=float(data["expires_in"]))
    except (ValueError, KeyError, TypeError) as exc:
        raise ProviderError(
            code=ErrorCode.AUTH,
            message="Failed to fetch Azure token: response is missing access_token/expires_in",
            status_code=response.status_code,
        ) from exc
    normalized_log_event(
        _logger, "token.fetch.end", ctx, phase="finalize", attempt=1, emitted=True,
        latency_ms=round((time.perf_counter() - t0) * 1000, 2), expires_in=grant.expires_in,
    )
    return grant


def azure_fetcher(
    creds: Optional[AzureCredentials] = None,
    client: Optional[httpx.Client] = None,
) -> Callable[[], TokenGrant]:
    """Bind credentials (or, when incomplete, the environment) into a fetch callable."""

    def _fetch() -> TokenGrant:
        resolved = creds
        if resolved is None or resolved.missing_env_vars():
            resolved = azure_credentials_from_env()
        return fetch_azure_token(resolved, client)

    return _fetch


__all__ = [
    "TokenGrant",
    "azure_credentials_from_env",
    "azure_fetcher",
    "fetch_azure_token",
    "require_complete",
    "token_endpoint",
]
