"""aide_providers.config.env
=========================

Environment variable names and small parsing helpers for the AIDE provider.

Helpers never raise on unset variables; they return ``None`` so callers can
fall back to defaults or explicit settings. Malformed booleans raise a
configuration ``ProviderError`` naming the variable.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

from ..base.errors import configuration_error

AIDE_BASE_URL = "AIDE_BASE_URL"
AIDE_USE_CASE_ID = "AIDE_USE_CASE_ID"
AIDE_SOLMA_ID = "AIDE_SOLMA_ID"
AIDE_AZURE_TENANT_ID = "AIDE_AZURE_TENANT_ID"
AIDE_AZURE_CLIENT_ID = "AIDE_AZURE_CLIENT_ID"
AIDE_AZURE_CLIENT_SECRET = "AIDE_AZURE_CLIENT_SECRET"  # pragma: allowlist secret - env var name
AIDE_AZURE_SCOPE = "AIDE_AZURE_SCOPE"
AIDE_AZURE_AUTHORITY_HOST = "AIDE_AZURE_AUTHORITY_HOST"
AIDE_SCRUB_INPUT = "AIDE_SCRUB_INPUT"
AIDE_APPLY_GUARDRAIL = "AIDE_APPLY_GUARDRAIL"
AIDE_FAIL_ON_SCRUB = "AIDE_FAIL_ON_SCRUB"
AIDE_CONFIG_FILE = "AIDE_CONFIG_FILE"

# Settings field -> env var, for the flat gateway settings.
GATEWAY_ENV_MAP: Dict[str, str] = {
    "base_url": AIDE_BASE_URL,
    "use_case_id": AIDE_USE_CASE_ID,
    "solma_id": AIDE_SOLMA_ID,
}

AZURE_ENV_MAP: Dict[str, str] = {
    "tenant_id": AIDE_AZURE_TENANT_ID,
    "client_id": AIDE_AZURE_CLIENT_ID,
    "client_secret": AIDE_AZURE_CLIENT_SECRET,
    "scope": AIDE_AZURE_SCOPE,
    "authority_host": AIDE_AZURE_AUTHORITY_HOST,
}

POLICY_ENV_MAP: Dict[str, str] = {
    "scrub_input": AIDE_SCRUB_INPUT,
    "apply_guardrail": AIDE_APPLY_GUARDRAIL,
    "fail_on_scrub": AIDE_FAIL_ON_SCRUB,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def read_env(name: str) -> Optional[str]:
    """Return the stripped value of ``name``; empty strings count as unset."""
    val = os.environ.get(name)
    if val is None:
        return None
    val = val.strip()
    return val or None


def parse_bool(name: str, raw: Optional[str]) -> Optional[bool]:
    """Parse a boolean flag value read from ``name``.

    Raises:
        ProviderError: ``CONFIGURATION`` when the value is not a recognized flag.
    """
    if raw is None:
        return None
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise configuration_error(f"{name} must be a boolean flag (true/false), got {raw!r}")


def read_bool_env(name: str) -> Optional[bool]:
    return parse_bool(name, read_env(name))


__all__ = [
    "AIDE_APPLY_GUARDRAIL",
    "AIDE_AZURE_AUTHORITY_HOST",
    "AIDE_AZURE_CLIENT_ID",
    "AIDE_AZURE_CLIENT_SECRET",
    "AIDE_AZURE_SCOPE",
    "AIDE_AZURE_TENANT_ID",
    "AIDE_BASE_URL",
    "AIDE_CONFIG_FILE",
    "AIDE_FAIL_ON_SCRUB",
    "AIDE_SCRUB_INPUT",
    "AIDE_SOLMA_ID",
    "AIDE_USE_CASE_ID",
    "AZURE_ENV_MAP",
    "GATEWAY_ENV_MAP",
    "POLICY_ENV_MAP",
    "parse_bool",
    "read_bool_env",
    "read_env",
]
