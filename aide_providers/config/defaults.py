"""aide_providers.config.defaults
==============================

Central place for small, stable default values used by the gateway adapter and
the token fetcher. These values mirror what the gateway expects when a setting
is not explicitly provided.

This module intentionally avoids importing from other provider packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Gateway ----
# Path appended to the configured base URL for every generation call.
GATEWAY_GENERATE_PATH = "/generate"

# Content-safety policy applied when neither env nor settings override it.
DEFAULT_SCRUB_INPUT = True
DEFAULT_APPLY_GUARDRAIL = True
DEFAULT_FAIL_ON_SCRUB = True

# Fixed routing block values.
ROUTING_GUARDRAILS_ENABLED = False
ROUTING_SCRUB_INPUT = False
ROUTING_SCRUBBING_TIMEOUT_SECONDS = 8

# Backend wire versions.
ANTHROPIC_BEDROCK_VERSION = "bedrock-2023-05-31"
OPENAI_API_VERSION = "2024-10-21"

# ---- Identity provider ----
AZURE_DEFAULT_AUTHORITY_HOST = "https://login.microsoftonline.com"
# Tokens are treated as expired this many seconds before the server expiry.
TOKEN_EXPIRY_BUFFER_SECONDS = 300

# ---- CLI ----
PROVIDER_CLI_DEFAULT_MODEL = "claude-sonnet-4.5"


__all__ = [
    "ANTHROPIC_BEDROCK_VERSION",
    "AZURE_DEFAULT_AUTHORITY_HOST",
    "DEFAULT_APPLY_GUARDRAIL",
    "DEFAULT_FAIL_ON_SCRUB",
    "DEFAULT_SCRUB_INPUT",
    "GATEWAY_GENERATE_PATH",
    "OPENAI_API_VERSION",
    "PROVIDER_CLI_DEFAULT_MODEL",
    "ROUTING_GUARDRAILS_ENABLED",
    "ROUTING_SCRUBBING_TIMEOUT_SECONDS",
    "ROUTING_SCRUB_INPUT",
    "TOKEN_EXPIRY_BUFFER_SECONDS",
]
