"""
Pydantic settings models for the AIDE provider.

Purpose
-------
Typed, validated containers for everything the provider factory needs:
gateway coordinates, the identity-provider credentials (or a custom token
supplier), static header overrides, and the content-safety policy.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``model_dump``.

Failure modes
-------------
- Pure data containers; type errors surface as ``pydantic.ValidationError``.
- Required-setting checks are not done here. The factory validates base URL,
  use-case id and logging id at construction; Azure credentials are checked
  lazily when a token is first needed.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .defaults import (
    AZURE_DEFAULT_AUTHORITY_HOST,
    DEFAULT_APPLY_GUARDRAIL,
    DEFAULT_FAIL_ON_SCRUB,
    DEFAULT_SCRUB_INPUT,
)
from .env import AZURE_ENV_MAP


class PolicyOptions(BaseModel):
    """Content-safety flags sent in the envelope ``policy`` block."""

    scrub_input: bool = DEFAULT_SCRUB_INPUT
    apply_guardrail: bool = DEFAULT_APPLY_GUARDRAIL
    fail_on_scrub: bool = DEFAULT_FAIL_ON_SCRUB

    def to_wire(self) -> Dict[str, bool]:
        return {
            "scrubInput": self.scrub_input,
            "applyGuardrail": self.apply_guardrail,
            "failOnScrub": self.fail_on_scrub,
        }


class AzureCredentials(BaseModel):
    """Azure AD client-credentials for the gateway token."""

    tenant_id: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = Field(default=None, repr=False)
    scope: Optional[str] = None
    authority_host: str = AZURE_DEFAULT_AUTHORITY_HOST

    def missing_env_vars(self) -> List[str]:
        """Env var names of the credential fields that are unset."""
        return [
            AZURE_ENV_MAP[name]
            for name in ("tenant_id", "client_id", "client_secret", "scope")
            if not getattr(self, name)
        ]


class AideProviderSettings(BaseModel):
    """Provider construction settings.

    Attributes:
        base_url: Gateway base URL (``/generate`` is appended).
        use_case_id: Value of the ``UseCaseID`` header.
        solma_id: Logging identifier placed in ``routing.logMetadata``.
        azure: Identity-provider credentials.
        get_auth_token: Custom bearer-token supplier; bypasses Azure entirely.
        headers: Static header overrides added to every gateway call.
        policy: Content-safety flags.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    base_url: Optional[str] = None
    use_case_id: Optional[str] = None
    solma_id: Optional[str] = None
    azure: AzureCredentials = Field(default_factory=AzureCredentials)
    get_auth_token: Optional[Callable[[], str]] = Field(default=None, exclude=True, repr=False)
    headers: Dict[str, str] = Field(default_factory=dict)
    policy: PolicyOptions = Field(default_factory=PolicyOptions)


__all__ = ["AideProviderSettings", "AzureCredentials", "PolicyOptions"]
