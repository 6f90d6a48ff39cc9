"""Bearer token acquisition for the AIDE gateway.

Exports the single-flight ``TokenCache`` and the Azure AD client-credentials
fetcher it is usually built around.
"""

from .azure import (
    TokenGrant,
    azure_credentials_from_env,
    azure_fetcher,
    fetch_azure_token,
    require_complete,
    token_endpoint,
)
from .token_cache import (
    CachedToken,
    TokenCache,
    clear_token_cache,
    default_token_cache,
    shared_token_cache,
)

__all__ = [
    "CachedToken",
    "TokenCache",
    "TokenGrant",
    "azure_credentials_from_env",
    "azure_fetcher",
    "clear_token_cache",
    "default_token_cache",
    "fetch_azure_token",
    "require_complete",
    "shared_token_cache",
    "token_endpoint",
]
