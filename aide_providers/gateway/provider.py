"""AIDE provider factory.

``AideProvider`` resolves settings once (defaults, config file, environment,
explicit values), validates the three gateway settings immediately, and hands
out ``AideLanguageModel`` instances for registry model ids.

Token source, in priority order:
    1. ``settings.get_auth_token`` (custom supplier, called on every request)
    2. an injected ``TokenCache``
    3. the process-wide cache shared by providers with the same Azure credentials
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx

from ..auth import TokenCache, shared_token_cache
from ..base.cancellation import CancellationToken
from ..base.errors import configuration_error
from ..base.logging import LogContext, get_logger, log_event
from ..base.model_registry import AIDE_MODELS, find_model, list_model_ids, lookup_model
from ..base.models import ModelInfo, ModelSettings
from ..config import AideProviderSettings, load_settings
from ..config.env import GATEWAY_ENV_MAP
from .language_model import AideLanguageModel, GatewayConfig, TokenSupplier

SettingsInput = Union[AideProviderSettings, Mapping[str, Any], None]

_logger = get_logger("aide.provider")


def _token_supplier(settings: AideProviderSettings, token_cache: Optional[TokenCache]) -> TokenSupplier:
    custom = settings.get_auth_token
    if custom is not None:

        def _custom(_cancel: Optional[CancellationToken]) -> str:
            return custom()

        return _custom
    cache = token_cache or shared_token_cache(settings.azure)
    return cache.get_token


class AideProvider:
    """Entry point for AIDE gateway models.

    Raises:
        ProviderError: ``CONFIGURATION`` at construction when ``AIDE_BASE_URL``,
            ``AIDE_USE_CASE_ID`` or ``AIDE_SOLMA_ID`` resolves to nothing.
    """

    provider_name = "aide"

    def __init__(
        self,
        settings: SettingsInput = None,
        *,
        token_cache: Optional[TokenCache] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        resolved = load_settings(settings)
        for field_name, env_var in GATEWAY_ENV_MAP.items():
            if not getattr(resolved, field_name):
                raise configuration_error(f"{env_var} is required")
        self.settings = resolved
        self._client = client
        self._config = GatewayConfig(
            base_url=resolved.base_url,  # type: ignore[arg-type]
            use_case_id=resolved.use_case_id,  # type: ignore[arg-type]
            solma_id=resolved.solma_id,  # type: ignore[arg-type]
            get_token=_token_supplier(resolved, token_cache),
            headers=dict(resolved.headers),
            policy=resolved.policy,
        )
        log_event(
            _logger,
            "provider.init",
            LogContext(provider=self.provider_name),
            custom_token=resolved.get_auth_token is not None,
            header_overrides=len(resolved.headers),
        )

    @property
    def gateway_config(self) -> GatewayConfig:
        return self._config

    @property
    def models(self) -> List[str]:
        return list_model_ids()

    def list_models(self) -> List[ModelInfo]:
        return list(AIDE_MODELS.values())

    def get_model_info(self, model_id: str) -> Optional[ModelInfo]:
        return find_model(model_id)

    def language_model(
        self,
        model_id: str,
        settings: Union[ModelSettings, Mapping[str, Any], None] = None,
    ) -> AideLanguageModel:
        """Return a model bound to this provider's gateway config.

        Raises:
            ProviderError: ``CONFIGURATION`` for an unknown ``model_id``.
        """
        info = lookup_model(model_id)
        if settings is not None and not isinstance(settings, ModelSettings):
            settings = ModelSettings(**dict(settings))
        return AideLanguageModel(model_id, info, self._config, settings, client=self._client)


def create_aide(
    settings: SettingsInput = None,
    *,
    token_cache: Optional[TokenCache] = None,
    client: Optional[httpx.Client] = None,
) -> AideProvider:
    return AideProvider(settings, token_cache=token_cache, client=client)


_DEFAULT_PROVIDER: Optional[AideProvider] = None
_DEFAULT_LOCK = threading.Lock()


def aide() -> AideProvider:
    """Return the process-default provider, built from the environment on first use."""
    global _DEFAULT_PROVIDER  # noqa: PLW0603 - documented module cache
    with _DEFAULT_LOCK:
        if _DEFAULT_PROVIDER is None:
            _DEFAULT_PROVIDER = AideProvider()
        return _DEFAULT_PROVIDER


def reset_default_provider() -> None:
    """Drop the process-default provider so the next ``aide()`` rebuilds it."""
    global _DEFAULT_PROVIDER  # noqa: PLW0603
    with _DEFAULT_LOCK:
        _DEFAULT_PROVIDER = None


def is_aide_model(model_id: str) -> bool:
    return model_id in AIDE_MODELS


def get_aide_model_ids() -> List[str]:
    return list_model_ids()


def get_aide_model_display_names() -> Dict[str, str]:
    return {model_id: info.display_name for model_id, info in AIDE_MODELS.items()}


__all__ = [
    "AideProvider",
    "aide",
    "create_aide",
    "get_aide_model_display_names",
    "get_aide_model_ids",
    "is_aide_model",
    "reset_default_provider",
]
