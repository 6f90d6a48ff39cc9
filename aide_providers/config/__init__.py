"""Configuration layer for the AIDE provider.

Goals
-----
* Centralize defaults (policy flags, wire versions, identity host).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults (the settings model defaults)
    2. Optional external config file (JSON or YAML) pointed to by AIDE_CONFIG_FILE
    3. Environment variables (AIDE_BASE_URL, AIDE_AZURE_TENANT_ID, ...)
    4. Explicit settings passed to the provider factory
* Provide a single call site: ``load_settings(explicit)``.

External Config File (Optional)
-------------------------------
If AIDE_CONFIG_FILE is set to a path, JSON is tried first, then YAML. Only the
``aide`` section is read. Structure example:

```
aide:
  base_url: https://gateway.example.internal/api
  use_case_id: ticket-assistant
  solma_id: "12345"
  azure:
    tenant_id: my-tenant
    scope: api://aide/.default
  policy:
    fail_on_scrub: false
```

Public API
----------
* get_gateway_config(overrides: dict | None = None) -> dict
* load_settings(explicit: AideProviderSettings | dict | None = None) -> AideProviderSettings
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ..base.logging import get_logger, log_event
from .env import (
    AIDE_CONFIG_FILE,
    AZURE_ENV_MAP,
    GATEWAY_ENV_MAP,
    POLICY_ENV_MAP,
    read_bool_env,
    read_env,
)
from .settings import AideProviderSettings, AzureCredentials, PolicyOptions

_logger = get_logger("aide.config")

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    environment variables are never overridden. Safe to call multiple times.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if line.startswith("export "):
                    line = line[len("export "):]
                if "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and k not in os.environ:
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(AIDE_CONFIG_FILE)
    if _FILE_CACHE is not None and path == _FILE_CACHE_PATH:
        return _FILE_CACHE
    _FILE_CACHE_PATH = path
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            log_event(_logger, "config.file.invalid", path=path, error=str(exc))
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    return data


def _reset_caches() -> None:
    """Forget the cached config file and .env state (tests)."""
    global _FILE_CACHE, _FILE_CACHE_PATH, _DOTENV_LOADED
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None
    _DOTENV_LOADED = False


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, var in GATEWAY_ENV_MAP.items():
        if (val := read_env(var)) is not None:
            out[field] = val
    azure = {field: val for field, var in AZURE_ENV_MAP.items() if (val := read_env(var)) is not None}
    if azure:
        out["azure"] = azure
    policy = {field: val for field, var in POLICY_ENV_MAP.items() if (val := read_bool_env(var)) is not None}
    if policy:
        out["policy"] = policy
    return out


def _merge(base: Dict[str, Any], extra: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``extra`` into ``base`` one level deep; ``None`` values are skipped."""
    for key, value in extra.items():
        if value is None:
            continue
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            base[key] = {**base[key], **{k: v for k, v in value.items() if v is not None}}
        else:
            base[key] = value
    return base


def get_gateway_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return merged provider configuration as a plain dict.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = AideProviderSettings().model_dump()

    file_cfg = _load_external_config().get("aide")
    if isinstance(file_cfg, dict):
        _merge(cfg, file_cfg)

    _merge(cfg, _env_overrides())

    if overrides:
        _merge(cfg, overrides)
    return cfg


def load_settings(
    explicit: Union[AideProviderSettings, Mapping[str, Any], None] = None,
) -> AideProviderSettings:
    """Resolve the effective ``AideProviderSettings``.

    Explicit settings win over every other source; only fields the caller
    actually set take part in the merge.
    """
    supplier = None
    overrides: Dict[str, Any] = {}
    if isinstance(explicit, AideProviderSettings):
        overrides = explicit.model_dump(exclude_unset=True)
        supplier = explicit.get_auth_token
    elif explicit:
        overrides = dict(explicit)
        supplier = overrides.pop("get_auth_token", None)
        for key in ("azure", "policy"):
            if isinstance(overrides.get(key), (AzureCredentials, PolicyOptions)):
                overrides[key] = overrides[key].model_dump(exclude_unset=True)
    cfg = get_gateway_config(overrides)
    settings = AideProviderSettings.model_validate(cfg)
    if supplier is not None:
        settings.get_auth_token = supplier
    return settings


__all__ = [
    "AideProviderSettings",
    "AzureCredentials",
    "PolicyOptions",
    "get_gateway_config",
    "load_settings",
]
