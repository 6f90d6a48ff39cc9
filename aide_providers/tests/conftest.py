"""Pytest configuration for the AIDE provider test suite.

Every test starts from a clean slate: no ``AIDE_*`` variables leak in from
the developer's shell or a local ``.env``, and module caches (config file,
default provider, shared token caches, pooled HTTP clients) are reset.
"""

from __future__ import annotations

import os
from typing import Iterator

import pytest

from aide_providers import config
from aide_providers.auth import clear_token_cache
from aide_providers.base.http import close_all_clients
from aide_providers.gateway.provider import reset_default_provider


def _reset_module_state() -> None:
    config._reset_caches()  # type: ignore[attr-defined]
    reset_default_provider()
    clear_token_cache()
    close_all_clients()


@pytest.fixture(autouse=True)
def clean_aide_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip ``AIDE_*`` variables and point ``DOTENV_FILE`` at a missing file."""

    saved = dict(os.environ)
    for name in list(os.environ):
        if name.startswith("AIDE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    _reset_module_state()
    yield
    _reset_module_state()
    # .env loading writes straight into os.environ; undo it here.
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture()
def gateway_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Populate the three required gateway variables."""

    monkeypatch.setenv("AIDE_BASE_URL", "https://aide.test/api")
    monkeypatch.setenv("AIDE_USE_CASE_ID", "uc-env")
    monkeypatch.setenv("AIDE_SOLMA_ID", "solma-env")


@pytest.fixture()
def azure_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AIDE_AZURE_TENANT_ID", "tenant-1")
    monkeypatch.setenv("AIDE_AZURE_CLIENT_ID", "client-1")
    monkeypatch.setenv("AIDE_AZURE_CLIENT_SECRET", "s3cret")  # pragma: allowlist secret
    monkeypatch.setenv("AIDE_AZURE_SCOPE", "api://aide/.default")
