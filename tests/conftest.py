from __future__ import annotations

import os
from typing import Callable

import httpx
import pytest

from gh_asset.adapters.http_client import build_async_client
from gh_asset.core.config import AppSettings
from gh_asset.core.domain.models import Credential
from gh_asset.core.errors import AuthError

ASSET_ID = "1234abcd-1234-1234-1234-1234abcd1234"
ASSET_URL = f"https://github.com/user-attachments/assets/{ASSET_ID}"
TOKEN = "gho_testtoken123"


class FakeCredentialProvider:
    """Credential provider returning a canned token or raising a canned error."""

    def __init__(self, token: str = TOKEN, error: AuthError | None = None) -> None:
        self.token = token
        self.error = error
        self.calls = 0

    def fetch_token(self) -> Credential:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return Credential(token=self.token)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep the developer's GH_ASSET_* variables and user .env out of tests."""

    for key in list(os.environ):
        if key.upper().startswith("GH_ASSET_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))


@pytest.fixture()
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture()
def credential() -> Credential:
    return Credential(token=TOKEN)


@pytest.fixture()
def credentials() -> FakeCredentialProvider:
    return FakeCredentialProvider()


@pytest.fixture()
def make_client(settings: AppSettings) -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return build_async_client(settings, transport=httpx.MockTransport(handler))

    return _make
