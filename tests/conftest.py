import os
from typing import Callable

import httpx
import pytest

from stem_client.core.config import ClientSettings
from stem_client.core.services.separation_client import StemSeparatorClient

BASE_URL = "https://api.example.com"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # Keep developer STEMSEP_* variables and .env files out of the tests.
    for key in list(os.environ):
        if key.upper().startswith("STEMSEP_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(_env_file=None)


@pytest.fixture
def recorded() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(settings, recorded) -> Callable[..., StemSeparatorClient]:
    """Build a client whose HTTP traffic goes to `handler`."""

    def factory(handler, *, transport: str = "auto", **kwargs) -> StemSeparatorClient:
        def recording(request: httpx.Request):
            recorded.append(request)
            return handler(request)

        kwargs.setdefault("base_url", BASE_URL)
        return StemSeparatorClient(
            settings=settings,
            transport=transport,
            http_transport=httpx.MockTransport(recording),
            **kwargs,
        )

    return factory
