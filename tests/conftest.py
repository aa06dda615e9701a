"""Pytest fixtures shared across the docpub test suite.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket

import pytest

import docpub.config as config_module
from docpub.config import ZendeskConfig
from tests.fakes import FakeTransport
from tests.support.errors import NetworkIsolationError

_ENV_VARS = (
    "ZENDESK_API_USERNAME",
    "ZENDESK_API_TOKEN",
    "ZENDESK_URL",
    "ZENDESK_API_PASSWORD",
    "ZENDESK_OAUTH",
    "ZENDESK_MAX_CONCURRENT",
    "ZENDESK_MAX_RETRIES",
    "ZENDESK_RETRY_AFTER_DEFAULT_MS",
    "ZENDESK_RETRY_AFTER_MAX_MS",
    "ZENDESK_TIMEOUT_SECONDS",
)


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> None:
    """Block all network access in tests.

    Tests that need HTTP should use FakeTransport or a MagicMock session.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)


@pytest.fixture
def zendesk_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Provide a minimal Zendesk environment and disable .env discovery."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ZENDESK_API_USERNAME", "username")
    monkeypatch.setenv("ZENDESK_API_TOKEN", "token")
    monkeypatch.setenv("ZENDESK_URL", "https://example.zendesk.com")

    def fake_load_dotenv(dotenv_path: str | None = None) -> bool:
        _ = dotenv_path
        return True

    monkeypatch.setattr(config_module, "load_dotenv", fake_load_dotenv)


@pytest.fixture
def zendesk_config() -> ZendeskConfig:
    """Provide an API-token configuration."""
    return ZendeskConfig(
        username="user@example.com",
        token="api-token",
        url="https://example.zendesk.com/",
    )


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Provide a fake transport that succeeds with no body by default."""
    return FakeTransport()
