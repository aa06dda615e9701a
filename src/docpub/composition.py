"""Composition root for wiring the Help Center client and CLI."""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter

from .cli import create_app
from .client import HelpCenterClient
from .config import ZendeskConfig
from .infrastructure import (
    AuthRequestBuilder,
    ConcurrencyLimitedQueue,
    RequestsTransport,
    RetryPolicy,
)


def build_session(*, pool_size: int) -> requests.Session:
    """Return a session whose connection pool can serve every queue slot."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def build_help_center_client(
    config: ZendeskConfig,
    *,
    session: requests.Session | None = None,
) -> HelpCenterClient:
    """Build a fully wired client from configuration.

    Args:
        config: Zendesk credentials and dispatch tuning.
        session: Optional pre-built session (defaults to a pooled session).
    """
    transport = RequestsTransport(
        request_builder=AuthRequestBuilder(config),
        session=session or build_session(pool_size=config.max_concurrent),
        timeout_seconds=config.timeout_seconds,
    )
    return HelpCenterClient(
        transport,
        queue=ConcurrencyLimitedQueue(config.max_concurrent),
        retry_policy=RetryPolicy(
            max_retries=config.max_retries,
            retry_after_default_ms=config.retry_after_default_ms,
            retry_after_max_ms=config.retry_after_max_ms,
        ),
    )


app = create_app(build_help_center_client)
