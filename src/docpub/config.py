"""Centralised, injectable configuration for docpub."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Self

from dotenv import load_dotenv

from .exceptions import ConfigurationError

HELP_CENTER_API_PATH = "/api/v2/help_center"

MAX_CONCURRENT = 29
MAX_RETRIES = 6
RETRY_AFTER_DEFAULT_MS = 500
RETRY_AFTER_MAX_MS = 8000
DEFAULT_TIMEOUT_SECONDS = 30.0


class PositiveIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class NonNegativeIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be zero or a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a non-negative integer.")


class PositiveFloatEnvVarError(ValueError):
    """Raised when an environment variable must be a positive number."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive number.")


class BooleanEnvVarError(ValueError):
    """Raised when an environment variable must be a supported boolean."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a boolean value (true/false, 1/0, yes/no, on/off).")


@dataclass(frozen=True)
class ZendeskConfig:
    """Immutable Zendesk connection and dispatch settings.

    Load from environment with `ZendeskConfig.from_env()` or construct directly for testing.
    """

    username: str
    token: str
    url: str
    password: str = ""
    oauth: bool = False

    # Dispatch tuning
    max_concurrent: int = MAX_CONCURRENT
    max_retries: int = MAX_RETRIES
    retry_after_default_ms: int = RETRY_AFTER_DEFAULT_MS
    retry_after_max_ms: int = RETRY_AFTER_MAX_MS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def remote_uri(self) -> str:
        """Help Center API root with any trailing slashes removed from `url`."""
        return self.url.rstrip("/") + HELP_CENTER_API_PATH

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            ZendeskConfig instance populated from environment.

        Raises:
            ConfigurationError: If username, token or URL is not set.
        """
        load_dotenv(dotenv_path)

        username = os.getenv("ZENDESK_API_USERNAME", "").strip()
        if not username:
            raise ConfigurationError("Zendesk Username is undefined")
        token = os.getenv("ZENDESK_API_TOKEN", "").strip()
        if not token:
            raise ConfigurationError("Zendesk Token is undefined")
        url = os.getenv("ZENDESK_URL", "").strip()
        if not url:
            raise ConfigurationError("Zendesk Url is undefined")

        return cls(
            username=username,
            token=token,
            url=url,
            password=os.getenv("ZENDESK_API_PASSWORD", "").strip(),
            oauth=_parse_optional_bool(os.getenv("ZENDESK_OAUTH", ""), env_name="ZENDESK_OAUTH")
            or False,
            max_concurrent=_parse_positive_int(
                os.getenv("ZENDESK_MAX_CONCURRENT", ""),
                default=MAX_CONCURRENT,
                env_name="ZENDESK_MAX_CONCURRENT",
            ),
            max_retries=_parse_non_negative_int(
                os.getenv("ZENDESK_MAX_RETRIES", ""),
                default=MAX_RETRIES,
                env_name="ZENDESK_MAX_RETRIES",
            ),
            retry_after_default_ms=_parse_positive_int(
                os.getenv("ZENDESK_RETRY_AFTER_DEFAULT_MS", ""),
                default=RETRY_AFTER_DEFAULT_MS,
                env_name="ZENDESK_RETRY_AFTER_DEFAULT_MS",
            ),
            retry_after_max_ms=_parse_positive_int(
                os.getenv("ZENDESK_RETRY_AFTER_MAX_MS", ""),
                default=RETRY_AFTER_MAX_MS,
                env_name="ZENDESK_RETRY_AFTER_MAX_MS",
            ),
            timeout_seconds=_parse_positive_float(
                os.getenv("ZENDESK_TIMEOUT_SECONDS", ""),
                default=DEFAULT_TIMEOUT_SECONDS,
                env_name="ZENDESK_TIMEOUT_SECONDS",
            ),
        )


def _parse_positive_int(value: str, *, default: int, env_name: str) -> int:
    """Parse a positive integer, falling back to `default` when unset."""
    text = value.strip()
    if not text:
        return default
    try:
        parsed = int(text)
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_non_negative_int(value: str, *, default: int, env_name: str) -> int:
    text = value.strip()
    if not text:
        return default
    try:
        parsed = int(text)
    except ValueError as exc:
        raise NonNegativeIntegerEnvVarError(env_name) from exc
    if parsed < 0:
        raise NonNegativeIntegerEnvVarError(env_name)
    return parsed


def _parse_positive_float(value: str, *, default: float, env_name: str) -> float:
    text = value.strip()
    if not text:
        return default
    try:
        parsed = float(text)
    except ValueError as exc:
        raise PositiveFloatEnvVarError(env_name) from exc
    if not math.isfinite(parsed) or parsed <= 0:
        raise PositiveFloatEnvVarError(env_name)
    return parsed


def _parse_optional_bool(value: str, *, env_name: str) -> bool | None:
    """Parse an optional boolean from an environment variable."""
    text = value.strip().lower()
    if not text:
        return None
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    raise BooleanEnvVarError(env_name)
