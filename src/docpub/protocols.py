"""Protocol definitions for dependency injection.

These protocols define the seams the dispatch layer calls into, so the
dispatcher and capability surface can be unit tested against fakes instead
of a live Help Center.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from requests.auth import AuthBase


@runtime_checkable
class HttpResponse(Protocol):
    """The parts of an HTTP response the error classifier inspects."""

    status_code: int
    headers: Mapping[str, str]
    text: str


@dataclass(frozen=True)
class TransportOutcome:
    """Result of exactly one physical API attempt.

    `error` is set when the attempt failed before a usable response arrived
    (connection errors, timeouts, undecodable success bodies). `response` is
    the raw HTTP response when one was received, whatever its status.
    """

    error: BaseException | None = None
    response: HttpResponse | None = None
    result: object = None


@dataclass(frozen=True)
class AuthenticatedRequest:
    """Absolute URL plus the auth block for one Help Center request."""

    url: str
    auth: AuthBase


@runtime_checkable
class RequestBuilder(Protocol):
    """Builds authenticated request parameters for a relative endpoint."""

    def build(self, endpoint: str) -> AuthenticatedRequest:
        """Return the absolute URL and auth block for `endpoint`."""
        ...


@runtime_checkable
class Transport(Protocol):
    """Performs single physical calls against the Help Center API."""

    @property
    def operations(self) -> Mapping[str, tuple[str, ...]]:
        """Resource kind -> operation names this transport can perform."""
        ...

    def call(self, resource: str, operation: str, *args: object) -> TransportOutcome:
        """Perform one attempt of `resource.operation(*args)`."""
        ...

    def upload_attachment(self, article_id: int | str, file_path: str | Path) -> TransportOutcome:
        """Perform one multipart attachment upload attempt."""
        ...


@runtime_checkable
class RetryPolicy(Protocol):
    """Abstract retry policy for transient failures."""

    max_retries: int

    def compute_backoff(self, attempt: int, retry_after_ms: int | None = None) -> int:
        """Return the delay in milliseconds before retry number `attempt` (0-based)."""
        ...
