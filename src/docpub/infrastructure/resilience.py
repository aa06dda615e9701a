"""Failure classification and backoff for Help Center calls.

Usage example:
    from docpub.infrastructure.resilience import RetryPolicy, classify_failure

    failure = classify_failure(outcome.error, outcome.response)
    if failure is not None and failure.retryable:
        delay_ms = RetryPolicy().compute_backoff(0, failure.retry_after_ms)
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import override

from ..config import MAX_RETRIES, RETRY_AFTER_DEFAULT_MS, RETRY_AFTER_MAX_MS
from ..exceptions import HelpCenterApiError
from ..protocols import HttpResponse
from ..protocols import RetryPolicy as RetryPolicyProtocol

_MAX_BODY_CHARS = 300


@dataclass(frozen=True)
class FailureDescriptor:
    """Normalized view of one failed attempt."""

    status_code: int | None = None
    retry_after_ms: int | None = None
    cause: BaseException | None = None
    body: str = ""

    @property
    def retryable(self) -> bool:
        """Retry when the server sent a hint or reported a server-side error."""
        if self.retry_after_ms is not None:
            return True
        return self.status_code is not None and self.status_code >= 500

    def to_error(self, resource: str, operation: str) -> HelpCenterApiError:
        """Build the exception delivered to the caller's future."""
        error = HelpCenterApiError(
            resource=resource,
            operation=operation,
            status_code=self.status_code,
            retry_after_ms=self.retry_after_ms,
            body=self.body,
        )
        error.__cause__ = self.cause
        return error


def parse_retry_after(headers: Mapping[str, str] | None) -> float | None:
    """Parse a Retry-After header into seconds, if available.

    Accepts whole or fractional seconds and HTTP dates.
    """
    if not headers:
        return None
    value = headers.get("Retry-After") or headers.get("retry-after")
    if not value:
        return None
    value = str(value).strip()
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        return seconds if math.isfinite(seconds) and seconds >= 0 else None
    try:
        dt = parsedate_to_datetime(value)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        delta = (dt - datetime.now(UTC)).total_seconds()
        return max(0, int(delta))
    except (AttributeError, OverflowError, TypeError, ValueError):
        return None


def response_details(response: HttpResponse) -> str:
    """Return a compact response body for error reporting."""
    try:
        body = response.text or ""
    except (UnicodeDecodeError, ValueError):
        return "<unreadable>"
    body = " ".join(str(body).split())
    if len(body) > _MAX_BODY_CHARS:
        body = body[:_MAX_BODY_CHARS] + "..."
    return body


def _error_status(error: BaseException) -> int | None:
    response = getattr(error, "response", None)
    status = getattr(response, "status_code", None)
    if isinstance(status, int):
        return status
    status = getattr(error, "status_code", None)
    return status if isinstance(status, int) else None


def classify_failure(
    error: BaseException | None,
    response: HttpResponse | None,
) -> FailureDescriptor | None:
    """Decide whether a transport outcome is a failure.

    Returns None for a clean response below 400. A Retry-After header on the
    response always yields a descriptor carrying the hint in milliseconds,
    even when the status alone would not have been a failure.
    """
    status_code = response.status_code if response is not None else None
    failure: FailureDescriptor | None = None

    if error is not None:
        failure = FailureDescriptor(
            status_code=status_code if status_code is not None else _error_status(error),
            cause=error,
            body=response_details(response) if response is not None else "",
        )
    elif status_code is not None and status_code >= 400:
        failure = FailureDescriptor(status_code=status_code, body=response_details(response))

    retry_after = parse_retry_after(response.headers) if response is not None else None
    if retry_after is not None:
        if failure is None:
            failure = FailureDescriptor(status_code=status_code)
        failure = replace(failure, retry_after_ms=math.ceil(retry_after * 1000))

    return failure


@dataclass
class RetryPolicy(RetryPolicyProtocol):
    """Exponential backoff doubling from `retry_after_default_ms` up to a cap."""

    max_retries: int = MAX_RETRIES
    retry_after_default_ms: int = RETRY_AFTER_DEFAULT_MS
    retry_after_max_ms: int = RETRY_AFTER_MAX_MS

    @override
    def compute_backoff(self, attempt: int, retry_after_ms: int | None = None) -> int:
        """Compute the retry delay; an explicit server hint is used verbatim."""
        if retry_after_ms is not None:
            return retry_after_ms
        multiplier = max(2**attempt, 1)
        return min(self.retry_after_default_ms * multiplier, self.retry_after_max_ms)
