"""Custom exceptions for docpub.

Failed API calls reach callers as a `HelpCenterApiError` through the future
returned by a wrapped operation. Configuration and construction errors are
raised synchronously.
"""

from __future__ import annotations


class DocpubError(Exception):
    """Base exception for all docpub errors."""

    pass


class ConfigurationError(DocpubError):
    """Raised when required Zendesk configuration is missing or invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class MissingTransportError(DocpubError):
    """Raised when a client is constructed without a transport to wrap."""

    def __init__(self) -> None:
        super().__init__("No Zendesk transport to wrap provided!")


class UnknownOperationError(DocpubError):
    """Raised when a resource/operation pair is not declared in the endpoint registry."""

    def __init__(self, resource: str, operation: str) -> None:
        self.resource = resource
        self.operation = operation
        super().__init__(f"Unknown Zendesk operation: {resource}.{operation}")


class InvalidResponseError(DocpubError):
    """Raised when a successful response does not carry a JSON body."""

    def __init__(self, status_code: int, details: str) -> None:
        self.status_code = status_code
        super().__init__(f"Expected a JSON body (status={status_code}): {details}")


class HelpCenterApiError(DocpubError):
    """Normalized failure of a Help Center API call.

    Carries the HTTP status code and retry hint when the server supplied them.
    Transport-level failures (no usable response) chain the original exception
    as ``__cause__``.
    """

    def __init__(
        self,
        *,
        resource: str,
        operation: str,
        status_code: int | None = None,
        retry_after_ms: int | None = None,
        body: str = "",
    ) -> None:
        self.resource = resource
        self.operation = operation
        self.status_code = status_code
        self.retry_after_ms = retry_after_ms
        self.body = body
        status = status_code if status_code is not None else "no response"
        super().__init__(f"Zendesk request {resource}.{operation} failed (status={status})")


class InvalidMetadataError(DocpubError):
    """Raised when document metadata has an unusable shape."""

    def __init__(self, details: str) -> None:
        super().__init__(f"Invalid document metadata: {details}")
