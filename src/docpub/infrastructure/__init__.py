"""Concrete infrastructure implementations and shared helpers."""

from .auth import AuthRequestBuilder, BearerAuth
from .dispatch import ResilientDispatcher, UnitOfWork
from .endpoints import ENDPOINTS, Endpoint, operation_names, resolve_endpoint
from .queue import ConcurrencyLimitedQueue
from .resilience import FailureDescriptor, RetryPolicy, classify_failure, parse_retry_after
from .transport import ARTICLE_ATTACHMENT_KEY, RequestsTransport

__all__ = [
    "ARTICLE_ATTACHMENT_KEY",
    "AuthRequestBuilder",
    "BearerAuth",
    "ConcurrencyLimitedQueue",
    "ENDPOINTS",
    "Endpoint",
    "FailureDescriptor",
    "RequestsTransport",
    "ResilientDispatcher",
    "RetryPolicy",
    "UnitOfWork",
    "classify_failure",
    "operation_names",
    "parse_retry_after",
    "resolve_endpoint",
]
