"""Exports for test fakes."""

from .transport import FakeResponse, FakeTransport, failed, succeeded

__all__ = [
    "FakeResponse",
    "FakeTransport",
    "failed",
    "succeeded",
]
