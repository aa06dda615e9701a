"""Polling helper for tests that coordinate with worker threads."""

from __future__ import annotations

import time
from collections.abc import Callable

from .errors import WaitTimeoutError


def wait_until(predicate: Callable[[], bool], description: str, *, timeout: float = 5.0) -> None:
    """Poll `predicate` until it holds or `timeout` seconds pass."""
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise WaitTimeoutError(description)
        time.sleep(0.005)
