"""Resilient dispatch of Help Center calls.

Every call goes through one `ResilientDispatcher`, which gives it:
- a slot in a shared concurrency-limited queue
- automatic retries with rate-aware exponential backoff
- a `concurrent.futures.Future` that resolves with the result or
  rejects with a `HelpCenterApiError`

Usage example:
    from docpub.infrastructure.dispatch import ResilientDispatcher

    dispatcher = ResilientDispatcher(transport)
    article = dispatcher.dispatch("articles", "show", 360001).result()
"""

from __future__ import annotations

import time
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from functools import partial
from types import TracebackType
from typing import Self

from ..observability import get_logger
from ..protocols import RetryPolicy, Transport, TransportOutcome
from .queue import ConcurrencyLimitedQueue
from .resilience import RetryPolicy as RetryPolicyImpl
from .resilience import classify_failure

logger = get_logger("docpub.infrastructure.dispatch")

type TransportCall = Callable[..., TransportOutcome]


@dataclass
class UnitOfWork:
    """One logical API call plus its retry state."""

    resource: str
    operation: str
    arguments: tuple[object, ...]
    attempts_remaining: int
    perform: TransportCall


class ResilientDispatcher:
    """Schedules transport calls with bounded concurrency and retries.

    A unit of work keeps its queue slot for its whole lifetime: retries run
    sequentially inside the same worker and are never resubmitted.

    The dispatcher owns its queue, including one passed in as `queue`; closing
    the dispatcher shuts that queue down. Share a queue between dispatchers
    only if no dispatcher is closed before the others are done with it.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        queue: ConcurrencyLimitedQueue | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self.transport = transport
        self.queue = queue or ConcurrencyLimitedQueue()
        self.retry_policy = retry_policy or RetryPolicyImpl()

    def dispatch(
        self,
        resource: str,
        operation: str,
        *args: object,
        perform: TransportCall | None = None,
    ) -> Future[object]:
        """Queue `resource.operation(*args)` and return a future for its result.

        Args:
            resource: Resource kind, e.g. "articles".
            operation: Operation name, e.g. "create".
            *args: Positional arguments forwarded to the physical call.
            perform: Physical call to use instead of `transport.call(resource, operation, ...)`.
        """
        unit = UnitOfWork(
            resource=resource,
            operation=operation,
            arguments=args,
            attempts_remaining=self.retry_policy.max_retries,
            perform=perform or partial(self.transport.call, resource, operation),
        )
        return self.queue.submit(self._run, unit)

    def _run(self, unit: UnitOfWork) -> object:
        max_retries = self.retry_policy.max_retries
        while True:
            outcome = unit.perform(*unit.arguments)
            failure = classify_failure(outcome.error, outcome.response)
            if failure is None:
                return outcome.result
            if not failure.retryable or unit.attempts_remaining <= 0:
                raise failure.to_error(unit.resource, unit.operation)

            delay_ms = self.retry_policy.compute_backoff(
                max_retries - unit.attempts_remaining,
                failure.retry_after_ms,
            )
            unit.attempts_remaining -= 1
            logger.warning(
                "Zendesk request failed (%s.%s, status=%s). "
                "Retrying request after %s milliseconds. %s attempts are remaining.",
                unit.resource,
                unit.operation,
                failure.status_code,
                delay_ms,
                unit.attempts_remaining,
            )
            time.sleep(delay_ms / 1000)

    def close(self) -> None:
        """Shut down the queue (injected or not), waiting for outstanding calls."""
        self.queue.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
