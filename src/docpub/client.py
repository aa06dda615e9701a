"""Help Center client: one future-returning operation per declared endpoint.

Usage example:
    from docpub.client import HelpCenterClient

    with HelpCenterClient(transport) as client:
        section = client.sections.show(42).result()
        attachment = client.articleattachments.create(360001, "img/logo.png").result()
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from concurrent.futures import Future
from functools import partial
from pathlib import Path
from types import MappingProxyType, TracebackType
from typing import Self

from .exceptions import MissingTransportError
from .infrastructure.dispatch import ResilientDispatcher
from .infrastructure.queue import ConcurrencyLimitedQueue
from .protocols import RetryPolicy, Transport

RESOURCE_KINDS: tuple[str, ...] = (
    "articles",
    "articleattachments",
    "sections",
    "accesspolicies",
    "categories",
    "translations",
)
ATTACHMENTS = "articleattachments"

type Operation = Callable[..., Future[object]]


class ResourceOperations(Mapping[str, Operation]):
    """Read-only wrapped operations of one resource kind.

    Operations are reachable by key (`ops["show"]`) or attribute (`ops.show`).
    """

    def __init__(self, resource: str, operations: Mapping[str, Operation]) -> None:
        self.resource = resource
        self._operations: Mapping[str, Operation] = MappingProxyType(dict(operations))

    def __getitem__(self, name: str) -> Operation:
        return self._operations[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __getattr__(self, name: str) -> Operation:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._operations[name]
        except KeyError:
            raise AttributeError(f"{self.resource!r} has no operation {name!r}") from None


class HelpCenterClient:
    """Wraps a transport so every call is queued, retried and future-based.

    The surface is built once from the transport's declared operations for
    the resource kinds in `RESOURCE_KINDS`, and never changes afterwards.
    `articleattachments.create` has no declared endpoint; it is added here
    and drives the multipart upload through the same dispatcher.
    """

    def __init__(
        self,
        transport: Transport | None,
        *,
        queue: ConcurrencyLimitedQueue | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        if transport is None:
            raise MissingTransportError()
        self.transport = transport
        self.dispatcher = ResilientDispatcher(transport, queue=queue, retry_policy=retry_policy)

        available = transport.operations
        surface: dict[str, ResourceOperations] = {}
        for resource in RESOURCE_KINDS:
            names = available.get(resource)
            if names is None and resource != ATTACHMENTS:
                continue
            operations: dict[str, Operation] = {
                name: partial(self.dispatcher.dispatch, resource, name) for name in names or ()
            }
            if resource == ATTACHMENTS:
                operations["create"] = self.create_attachment
            surface[resource] = ResourceOperations(resource, operations)
        self.surface: Mapping[str, ResourceOperations] = MappingProxyType(surface)

    def create_attachment(self, article_id: int | str, file_path: str | Path) -> Future[object]:
        """Upload a file as an inline article attachment.

        Resolves with the `article_attachment` record from the response body.
        """
        return self.dispatcher.dispatch(
            ATTACHMENTS,
            "create",
            article_id,
            file_path,
            perform=self.transport.upload_attachment,
        )

    def __getattr__(self, name: str) -> ResourceOperations:
        if name.startswith("_") or name == "surface":
            raise AttributeError(name)
        try:
            return self.surface[name]
        except KeyError:
            raise AttributeError(f"Help Center client has no resource {name!r}") from None

    def close(self) -> None:
        """Wait for outstanding calls and release the worker threads."""
        self.dispatcher.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
