"""Declared Help Center endpoints, keyed by resource kind and operation.

Paths are relative to the Help Center API root (`ZendeskConfig.remote_uri`).
Positional call arguments fill the `{}` placeholders in order; POST and PUT
operations take one more positional argument, the JSON payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from string import Formatter
from types import MappingProxyType

from ..exceptions import UnknownOperationError

_BODY_METHODS = frozenset({"POST", "PUT"})


class EndpointArgumentsError(TypeError):
    """Raised when an operation is called with the wrong number of arguments."""

    def __init__(self, resource: str, operation: str, expected: int, received: int) -> None:
        super().__init__(
            f"{resource}.{operation} takes {expected} positional argument(s) ({received} given)"
        )


@dataclass(frozen=True)
class Endpoint:
    """HTTP method and path template of one operation."""

    method: str
    path: str

    @property
    def path_params(self) -> int:
        return sum(1 for _, field, _, _ in Formatter().parse(self.path) if field is not None)

    @property
    def takes_body(self) -> bool:
        return self.method in _BODY_METHODS

    def bind(
        self, resource: str, operation: str, args: tuple[object, ...]
    ) -> tuple[str, object | None]:
        """Return the concrete relative path and JSON payload for `args`."""
        expected = self.path_params + (1 if self.takes_body else 0)
        if len(args) != expected:
            raise EndpointArgumentsError(resource, operation, expected, len(args))
        path = self.path.format(*args[: self.path_params])
        payload = args[self.path_params] if self.takes_body else None
        return path, payload


def _get(path: str) -> Endpoint:
    return Endpoint("GET", path)


def _post(path: str) -> Endpoint:
    return Endpoint("POST", path)


def _put(path: str) -> Endpoint:
    return Endpoint("PUT", path)


def _delete(path: str) -> Endpoint:
    return Endpoint("DELETE", path)


ENDPOINTS: Mapping[str, Mapping[str, Endpoint]] = MappingProxyType(
    {
        "articles": MappingProxyType(
            {
                "list": _get("/articles.json"),
                "list_by_section": _get("/sections/{}/articles.json"),
                "list_by_category": _get("/categories/{}/articles.json"),
                "show": _get("/articles/{}.json"),
                "create": _post("/sections/{}/articles.json"),
                "update": _put("/articles/{}.json"),
                "delete": _delete("/articles/{}.json"),
                "associate_attachments_in_bulk": _post("/articles/{}/bulk_attachments.json"),
            }
        ),
        # `create` is a multipart upload, see RequestsTransport.upload_attachment.
        "articleattachments": MappingProxyType(
            {
                "list": _get("/articles/{}/attachments.json"),
                "list_inline": _get("/articles/{}/attachments/inline.json"),
                "list_block": _get("/articles/{}/attachments/block.json"),
                "show": _get("/articles/attachments/{}.json"),
                "delete": _delete("/articles/attachments/{}.json"),
            }
        ),
        "sections": MappingProxyType(
            {
                "list": _get("/sections.json"),
                "list_by_category": _get("/categories/{}/sections.json"),
                "show": _get("/sections/{}.json"),
                "create": _post("/categories/{}/sections.json"),
                "update": _put("/sections/{}.json"),
                "delete": _delete("/sections/{}.json"),
            }
        ),
        "accesspolicies": MappingProxyType(
            {
                "show": _get("/sections/{}/access_policy.json"),
                "update": _put("/sections/{}/access_policy.json"),
            }
        ),
        "categories": MappingProxyType(
            {
                "list": _get("/categories.json"),
                "show": _get("/categories/{}.json"),
                "create": _post("/categories.json"),
                "update": _put("/categories/{}.json"),
                "delete": _delete("/categories/{}.json"),
            }
        ),
        "translations": MappingProxyType(
            {
                "list": _get("/articles/{}/translations.json"),
                "list_missing": _get("/articles/{}/translations/missing.json"),
                "show": _get("/articles/{}/translations/{}.json"),
                "create": _post("/articles/{}/translations.json"),
                "update": _put("/articles/{}/translations/{}.json"),
                "delete": _delete("/translations/{}.json"),
                "create_for_section": _post("/sections/{}/translations.json"),
                "update_for_section": _put("/sections/{}/translations/{}.json"),
                "create_for_category": _post("/categories/{}/translations.json"),
                "update_for_category": _put("/categories/{}/translations/{}.json"),
            }
        ),
    }
)


def resolve_endpoint(
    resource: str,
    operation: str,
    endpoints: Mapping[str, Mapping[str, Endpoint]] = ENDPOINTS,
) -> Endpoint:
    """Look up a declared endpoint or raise `UnknownOperationError`."""
    try:
        return endpoints[resource][operation]
    except KeyError as exc:
        raise UnknownOperationError(resource, operation) from exc


def operation_names(
    endpoints: Mapping[str, Mapping[str, Endpoint]] = ENDPOINTS,
) -> Mapping[str, tuple[str, ...]]:
    """Return resource kind -> declared operation names."""
    return MappingProxyType({resource: tuple(ops) for resource, ops in endpoints.items()})
