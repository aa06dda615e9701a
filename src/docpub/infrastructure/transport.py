"""Requests-backed transport for the Help Center API.

Each method performs exactly one physical HTTP exchange and reports it as a
`TransportOutcome`; retrying and error shaping belong to the dispatcher.

Usage example:
    import requests

    from docpub.config import ZendeskConfig
    from docpub.infrastructure.auth import AuthRequestBuilder
    from docpub.infrastructure.transport import RequestsTransport

    config = ZendeskConfig.from_env()
    transport = RequestsTransport(
        request_builder=AuthRequestBuilder(config),
        session=requests.Session(),
    )
    outcome = transport.call("articles", "show", 360001)
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import override

import requests

from ..exceptions import InvalidResponseError
from ..protocols import RequestBuilder, Transport, TransportOutcome
from .endpoints import ENDPOINTS, Endpoint, operation_names, resolve_endpoint
from .resilience import response_details

ARTICLE_ATTACHMENT_KEY = "article_attachment"


def _outcome(response: requests.Response, *, key: str | None = None) -> TransportOutcome:
    """Decode a received response; failed statuses carry no result."""
    if response.status_code >= 400 or not response.content:
        return TransportOutcome(response=response)
    try:
        body: object = response.json()
    except ValueError:
        error = InvalidResponseError(response.status_code, response_details(response))
        return TransportOutcome(error=error, response=response)
    if key is not None:
        body = body.get(key) if isinstance(body, dict) else None
    return TransportOutcome(response=response, result=body)


class RequestsTransport(Transport):
    """Performs single Help Center calls over a shared `requests.Session`."""

    def __init__(
        self,
        *,
        request_builder: RequestBuilder,
        session: requests.Session | None = None,
        timeout_seconds: float = 30.0,
        endpoints: Mapping[str, Mapping[str, Endpoint]] = ENDPOINTS,
    ) -> None:
        self.request_builder = request_builder
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds
        self._endpoints = endpoints

    @property
    @override
    def operations(self) -> Mapping[str, tuple[str, ...]]:
        return operation_names(self._endpoints)

    @override
    def call(self, resource: str, operation: str, *args: object) -> TransportOutcome:
        endpoint = resolve_endpoint(resource, operation, self._endpoints)
        path, payload = endpoint.bind(resource, operation, args)
        request = self.request_builder.build(path)
        try:
            response = self.session.request(
                endpoint.method,
                request.url,
                auth=request.auth,
                json=payload,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            return TransportOutcome(error=exc, response=exc.response)
        return _outcome(response)

    @override
    def upload_attachment(self, article_id: int | str, file_path: str | Path) -> TransportOutcome:
        """Upload `file_path` as an inline attachment of the article.

        The form encoder only accepts strings, so `inline` is sent as "true".
        """
        request = self.request_builder.build(f"/articles/{article_id}/attachments.json")
        path = Path(file_path)
        try:
            with path.open("rb") as handle:
                response = self.session.post(
                    request.url,
                    auth=request.auth,
                    data={"inline": "true"},
                    files={"file": (path.name, handle)},
                    timeout=self.timeout_seconds,
                )
        except requests.RequestException as exc:
            return TransportOutcome(error=exc, response=exc.response)
        except OSError as exc:
            return TransportOutcome(error=exc)
        return _outcome(response, key=ARTICLE_ATTACHMENT_KEY)
