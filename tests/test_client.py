"""Tests for the Help Center client surface."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
import requests

from docpub.client import HelpCenterClient, ResourceOperations
from docpub.config import ZendeskConfig
from docpub.exceptions import HelpCenterApiError, MissingTransportError, UnknownOperationError
from docpub.infrastructure import AuthRequestBuilder, RequestsTransport
from docpub.infrastructure.endpoints import operation_names
from tests.fakes import FakeTransport, failed, succeeded


@pytest.fixture
def client(fake_transport: FakeTransport) -> Iterator[HelpCenterClient]:
    with HelpCenterClient(fake_transport) as instance:
        yield instance


def test_missing_transport_is_rejected() -> None:
    with pytest.raises(MissingTransportError, match="No Zendesk transport to wrap provided!"):
        HelpCenterClient(None)


def test_surface_mirrors_declared_operations(client: HelpCenterClient) -> None:
    declared = operation_names()

    assert set(client.surface) == set(declared)
    for resource, names in declared.items():
        assert set(names) <= set(client.surface[resource])


def test_attachment_create_is_added(client: HelpCenterClient) -> None:
    assert set(client.articleattachments) == {
        "list",
        "list_inline",
        "list_block",
        "show",
        "delete",
        "create",
    }


def test_operations_return_futures(fake_transport: FakeTransport, client: HelpCenterClient) -> None:
    fake_transport.script("sections", "show", succeeded({"section": {"id": 42}}))

    future = client.sections.show(42)

    assert future.result(timeout=5) == {"section": {"id": 42}}
    assert fake_transport.calls == [("sections", "show", (42,))]


def test_key_and_attribute_access_are_equivalent(
    fake_transport: FakeTransport, client: HelpCenterClient
) -> None:
    client.surface["categories"]["list"]().result(timeout=5)
    client.categories.list().result(timeout=5)

    assert fake_transport.calls_to("categories", "list") == [(), ()]


def test_attachment_create_uses_upload(
    fake_transport: FakeTransport, client: HelpCenterClient
) -> None:
    fake_transport.script(
        "articleattachments", "create", succeeded({"id": 9, "content_url": "https://cdn/x.png"})
    )

    record = client.articleattachments.create(360001, "img/x.png").result(timeout=5)

    assert record == {"id": 9, "content_url": "https://cdn/x.png"}
    assert fake_transport.calls == [("articleattachments", "create", (360001, "img/x.png"))]


def test_attachment_create_is_retried(fake_transport: FakeTransport, client: HelpCenterClient) -> None:
    fake_transport.script("articleattachments", "create", failed(503), succeeded({"id": 1}))

    with patch("docpub.infrastructure.dispatch.time.sleep"):
        assert client.articleattachments.create(1, "a.png").result(timeout=5) == {"id": 1}

    assert len(fake_transport.calls) == 2


def test_failures_reject_with_api_error(fake_transport: FakeTransport, client: HelpCenterClient) -> None:
    fake_transport.script("articles", "delete", failed(403, text="Forbidden"))

    with pytest.raises(HelpCenterApiError, match="status=403"):
        client.articles.delete(1).result(timeout=5)


def test_surface_is_read_only(client: HelpCenterClient) -> None:
    with pytest.raises(TypeError):
        client.surface["tickets"] = ResourceOperations("tickets", {})  # type: ignore[index]
    with pytest.raises(TypeError):
        client.articles["publish"] = client.articles.show  # type: ignore[index]


def test_unknown_resource_and_operation(client: HelpCenterClient) -> None:
    with pytest.raises(AttributeError, match="tickets"):
        _ = client.tickets
    with pytest.raises(AttributeError, match="publish"):
        _ = client.articles.publish


def test_only_available_resources_are_exposed() -> None:
    transport = FakeTransport(available={"sections": ("show",)})

    with HelpCenterClient(transport) as client:
        assert set(client.surface) == {"sections", "articleattachments"}
        assert set(client.sections) == {"show"}
        assert set(client.articleattachments) == {"create"}


def test_undeclared_operation_rejects_through_future(zendesk_config: ZendeskConfig) -> None:
    session = MagicMock(spec=requests.Session)
    transport = RequestsTransport(request_builder=AuthRequestBuilder(zendesk_config), session=session)

    with HelpCenterClient(transport) as client:
        future = client.dispatcher.dispatch("sections", "archive", 1)
        with pytest.raises(UnknownOperationError):
            future.result(timeout=5)

    session.request.assert_not_called()
