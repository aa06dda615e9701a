"""Conformance checks for the runtime-checkable protocols."""

from unittest.mock import MagicMock

import requests

from docpub.config import ZendeskConfig
from docpub.infrastructure import AuthRequestBuilder, RequestsTransport, RetryPolicy
from docpub.protocols import HttpResponse, RequestBuilder, Transport
from docpub.protocols import RetryPolicy as RetryPolicyProtocol
from tests.fakes import FakeResponse, FakeTransport


def test_requests_transport_is_a_transport(zendesk_config: ZendeskConfig) -> None:
    transport = RequestsTransport(
        request_builder=AuthRequestBuilder(zendesk_config),
        session=MagicMock(spec=requests.Session),
    )

    assert isinstance(transport, Transport)


def test_fake_transport_is_a_transport() -> None:
    assert isinstance(FakeTransport(), Transport)


def test_auth_request_builder_is_a_request_builder(zendesk_config: ZendeskConfig) -> None:
    assert isinstance(AuthRequestBuilder(zendesk_config), RequestBuilder)


def test_retry_policy_conforms() -> None:
    assert isinstance(RetryPolicy(), RetryPolicyProtocol)


def test_responses_conform() -> None:
    assert isinstance(FakeResponse(), HttpResponse)
    assert isinstance(requests.Response(), HttpResponse)
