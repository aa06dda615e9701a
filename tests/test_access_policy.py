"""Tests for section access policies set from document metadata."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from docpub.access_policy import build_access_policy, set_section_access_policy
from docpub.client import HelpCenterClient
from docpub.exceptions import HelpCenterApiError, InvalidMetadataError
from tests.fakes import FakeTransport, failed, succeeded

UPDATED = {"access_policy": {"viewable_by": "staff"}}


@pytest.fixture
def client(fake_transport: FakeTransport) -> Iterator[HelpCenterClient]:
    with HelpCenterClient(fake_transport) as instance:
        yield instance


def test_resolves_with_updated_policy(fake_transport: FakeTransport, client: HelpCenterClient) -> None:
    fake_transport.script("accesspolicies", "update", succeeded(UPDATED))

    future = set_section_access_policy(123, {"access": {"viewableBy": "staff"}}, client)

    assert future.result(timeout=5) == UPDATED
    assert fake_transport.calls_to("accesspolicies", "update") == [
        (123, {"access_policy": {"viewable_by": "staff"}})
    ]


def test_rejects_when_api_fails(fake_transport: FakeTransport, client: HelpCenterClient) -> None:
    fake_transport.script("accesspolicies", "update", failed(422, text='{"error": "invalid"}'))

    future = set_section_access_policy(123, {"access": {"viewableBy": "staff"}}, client)

    with pytest.raises(HelpCenterApiError) as exc_info:
        future.result(timeout=5)
    assert exc_info.value.status_code == 422


def test_no_access_block_resolves_none(fake_transport: FakeTransport, client: HelpCenterClient) -> None:
    future = set_section_access_policy(123, {}, client)

    assert future.done()
    assert future.result() is None
    assert fake_transport.calls == []


def test_unrecognised_access_properties_resolve_none(
    fake_transport: FakeTransport, client: HelpCenterClient
) -> None:
    future = set_section_access_policy(123, {"access": {"someRandomProperty": "value"}}, client)

    assert future.result() is None
    assert fake_transport.calls == []


def test_both_properties_are_sent(fake_transport: FakeTransport, client: HelpCenterClient) -> None:
    meta = {"access": {"viewableBy": "everyone", "manageableBy": "managers"}}

    set_section_access_policy(9, meta, client).result(timeout=5)

    assert fake_transport.calls_to("accesspolicies", "update") == [
        (9, {"access_policy": {"viewable_by": "everyone", "manageable_by": "managers"}})
    ]


@pytest.mark.parametrize(
    ("access", "expected"),
    [
        ({"viewableBy": "everyone"}, {"viewable_by": "everyone"}),
        ({"manageableBy": "staff"}, {"manageable_by": "staff"}),
    ],
)
def test_build_access_policy_maps_single_property(
    access: dict[str, str], expected: dict[str, str]
) -> None:
    assert build_access_policy({"access": access}) == {"access_policy": expected}


def test_other_metadata_is_ignored() -> None:
    assert build_access_policy({"title": "Intro", "position": 3}) is None


def test_malformed_access_block_is_rejected() -> None:
    with pytest.raises(InvalidMetadataError):
        build_access_policy({"access": "staff"})
