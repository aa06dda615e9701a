"""Section access policies derived from document metadata."""

from __future__ import annotations

from collections.abc import Mapping
from concurrent.futures import Future

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .client import HelpCenterClient
from .exceptions import InvalidMetadataError
from .types import AccessPolicy, AccessPolicyPayload


class _AccessModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    viewable_by: str | None = Field(default=None, alias="viewableBy")
    manageable_by: str | None = Field(default=None, alias="manageableBy")


class _MetaModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    access: _AccessModel | None = None


def build_access_policy(meta: Mapping[str, object]) -> AccessPolicyPayload | None:
    """Return the access policy request body for `meta`, or None if it sets nothing.

    Raises:
        InvalidMetadataError: If the `access` block has the wrong shape.
    """
    try:
        parsed = _MetaModel.model_validate(dict(meta))
    except ValidationError as exc:
        raise InvalidMetadataError(str(exc)) from exc
    if parsed.access is None:
        return None
    policy: AccessPolicy = {}
    if parsed.access.viewable_by is not None:
        policy["viewable_by"] = parsed.access.viewable_by
    if parsed.access.manageable_by is not None:
        policy["manageable_by"] = parsed.access.manageable_by
    if not policy:
        return None
    return {"access_policy": policy}


def set_section_access_policy(
    section_id: int | str,
    meta: Mapping[str, object],
    client: HelpCenterClient,
) -> Future[object]:
    """Update a section's access policy from its metadata.

    Returns an already-resolved future with None when the metadata carries
    no access policy values; no request is made in that case.
    """
    payload = build_access_policy(meta)
    if payload is None:
        done: Future[object] = Future()
        done.set_result(None)
        return done
    return client.accesspolicies.update(section_id, payload)
