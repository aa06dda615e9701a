"""Typed shapes of Help Center API payloads used by docpub."""

from __future__ import annotations

from typing import NotRequired, TypedDict


class ArticleAttachment(TypedDict):
    """Help Center article attachment record."""

    id: int
    url: str
    article_id: int
    file_name: str
    content_url: str
    content_type: str
    size: int
    inline: bool
    created_at: NotRequired[str]
    updated_at: NotRequired[str]


class AccessPolicy(TypedDict, total=False):
    """Section access policy body."""

    viewable_by: str
    manageable_by: str
    restricted_to_group_ids: list[int]
    required_tags: list[str]


class AccessPolicyPayload(TypedDict):
    """Request/response envelope for section access policies."""

    access_policy: AccessPolicy
