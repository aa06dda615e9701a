"""Authenticated request parameters for the Help Center API."""

from __future__ import annotations

from typing import override

from requests import PreparedRequest
from requests.auth import AuthBase, HTTPBasicAuth

from ..config import ZendeskConfig
from ..protocols import AuthenticatedRequest, RequestBuilder


class BearerAuth(AuthBase):
    """OAuth bearer token auth for requests."""

    def __init__(self, token: str) -> None:
        self.token = token

    def __call__(self, r: PreparedRequest) -> PreparedRequest:
        r.headers["Authorization"] = f"Bearer {self.token}"
        return r

    def __eq__(self, other: object) -> bool:
        return isinstance(other, BearerAuth) and other.token == self.token

    def __ne__(self, other: object) -> bool:
        return not self == other


class AuthRequestBuilder(RequestBuilder):
    """Chooses the auth block for every Help Center request.

    Precedence: OAuth bearer token, then username/password, then the
    `{username}/token` API-token form of basic auth.
    """

    def __init__(self, config: ZendeskConfig) -> None:
        self.config = config

    @override
    def build(self, endpoint: str) -> AuthenticatedRequest:
        return AuthenticatedRequest(url=self.config.remote_uri + endpoint, auth=self._auth())

    def _auth(self) -> AuthBase:
        config = self.config
        if config.oauth:
            return BearerAuth(config.token)
        if config.password:
            return HTTPBasicAuth(config.username, config.password)
        return HTTPBasicAuth(f"{config.username}/token", config.token)
