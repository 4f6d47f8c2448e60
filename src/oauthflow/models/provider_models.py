"""Provider configuration models for oauthflow.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

from enum import Enum
from typing import NewType

from pydantic import BaseModel, ConfigDict, model_validator

Issuer = NewType("Issuer", str)


class QueryParametersPolicy(str, Enum):
    """How request parameters are attached to an outbound request.

    Some providers (Spotify, Discord) reject parameters sent as query strings,
    others accept either. Switch this if a provider reports missing parameters.
    """

    USE_QUERY_STRINGS = "useQueryStrings"
    USE_URL_ENCODED_FORM = "useUrlEncodedForm"


class Capability(str, Enum):
    """OAuth2 operations a provider descriptor can enable."""

    AUTHORIZATION_CODE = "authorization_code"
    IMPLICIT = "implicit"
    CLIENT_CREDENTIALS = "client_credentials"
    WEB_APP = "web_app"
    REFRESH = "refresh"
    REVOKE = "revoke"


class ProviderDescriptor(BaseModel):
    """Static configuration of one OAuth2 provider."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str
    authorization_url: str
    token_url: str
    revocation_url: str | None = None
    issuer: Issuer
    query_parameters_policy: QueryParametersPolicy = (
        QueryParametersPolicy.USE_URL_ENCODED_FORM
    )
    requires_basic_auth: bool = False
    capabilities: frozenset[Capability] = frozenset()
    scopes: type[Enum] | None = None
    default_scopes: tuple[str, ...] | None = None
    scope_separator: str = " "

    @model_validator(mode="after")
    def _check_revocation_url(self) -> ProviderDescriptor:
        if Capability.REVOKE in self.capabilities and not self.revocation_url:
            msg = "revocation_url is required when REVOKE is enabled"
            raise ValueError(msg)
        return self

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def join_scopes(self, scopes: list[Enum | str] | tuple[Enum | str, ...]) -> str:
        """Join scopes for the ``scope`` parameter."""
        return self.scope_separator.join(
            s.value if isinstance(s, Enum) else str(s) for s in scopes
        )

    def all_scopes(self) -> list[Enum | str]:
        """Scopes requested when the caller names none."""
        if self.default_scopes is not None:
            return list(self.default_scopes)
        return list(self.scopes) if self.scopes is not None else []
