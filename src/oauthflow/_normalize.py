"""Normalization of provider token responses.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .models import Flow, Issuer, RetrievedToken

DEFAULT_TOKEN_TYPE = "bearer"


class TokenResponse(BaseModel):
    """Token endpoint response as providers send it."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    token_type: str | None = None
    scope: str | list[str] | None = None
    scopes: list[str] | None = None
    expires_in: int | None = None
    refresh_token: str | None = None
    refresh_token_expires_in: int | None = None


def parse_scopes(response: TokenResponse) -> frozenset[str]:
    """Scopes from a structured list, else a comma or space delimited string."""
    if response.scopes is not None:
        return frozenset(response.scopes)
    if isinstance(response.scope, list):
        return frozenset(response.scope)
    if not response.scope:
        return frozenset()
    separator = "," if "," in response.scope else None
    return frozenset(s.strip() for s in response.scope.split(separator) if s.strip())


def normalize(response: TokenResponse, issuer: Issuer, flow: Flow) -> RetrievedToken:
    return RetrievedToken(
        access_token=response.access_token,
        token_type=response.token_type or DEFAULT_TOKEN_TYPE,
        scopes=parse_scopes(response),
        expires_in=response.expires_in or 0,
        refresh_token=response.refresh_token or "",
        refresh_token_expires_in=response.refresh_token_expires_in or 0,
        issuer=issuer,
        flow=flow,
    )
