"""Inbound request models for oauthflow.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from .._session import SessionStore


class CallbackRequest(BaseModel):
    """The provider's redirect back to this application."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    query: Mapping[str, str | list[str]] = Field(default_factory=dict)
    session: SessionStore
    body: str | None = None

    def query_value(self, key: str) -> str | None:
        """Return a single query value, the first one when repeated."""
        value = self.query.get(key)
        if isinstance(value, list):
            return value[0] if value else None
        return value
