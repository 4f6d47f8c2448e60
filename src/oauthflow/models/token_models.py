"""Token models for oauthflow.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .provider_models import Issuer


class Flow(str, Enum):
    """The grant flow that produced a token."""

    AUTHORIZATION_CODE = "authorization_code"
    CLIENT_CREDENTIALS = "client_credentials"
    WEB_APP = "web_app"


class FlowState(str, Enum):
    """Lifecycle states of a flow instance and the token it produces."""

    UNSTARTED = "unstarted"
    AWAITING_CALLBACK = "awaiting_callback"
    EXCHANGED = "exchanged"
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"
    DELETED = "deleted"


class RetrievedToken(BaseModel):
    """A token as returned by a provider, normalized across providers.

    ``expires_in`` and ``refresh_token_expires_in`` of ``0`` mean the value
    does not expire. An empty ``refresh_token`` means it cannot be refreshed.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str
    token_type: str
    scopes: frozenset[str] = frozenset()
    expires_in: int = 0
    refresh_token: str = ""
    refresh_token_expires_in: int = 0
    issuer: Issuer
    flow: Flow


class StoredToken(RetrievedToken):
    """A retrieved token after it has been persisted."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime | None = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @classmethod
    def from_retrieved(
        cls, token: RetrievedToken, created_at: datetime | None = None
    ) -> StoredToken:
        data = token.model_dump()
        if created_at is not None:
            data["created_at"] = created_at
        return cls(**data)
