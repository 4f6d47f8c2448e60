"""Token persistence interface.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

import asyncio
from collections.abc import Collection
from datetime import datetime
from typing import Protocol, runtime_checkable

from .models import Issuer, RetrievedToken, StoredToken


@runtime_checkable
class PersistedToken(Protocol):
    """Any stored token record the lifecycle can reason about."""

    access_token: str
    refresh_token: str
    expires_in: int
    refresh_token_expires_in: int
    scopes: Collection[str]
    token_type: str
    issuer: Issuer
    created_at: datetime | None


class TokenStore(Protocol):
    """Persistence of tokens, owned by the integrating application.

    Neither call is retried by the lifecycle.
    """

    async def save(self, token: RetrievedToken) -> PersistedToken:
        """Persist a token and return the stored record."""
        ...

    async def delete(self, token: PersistedToken) -> None:
        """Remove a stored token."""
        ...


class InMemoryTokenStore:
    """In-memory :class:`TokenStore` keyed by record id.

    Suitable for tests and single-process scripts.
    """

    def __init__(self) -> None:
        self.tokens: dict[str, StoredToken] = {}
        self._lock = asyncio.Lock()

    async def save(self, token: RetrievedToken) -> StoredToken:
        stored = StoredToken.from_retrieved(token)
        async with self._lock:
            self.tokens[stored.id] = stored
        return stored

    async def delete(self, token: PersistedToken) -> None:
        token_id = getattr(token, "id", None)
        async with self._lock:
            if token_id is not None:
                self.tokens.pop(token_id, None)
                return
            for key, stored in list(self.tokens.items()):
                if stored.access_token == token.access_token:
                    del self.tokens[key]

    def get(self, token_id: str) -> StoredToken | None:
        return self.tokens.get(token_id)
