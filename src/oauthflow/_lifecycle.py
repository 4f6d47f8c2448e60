"""Token expiry, refresh and revocation.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from ._store import PersistedToken, TokenStore
from ._tokens import TokenService
from .exceptions import ProviderError, ProviderErrorCode
from .models import Flow, FlowState, RetrievedToken

logger = logging.getLogger(__name__)

# Tokens are treated as expired this long before the provider's deadline.
EXPIRY_MARGIN = timedelta(seconds=5)
NEVER = datetime.max.replace(tzinfo=timezone.utc)


def _utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _now(now: datetime | None) -> datetime:
    return _utc(now) if now is not None else datetime.now(timezone.utc)


def _expiry_instant(created_at: datetime | None, lifetime: int) -> datetime | None:
    if created_at is None:
        return None
    if lifetime == 0:
        return NEVER
    try:
        return _utc(created_at) + timedelta(seconds=lifetime) - EXPIRY_MARGIN
    except OverflowError:
        # Lifetimes past datetime.max can never be reached.
        return NEVER


def access_expiry_instant(token: PersistedToken) -> datetime | None:
    """When the access token should be considered expired.

    Returns:
        None if the creation time is unknown, :data:`NEVER` if the token does
        not expire.

    """
    return _expiry_instant(token.created_at, token.expires_in)


def refresh_expiry_instant(token: PersistedToken) -> datetime | None:
    """When the refresh token should be considered expired."""
    return _expiry_instant(token.created_at, token.refresh_token_expires_in)


def is_access_expired(token: PersistedToken, now: datetime | None = None) -> bool:
    instant = access_expiry_instant(token)
    if token.expires_in == 0 or instant is None:
        return False
    return _now(now) >= instant


def is_refresh_expired(token: PersistedToken, now: datetime | None = None) -> bool:
    instant = refresh_expiry_instant(token)
    if token.refresh_token_expires_in == 0 or instant is None:
        return False
    return _now(now) >= instant


def is_refreshable(token: PersistedToken) -> bool:
    return bool(token.refresh_token)


def token_state(token: PersistedToken, now: datetime | None = None) -> FlowState:
    return FlowState.EXPIRED if is_access_expired(token, now) else FlowState.ACTIVE


def remaining_refresh_budget(token: PersistedToken, now: datetime | None = None) -> int:
    """Seconds left on a refresh token, measured from the old token's creation.

    A ``0`` budget stays ``0`` (never expires). A spent budget is clamped to
    one second so it is not mistaken for that sentinel.
    """
    if token.refresh_token_expires_in == 0:
        return 0
    if token.created_at is None:
        return token.refresh_token_expires_in
    elapsed = int((_now(now) - _utc(token.created_at)).total_seconds())
    return max(token.refresh_token_expires_in - elapsed, 1)


def carry_forward(
    old: PersistedToken, renewed: RetrievedToken, now: datetime | None = None
) -> RetrievedToken:
    """Merge a renewal response with the token it replaces.

    Providers often omit the refresh token on renewal, so the old one is
    kept together with what is left of its expiry window.
    """
    update: dict[str, object] = {"issuer": old.issuer}
    if not renewed.refresh_token:
        update["refresh_token"] = old.refresh_token
        update["refresh_token_expires_in"] = remaining_refresh_budget(old, now)
    return renewed.model_copy(update=update)


class TokenLifecycle:
    """Refresh and revocation transactions against a token store.

    Concurrent refreshes of the same token are not serialized here; callers
    must hold a per-token lock or use an optimistic check in their store.
    """

    def __init__(self, tokens: TokenService, store: TokenStore) -> None:
        """Initialize the lifecycle.

        Args:
            tokens: Wire-level token service of the provider
            store: Where tokens are persisted

        """
        self._tokens = tokens
        self._store = store

    async def ensure_fresh(self, token: PersistedToken) -> PersistedToken:
        """Return the token, refreshed first if it expired and can be refreshed."""
        if is_access_expired(token) and is_refreshable(token):
            return await self.refresh(token)
        return token

    async def refresh(self, token: PersistedToken) -> PersistedToken:
        """Replace a token with a renewed one.

        The new token is saved before the old one is deleted, so there is
        never a moment without a valid token in the store.

        Raises:
            ProviderError: ``INVALID_TOKEN`` after the stored token was deleted,
                because the provider has revoked it.

        """
        flow = token.flow if isinstance(token, RetrievedToken) else Flow.AUTHORIZATION_CODE
        try:
            renewed = await self._tokens.refresh(token.refresh_token, flow)
        except ProviderError as e:
            if e.kind is ProviderErrorCode.INVALID_TOKEN:
                logger.warning(
                    "Provider %s rejected refresh token; deleting stored token",
                    token.issuer,
                )
                await self._store.delete(token)
            raise

        saved = await self._store.save(carry_forward(token, renewed))
        await self._store.delete(token)
        logger.info("Refreshed %s token", token.issuer)
        return saved

    async def revoke(self, token: PersistedToken) -> None:
        """Revoke a token at the provider, then delete it from the store.

        On failure the stored token is left untouched and the error propagates.
        """
        await self._tokens.revoke(token.access_token)
        await self._store.delete(token)
        logger.info("Revoked %s token", token.issuer)
