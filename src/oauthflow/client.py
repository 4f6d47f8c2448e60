"""OAuth2 client for one provider, composed of the flows it enables.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

from enum import Enum
from typing import Self

import httpx

from ._base import BaseClient
from ._client import ClientCredentialsFlow
from ._explicit import ExplicitFlow
from ._implicit import ImplicitFlow
from ._lifecycle import TokenLifecycle
from ._store import PersistedToken, TokenStore
from ._tokens import TokenService
from ._web_app import WebAppFlow
from .exceptions import CapabilityError
from .models import Capability, ProviderDescriptor


class OAuthClient:
    """OAuth2 client using service composition.

    Flows are exposed as attributes; touching one the provider does not
    enable raises :class:`CapabilityError`.
    """

    def __init__(
        self,
        provider: ProviderDescriptor,
        callbacks: type[Enum],
        *,
        store: TokenStore | None = None,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            provider: Descriptor of the provider
            callbacks: Enum of the redirect URLs registered at the provider
            store: Token persistence, needed for refresh and revoke transactions
            timeout: Request timeout in seconds
            http_client: Optional shared ``httpx.AsyncClient``

        """
        self.provider = provider
        self._client = BaseClient(
            provider=provider,
            timeout=timeout,
            http_client=http_client,
        )
        self._store = store

        # Initialize flow services
        self._explicit = ExplicitFlow(self._client, callbacks)
        self._implicit = ImplicitFlow(self._client, callbacks)
        self._web_app = WebAppFlow(self._client, callbacks)
        self._client_credentials = ClientCredentialsFlow(self._client)
        self._tokens = TokenService(self._client)

    async def __aenter__(self) -> Self:
        """Async context manager entry.

        Returns:
            The client instance.

        """
        await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit.

        Args:
            exc_type: Exception type if an exception occurred
            exc_val: Exception value if an exception occurred
            exc_tb: Exception traceback if an exception occurred

        """
        await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def close(self) -> None:
        """Close the client and clean up resources."""
        await self._client.close()

    def _require(self, *capabilities: Capability) -> None:
        for capability in capabilities:
            if not self.provider.supports(capability):
                raise CapabilityError(capability.value, self.provider.issuer)

    @property
    def explicit(self) -> ExplicitFlow:
        self._require(Capability.AUTHORIZATION_CODE)
        return self._explicit

    @property
    def implicit(self) -> ImplicitFlow:
        self._require(Capability.IMPLICIT)
        return self._implicit

    @property
    def web_app(self) -> WebAppFlow:
        self._require(Capability.WEB_APP)
        return self._web_app

    @property
    def client_credentials(self) -> ClientCredentialsFlow:
        self._require(Capability.CLIENT_CREDENTIALS)
        return self._client_credentials

    @property
    def tokens(self) -> TokenService:
        """Wire-level refresh and revoke. Needs REFRESH or REVOKE."""
        if not (
            self.provider.supports(Capability.REFRESH)
            or self.provider.supports(Capability.REVOKE)
        ):
            raise CapabilityError(Capability.REFRESH.value, self.provider.issuer)
        return self._tokens

    @property
    def lifecycle(self) -> TokenLifecycle:
        """Refresh and revocation transactions against the configured store."""
        if self._store is None:
            msg = "A token store is required for lifecycle transactions"
            raise ValueError(msg)
        return TokenLifecycle(self._tokens, self._store)

    async def refresh(self, token: PersistedToken) -> PersistedToken:
        """Refresh a stored token now. See :meth:`TokenLifecycle.refresh`."""
        self._require(Capability.REFRESH)
        return await self.lifecycle.refresh(token)

    async def refresh_if_expired(self, token: PersistedToken) -> PersistedToken:
        """Refresh a stored token if it has expired.

        Providers without refresh support get the token back unchanged.
        """
        if not self.provider.supports(Capability.REFRESH):
            return token
        return await self.lifecycle.ensure_fresh(token)

    async def revoke(self, token: PersistedToken) -> None:
        """Revoke a stored token and delete it. See :meth:`TokenLifecycle.revoke`."""
        self._require(Capability.REVOKE)
        await self.lifecycle.revoke(token)
