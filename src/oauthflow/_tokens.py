"""Token refresh and revocation requests.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

import logging

from ._base import BaseClient, is_success
from ._errors import classify
from ._normalize import normalize
from .exceptions import CapabilityError
from .models import Capability, Flow, RetrievedToken

logger = logging.getLogger(__name__)


class TokenService:
    """Service for wire-level token operations."""

    def __init__(self, client: BaseClient) -> None:
        """Initialize token service.

        Args:
            client: The base HTTP client

        """
        self._client = client

    async def refresh(
        self, refresh_token: str, flow: Flow = Flow.AUTHORIZATION_CODE
    ) -> RetrievedToken:
        """Exchange a refresh token for a new access token.

        Args:
            refresh_token: The refresh token of the expired token
            flow: Flow tag for the renewed token

        Returns:
            The renewed token as sent by the provider. Persisting it, and
            carrying the old refresh token forward, is the lifecycle's job.

        """
        provider = self._client.provider
        logger.debug("Refreshing %s token", provider.issuer)
        response = await self._client.request_token(
            provider.token_url,
            {
                "client_id": provider.client_id,
                "client_secret": provider.client_secret,
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
            },
        )
        return normalize(response, provider.issuer, flow)

    async def revoke(self, access_token: str) -> None:
        """Revoke an access token at the provider.

        Args:
            access_token: Token to revoke

        Raises:
            CapabilityError: If the provider does not enable revocation.
            OAuthableError: If the provider did not confirm the revocation.

        """
        provider = self._client.provider
        if not provider.supports(Capability.REVOKE) or provider.revocation_url is None:
            raise CapabilityError(Capability.REVOKE.value, provider.issuer)
        logger.debug("Revoking %s token", provider.issuer)
        request, auth = self._client.build_request(
            provider.revocation_url,
            {
                "client_id": provider.client_id,
                "client_secret": provider.client_secret,
                "token": access_token,
            },
        )
        response = await self._client.send(request, auth)
        if not is_success(response):
            raise classify({}, response=response)
