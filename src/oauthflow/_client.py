"""Client credentials flow.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from ._base import BaseClient
from ._normalize import normalize
from .models import Flow, RetrievedToken

logger = logging.getLogger(__name__)


class ClientCredentialsFlow:
    """Service for app access tokens. No user, no redirect."""

    def __init__(self, client: BaseClient) -> None:
        """Initialize the flow.

        Args:
            client: The base HTTP client

        """
        self._client = client

    async def get_app_access_token(
        self, scopes: Sequence[Enum | str] = ()
    ) -> RetrievedToken:
        """Acquire an app access token.

        Args:
            scopes: Scopes to ask for; most providers need none

        Returns:
            The retrieved token.

        """
        provider = self._client.provider
        logger.debug("Requesting %s app access token", provider.issuer)
        response = await self._client.request_token(
            provider.token_url,
            {
                "client_id": provider.client_id,
                "client_secret": provider.client_secret,
                "scope": provider.join_scopes(list(scopes)) or None,
                "grant_type": "client_credentials",
            },
        )
        return normalize(response, provider.issuer, Flow.CLIENT_CREDENTIALS)
