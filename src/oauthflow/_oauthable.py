"""Machinery shared by the redirect based flows.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from typing import NamedTuple
from urllib.parse import quote, urlencode

from ._base import BaseClient
from ._errors import classify
from ._normalize import normalize
from ._session import SessionStore
from ._state import StateContainer
from .models import CallbackRequest, Flow, FlowState, ProviderDescriptor, RetrievedToken

logger = logging.getLogger(__name__)


class AuthorizationRedirect(NamedTuple):
    """Where to send the user, and the state stashed for the callback."""

    url: str
    state: StateContainer


class RedirectFlow:
    """Base of the flows that send the user to the provider and back."""

    response_type: str = "code"

    def __init__(self, client: BaseClient, callbacks: type[Enum]) -> None:
        """Initialize the flow.

        Args:
            client: The base HTTP client
            callbacks: Enum of the redirect URLs registered at the provider

        """
        self._client = client
        self.callbacks = callbacks

    @property
    def provider(self) -> ProviderDescriptor:
        return self._client.provider

    def authorization_url(
        self,
        state: StateContainer,
        scopes: Sequence[Enum | str] | None = None,
        extra_arg: str | None = None,
    ) -> str:
        """Build the provider URL the user is redirected to.

        Args:
            state: State to embed
            scopes: Scopes to ask for; every scope of the provider by default
            extra_arg: Raw ``key=value`` provider specific suffix

        """
        if scopes is None:
            scopes = self.provider.all_scopes()
        params = [
            ("client_id", self.provider.client_id),
            ("response_type", self.response_type),
            ("redirect_uri", state.callback_url),
            ("scope", self.provider.join_scopes(list(scopes))),
            ("state", state.encode()),
        ]
        url = f"{self.provider.authorization_url}?{urlencode(params, quote_via=quote)}"
        if extra_arg:
            url = f"{url}&{extra_arg}"
        return url

    def request_authorization(
        self,
        custom_value: str,
        callback: Enum,
        scopes: Sequence[Enum | str] | None = None,
        extra_arg: str | None = None,
        *,
        session: SessionStore,
    ) -> AuthorizationRedirect:
        """Start the flow: stash a fresh state and return the redirect target.

        Args:
            custom_value: Value handed back to the app on callback
            callback: Which registered redirect URL the provider should call
            scopes: Scopes to ask for; every scope of the provider by default
            extra_arg: Raw ``key=value`` provider specific suffix
            session: The end user's session

        Returns:
            The redirect URL and the state it carries.

        """
        if callback not in self.callbacks:
            msg = f"{callback!r} is not a member of {self.callbacks.__name__}"
            raise ValueError(msg)
        state = StateContainer.create(callback, custom_value)
        url = self.authorization_url(state, scopes, extra_arg)
        state.stash(session)
        logger.debug(
            "OAuth2 authorization requested (%s, %s): %s",
            type(self).__name__,
            self.provider.issuer,
            FlowState.AWAITING_CALLBACK.value,
        )
        return AuthorizationRedirect(url, state)

    def validate_state(self, request: CallbackRequest) -> StateContainer:
        return StateContainer.validate(request, self.callbacks)


class CodeExchangeFlow(RedirectFlow, ABC):
    """A redirect flow that trades the callback's ``code`` for a token."""

    flow: Flow
    uses_basic_auth: bool = True

    @abstractmethod
    def token_parameters(self, state: StateContainer, code: str) -> dict[str, str | None]:
        """Body of the code exchange request."""

    async def callback(
        self, request: CallbackRequest
    ) -> tuple[StateContainer, RetrievedToken]:
        """Handle the provider's redirect back to this app.

        Returns:
            The validated state and the retrieved token.

        Raises:
            OAuthableError: If the state is invalid or the provider failed.

        """
        logger.debug(
            "OAuth2 authorization callback called (%s, %s)",
            type(self).__name__,
            self.provider.issuer,
        )
        state = self.validate_state(request)

        code = request.query_value("code")
        if not code:
            raise classify(request.query, body=request.body)

        response = await self._client.request_token(
            self.provider.token_url,
            self.token_parameters(state, code),
            query=dict(request.query),
            basic_auth=self.uses_basic_auth,
        )
        token = normalize(response, self.provider.issuer, self.flow)
        logger.debug(
            "OAuth2 code exchanged (%s, %s): %s",
            type(self).__name__,
            self.provider.issuer,
            FlowState.EXCHANGED.value,
        )
        return state, token
