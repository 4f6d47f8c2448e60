"""Implicit grant flow.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

import logging

from ._errors import extract_from_query
from ._oauthable import RedirectFlow
from ._state import StateContainer
from .exceptions import ServerError, ServerErrorCode
from .models import CallbackRequest

logger = logging.getLogger(__name__)


class ImplicitFlow(RedirectFlow):
    """OAuth2 implicit grant.

    The token arrives in the URL fragment, which never reaches the server, so
    the callback only confirms the state and surfaces provider errors.
    """

    response_type = "token"

    async def callback(self, request: CallbackRequest) -> StateContainer:
        """Handle the provider's redirect back to this app.

        Returns:
            The stashed state, checked against the query ``state`` when the
            provider put one there.

        """
        logger.debug(
            "OAuth2 implicit authorization callback called (%s)", self.provider.issuer
        )
        error = extract_from_query(request.query)
        if error is not None:
            raise error

        state = StateContainer.extract(request.session, self.callbacks)
        raw = request.query.get("state")
        if raw is not None:
            received = StateContainer.decode(raw, self.callbacks)
            request.session.destroy()
            if received != state:
                raise ServerError(ServerErrorCode.INVALID_COOKIE)
        else:
            request.session.destroy()
        return state
