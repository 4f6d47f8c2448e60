"""Authorization code ("explicit") flow.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

from ._oauthable import CodeExchangeFlow
from ._state import StateContainer
from .models import Flow


class ExplicitFlow(CodeExchangeFlow):
    """OAuth2 authorization code grant."""

    response_type = "code"
    flow = Flow.AUTHORIZATION_CODE

    def token_parameters(self, state: StateContainer, code: str) -> dict[str, str | None]:
        return {
            "client_id": self.provider.client_id,
            "client_secret": self.provider.client_secret,
            "redirect_uri": state.callback_url,
            "grant_type": "authorization_code",
            "code": code,
        }
