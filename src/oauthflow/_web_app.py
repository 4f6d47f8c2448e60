"""Web application flow, GitHub's variant of the authorization code grant.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

from ._oauthable import CodeExchangeFlow
from ._state import StateContainer
from .models import Flow


class WebAppFlow(CodeExchangeFlow):
    """Code exchange that echoes the state and sends no grant type."""

    response_type = "code"
    flow = Flow.WEB_APP
    uses_basic_auth = False

    def token_parameters(self, state: StateContainer, code: str) -> dict[str, str | None]:
        return {
            "client_id": self.provider.client_id,
            "client_secret": self.provider.client_secret,
            "redirect_uri": state.callback_url,
            "state": state.encode(),
            "code": code,
        }
