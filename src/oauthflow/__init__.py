"""
oauthflow

Client-side OAuth2 flows for Python applications.
Drives the authorization code, implicit, client credentials and web-app
flows against third-party providers, guards the redirect with a CSRF state,
and refreshes or revokes the resulting tokens.
"""

from ._errors import classify, extract_from_query, extract_from_response_body
from ._lifecycle import (
    EXPIRY_MARGIN,
    TokenLifecycle,
    access_expiry_instant,
    is_access_expired,
    is_refresh_expired,
    is_refreshable,
    refresh_expiry_instant,
    token_state,
)
from ._normalize import TokenResponse, normalize
from ._oauthable import AuthorizationRedirect
from ._session import MappingSession, MemorySession, SessionStore
from ._state import NONCE_LENGTH, StateContainer
from ._store import InMemoryTokenStore, PersistedToken, TokenStore
from .client import OAuthClient
from .exceptions import *
from .models import *

__version__ = "1.0.0"

__all__ = [
    "OAuthClient",
    # Exceptions
    "OAuthFlowError",
    "OAuthableError",
    "ProviderError",
    "ProviderErrorCode",
    "ServerError",
    "ServerErrorCode",
    "CapabilityError",
    "NetworkError",
    "TimeoutError",
    # Models
    "Capability",
    "CallbackRequest",
    "Flow",
    "FlowState",
    "Issuer",
    "ProviderDescriptor",
    "QueryParametersPolicy",
    "RetrievedToken",
    "StoredToken",
    # State and sessions
    "NONCE_LENGTH",
    "StateContainer",
    "AuthorizationRedirect",
    "SessionStore",
    "MemorySession",
    "MappingSession",
    # Errors
    "classify",
    "extract_from_query",
    "extract_from_response_body",
    # Tokens
    "TokenResponse",
    "normalize",
    "EXPIRY_MARGIN",
    "TokenLifecycle",
    "TokenStore",
    "PersistedToken",
    "InMemoryTokenStore",
    "access_expiry_instant",
    "refresh_expiry_instant",
    "is_access_expired",
    "is_refresh_expired",
    "is_refreshable",
    "token_state",
]
