"""oauthflow models package.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from .provider_models import (
    Capability,
    Issuer,
    ProviderDescriptor,
    QueryParametersPolicy,
)
from .request_models import CallbackRequest
from .token_models import Flow, FlowState, RetrievedToken, StoredToken

__all__ = [
    # Provider models
    "Capability",
    "Issuer",
    "ProviderDescriptor",
    "QueryParametersPolicy",
    # Request models
    "CallbackRequest",
    # Token models
    "Flow",
    "FlowState",
    "RetrievedToken",
    "StoredToken",
]
