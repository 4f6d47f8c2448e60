"""Test configuration and common utilities.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qs

import httpx
import pytest
import respx
from oauthflow import (
    Capability,
    InMemoryTokenStore,
    MemorySession,
    OAuthClient,
    ProviderDescriptor,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator

AUTHORIZATION_URL = "https://provider.test/oauth/authorize"
TOKEN_URL = "https://provider.test/oauth/token"
REVOCATION_URL = "https://provider.test/oauth/revoke"


class Callback(str, Enum):
    """Redirect URLs registered at the test provider."""

    SIGNUP = "https://app.test/oauth/signup"
    LOGIN = "https://app.test/oauth/login"


class Scope(str, Enum):
    """Scopes of the test provider."""

    READ = "read"
    WRITE = "write"


def form_of(request: httpx.Request) -> dict[str, str]:
    """Decode the url-encoded form body of a captured request.

    Returns:
        dict[str, str]: Form fields.

    """
    parsed = parse_qs(request.content.decode(), keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items()}


@pytest.fixture
def provider() -> ProviderDescriptor:
    """Return a provider enabling every capability.

    Returns:
        ProviderDescriptor: The test provider.

    """
    return ProviderDescriptor(
        client_id="test-client-id",
        client_secret="test-client-secret",
        authorization_url=AUTHORIZATION_URL,
        token_url=TOKEN_URL,
        revocation_url=REVOCATION_URL,
        issuer="testprovider",
        capabilities=frozenset(Capability),
        scopes=Scope,
    )


@pytest.fixture
def session() -> MemorySession:
    """Return an empty in-memory session.

    Returns:
        MemorySession: The session.

    """
    return MemorySession()


@pytest.fixture
def store() -> InMemoryTokenStore:
    """Return an empty token store.

    Returns:
        InMemoryTokenStore: The store.

    """
    return InMemoryTokenStore()


@pytest.fixture
async def client(
    provider: ProviderDescriptor,
    store: InMemoryTokenStore,
) -> AsyncGenerator[OAuthClient, None]:
    """Create test client.

    Yields:
        OAuthClient: Configured test client.

    """
    async with OAuthClient(
        provider,
        Callback,
        store=store,
        timeout=5.0,
    ) as client:
        yield client


@pytest.fixture
def mock_responses() -> Generator[Any, None, None]:
    """Mock HTTP responses.

    Yields:
        The mock router for HTTP requests.

    """
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def sample_token_response() -> dict[str, Any]:
    """Sample token endpoint response.

    Returns:
        dict[str, Any]: Sample token response data.

    """
    return {
        "access_token": "test-access-token",
        "token_type": "Bearer",
        "expires_in": 3600,
        "refresh_token": "test-refresh-token",
        "scope": "read write",
    }
