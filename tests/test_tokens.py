"""Tests for token refresh and revocation."""

from __future__ import annotations

import base64
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import pytest
from conftest import REVOCATION_URL, TOKEN_URL, Callback, form_of
from oauthflow import (
    Capability,
    CapabilityError,
    Flow,
    InMemoryTokenStore,
    Issuer,
    OAuthClient,
    ProviderDescriptor,
    ProviderError,
    ProviderErrorCode,
    RetrievedToken,
    StoredToken,
)


def stored(
    store: InMemoryTokenStore, age: int = 100, **overrides: Any
) -> StoredToken:
    fields: dict[str, Any] = {
        "access_token": "old-access",
        "token_type": "bearer",
        "expires_in": 60,
        "refresh_token": "old-refresh",
        "refresh_token_expires_in": 3600,
        "issuer": Issuer("testprovider"),
        "flow": Flow.AUTHORIZATION_CODE,
    }
    fields.update(overrides)
    token = StoredToken.from_retrieved(
        RetrievedToken(**fields),
        created_at=datetime.now(timezone.utc) - timedelta(seconds=age),
    )
    store.tokens[token.id] = token
    return token


class TestRefresh:
    """Refreshing through the lifecycle."""

    async def test_sends_refresh_grant(
        self, client: OAuthClient, store: InMemoryTokenStore, mock_responses: Any
    ) -> None:
        route = mock_responses.post(TOKEN_URL).mock(
            return_value=httpx.Response(200, json={"access_token": "new-access"})
        )

        await client.refresh(stored(store))

        assert form_of(route.calls.last.request) == {
            "client_id": "test-client-id",
            "client_secret": "test-client-secret",
            "grant_type": "refresh_token",
            "refresh_token": "old-refresh",
        }

    async def test_preserves_refresh_token_and_budget(
        self, client: OAuthClient, store: InMemoryTokenStore, mock_responses: Any
    ) -> None:
        mock_responses.post(TOKEN_URL).mock(
            return_value=httpx.Response(
                200, json={"access_token": "new-access", "expires_in": 3600}
            )
        )
        old = stored(store, age=100)

        renewed = await client.refresh(old)

        assert renewed.access_token == "new-access"
        assert renewed.refresh_token == "old-refresh"
        assert 3490 <= renewed.refresh_token_expires_in <= 3500
        assert renewed.issuer == old.issuer
        assert list(store.tokens.values()) == [renewed]

    async def test_uses_rotated_refresh_token(
        self, client: OAuthClient, store: InMemoryTokenStore, mock_responses: Any
    ) -> None:
        mock_responses.post(TOKEN_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "access_token": "new-access",
                    "refresh_token": "new-refresh",
                    "refresh_token_expires_in": 7200,
                },
            )
        )

        renewed = await client.refresh(stored(store))

        assert renewed.refresh_token == "new-refresh"
        assert renewed.refresh_token_expires_in == 7200

    async def test_keeps_flow_tag(
        self, client: OAuthClient, store: InMemoryTokenStore, mock_responses: Any
    ) -> None:
        mock_responses.post(TOKEN_URL).mock(
            return_value=httpx.Response(200, json={"access_token": "new-access"})
        )

        renewed = await client.refresh(stored(store, flow=Flow.WEB_APP))

        assert renewed.flow is Flow.WEB_APP

    async def test_invalid_token_deletes_stored_token(
        self, client: OAuthClient, store: InMemoryTokenStore, mock_responses: Any
    ) -> None:
        mock_responses.post(TOKEN_URL).mock(
            return_value=httpx.Response(401, json={"error": "invalid_token"})
        )
        old = stored(store)

        with pytest.raises(ProviderError) as exc_info:
            await client.refresh(old)

        assert exc_info.value.kind is ProviderErrorCode.INVALID_TOKEN
        assert exc_info.value.status == 401
        assert store.get(old.id) is None

    async def test_other_errors_keep_stored_token(
        self, client: OAuthClient, store: InMemoryTokenStore, mock_responses: Any
    ) -> None:
        mock_responses.post(TOKEN_URL).mock(
            return_value=httpx.Response(400, json={"error": "invalid_grant"})
        )
        old = stored(store)

        with pytest.raises(ProviderError) as exc_info:
            await client.refresh(old)

        assert exc_info.value.kind is ProviderErrorCode.INVALID_GRANT
        assert store.get(old.id) == old


class TestRefreshIfExpired:
    """Refreshing only when needed."""

    async def test_fresh_token_is_returned_unchanged(
        self, client: OAuthClient, store: InMemoryTokenStore, mock_responses: Any
    ) -> None:
        route = mock_responses.post(TOKEN_URL)
        token = stored(store, age=0, expires_in=3600)

        assert await client.refresh_if_expired(token) is token
        assert not route.called

    async def test_expired_token_is_refreshed(
        self, client: OAuthClient, store: InMemoryTokenStore, mock_responses: Any
    ) -> None:
        mock_responses.post(TOKEN_URL).mock(
            return_value=httpx.Response(200, json={"access_token": "new-access"})
        )
        token = stored(store, age=100, expires_in=60)

        renewed = await client.refresh_if_expired(token)

        assert renewed.access_token == "new-access"

    async def test_expired_without_refresh_token(
        self, client: OAuthClient, store: InMemoryTokenStore, mock_responses: Any
    ) -> None:
        route = mock_responses.post(TOKEN_URL)
        token = stored(store, age=100, expires_in=60, refresh_token="")

        assert await client.refresh_if_expired(token) is token
        assert not route.called

    async def test_provider_without_refresh(
        self, provider: ProviderDescriptor, mock_responses: Any
    ) -> None:
        no_refresh = provider.model_copy(
            update={"capabilities": frozenset({Capability.AUTHORIZATION_CODE})}
        )
        store = InMemoryTokenStore()
        token = stored(store, age=100, expires_in=60)

        async with OAuthClient(no_refresh, Callback, store=store) as client:
            assert await client.refresh_if_expired(token) is token
            with pytest.raises(CapabilityError):
                await client.refresh(token)


class TestRevoke:
    """Revocation through the lifecycle."""

    async def test_success_deletes_token(
        self, client: OAuthClient, store: InMemoryTokenStore, mock_responses: Any
    ) -> None:
        route = mock_responses.post(REVOCATION_URL).mock(
            return_value=httpx.Response(200)
        )
        token = stored(store)

        await client.revoke(token)

        assert route.call_count == 1
        assert form_of(route.calls.last.request) == {
            "client_id": "test-client-id",
            "client_secret": "test-client-secret",
            "token": "old-access",
        }
        assert store.tokens == {}

    async def test_failure_keeps_token(
        self, client: OAuthClient, store: InMemoryTokenStore, mock_responses: Any
    ) -> None:
        mock_responses.post(REVOCATION_URL).mock(
            return_value=httpx.Response(400, json={"error": "unsupported_grant_type"})
        )
        token = stored(store)

        with pytest.raises(ProviderError) as exc_info:
            await client.revoke(token)

        assert exc_info.value.kind is ProviderErrorCode.UNSUPPORTED_GRANT_TYPE
        assert store.get(token.id) == token

    async def test_refresh_only_provider_cannot_revoke(
        self, provider: ProviderDescriptor, mock_responses: Any
    ) -> None:
        route = mock_responses.route()
        refresh_only = provider.model_copy(
            update={
                "capabilities": frozenset({Capability.REFRESH}),
                "revocation_url": None,
            }
        )

        async with OAuthClient(refresh_only, Callback) as client:
            with pytest.raises(CapabilityError):
                await client.tokens.revoke("some-access")

        assert not route.called

    async def test_wire_revoke_without_store(
        self, provider: ProviderDescriptor, mock_responses: Any
    ) -> None:
        mock_responses.post(REVOCATION_URL).mock(return_value=httpx.Response(204))

        async with OAuthClient(provider, Callback) as client:
            await client.tokens.revoke("some-access")
            with pytest.raises(ValueError, match="token store"):
                _ = client.lifecycle


async def test_basic_auth_header(
    provider: ProviderDescriptor, mock_responses: Any
) -> None:
    route = mock_responses.post(TOKEN_URL).mock(
        return_value=httpx.Response(200, json={"access_token": "new-access"})
    )
    basic = provider.model_copy(update={"requires_basic_auth": True})

    async with OAuthClient(basic, Callback) as client:
        await client.tokens.refresh("old-refresh")

    expected = base64.b64encode(b"test-client-id:test-client-secret").decode()
    request = route.calls.last.request
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert form_of(request)["client_secret"] == "test-client-secret"


async def test_basic_auth_wins_over_shared_client_auth(
    provider: ProviderDescriptor, mock_responses: Any
) -> None:
    route = mock_responses.post(TOKEN_URL).mock(
        return_value=httpx.Response(200, json={"access_token": "new-access"})
    )
    basic = provider.model_copy(update={"requires_basic_auth": True})

    async with httpx.AsyncClient(auth=("gateway-user", "gateway-pass")) as shared:
        async with OAuthClient(basic, Callback, http_client=shared) as client:
            await client.tokens.refresh("old-refresh")

    expected = base64.b64encode(b"test-client-id:test-client-secret").decode()
    assert route.calls.last.request.headers["Authorization"] == f"Basic {expected}"
