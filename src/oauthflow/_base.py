"""Base HTTP client for provider requests.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple

import httpx

from ._errors import classify
from ._normalize import TokenResponse
from .exceptions import (
    HTTP_PRECONDITION_FAILED,
    NetworkError,
    ServerError,
    ServerErrorCode,
    TimeoutError as OAuthTimeoutError,
)
from .models import ProviderDescriptor, QueryParametersPolicy

logger = logging.getLogger(__name__)

# HTTP Status Constants
HTTP_SUCCESS_MIN = 200
HTTP_SUCCESS_MAX = 300


class RequestConfig(NamedTuple):
    """Configuration for a provider request."""

    form_data: dict[str, str] | None = None
    params: dict[str, str] | None = None
    headers: dict[str, str] | None = None
    auth: httpx.Auth | None = None


def encode_parameters(
    policy: QueryParametersPolicy,
    parameters: dict[str, str | None],
    *,
    basic_auth: tuple[str, str] | None = None,
) -> RequestConfig:
    """Attach parameters to a request as query strings or as a form body.

    ``None`` values are dropped. ``basic_auth`` adds an HTTP Basic credential
    on top of the parameters.
    """
    data = {key: value for key, value in parameters.items() if value is not None}
    headers = {"Accept": "application/json"}
    auth = httpx.BasicAuth(*basic_auth) if basic_auth else None
    if policy is QueryParametersPolicy.USE_QUERY_STRINGS:
        return RequestConfig(params=data, headers=headers, auth=auth)
    return RequestConfig(form_data=data, headers=headers, auth=auth)


def is_success(response: httpx.Response) -> bool:
    return HTTP_SUCCESS_MIN <= response.status_code < HTTP_SUCCESS_MAX


class BaseClient:
    """HTTP client used by every flow of one provider."""

    def __init__(
        self,
        provider: ProviderDescriptor,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize base HTTP client.

        Args:
            provider: The provider requests are sent to
            timeout: Request timeout in seconds
            http_client: Optional shared client; closing it stays the caller's job

        """
        self.provider = provider
        self.timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": "oauthflow-python/1.0.0"},
        )

    async def __aenter__(self) -> BaseClient:
        """Async context manager entry.

        Returns:
            The client instance.

        """
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.

        """
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    def basic_auth(self) -> tuple[str, str] | None:
        """Client credentials for HTTP Basic, if the provider requires them."""
        if not self.provider.requires_basic_auth:
            return None
        return (self.provider.client_id, self.provider.client_secret)

    def build_request(
        self,
        url: str,
        parameters: dict[str, str | None],
        *,
        basic_auth: bool = True,
    ) -> tuple[httpx.Request, httpx.Auth | None]:
        """Build a POST to the provider using its query encoding policy.

        Returns:
            The request and the Basic auth to send it with, if any.

        Raises:
            ServerError: ``QUERY_PARAMETERS_ENCODE`` if encoding fails.

        """
        policy = self.provider.query_parameters_policy
        try:
            config = encode_parameters(
                policy,
                parameters,
                basic_auth=self.basic_auth() if basic_auth else None,
            )
            request = self._client.build_request(
                "POST",
                url,
                params=config.params,
                data=config.form_data,
                headers=config.headers,
                timeout=self.timeout,
            )
        except (TypeError, ValueError, httpx.InvalidURL) as e:
            raise ServerError(
                ServerErrorCode.QUERY_PARAMETERS_ENCODE,
                status=HTTP_PRECONDITION_FAILED,
                detail=policy.value,
            ) from e
        return request, config.auth

    async def send(
        self, request: httpx.Request, auth: httpx.Auth | None = None
    ) -> httpx.Response:
        """Send a request once. Provider errors are left to the caller.

        Raises:
            NetworkError: For network-related errors
            OAuthTimeoutError: For timeout errors

        """
        logger.debug("POST %s%s", request.url.host, request.url.path)
        try:
            response = await self._client.send(
                request, auth=auth if auth is not None else httpx.USE_CLIENT_DEFAULT
            )
        except httpx.TimeoutException as e:
            raise OAuthTimeoutError("Request timeout") from e
        except httpx.TransportError as e:
            raise NetworkError("Network error", details=str(e)) from e
        logger.debug("Provider responded %s", response.status_code)
        return response

    async def request_token(
        self,
        url: str,
        parameters: dict[str, str | None],
        *,
        query: dict[str, Any] | None = None,
        basic_auth: bool = True,
    ) -> TokenResponse:
        """POST to a token endpoint and decode the token.

        Args:
            url: Token endpoint
            parameters: Request parameters
            query: Query of the inbound callback, consulted first on failure
            basic_auth: Whether the provider's basic auth requirement applies

        Returns:
            The decoded token response.

        """
        request, auth = self.build_request(url, parameters, basic_auth=basic_auth)
        response = await self.send(request, auth)
        if not is_success(response):
            raise classify(query or {}, response=response)
        return self._parse_token_response(response)

    @staticmethod
    def _parse_token_response(response: httpx.Response) -> TokenResponse:
        """Decode a successful token response.

        Raises:
            ServerError: ``UNKNOWN`` if the body is not a token.

        """
        try:
            return TokenResponse.model_validate(response.json())
        except ValueError as e:
            raise ServerError(ServerErrorCode.UNKNOWN, detail=str(e)) from e
