"""
Exception classes for the oauthflow library.
"""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from typing import Any

HTTP_BAD_REQUEST = 400
HTTP_PRECONDITION_FAILED = 412


class OAuthFlowError(Exception):
    """Base exception for oauthflow errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Any | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.status_code = status_code


class CapabilityError(OAuthFlowError):
    """Raised when a flow is used on a provider that does not enable it."""

    def __init__(self, capability: str, issuer: str) -> None:
        super().__init__(
            f"Provider '{issuer}' does not support '{capability}'",
            "CAPABILITY_ERROR",
            {"capability": capability, "issuer": issuer},
        )


class NetworkError(OAuthFlowError):
    """Raised when a network error occurs."""

    def __init__(
        self, message: str = "Network error", details: Any | None = None
    ) -> None:
        super().__init__(message, "NETWORK_ERROR", details)


class TimeoutError(OAuthFlowError):  # noqa: A001
    """Raised when a request times out."""

    def __init__(
        self, message: str = "Request timeout", details: Any | None = None
    ) -> None:
        super().__init__(message, "TIMEOUT_ERROR", details)


class ProviderErrorCode(str, Enum):
    """Error codes an OAuth2 provider may report."""

    UNSUPPORTED_OVER_HTTP = "unsupported_over_http"
    VERSION_REJECTED = "version_rejected"
    PARAMETER_ABSENT = "parameter_absent"
    PARAMETER_REJECTED = "parameter_rejected"
    INVALID_CLIENT = "invalid_client"
    INVALID_REQUEST = "invalid_request"
    UNSUPPORTED_RESPONSE_TYPE = "unsupported_response_type"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"
    INVALID_PARAM = "invalid_param"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    ACCESS_DENIED = "access_denied"
    SERVER_ERROR = "server_error"
    TOKEN_EXPIRED = "token_expired"
    INVALID_TOKEN = "invalid_token"
    INVALID_CALLBACK = "invalid_callback"
    INVALID_CLIENT_SECRET = "invalid_client_secret"
    INVALID_GRANT = "invalid_grant"
    INVALID_SCOPE = "invalid_scope"
    UNKNOWN = "unknown"

    @property
    def description(self) -> str:
        return _PROVIDER_DESCRIPTIONS.get(self, "UNKNOWN")

    @classmethod
    def from_raw(cls, raw: str | None) -> ProviderErrorCode | None:
        """Match a raw error code such as ``invalid_grant``.

        Blank strings and the ``unknown`` placeholder never match.
        """
        if raw is None or not raw.strip():
            return None
        for code in _PROVIDER_DESCRIPTIONS:
            if code.value == raw:
                return code
        return None

    @classmethod
    def from_description(cls, text: str | None) -> ProviderErrorCode | None:
        """Match a human-readable description a provider sent instead of a code."""
        if text is None or not text.strip():
            return None
        needle = text.strip().lower()
        for code, description in _PROVIDER_DESCRIPTIONS.items():
            if needle in description.lower():
                return code
        return None


_PROVIDER_DESCRIPTIONS: dict[ProviderErrorCode, str] = {
    ProviderErrorCode.UNSUPPORTED_OVER_HTTP: "OAuth 2.0 only supports the calls over https",
    ProviderErrorCode.VERSION_REJECTED: "An unsupported version of OAuth was supplied",
    ProviderErrorCode.PARAMETER_ABSENT: "A required parameter is missing from the request",
    ProviderErrorCode.PARAMETER_REJECTED: "A parameter was too long",
    ProviderErrorCode.INVALID_CLIENT: "An invalid client ID was given",
    ProviderErrorCode.INVALID_REQUEST: "An invalid request parameter was given",
    ProviderErrorCode.UNSUPPORTED_RESPONSE_TYPE: (
        "The provided response type does not match the request"
    ),
    ProviderErrorCode.UNSUPPORTED_GRANT_TYPE: (
        "The provided grant type does not match the request"
    ),
    ProviderErrorCode.INVALID_PARAM: "An invalid request parameter was provided",
    ProviderErrorCode.UNAUTHORIZED_CLIENT: (
        "The client is not given permissions to perform this action"
    ),
    ProviderErrorCode.ACCESS_DENIED: (
        "The resource owner refused the request for authorization"
    ),
    ProviderErrorCode.SERVER_ERROR: "An unexpected error happened",
    ProviderErrorCode.TOKEN_EXPIRED: "The provided token has expired",
    ProviderErrorCode.INVALID_TOKEN: "The provided token was invalid",
    ProviderErrorCode.INVALID_CALLBACK: (
        "The provided callback URI does not match the consumer key"
    ),
    ProviderErrorCode.INVALID_CLIENT_SECRET: "The provided client secret is invalid",
    ProviderErrorCode.INVALID_GRANT: (
        "The provided token has either expired or is invalid"
    ),
    ProviderErrorCode.INVALID_SCOPE: (
        "The requested scope is invalid, unknown, or malformed"
    ),
}


class ServerErrorCode(str, Enum):
    """Failures raised by this application rather than by the provider."""

    INVALID_COOKIE = "invalid_cookie"
    STATE_DECODE = "state_decode"
    QUERY_PARAMETERS_ENCODE = "query_parameters_encode"
    UNKNOWN = "unknown"


class OAuthableError(OAuthFlowError):
    """Failure of an OAuth2 exchange, tagged with an HTTP status and a kind.

    Two errors are equal when their class, status, code and detail are equal.
    The rendered message is not part of the comparison. Raise one of the
    concrete subclasses, :class:`ProviderError` or :class:`ServerError`.
    """

    kind: Enum

    def __init__(
        self,
        kind: ProviderErrorCode | ServerErrorCode,
        *,
        status: int = HTTP_BAD_REQUEST,
        detail: str | None = None,
    ) -> None:
        if getattr(self._render, "__isabstractmethod__", False):
            msg = f"{type(self).__name__} is abstract; raise ProviderError or ServerError"
            raise TypeError(msg)
        self.kind = kind
        self.status = status
        self.detail = detail
        super().__init__(self._render(), kind.value, detail, status)

    @property
    def reason(self) -> str:
        return self.message

    @abstractmethod
    def _render(self) -> str:
        """Human-readable reason of this error."""

    def _key(self) -> tuple[Any, ...]:
        return (type(self), self.status, self.kind, self.detail)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OAuthableError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, "
            f"status={self.status}, detail={self.detail!r})"
        )


class ProviderError(OAuthableError):
    """The OAuth2 provider rejected the request."""

    kind: ProviderErrorCode

    def __init__(
        self,
        kind: ProviderErrorCode,
        *,
        status: int = HTTP_BAD_REQUEST,
        detail: str | None = None,
        description: str | None = None,
    ) -> None:
        self.description = description
        super().__init__(kind, status=status, detail=detail)

    def _render(self) -> str:
        if self.kind is ProviderErrorCode.UNKNOWN:
            return f"Provider failed. Error: [UNKNOWN: {self.detail or 'NIL'}]"
        return (
            f"Provider failed. Error: [error: {self.kind.value}, "
            f"description: {self.kind.description}]"
        )


class ServerError(OAuthableError):
    """This application's own checks failed, e.g. the CSRF state did not match.

    Callers should show a generic "please retry" message: the cause may be a
    browser with cookies disabled or a forged callback.
    """

    kind: ServerErrorCode

    def _render(self) -> str:
        if self.kind is ServerErrorCode.INVALID_COOKIE:
            text = (
                "[Could not approve the legitimacy of your request. Please use a web"
                " browser that allows cookies, or enable cookies for this website.]"
            )
        elif self.kind is ServerErrorCode.STATE_DECODE:
            text = f"[Could not decode state {self.detail}.]"
        elif self.kind is ServerErrorCode.QUERY_PARAMETERS_ENCODE:
            text = (
                "[Failed to encode query parameters into the request"
                f" using policy `{self.detail}`.]"
            )
        else:
            text = f"[UNKNOWN: {self.detail or 'NIL'}]"
        return f"Server failed. Error: {text}"
