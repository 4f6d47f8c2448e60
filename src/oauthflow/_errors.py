"""Classification of provider failures.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from .exceptions import (
    OAuthableError,
    ProviderError,
    ProviderErrorCode,
    ServerError,
    ServerErrorCode,
)


def _first(value: str | list[str] | None) -> str | None:
    if isinstance(value, list):
        return value[0] if value else None
    return value


def extract_from_query(query: Mapping[str, Any]) -> ProviderError | None:
    """Extract an ``error`` the provider put on the callback URL.

    Unrecognized codes are kept as ``UNKNOWN`` with the raw string as detail.

    Returns:
        The provider error, or None when the query has no ``error``.

    """
    raw = _first(query.get("error"))
    if raw is None or not raw.strip():
        return None
    description = _first(query.get("error_description"))
    code = ProviderErrorCode.from_raw(raw)
    if code is None:
        return ProviderError(
            ProviderErrorCode.UNKNOWN, detail=raw, description=description
        )
    return ProviderError(code, description=description)


def _match(text: str) -> ProviderErrorCode | None:
    return ProviderErrorCode.from_raw(text) or ProviderErrorCode.from_description(text)


def extract_from_response_body(response: httpx.Response) -> ProviderError | None:
    """Extract a known provider error from a token endpoint response.

    Providers are inconsistent, so two shapes are tried: ``{message, status}``
    and ``{error}``. Within each the raw code is matched before the prose.

    Returns:
        The provider error, or None when no known code is found.

    """
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None

    message = payload.get("message")
    if isinstance(message, str) and isinstance(payload.get("status"), int):
        code = _match(message)
    elif isinstance(payload.get("error"), str):
        code = _match(payload["error"])
    else:
        code = None

    if code is None:
        return None
    description = payload.get("error_description")
    return ProviderError(
        code,
        status=response.status_code,
        description=description if isinstance(description, str) else None,
    )


def classify(
    query: Mapping[str, Any],
    body: str | None = None,
    response: httpx.Response | None = None,
) -> OAuthableError:
    """Turn a failed exchange into an :class:`OAuthableError`.

    The callback query takes priority over the response body. Without a known
    code the error is ``UNKNOWN``: a provider error carrying the response text
    when there is a response, else a server error carrying the request body.
    """
    error = extract_from_query(query)
    if error is not None:
        return error
    if response is not None:
        error = extract_from_response_body(response)
        if error is not None:
            return error
        return ProviderError(
            ProviderErrorCode.UNKNOWN,
            status=response.status_code,
            detail=response.text,
        )
    return ServerError(ServerErrorCode.UNKNOWN, detail=body)
