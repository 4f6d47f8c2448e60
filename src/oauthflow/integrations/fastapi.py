"""FastAPI / Starlette integration for oauthflow.

Requires ``SessionMiddleware`` so that ``request.session`` is available.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse

from .._oauthable import AuthorizationRedirect
from .._session import MappingSession
from ..exceptions import OAuthableError, ServerError
from ..models import CallbackRequest


def session_store(request: Request) -> MappingSession:
    """Wrap the Starlette session of a request."""
    return MappingSession(request.session)


async def callback_request(request: Request) -> CallbackRequest:
    """Build a :class:`CallbackRequest` from the provider's redirect.

    Usable directly as a FastAPI dependency.
    """
    query: dict[str, str | list[str]] = {}
    for key in request.query_params:
        values = request.query_params.getlist(key)
        query[key] = values[0] if len(values) == 1 else values
    body = (await request.body()).decode("utf-8", errors="replace") or None
    return CallbackRequest(query=query, session=session_store(request), body=body)


def redirect_response(redirect: AuthorizationRedirect) -> RedirectResponse:
    """Send the user to the provider."""
    return RedirectResponse(redirect.url, status_code=303)


async def oauth_error_handler(request: Request, exc: OAuthableError) -> JSONResponse:
    """Exception handler for :class:`OAuthableError`.

    Register with ``app.add_exception_handler(OAuthableError, oauth_error_handler)``.
    State failures get a generic retry message; provider failures keep the
    provider's status and code.
    """
    if isinstance(exc, ServerError):
        return JSONResponse(
            {"error": exc.kind.value, "message": "Please retry signing in."},
            status_code=exc.status,
        )
    return JSONResponse(
        {"error": exc.kind.value, "message": exc.reason},
        status_code=exc.status,
    )
