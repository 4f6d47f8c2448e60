"""Flask integration for oauthflow."""

from __future__ import annotations

try:
    from flask import redirect, request, session
    FLASK_AVAILABLE = True
except ImportError:
    FLASK_AVAILABLE = False

from .._oauthable import AuthorizationRedirect
from .._session import MappingSession
from ..models import CallbackRequest


def _require_flask() -> None:
    if not FLASK_AVAILABLE:
        raise ImportError("Flask is not installed. Install it with: pip install flask")


def session_store() -> MappingSession:
    """Wrap ``flask.session`` of the current request."""
    _require_flask()
    return MappingSession(session)


def callback_request() -> CallbackRequest:
    """Build a :class:`CallbackRequest` from the current Flask request."""
    _require_flask()
    query: dict[str, str | list[str]] = {}
    for key in request.args:
        values = request.args.getlist(key)
        query[key] = values[0] if len(values) == 1 else values
    body = request.get_data(as_text=True) or None
    return CallbackRequest(query=query, session=session_store(), body=body)


def redirect_response(redirect_to: AuthorizationRedirect):
    """Send the user to the provider."""
    _require_flask()
    return redirect(redirect_to.url, code=303)
