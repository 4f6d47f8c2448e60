"""Tests for the FastAPI and Flask adapters."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import urlencode

import pytest
from flask import Flask, session as flask_session
from starlette.requests import Request

from conftest import Callback
from oauthflow import (
    AuthorizationRedirect,
    MappingSession,
    ProviderError,
    ProviderErrorCode,
    ServerError,
    ServerErrorCode,
    StateContainer,
)
from oauthflow.integrations import fastapi as fastapi_integration
from oauthflow.integrations import flask as flask_integration


def starlette_request(
    query_string: bytes, session: dict[str, Any], body: bytes = b""
) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/oauth/signup",
        "query_string": query_string,
        "headers": [],
        "session": session,
    }

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


class TestFastAPI:
    """Starlette requests and responses."""

    async def test_callback_request(self) -> None:
        backing: dict[str, Any] = {"user_id": "42"}
        request = starlette_request(b"code=abc&scope=a&scope=b", backing)

        callback = await fastapi_integration.callback_request(request)

        assert callback.query == {"code": "abc", "scope": ["a", "b"]}
        assert callback.query_value("scope") == "a"
        assert callback.body is None
        assert isinstance(callback.session, MappingSession)

    async def test_state_round_trip_through_session(self) -> None:
        backing: dict[str, Any] = {"user_id": "42"}
        state = StateContainer.create(Callback.SIGNUP, "mktg")
        state.stash(fastapi_integration.session_store(starlette_request(b"", backing)))

        request = starlette_request(urlencode({"state": state.encode()}).encode(), backing)
        callback = await fastapi_integration.callback_request(request)

        assert StateContainer.validate(callback, Callback) == state
        assert backing == {"user_id": "42"}

    def test_redirect_response(self) -> None:
        state = StateContainer.create(Callback.SIGNUP)
        response = fastapi_integration.redirect_response(
            AuthorizationRedirect("https://provider.test/authorize?x=1", state)
        )

        assert response.status_code == 303
        assert response.headers["location"] == "https://provider.test/authorize?x=1"

    async def test_error_handler_hides_server_errors(self) -> None:
        response = await fastapi_integration.oauth_error_handler(
            starlette_request(b"", {}), ServerError(ServerErrorCode.INVALID_COOKIE)
        )

        assert response.status_code == 400
        assert json.loads(response.body) == {
            "error": "invalid_cookie",
            "message": "Please retry signing in.",
        }

    async def test_error_handler_keeps_provider_status(self) -> None:
        error = ProviderError(ProviderErrorCode.INVALID_CLIENT, status=401)

        response = await fastapi_integration.oauth_error_handler(
            starlette_request(b"", {}), error
        )

        assert response.status_code == 401
        assert json.loads(response.body) == {
            "error": "invalid_client",
            "message": error.reason,
        }


@pytest.fixture
def flask_app() -> Flask:
    app = Flask(__name__)
    app.secret_key = "test-secret"
    return app


class TestFlask:
    """Flask request context helpers."""

    def test_callback_request(self, flask_app: Flask) -> None:
        with flask_app.test_request_context("/oauth/signup?code=abc&scope=a&scope=b"):
            callback = flask_integration.callback_request()

        assert callback.query == {"code": "abc", "scope": ["a", "b"]}
        assert callback.body is None

    def test_state_survives_in_flask_session(self, flask_app: Flask) -> None:
        with flask_app.test_request_context("/oauth/signup"):
            flask_session["user_id"] = "42"
            state = StateContainer.create(Callback.LOGIN, "x")
            state.stash(flask_integration.session_store())
            request = flask_integration.callback_request().model_copy(
                update={"query": {"state": state.encode()}}
            )

            assert StateContainer.validate(request, Callback) == state
            assert dict(flask_session) == {"user_id": "42"}

    def test_redirect_response(self, flask_app: Flask) -> None:
        state = StateContainer.create(Callback.SIGNUP)

        with flask_app.test_request_context("/"):
            response = flask_integration.redirect_response(
                AuthorizationRedirect("https://provider.test/authorize", state)
            )

        assert response.status_code == 303
        assert response.location == "https://provider.test/authorize"
