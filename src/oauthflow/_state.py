"""CSRF state carried through the provider redirect.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

import logging
import secrets
import string
from enum import Enum
from typing import NamedTuple
from urllib.parse import quote, unquote

from ._errors import extract_from_query
from ._session import SESSION_KEY_PREFIX, SessionStore
from .exceptions import (
    OAuthableError,
    ProviderError,
    ProviderErrorCode,
    ServerError,
    ServerErrorCode,
)
from .models import CallbackRequest

logger = logging.getLogger(__name__)

NONCE_LENGTH = 64
_NONCE_ALPHABET = string.ascii_letters + string.digits

CUSTOM_VALUE_KEY = f"{SESSION_KEY_PREFIX}custom_value"
CALLBACK_URL_KEY = f"{SESSION_KEY_PREFIX}callback_url"
RANDOM_VALUE_KEY = f"{SESSION_KEY_PREFIX}random_value"


class StateContainer(NamedTuple):
    """The ``state`` round-tripped through the provider.

    Carries a caller supplied value, the callback the flow is using and a
    random nonce. The nonce only has to be unpredictable enough to stop a
    forged callback; it is not a cryptographic guarantee.
    """

    custom_value: str
    callback: Enum
    nonce: str

    @classmethod
    def create(cls, callback: Enum, custom_value: str = "") -> StateContainer:
        nonce = "".join(secrets.choice(_NONCE_ALPHABET) for _ in range(NONCE_LENGTH))
        return cls(custom_value, callback, nonce)

    @property
    def callback_url(self) -> str:
        return str(self.callback.value)

    @property
    def value(self) -> list[str]:
        """The ordered list form of this state."""
        return [self.custom_value, self.callback_url, self.nonce]

    def encode(self) -> str:
        """Single string form for the ``state`` parameter."""
        return ",".join(quote(part, safe="") for part in self.value)

    def stash(self, session: SessionStore) -> None:
        session.set(CUSTOM_VALUE_KEY, self.custom_value)
        session.set(CALLBACK_URL_KEY, self.callback_url)
        session.set(RANDOM_VALUE_KEY, self.nonce)

    @classmethod
    def extract(cls, session: SessionStore, callbacks: type[Enum]) -> StateContainer:
        """Read the state stashed before the redirect.

        Raises:
            ServerError: ``INVALID_COOKIE`` if the session lost any part of it.

        """
        custom_value = session.get(CUSTOM_VALUE_KEY)
        callback_url = session.get(CALLBACK_URL_KEY)
        nonce = session.get(RANDOM_VALUE_KEY)
        callback = _lookup(callbacks, callback_url)
        if (
            custom_value is None
            or callback is None
            or nonce is None
            or len(nonce) != NONCE_LENGTH
        ):
            raise ServerError(ServerErrorCode.INVALID_COOKIE)
        return cls(custom_value, callback, nonce)

    @classmethod
    def decode(
        cls, raw: str | list[str] | None, callbacks: type[Enum]
    ) -> StateContainer:
        """Parse the ``state`` a callback carries, in string or list form.

        Raises:
            ServerError: ``STATE_DECODE`` if the value is malformed.

        """
        if isinstance(raw, list) and len(raw) == 1:
            raw = raw[0]
        if isinstance(raw, str):
            values = [unquote(part) for part in raw.split(",")]
        elif isinstance(raw, list):
            values = list(raw)
        else:
            values = []

        callback = _lookup(callbacks, values[1]) if len(values) == 3 else None
        if callback is None:
            detail = "NIL" if raw is None else repr(raw)
            raise ServerError(ServerErrorCode.STATE_DECODE, detail=detail)
        return cls(values[0], callback, values[2])

    @classmethod
    def validate(cls, request: CallbackRequest, callbacks: type[Enum]) -> StateContainer:
        """Check the callback's state against the stashed one.

        The stashed copy is destroyed as soon as both sides were read, so a
        state can only be validated once. A provider ``error`` parameter wins
        over any state failure.
        """
        try:
            stored = cls.extract(request.session, callbacks)
            received = cls.decode(request.query.get("state"), callbacks)
            request.session.destroy()
            if stored != received:
                logger.warning("OAuth2 state mismatch on %s", stored.callback_url)
                raise ServerError(ServerErrorCode.INVALID_COOKIE)
        except Exception as exc:
            query_error = extract_from_query(request.query)
            if query_error is not None:
                raise query_error from exc
            if isinstance(exc, OAuthableError):
                raise
            raise ProviderError(ProviderErrorCode.UNKNOWN, detail=str(exc)) from exc
        return stored


def _lookup(callbacks: type[Enum], raw: str | None) -> Enum | None:
    if raw is None:
        return None
    for member in callbacks:
        if str(member.value) == raw:
            return member
    return None
