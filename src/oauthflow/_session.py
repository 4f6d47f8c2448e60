"""Session storage used to hold the CSRF state between redirect and callback.

Copyright (c) 2025 OAuthFlow. All rights reserved.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Protocol, runtime_checkable

SESSION_KEY_PREFIX = "_oauthflow_"


@runtime_checkable
class SessionStore(Protocol):
    """Key/value session of the end user's browser."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def destroy(self) -> None: ...


class MemorySession:
    """Dict backed :class:`SessionStore`, for tests and scripts."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def destroy(self) -> None:
        self.data.clear()


class MappingSession:
    """Adapts a framework session mapping (Starlette, Flask) to :class:`SessionStore`.

    ``destroy`` only drops the keys this library owns, so the rest of the
    user's session (login, preferences) survives the OAuth round trip.
    """

    def __init__(self, mapping: MutableMapping[str, Any]) -> None:
        self._mapping = mapping

    def get(self, key: str) -> str | None:
        value = self._mapping.get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        self._mapping[key] = value

    def destroy(self) -> None:
        for key in [k for k in self._mapping if k.startswith(SESSION_KEY_PREFIX)]:
            del self._mapping[key]
