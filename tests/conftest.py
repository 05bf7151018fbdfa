"""
Pytest configuration and shared fakes.

Why: The request-context layer talks to two collaborators, the identity
service (sessions) and the client's cookie jar (locale preference). Tests
replace both with in-memory stand-ins so no network or browser is involved.

AnyIO is pinned to the asyncio backend.
"""

from __future__ import annotations

import httpx
from httpx import ASGITransport
import pytest

from admin_portal.auth import RequestCredentials, SessionSnapshot, get_session_provider
from admin_portal.i18n import CookieOptions
from admin_portal.main import create_app

SESSION_COOKIE = "session_token"


class MemoryPreferenceStore:
    """Dict-backed PreferenceStore that records every write."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str, CookieOptions]] = []

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str, options: CookieOptions) -> None:
        self.values[key] = value
        self.writes.append((key, value, options))


class FakeSessionProvider:
    """Session provider keyed by the value of the session cookie."""

    def __init__(
        self,
        sessions: dict[str, object] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.sessions = sessions or {}
        self.error = error
        self.calls: list[RequestCredentials] = []

    async def get_session(self, credentials: RequestCredentials):
        self.calls.append(credentials)
        if self.error is not None:
            raise self.error
        cookie_header = dict(credentials.headers).get("cookie", "")
        for part in cookie_header.split(";"):
            name, _, value = part.strip().partition("=")
            if name == SESSION_COOKIE:
                return self.sessions.get(value)
        return None


def make_snapshot(**user: object) -> SessionSnapshot:
    user.setdefault("id", "user-1")
    return SessionSnapshot.model_validate({"user": user})


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def sessions() -> dict[str, object]:
    return {
        "admin-token": make_snapshot(
            id="u-admin",
            name="Ada Lovelace",
            email="ada@example.com",
            role="admin",
        ),
        "user-token": make_snapshot(
            id="u-user",
            name="Bob",
            email="bob@example.com",
            role="user",
        ),
        "anonymous-admin-token": make_snapshot(id="u-anon", role="admin"),
    }


@pytest.fixture
def session_provider(sessions: dict[str, object]) -> FakeSessionProvider:
    return FakeSessionProvider(sessions)


@pytest.fixture
def app(session_provider: FakeSessionProvider):
    application = create_app()
    application.dependency_overrides[get_session_provider] = lambda: session_provider
    return application


@pytest.fixture
async def client(app):
    async with httpx.AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c
