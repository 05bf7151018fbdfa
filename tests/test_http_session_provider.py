"""
HTTP session provider against a mocked identity service.

The provider makes exactly one request per lookup and maps every failure to
an application error; the gate turns those into Unauthenticated.
"""

from __future__ import annotations

import httpx
import pytest

from admin_portal.auth import (
    Authenticated,
    HttpSessionProvider,
    RequestCredentials,
    SessionGate,
    SessionSnapshot,
    Unauthenticated,
)
from admin_portal.core.exceptions import ExternalServiceError, TimeoutError

pytestmark = pytest.mark.anyio("asyncio")

URL = "http://auth.test/api/auth/get-session"

CREDENTIALS = RequestCredentials.from_mapping(
    {
        "host": "admin.example.com",
        "cookie": "better-auth.session_token=abc; locale=en",
        "user-agent": "pytest",
        "content-length": "0",
    }
)

SESSION_PAYLOAD = {
    "session": {"id": "s-1", "expiresAt": "2030-01-01T00:00:00Z", "token": "abc"},
    "user": {
        "id": "u-1",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "image": None,
        "role": "admin",
        "emailVerified": True,
    },
}


def provider_for(handler) -> tuple[HttpSessionProvider, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    provider = HttpSessionProvider(
        URL, timeout_seconds=2.0, transport=httpx.MockTransport(recording_handler)
    )
    return provider, seen


@pytest.mark.anyio
async def test_returns_snapshot_and_forwards_credentials():
    provider, seen = provider_for(lambda _: httpx.Response(200, json=SESSION_PAYLOAD))

    snapshot = await provider.get_session(CREDENTIALS)

    assert isinstance(snapshot, SessionSnapshot)
    assert snapshot.user.id == "u-1"
    assert snapshot.user.role == "admin"
    assert snapshot.session.id == "s-1"
    assert snapshot.session.expires_at is not None

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "GET"
    assert str(request.url) == URL
    assert request.headers["cookie"] == "better-auth.session_token=abc; locale=en"
    assert request.headers["user-agent"] == "pytest"
    # This hop's own headers are not forwarded
    assert request.headers["host"] == "auth.test"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "payload",
    [
        {"user": SESSION_PAYLOAD["user"], "session": None},
        {"user": SESSION_PAYLOAD["user"]},
    ],
)
async def test_user_without_session_details_is_admitted(payload):
    provider, _ = provider_for(lambda _: httpx.Response(200, json=payload))

    snapshot = await provider.get_session(CREDENTIALS)
    assert snapshot is not None
    assert snapshot.session is None
    assert snapshot.user.email == "ada@example.com"

    result = await SessionGate(provider).admit(CREDENTIALS)
    assert isinstance(result, Authenticated)


@pytest.mark.anyio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json=None),
        httpx.Response(200, content=b""),
        httpx.Response(200, content=b"null"),
    ],
)
async def test_no_session(response):
    provider, _ = provider_for(lambda _: response)
    assert await provider.get_session(CREDENTIALS) is None


@pytest.mark.anyio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"message": "boom"}),
        httpx.Response(401),
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, json={"user": {"name": "no id"}}),
        httpx.Response(200, json=["not", "an", "object"]),
    ],
)
async def test_bad_responses_raise_external_service_error(response):
    provider, _ = provider_for(lambda _: response)
    with pytest.raises(ExternalServiceError):
        await provider.get_session(CREDENTIALS)


@pytest.mark.anyio
async def test_connection_error():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider, _ = provider_for(refuse)
    with pytest.raises(ExternalServiceError):
        await provider.get_session(CREDENTIALS)


@pytest.mark.anyio
async def test_timeout():
    def stall(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    provider, _ = provider_for(stall)
    with pytest.raises(TimeoutError):
        await provider.get_session(CREDENTIALS)


@pytest.mark.anyio
async def test_gate_fails_closed_on_service_error():
    provider, seen = provider_for(lambda _: httpx.Response(503))
    result = await SessionGate(provider).admit(CREDENTIALS)
    assert isinstance(result, Unauthenticated)
    assert len(seen) == 1


@pytest.mark.anyio
async def test_gate_admits_with_service_session():
    provider, _ = provider_for(lambda _: httpx.Response(200, json=SESSION_PAYLOAD))
    gate = SessionGate(provider)

    result = await gate.admit(CREDENTIALS)

    assert isinstance(result, Authenticated)
    identity = gate.project_identity(result.session)
    assert identity.name == "Ada Lovelace"
    assert identity.avatar_ref is None
