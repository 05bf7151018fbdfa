"""Session lookup against the external identity service.

The identity service owns sessions: it issues, verifies and expires them.
This module only asks it "who is behind these request credentials?".
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
from pydantic import ValidationError
from starlette.requests import HTTPConnection

from admin_portal.auth.models import SessionSnapshot
from admin_portal.core.exceptions import ExternalServiceError
from admin_portal.core.http import SESSION_LOOKUP_TIMEOUT, fetch_json
from admin_portal.core.logging import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "identity service"

# Never forwarded: they describe this hop, not the client's identity
_HOP_HEADERS = frozenset(
    {
        "connection",
        "content-length",
        "content-type",
        "host",
        "keep-alive",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


@dataclass(frozen=True)
class RequestCredentials:
    """Ambient identification material of a request.

    Opaque to the gate: headers (cookies included) are carried verbatim and
    only the provider decides what to send on.
    """

    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_connection(cls, conn: HTTPConnection) -> "RequestCredentials":
        return cls(headers=tuple(conn.headers.items()))

    @classmethod
    def from_mapping(
        cls, headers: Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> "RequestCredentials":
        items = headers.items() if isinstance(headers, Mapping) else headers
        return cls(headers=tuple((k.lower(), v) for k, v in items))


class SessionProvider(Protocol):
    async def get_session(
        self, credentials: RequestCredentials
    ) -> SessionSnapshot | None: ...


class HttpSessionProvider:
    """Looks sessions up with one GET to the identity service.

    Expects the service to answer with ``null`` (or an empty body) when there
    is no session, and ``{"user": {...}, "session": {...}}`` otherwise.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    def forwarded_headers(self, credentials: RequestCredentials) -> list[tuple[str, str]]:
        return [
            (name, value)
            for name, value in credentials.headers
            if name.lower() not in _HOP_HEADERS
        ]

    async def get_session(
        self, credentials: RequestCredentials
    ) -> SessionSnapshot | None:
        """Fetch the session for the given credentials.

        Raises:
            TimeoutError: The identity service did not answer in time
            ExternalServiceError: The lookup failed or returned invalid data
        """
        client_kwargs: dict[str, Any] = {"timeout": SESSION_LOOKUP_TIMEOUT}
        if self.transport is not None:
            client_kwargs["transport"] = self.transport

        payload = await fetch_json(
            self.url,
            timeout_seconds=self.timeout_seconds,
            service_name=SERVICE_NAME,
            client_kwargs=client_kwargs,
            headers=self.forwarded_headers(credentials),
        )
        if payload is None:
            return None

        try:
            return SessionSnapshot.model_validate(payload)
        except ValidationError as e:
            logger.warning("session_payload_invalid", errors=e.error_count())
            raise ExternalServiceError(SERVICE_NAME, "Invalid session payload") from e
