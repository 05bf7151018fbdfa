"""Locale middleware.

Resolves the request locale once, before any handler runs, from:
1. The persisted preference cookie
2. Accept-Language header
3. The configured default locale

Uses pure ASGI middleware to avoid BaseHTTPMiddleware's contextvars issues.
See: https://github.com/encode/starlette/discussions/1729

Cross-thread communication:
Since FastAPI runs sync dependencies in a threadpool, contextvars changes
made there aren't visible to async code. We use request scope state as a
shared dict that both threads can access; a handler that changes the
preference updates it so the response carries the new Content-Language.
"""

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from admin_portal.i18n.config import DEFAULT_LOCALE
from admin_portal.i18n.context import LOCALE_STATE_KEY, request_locale
from admin_portal.i18n.preferences import CookiePreferenceStore
from admin_portal.i18n.resolver import LOCALE_PREFERENCE_KEY, LocaleResolver


class LocaleMiddleware:
    """Pure ASGI middleware that installs the resolved locale per request.

    Also adds Content-Language header to responses.

    We capture the final locale when the response starts (before sending
    headers) rather than in a finally block, because the response may be sent
    before the finally block runs.
    """

    def __init__(
        self,
        app: ASGIApp,
        default_locale: str = DEFAULT_LOCALE,
        cookie_name: str = LOCALE_PREFERENCE_KEY,
    ) -> None:
        self.app = app
        self.default_locale = default_locale
        self.cookie_name = cookie_name

    def resolve(self, scope: Scope) -> str:
        conn = HTTPConnection(scope)
        resolver = LocaleResolver(
            CookiePreferenceStore(conn.cookies),
            default_locale=self.default_locale,
            preference_key=self.cookie_name,
        )
        return resolver.resolve(conn.headers.get("accept-language"))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI interface."""
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        locale = self.resolve(scope)

        if "state" not in scope:
            scope["state"] = {}

        with request_locale(scope["state"], locale) as state:

            async def send_with_locale(message: Message) -> None:
                if message["type"] == "http.response.start":
                    current_locale = state.get(LOCALE_STATE_KEY, locale)
                    response_headers = MutableHeaders(
                        raw=list(message.get("headers", []))
                    )
                    response_headers["Content-Language"] = current_locale
                    message["headers"] = response_headers.raw

                await send(message)

            await self.app(scope, receive, send_with_locale)
