"""Client-scoped persistence of the locale preference.

The preference lives on the client (a cookie). The resolver only talks to a
PreferenceStore, so the cookie jar can be swapped for any key/value store
with the same two operations.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, Protocol

from starlette.responses import Response

from admin_portal.core.config import LOCALE_COOKIE_MAX_AGE


@dataclass(frozen=True)
class CookieOptions:
    """Retention and scope of a persisted preference."""

    max_age: int = LOCALE_COOKIE_MAX_AGE
    path: str = "/"
    samesite: Literal["lax", "strict", "none"] = "lax"
    secure: bool = False


class PreferenceStore(Protocol):
    """Client-scoped key/value store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, options: CookieOptions) -> None: ...


class CookiePreferenceStore:
    """PreferenceStore backed by the request's cookies.

    Reads come from the incoming cookies, writes become Set-Cookie headers on
    the outgoing response. A value written during the request is returned by
    later reads of the same request.
    """

    def __init__(
        self,
        cookies: Mapping[str, str],
        response: Response | None = None,
    ) -> None:
        self._cookies = dict(cookies)
        self._response = response

    def get(self, key: str) -> str | None:
        return self._cookies.get(key)

    def set(self, key: str, value: str, options: CookieOptions) -> None:
        if self._response is None:
            raise RuntimeError("This preference store is read-only")
        self._response.set_cookie(
            key=key,
            value=value,
            max_age=options.max_age,
            path=options.path,
            samesite=options.samesite,
            secure=options.secure,
        )
        self._cookies[key] = value
