"""Request-scoped locale context using contextvars.

The locale resolved for a request is visible to everything that runs while
the request is handled (exception handlers, page assembly) without being
passed around explicitly.

We keep both a contextvar (for async code) and a reference to the ASGI scope
state dict (for sync dependencies that run in threadpools, and so the
middleware sees a locale changed by the handler when it writes the
Content-Language header).
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any

from admin_portal.i18n.config import DEFAULT_LOCALE

_locale_context: ContextVar[str] = ContextVar("locale", default=DEFAULT_LOCALE)

_request_state: ContextVar[dict[str, Any] | None] = ContextVar(
    "request_state", default=None
)

# Key used in request state for locale
LOCALE_STATE_KEY = "_i18n_locale"


def get_locale() -> str:
    """Get the current request's locale.

    Request state wins over the contextvar, which wins over DEFAULT_LOCALE.
    """
    state = _request_state.get()
    if state is not None:
        locale_value = state.get(LOCALE_STATE_KEY)
        if isinstance(locale_value, str):
            return locale_value
    return _locale_context.get()


def get_request_locale() -> str | None:
    """Locale bound to the request being handled, or None outside a request."""
    state = _request_state.get()
    if state is None:
        return None
    locale_value = state.get(LOCALE_STATE_KEY)
    return locale_value if isinstance(locale_value, str) else None


def set_locale(locale: str) -> Token[str]:
    """Set the locale for the current request context.

    Returns:
        Token that can be used with reset_locale to restore previous value.
    """
    state = _request_state.get()
    if state is not None:
        state[LOCALE_STATE_KEY] = locale
    return _locale_context.set(locale)


def reset_locale(token: Token[str]) -> None:
    _locale_context.reset(token)


@contextmanager
def request_locale(state: dict[str, Any], locale: str) -> Iterator[dict[str, Any]]:
    """Bind a resolved locale to one request for the duration of the block.

    Args:
        state: The request's scope["state"] dict, shared across threads.
        locale: The locale resolved for the request.

    Yields:
        The state dict, whose LOCALE_STATE_KEY holds the current locale.
    """
    state_token = _request_state.set(state)
    locale_token = set_locale(locale)
    try:
        yield state
    finally:
        _locale_context.reset(locale_token)
        _request_state.reset(state_token)
