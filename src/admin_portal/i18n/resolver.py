"""Locale resolution for a single request.

Signals, in strict priority order (first match wins):
1. The persisted preference (locale cookie), when it is a supported locale
2. The first entry of the Accept-Language header, reduced to its primary subtag
3. The system default locale

Resolution never fails: every malformed or unsupported signal falls through
to the next one and finally to the default.
"""

from typing import Any, Literal

from pydantic import BaseModel

from admin_portal.core.logging import get_logger
from admin_portal.i18n.config import (
    DEFAULT_LOCALE,
    SUPPORTED_LOCALES,
    SupportedLocale,
    is_supported_locale,
    primary_subtag,
)
from admin_portal.i18n.preferences import CookieOptions, PreferenceStore

logger = get_logger(__name__)

LOCALE_PREFERENCE_KEY = "locale"


class LocaleUpdateSuccess(BaseModel):
    success: Literal[True] = True
    locale: str


class LocaleUpdateFailure(BaseModel):
    success: Literal[False] = False
    error: str = "Invalid locale"
    # Echoes whatever the client sent, including non-string values
    candidate: Any = None


LocaleUpdateResult = LocaleUpdateSuccess | LocaleUpdateFailure


def parse_accept_language(header: str | None) -> str | None:
    """Parse an Accept-Language header into a supported locale.

    Only the first comma-separated entry is considered; quality values are
    ignored. Handles formats like:
    - "fr-FR,en;q=0.8" -> "fr"
    - "en;q=0.9" -> "en"
    - "xx-XX" -> None

    Args:
        header: The Accept-Language header value

    Returns:
        The supported locale code, or None if there is no usable match.
    """
    if not header:
        return None

    first_entry = header.split(",", 1)[0]
    tag = first_entry.split(";", 1)[0]
    if not tag.strip():
        return None

    code = primary_subtag(tag)
    return code if is_supported_locale(code) else None


def negotiate_locale(
    persisted: str | None,
    accept_language: str | None,
    default_locale: str = DEFAULT_LOCALE,
) -> str:
    """Pick the active locale from the persisted preference and the header."""
    if is_supported_locale(persisted):
        return persisted
    return parse_accept_language(accept_language) or default_locale


class LocaleResolver:
    """Resolves and persists the locale for one client.

    The preference store is injected so callers decide where the preference
    lives (the request's cookie jar in the web app, a dict in tests).
    """

    def __init__(
        self,
        store: PreferenceStore,
        *,
        default_locale: str = DEFAULT_LOCALE,
        preference_key: str = LOCALE_PREFERENCE_KEY,
        cookie_options: CookieOptions | None = None,
    ) -> None:
        self.store = store
        self.default_locale = default_locale
        self.preference_key = preference_key
        self.cookie_options = cookie_options or CookieOptions()

    def _persisted(self) -> str | None:
        return self.store.get(self.preference_key)

    def resolve(self, accept_language: str | None = None) -> str:
        """Return the active locale for the current request."""
        return negotiate_locale(
            self._persisted(), accept_language, self.default_locale
        )

    def current_preference(self) -> str:
        """Return the persisted preference, or the default if unset or invalid.

        The Accept-Language header is not consulted: this reflects what the
        client explicitly chose.
        """
        persisted = self._persisted()
        if is_supported_locale(persisted):
            return persisted
        return self.default_locale

    def set_preference(self, candidate: object) -> LocaleUpdateResult:
        """Persist a new locale preference.

        An unsupported candidate is reported as a failure result and nothing
        is written.
        """
        if not is_supported_locale(candidate):
            logger.warning("locale_preference_rejected", candidate=candidate)
            return LocaleUpdateFailure(candidate=candidate)

        self.store.set(self.preference_key, candidate, self.cookie_options)
        logger.info("locale_preference_updated", locale=candidate)
        return LocaleUpdateSuccess(locale=candidate)

    @staticmethod
    def supported_locales() -> tuple[SupportedLocale, ...]:
        return SUPPORTED_LOCALES
