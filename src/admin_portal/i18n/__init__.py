"""Locale negotiation, persistence and message catalogs.

Resolves the active locale per request (persisted preference, then
Accept-Language, then the default), persists explicit preference changes in
a client-scoped store, and serves translations for the resolved locale.

Uses python-i18n with flat JSON catalogs.
"""

from admin_portal.i18n.config import (
    DEFAULT_LOCALE,
    SUPPORTED_LOCALE_CODES,
    SUPPORTED_LOCALES,
    SupportedLocale,
    is_supported_locale,
    primary_subtag,
)
from admin_portal.i18n.context import (
    get_locale,
    get_request_locale,
    reset_locale,
    set_locale,
)
from admin_portal.i18n.middleware import LocaleMiddleware
from admin_portal.i18n.preferences import (
    CookieOptions,
    CookiePreferenceStore,
    PreferenceStore,
)
from admin_portal.i18n.resolver import (
    LOCALE_PREFERENCE_KEY,
    LocaleResolver,
    LocaleUpdateFailure,
    LocaleUpdateResult,
    LocaleUpdateSuccess,
    negotiate_locale,
    parse_accept_language,
)
from admin_portal.i18n.translator import (
    init_translations,
    translate,
    translate_with_fallback,
)

__all__ = [
    "DEFAULT_LOCALE",
    "LOCALE_PREFERENCE_KEY",
    "SUPPORTED_LOCALES",
    "SUPPORTED_LOCALE_CODES",
    "CookieOptions",
    "CookiePreferenceStore",
    "LocaleMiddleware",
    "LocaleResolver",
    "LocaleUpdateFailure",
    "LocaleUpdateResult",
    "LocaleUpdateSuccess",
    "PreferenceStore",
    "SupportedLocale",
    "get_locale",
    "get_request_locale",
    "init_translations",
    "is_supported_locale",
    "negotiate_locale",
    "parse_accept_language",
    "primary_subtag",
    "reset_locale",
    "set_locale",
    "translate",
    "translate_with_fallback",
]
