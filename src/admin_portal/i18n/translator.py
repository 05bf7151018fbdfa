"""Message catalogs served through python-i18n.

Each supported locale has a flat JSON catalog in ``translations/``. Callers
only hand over a locale code; catalog contents never leave this module
except as translated strings.
"""

from pathlib import Path
from typing import ClassVar

import i18n  # type: ignore[import-untyped]

from admin_portal.i18n.config import DEFAULT_LOCALE, is_supported_locale
from admin_portal.i18n.context import get_locale

# Path to translation files
TRANSLATIONS_DIR = Path(__file__).parent / "translations"


class _TranslationState:
    """Tracks translation initialization state.

    Uses class variable to avoid PLW0603 global statement warning.
    """

    initialized: ClassVar[bool] = False


def init_translations() -> None:
    """Initialize the i18n library with our translation files.

    This should be called once at application startup.
    """
    if _TranslationState.initialized:
        return

    i18n.set("file_format", "json")
    i18n.set("fallback", DEFAULT_LOCALE)
    i18n.set("enable_memoization", True)
    # Catalogs are flat key/value objects without a locale root element
    i18n.set("skip_locale_root_data", True)
    i18n.set("filename_format", "{locale}.{format}")

    if str(TRANSLATIONS_DIR) not in i18n.load_path:
        i18n.load_path.append(str(TRANSLATIONS_DIR))

    _TranslationState.initialized = True


def translate(
    key: str,
    locale: str | None = None,
    **params: str | int | float,
) -> str:
    """Translate a key to the specified locale.

    The locale is passed per call rather than set globally on python-i18n,
    so concurrent requests in different locales do not interfere.
    Interpolation uses %{variable} syntax in JSON files.

    Args:
        key: The translation key (e.g., "nav_posts")
        locale: Target locale code. If None, uses context locale.
        **params: Interpolation parameters (e.g., resource="Section")

    Returns:
        Translated string, or the key itself if not found.

    Example:
        translate("error_not_found", "fr", resource="Section")
        # Returns: "Section introuvable"
    """
    init_translations()

    target_locale = locale or get_locale()
    if not is_supported_locale(target_locale):
        target_locale = DEFAULT_LOCALE

    result: str = i18n.t(key, locale=target_locale, **params)
    return result


def translate_with_fallback(
    key: str,
    locale: str | None = None,
    fallback: str | None = None,
    **params: str | int | float,
) -> str:
    """Translate a key with a custom fallback message.

    Returns:
        Translated string, fallback, or key if neither found.
    """
    result = translate(key, locale, **params)

    # python-i18n returns the key if not found
    if result == key and fallback is not None:
        return fallback

    return result
