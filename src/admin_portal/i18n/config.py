"""i18n configuration and supported languages.

The supported set is closed: a locale outside it is never rendered,
persisted or accepted from the locale switcher.
"""

import re
from typing import NamedTuple, TypeGuard


class SupportedLocale(NamedTuple):
    """A supported locale with its metadata."""

    code: str
    name: str
    native_name: str


SUPPORTED_LOCALES: tuple[SupportedLocale, ...] = (
    SupportedLocale("zh", "Chinese", "中文"),
    SupportedLocale("en", "English", "English"),
    SupportedLocale("fr", "French", "Français"),
)

# Set of valid locale codes for fast lookup
SUPPORTED_LOCALE_CODES: frozenset[str] = frozenset(
    loc.code for loc in SUPPORTED_LOCALES
)

# Default locale when no signal selects another one
DEFAULT_LOCALE = "zh"

# Region/script separators in a language tag ("en-US", "zh_Hant")
_SUBTAG_SEPARATOR = re.compile(r"[-_]")


def is_supported_locale(code: object) -> TypeGuard[str]:
    """Check if a value is a supported locale code."""
    return isinstance(code, str) and code in SUPPORTED_LOCALE_CODES


def primary_subtag(tag: str) -> str:
    """Return the primary language subtag of a language tag.

    Handles cases like:
    - "en-US" -> "en"
    - "zh_CN" -> "zh"
    - " FR " -> "fr"
    """
    return _SUBTAG_SEPARATOR.split(tag.strip(), maxsplit=1)[0].lower()
