"""
Locale negotiation and preference persistence.

Priority: persisted preference > first Accept-Language entry > default.
Unsupported values are rejected, never coerced.
"""

from __future__ import annotations

from conftest import MemoryPreferenceStore
import pytest
from starlette.responses import Response

from admin_portal.i18n import (
    DEFAULT_LOCALE,
    SUPPORTED_LOCALE_CODES,
    CookieOptions,
    CookiePreferenceStore,
    LocaleResolver,
    LocaleUpdateFailure,
    LocaleUpdateSuccess,
    negotiate_locale,
    parse_accept_language,
)

UNSUPPORTED = ["xx", "", "EN", "en-US", "de", "français", "zh_CN"]


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("fr-FR,en;q=0.8", "fr"),
        ("en", "en"),
        ("EN-us", "en"),
        ("zh_CN", "zh"),
        ("zh-Hant-TW,en", "zh"),
        ("en;q=0.9, fr", "en"),
        (" fr ,en", "fr"),
        # Only the first entry counts, quality values are ignored
        ("de-DE,fr;q=0.9", None),
        ("xx-XX", None),
        ("*", None),
        (",en", None),
        (";q=0.5", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_accept_language(header, expected):
    assert parse_accept_language(header) == expected


def test_default_is_supported():
    assert DEFAULT_LOCALE in SUPPORTED_LOCALE_CODES


def test_header_used_when_nothing_persisted():
    resolver = LocaleResolver(MemoryPreferenceStore())
    assert resolver.resolve("fr-FR,en;q=0.8") == "fr"


def test_unsupported_header_falls_back_to_default():
    resolver = LocaleResolver(MemoryPreferenceStore())
    assert resolver.resolve("xx-XX") == DEFAULT_LOCALE
    assert resolver.resolve(None) == DEFAULT_LOCALE


@pytest.mark.parametrize("header", [None, "", "fr-FR", "zh-CN,en", "xx", "en;q=0.1"])
def test_persisted_preference_ignores_header(header):
    resolver = LocaleResolver(MemoryPreferenceStore({"locale": "en"}))
    assert resolver.resolve(header) == "en"


def test_invalid_persisted_value_falls_through_to_header():
    resolver = LocaleResolver(MemoryPreferenceStore({"locale": "de"}))
    assert resolver.resolve("fr-CA") == "fr"
    assert resolver.resolve(None) == DEFAULT_LOCALE


def test_custom_default_locale():
    resolver = LocaleResolver(MemoryPreferenceStore(), default_locale="en")
    assert resolver.resolve("xx") == "en"
    assert resolver.current_preference() == "en"


def test_resolve_is_idempotent():
    store = MemoryPreferenceStore({"locale": "fr"})
    resolver = LocaleResolver(store)
    assert resolver.resolve("en-GB") == resolver.resolve("en-GB")
    assert store.writes == []


def test_negotiate_locale_is_pure():
    assert negotiate_locale("zh", "fr") == "zh"
    assert negotiate_locale(None, "fr") == "fr"
    assert negotiate_locale("nope", None, "en") == "en"


@pytest.mark.parametrize("locale", sorted(SUPPORTED_LOCALE_CODES))
def test_set_preference_then_resolve_returns_it(locale):
    store = MemoryPreferenceStore()
    resolver = LocaleResolver(store)

    result = resolver.set_preference(locale)

    assert isinstance(result, LocaleUpdateSuccess)
    assert result.success is True
    assert result.locale == locale
    assert resolver.resolve(None) == locale
    assert resolver.current_preference() == locale


def test_set_preference_overwrites_previous_value():
    store = MemoryPreferenceStore({"locale": "zh"})
    resolver = LocaleResolver(store)
    resolver.set_preference("en")
    resolver.set_preference("fr")
    assert store.values["locale"] == "fr"
    assert [value for _, value, _ in store.writes] == ["en", "fr"]


@pytest.mark.parametrize("candidate", UNSUPPORTED)
def test_set_preference_rejects_unsupported(candidate):
    store = MemoryPreferenceStore({"locale": "en"})
    resolver = LocaleResolver(store)

    result = resolver.set_preference(candidate)

    assert isinstance(result, LocaleUpdateFailure)
    assert result.success is False
    assert result.error == "Invalid locale"
    assert result.candidate == candidate
    assert store.values == {"locale": "en"}
    assert store.writes == []


@pytest.mark.parametrize("candidate", [5, None, 1.5, ["en"], {"locale": "en"}, True])
def test_set_preference_rejects_non_string_values(candidate):
    store = MemoryPreferenceStore({"locale": "fr"})

    result = LocaleResolver(store).set_preference(candidate)

    assert isinstance(result, LocaleUpdateFailure)
    assert result.success is False
    assert result.candidate == candidate
    assert store.writes == []


def test_preference_written_with_cookie_policy():
    store = MemoryPreferenceStore()
    LocaleResolver(store).set_preference("en")

    key, value, options = store.writes[0]
    assert (key, value) == ("locale", "en")
    assert options.max_age == 31_536_000
    assert options.path == "/"
    assert options.samesite == "lax"


def test_current_preference_ignores_header_and_invalid_values():
    assert LocaleResolver(MemoryPreferenceStore()).current_preference() == DEFAULT_LOCALE
    invalid = LocaleResolver(MemoryPreferenceStore({"locale": "xx"}))
    assert invalid.current_preference() == DEFAULT_LOCALE


def test_supported_locales_lists_names():
    codes = [loc.code for loc in LocaleResolver.supported_locales()]
    assert sorted(codes) == sorted(SUPPORTED_LOCALE_CODES)
    native = {loc.code: loc.native_name for loc in LocaleResolver.supported_locales()}
    assert native["fr"] == "Français"


class TestCookiePreferenceStore:
    def test_reads_request_cookies(self):
        store = CookiePreferenceStore({"locale": "fr", "other": "x"})
        assert store.get("locale") == "fr"
        assert store.get("missing") is None

    def test_read_only_without_response(self):
        store = CookiePreferenceStore({})
        with pytest.raises(RuntimeError):
            store.set("locale", "en", CookieOptions())

    def test_write_sets_cookie_and_is_read_back(self):
        response = Response()
        store = CookiePreferenceStore({"locale": "zh"}, response)

        store.set("locale", "en", CookieOptions())

        assert store.get("locale") == "en"
        set_cookie = response.headers["set-cookie"].lower()
        assert "locale=en" in set_cookie
        assert "max-age=31536000" in set_cookie
        assert "path=/" in set_cookie
        assert "samesite=lax" in set_cookie
