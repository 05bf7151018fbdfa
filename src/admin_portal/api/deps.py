from typing import Annotated

from fastapi import Depends, Request, Response

from admin_portal.core.config import Settings, get_settings
from admin_portal.i18n import CookieOptions, CookiePreferenceStore, LocaleResolver

SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_locale_resolver(
    request: Request, response: Response, settings: SettingsDep
) -> LocaleResolver:
    """Locale resolver bound to this request's cookie jar.

    Preference writes land on the response FastAPI sends for the route.
    """
    return LocaleResolver(
        CookiePreferenceStore(request.cookies, response),
        default_locale=settings.DEFAULT_LANGUAGE,
        preference_key=settings.LOCALE_COOKIE_NAME,
        cookie_options=CookieOptions(
            max_age=settings.LOCALE_COOKIE_MAX_AGE,
            secure=settings.LOCALE_COOKIE_SECURE,
        ),
    )


LocaleResolverDep = Annotated[LocaleResolver, Depends(get_locale_resolver)]
