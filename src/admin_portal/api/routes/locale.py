"""Locale preference routes used by the locale switcher."""

from typing import Any

from fastapi import APIRouter, Response
from pydantic import BaseModel

from admin_portal.api.deps import LocaleResolverDep
from admin_portal.i18n import (
    LocaleUpdateFailure,
    LocaleUpdateResult,
    LocaleUpdateSuccess,
    set_locale,
    translate,
)

router = APIRouter(prefix="/locale", tags=["locale"])


class LocaleOption(BaseModel):
    code: str
    name: str
    native_name: str


class LocalePreferencePublic(BaseModel):
    locale: str
    supported: list[LocaleOption]


class LocaleUpdateRequest(BaseModel):
    # Any JSON value: unsupported ones, strings or not, get a failure result
    locale: Any


class LocaleUpdateRejected(LocaleUpdateFailure):
    message: str


@router.get("", response_model=LocalePreferencePublic)
async def read_locale_preference(resolver: LocaleResolverDep) -> LocalePreferencePublic:
    """Return the persisted locale preference and the selectable locales."""
    return LocalePreferencePublic(
        locale=resolver.current_preference(),
        supported=[
            LocaleOption(**option._asdict())
            for option in resolver.supported_locales()
        ],
    )


@router.post(
    "",
    response_model=LocaleUpdateSuccess | LocaleUpdateRejected,
    responses={422: {"model": LocaleUpdateRejected}},
)
async def update_locale_preference(
    body: LocaleUpdateRequest,
    resolver: LocaleResolverDep,
    response: Response,
) -> LocaleUpdateResult:
    """Persist a new locale preference.

    On success the preference cookie is set and the response is already
    rendered in the new locale. An unsupported locale leaves the stored
    preference untouched and answers 422.
    """
    result = resolver.set_preference(body.locale)
    if isinstance(result, LocaleUpdateFailure):
        response.status_code = 422
        return LocaleUpdateRejected(
            candidate=result.candidate,
            error=result.error,
            message=translate("locale_invalid"),
        )

    set_locale(result.locale)
    return result
