"""Admin page contexts.

Every route here sits behind the session gate and the admin role check: a
request that fails either is diverted before any page data is assembled.
The page context carries what the admin layout renders (sidebar identity,
navigation labels, page title) in the request's locale.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from admin_portal.auth import AdminIdentity, IdentityProjection
from admin_portal.auth.identity import format_role, get_initials, gravatar_url
from admin_portal.core.config import settings
from admin_portal.core.exceptions import ResourceNotFoundError
from admin_portal.i18n import get_locale, translate

router = APIRouter(prefix="/admin", tags=["admin"])

ADMIN_SECTIONS: tuple[str, ...] = (
    "dashboard",
    "posts",
    "comments",
    "media",
    "tags",
    "navigation",
    "users",
    "settings",
    "passkeys",
)


class NavItem(BaseModel):
    key: str
    href: str
    label: str


class AdminPage(BaseModel):
    locale: str
    section: str
    title: str
    user: IdentityProjection
    avatar_url: str | None
    initials: str
    role_label: str
    nav: list[NavItem]


def build_nav(locale: str) -> list[NavItem]:
    return [
        NavItem(
            key=section,
            href=f"/admin/{section}",
            label=translate(f"nav_{section}", locale),
        )
        for section in ADMIN_SECTIONS
    ]


def assemble_page(section: str, identity: IdentityProjection) -> AdminPage:
    """Build the page context for an admitted admin in the active locale."""
    locale = get_locale()
    avatar_url = identity.avatar_ref
    if not avatar_url and identity.email:
        avatar_url = gravatar_url(identity.email, settings.AVATAR_BASE_URL)

    return AdminPage(
        locale=locale,
        section=section,
        title=f"{translate(f'nav_{section}', locale)} · {translate('admin_title', locale)}",
        user=identity,
        avatar_url=avatar_url,
        initials=get_initials(identity.name),
        role_label=format_role(identity.role),
        nav=build_nav(locale),
    )


@router.get("", response_model=AdminPage)
async def read_admin_home(identity: AdminIdentity) -> AdminPage:
    """Admin landing page (the dashboard)."""
    return assemble_page("dashboard", identity)


@router.get("/{section}", response_model=AdminPage)
async def read_admin_section(section: str, identity: AdminIdentity) -> AdminPage:
    """Context for one admin section page."""
    if section not in ADMIN_SECTIONS:
        raise ResourceNotFoundError("Section", section)
    return assemble_page(section, identity)
