"""Identity projection and display helpers.

Turns a session snapshot into the small, display-safe record page assembly
works with. Every function here is total: missing data degrades to a
defined substitute, never to an error.
"""

import hashlib

from admin_portal.auth.models import IdentityProjection, SessionSnapshot

DEFAULT_ROLE = "user"
DEFAULT_AVATAR_BASE_URL = "https://use.sevencdn.com/avatar"


def project_identity(
    snapshot: SessionSnapshot, *, default_role: str = DEFAULT_ROLE
) -> IdentityProjection:
    """Project a session snapshot onto {name, email, avatar_ref, role}.

    Fallbacks: an absent or empty name becomes the email, an absent or empty
    email becomes "", an absent or empty role becomes ``default_role``.
    """
    user = snapshot.user
    email = user.email or ""
    return IdentityProjection(
        name=user.name or email,
        email=email,
        avatar_ref=user.image or None,
        role=user.role or default_role,
    )


def get_initials(name: str) -> str:
    """Initials of the first and last word of a name, uppercased.

    "Ada Lovelace" -> "AL", "ada" -> "A", "" -> "?".
    """
    parts = name.split()
    if not parts:
        return "?"
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def format_role(role: str) -> str:
    """Role label for display: "ADMIN" -> "Admin", "" -> "User"."""
    if not role:
        return "User"
    return role[0].upper() + role[1:].lower()


def gravatar_url(email: str, base_url: str = DEFAULT_AVATAR_BASE_URL) -> str:
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()  # noqa: S324
    return f"{base_url.rstrip('/')}/{digest}?d=mp"
