from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SessionUser(BaseModel):
    """User attributes as reported by the identity service."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str | None = None
    email: str | None = None
    image: str | None = None
    role: str | None = None


class SessionInfo(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = None
    expires_at: datetime | None = Field(default=None, alias="expiresAt")


class SessionSnapshot(BaseModel):
    """Read-only view of a verified session.

    Issued and verified by the identity service; this application only
    observes it and never mutates or revokes it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    user: SessionUser
    session: SessionInfo | None = None


class IdentityProjection(BaseModel):
    """Display-safe identity exposed to page assembly.

    Computed fresh for every request from the session snapshot.
    """

    name: str
    email: str
    avatar_ref: str | None = None
    role: str


@dataclass(frozen=True)
class Authenticated:
    session: SessionSnapshot

    is_authenticated = True


@dataclass(frozen=True)
class Unauthenticated:
    reason: str = "no_session"

    is_authenticated = False


AdmissionResult = Authenticated | Unauthenticated
