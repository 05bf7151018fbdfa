from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from admin_portal.auth.gate import SessionGate
from admin_portal.auth.models import Authenticated, IdentityProjection
from admin_portal.auth.provider import (
    HttpSessionProvider,
    RequestCredentials,
    SessionProvider,
)
from admin_portal.core.config import settings
from admin_portal.core.exceptions import AdminRequiredError, SignInRequiredError
from admin_portal.core.logging import get_logger

logger = get_logger(__name__)


@lru_cache
def get_session_provider() -> SessionProvider:
    """The identity service client shared by all requests."""
    return HttpSessionProvider(
        settings.session_lookup_url,
        timeout_seconds=settings.AUTH_TIMEOUT_SECONDS,
    )


SessionProviderDep = Annotated[SessionProvider, Depends(get_session_provider)]


def get_session_gate(provider: SessionProviderDep) -> SessionGate:
    return SessionGate(provider, default_role=settings.DEFAULT_USER_ROLE)


SessionGateDep = Annotated[SessionGate, Depends(get_session_gate)]


async def get_current_identity(
    request: Request, gate: SessionGateDep
) -> IdentityProjection:
    """Admit the request or divert it to the sign-in page.

    Args:
        request: Incoming request; its headers are the credentials
        gate: Session gate

    Returns:
        Identity projection of the admitted session

    Raises:
        SignInRequiredError: If there is no valid session
    """
    result = await gate.admit(RequestCredentials.from_connection(request))
    if not isinstance(result, Authenticated):
        logger.info(
            "access_diverted",
            reason=result.reason,
            path=request.url.path,
            location=settings.SIGN_IN_PATH,
        )
        raise SignInRequiredError(settings.SIGN_IN_PATH)
    return gate.project_identity(result.session)


CurrentIdentity = Annotated[IdentityProjection, Depends(get_current_identity)]


def get_admin_identity(
    request: Request, identity: CurrentIdentity
) -> IdentityProjection:
    """Require the admin role on top of a valid session.

    Raises:
        AdminRequiredError: If the signed-in user is not an administrator
    """
    if identity.role != settings.ADMIN_ROLE:
        logger.info(
            "access_diverted",
            reason="not_admin",
            path=request.url.path,
            location=settings.HOME_PATH,
        )
        raise AdminRequiredError(settings.HOME_PATH)
    return identity


AdminIdentity = Annotated[IdentityProjection, Depends(get_admin_identity)]
