"""Session gate for protected pages.

Two states, one transition: a request is Unauthenticated until a single
lookup against the identity service returns a session. There are no retries
and no partial admission. Any failure of the lookup denies access.
"""

from admin_portal.auth.identity import DEFAULT_ROLE, project_identity
from admin_portal.auth.models import (
    AdmissionResult,
    Authenticated,
    IdentityProjection,
    SessionSnapshot,
    Unauthenticated,
)
from admin_portal.auth.provider import RequestCredentials, SessionProvider
from admin_portal.core.logging import get_logger

logger = get_logger(__name__)


class SessionGate:
    """Admits or denies a request and projects the admitted identity."""

    def __init__(
        self, provider: SessionProvider, *, default_role: str = DEFAULT_ROLE
    ) -> None:
        self.provider = provider
        self.default_role = default_role

    async def admit(self, credentials: RequestCredentials) -> AdmissionResult:
        """Look the session up once; fail closed on any error.

        Args:
            credentials: The request's ambient credentials, passed to the
                provider unchanged.

        Returns:
            Authenticated(snapshot), or Unauthenticated when there is no
            session or the lookup failed.
        """
        try:
            snapshot = await self.provider.get_session(credentials)
        except Exception as e:
            logger.warning(
                "session_lookup_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return Unauthenticated(reason="lookup_failed")

        if snapshot is None:
            return Unauthenticated()
        if not isinstance(snapshot, SessionSnapshot):
            logger.warning(
                "session_lookup_invalid", result_type=type(snapshot).__name__
            )
            return Unauthenticated(reason="invalid_session")

        return Authenticated(session=snapshot)

    def project_identity(self, snapshot: SessionSnapshot) -> IdentityProjection:
        return project_identity(snapshot, default_role=self.default_role)
