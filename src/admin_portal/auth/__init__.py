from admin_portal.auth.deps import (
    AdminIdentity,
    CurrentIdentity,
    SessionGateDep,
    SessionProviderDep,
    get_admin_identity,
    get_current_identity,
    get_session_gate,
    get_session_provider,
)
from admin_portal.auth.gate import SessionGate
from admin_portal.auth.identity import (
    format_role,
    get_initials,
    gravatar_url,
    project_identity,
)
from admin_portal.auth.models import (
    AdmissionResult,
    Authenticated,
    IdentityProjection,
    SessionInfo,
    SessionSnapshot,
    SessionUser,
    Unauthenticated,
)
from admin_portal.auth.provider import (
    HttpSessionProvider,
    RequestCredentials,
    SessionProvider,
)

__all__ = [
    # Dependencies
    "AdminIdentity",
    "CurrentIdentity",
    "SessionGateDep",
    "SessionProviderDep",
    # Models
    "AdmissionResult",
    "Authenticated",
    "IdentityProjection",
    "SessionInfo",
    "SessionSnapshot",
    "SessionUser",
    "Unauthenticated",
    # Gate and provider
    "HttpSessionProvider",
    "RequestCredentials",
    "SessionGate",
    "SessionProvider",
    "format_role",
    "get_admin_identity",
    "get_current_identity",
    "get_initials",
    "get_session_gate",
    "get_session_provider",
    "gravatar_url",
    "project_identity",
]
