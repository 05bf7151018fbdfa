"""Centralized exception hierarchy for the application.

All custom exceptions inherit from AppException, which provides:
- Consistent error response format
- HTTP status codes
- Machine-readable error codes
- i18n support via message_key and params
- Optional details dict for additional context

DiversionRequired is the exception family raised by page gates: instead of a
JSON error it is turned into a redirect, so protected content is never
assembled for a request that failed the gate.

Exception handlers in main.py convert these to responses.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Provides a consistent structure for error responses with:
    - message: Human-readable error description (fallback if translation fails)
    - message_key: Translation key for i18n (e.g., "error_not_found")
    - params: Interpolation parameters for the translation
    - error_code: Machine-readable code (e.g., "SECTION_NOT_FOUND")
    - status_code: HTTP status code
    - details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        *,
        message_key: str | None = None,
        params: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.message_key = message_key
        self.params = params or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for JSON serialization."""
        result: dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
        if self.message_key:
            result["message_key"] = self.message_key
        return result


class DiversionRequired(AppException):
    """The request must be sent elsewhere instead of receiving the page."""

    def __init__(self, location: str, message: str, error_code: str):
        self.location = location
        super().__init__(
            message,
            error_code,
            307,
            {"location": location},
        )


class SignInRequiredError(DiversionRequired):
    """No authenticated session: divert to the sign-in page."""

    def __init__(self, location: str = "/sign-in"):
        super().__init__(location, "Sign-in required", "SIGN_IN_REQUIRED")


class AdminRequiredError(DiversionRequired):
    """Authenticated, but not an administrator: divert to the home page."""

    def __init__(self, location: str = "/"):
        super().__init__(location, "Admin role required", "ADMIN_REQUIRED")


class ResourceNotFoundError(AppException):
    """Requested resource does not exist."""

    def __init__(self, resource: str, identifier: str | None = None):
        msg = f"{resource} not found"
        message_key = "error_not_found"
        params: dict[str, Any] = {"resource": resource}
        if identifier:
            msg = f"{resource} not found: {identifier}"
            message_key = "error_not_found_with_id"
            params["id"] = identifier
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            404,
            {"resource": resource, "id": identifier}
            if identifier
            else {"resource": resource},
            message_key=message_key,
            params=params,
        )


class ExternalServiceError(AppException):
    """External service (identity service, etc.) is unavailable or failed."""

    def __init__(self, service: str, message: str | None = None):
        msg = f"{service} is unavailable"
        message_key = "error_service_unavailable"
        params: dict[str, Any] = {"service": service}
        if message:
            msg = f"{service}: {message}"
            message_key = "error_service_unavailable_with_message"
            params["message"] = message
        super().__init__(
            msg,
            "EXTERNAL_SERVICE_ERROR",
            503,
            {"service": service},
            message_key=message_key,
            params=params,
        )


class TimeoutError(AppException):
    """Operation timed out."""

    def __init__(self, operation: str, timeout_seconds: float | None = None):
        msg = f"{operation} timed out"
        message_key = "error_timeout"
        params: dict[str, Any] = {"operation": operation}
        if timeout_seconds:
            msg = f"{operation} timed out after {timeout_seconds}s"
            message_key = "error_timeout_with_seconds"
            params["seconds"] = timeout_seconds
        super().__init__(
            msg,
            "TIMEOUT",
            504,
            {"operation": operation, "timeout_seconds": timeout_seconds}
            if timeout_seconds
            else {"operation": operation},
            message_key=message_key,
            params=params,
        )
