"""HTTP client utilities with built-in timeout support.

Provides pre-configured HTTP clients for external service calls,
ensuring consistent timeout and error handling across the application.
Calls are made exactly once: nothing here retries.
"""

import asyncio
import builtins
from typing import Any

import httpx

from admin_portal.core.exceptions import ExternalServiceError, TimeoutError
from admin_portal.core.logging import get_logger

logger = get_logger(__name__)


DEFAULT_TIMEOUT = httpx.Timeout(
    connect=5.0,  # Connection timeout
    read=30.0,  # Read timeout
    write=10.0,  # Write timeout
    pool=5.0,  # Pool timeout
)

# Session lookups sit in front of every protected page
SESSION_LOOKUP_TIMEOUT = httpx.Timeout(
    connect=2.0,
    read=5.0,
    write=2.0,
    pool=2.0,
)


def create_http_client(
    timeout: httpx.Timeout | None = None,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """Create an async HTTP client with sensible defaults.

    Args:
        timeout: Custom timeout configuration. Defaults to DEFAULT_TIMEOUT.
        **kwargs: Additional arguments passed to AsyncClient
            (e.g. ``transport`` for tests).

    Returns:
        Configured AsyncClient instance.

    Usage:
        async with create_http_client() as client:
            response = await client.get("https://auth.example.com/session")
    """
    return httpx.AsyncClient(
        timeout=timeout or DEFAULT_TIMEOUT,
        follow_redirects=False,
        **kwargs,
    )


async def fetch_with_timeout(
    url: str,
    method: str = "GET",
    timeout_seconds: float = 30.0,
    service_name: str = "external service",
    *,
    client_kwargs: dict[str, Any] | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """Fetch a URL with explicit timeout and error handling.

    Args:
        url: URL to fetch
        method: HTTP method (GET, POST, etc.)
        timeout_seconds: Total timeout for the request
        service_name: Name for error messages
        client_kwargs: Extra arguments for the client (timeout, transport)
        **kwargs: Additional arguments for the request

    Returns:
        HTTP response

    Raises:
        TimeoutError: If request times out
        ExternalServiceError: If request fails
    """
    try:
        async with create_http_client(**(client_kwargs or {})) as client:
            return await asyncio.wait_for(
                client.request(method, url, **kwargs),
                timeout=timeout_seconds,
            )
    except (builtins.TimeoutError, httpx.TimeoutException) as err:
        logger.warning("http_request_timeout", url=url, timeout=timeout_seconds)
        raise TimeoutError(f"Request to {service_name}", timeout_seconds) from err
    except httpx.RequestError as e:
        logger.warning("http_request_failed", url=url, error=str(e))
        raise ExternalServiceError(service_name, str(e)) from e


async def fetch_json(
    url: str,
    method: str = "GET",
    timeout_seconds: float = 30.0,
    service_name: str = "external service",
    **kwargs: Any,
) -> Any:
    """Fetch JSON from a URL with error handling.

    Unlike a plain ``response.json()``, an empty body decodes to None so
    endpoints that answer "nothing here" with no content are not errors.

    Args:
        url: URL to fetch
        method: HTTP method
        timeout_seconds: Total timeout
        service_name: Name for error messages
        **kwargs: Additional request arguments

    Returns:
        Parsed JSON response (any JSON value), or None for an empty body

    Raises:
        TimeoutError: If request times out
        ExternalServiceError: If request fails or response is not valid JSON
    """
    response = await fetch_with_timeout(
        url, method, timeout_seconds, service_name, **kwargs
    )

    try:
        response.raise_for_status()
        if not response.content.strip():
            return None
        result: Any = response.json()
    except httpx.HTTPStatusError as e:
        logger.warning(
            "http_status_error",
            url=url,
            status=e.response.status_code,
        )
        raise ExternalServiceError(
            service_name, f"HTTP {e.response.status_code}"
        ) from e
    except ValueError as e:
        logger.warning("http_invalid_json", url=url, error=str(e))
        raise ExternalServiceError(service_name, "Invalid JSON response") from e
    else:
        return result
