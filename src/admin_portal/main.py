"""FastAPI application entry point."""

from contextlib import asynccontextmanager
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.routing import APIRoute
from structlog import contextvars

from admin_portal.api.main import api_router
from admin_portal.core.config import settings
from admin_portal.core.exceptions import AppException, DiversionRequired
from admin_portal.core.logging import get_logger, setup_logging
from admin_portal.i18n import LocaleMiddleware, get_locale, init_translations, translate

setup_logging()
logger = get_logger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI schema.

    Format: {tag}-{route_name}
    """
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    init_translations()

    logger.info(
        "application_startup",
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
        default_language=settings.DEFAULT_LANGUAGE,
        session_lookup_url=settings.session_lookup_url,
    )

    yield

    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        lifespan=lifespan,
        generate_unique_id_function=custom_generate_unique_id,
    )

    @app.exception_handler(DiversionRequired)
    async def diversion_handler(
        request: Request, exc: DiversionRequired
    ) -> RedirectResponse:
        """Send a request that failed a page gate elsewhere, with no body."""
        return RedirectResponse(url=exc.location, status_code=exc.status_code)

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        """Handle all AppException subclasses with consistent JSON format.

        Translates error messages to the request locale.
        """
        locale = get_locale()

        translated_message = exc.message
        if exc.message_key:
            translated_message = translate(exc.message_key, locale, **exc.params)

        logger.warning(
            "app_exception",
            error_code=exc.error_code,
            message=exc.message,
            translated_message=translated_message,
            locale=locale,
            status_code=exc.status_code,
            details=exc.details,
            path=str(request.url.path),
        )

        content = {
            "error_code": exc.error_code,
            "message": translated_message,
            "details": exc.details,
        }
        if exc.message_key:
            content["message_key"] = exc.message_key

        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers={"Content-Language": locale},
        )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add unique request ID to each request for tracing."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        contextvars.clear_contextvars()
        contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        """Add security headers to all responses."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # Pages depend on the session and the locale cookie
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Vary"] = "Cookie, Accept-Language"

        if settings.ENVIRONMENT == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains; preload"
            )

        return response

    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=[
                "Content-Type",
                "X-Request-ID",
                "Accept",
                "Accept-Language",
                "Origin",
                "X-Requested-With",
            ],
            expose_headers=["X-Request-ID", "Content-Language"],
        )
        logger.info("cors_configured", origins=settings.all_cors_origins)

    app.include_router(api_router)

    # Added last so it runs as the outermost layer
    app.add_middleware(
        LocaleMiddleware,
        default_locale=settings.DEFAULT_LANGUAGE,
        cookie_name=settings.LOCALE_COOKIE_NAME,
    )

    @app.get("/health", tags=["health"])
    async def root_health():
        """Health check endpoint."""
        return {"status": "ok", "service": settings.PROJECT_NAME}

    return app


app = create_app()
