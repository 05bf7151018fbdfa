from functools import lru_cache
from typing import Annotated, Any, Literal
import warnings

from pydantic import (
    AnyUrl,
    BeforeValidator,
    ValidationInfo,
    computed_field,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

# One year, in seconds
LOCALE_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    if isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Admin Portal"
    DEBUG: bool = False

    FRONTEND_URL: str = "http://localhost:3000"

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        """Return all CORS origins as strings."""
        origins = [str(origin).rstrip("/") for origin in self.CORS_ORIGINS]
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL.rstrip("/"))
        return origins

    # Locale negotiation and the persisted preference cookie
    DEFAULT_LANGUAGE: str = "zh"
    LOCALE_COOKIE_NAME: str = "locale"
    LOCALE_COOKIE_MAX_AGE: int = LOCALE_COOKIE_MAX_AGE
    LOCALE_COOKIE_SECURE: bool = False

    @field_validator("DEFAULT_LANGUAGE", mode="after")
    @classmethod
    def validate_default_language(cls, v: str) -> str:
        """The default locale must be one of the supported locales."""
        # Imported here: the i18n package pulls in logging, which reads settings.
        from admin_portal.i18n.config import SUPPORTED_LOCALE_CODES

        if v not in SUPPORTED_LOCALE_CODES:
            supported = ", ".join(sorted(SUPPORTED_LOCALE_CODES))
            raise ValueError(
                f"DEFAULT_LANGUAGE must be one of: {supported} (got {v!r})"
            )
        return v

    # External identity service (session lookup)
    AUTH_SERVICE_URL: str = "http://localhost:3000"
    AUTH_SESSION_PATH: str = "/api/auth/get-session"
    AUTH_TIMEOUT_SECONDS: float = 5.0

    @field_validator("AUTH_SERVICE_URL", mode="after")
    @classmethod
    def validate_auth_service_url(cls, v: str, info: ValidationInfo) -> str:
        """Warn when session lookups leave the host over plain http."""
        env = info.data.get("ENVIRONMENT", "local") if info.data else "local"
        if env != "local" and v.lower().startswith("http://"):
            warnings.warn(
                "AUTH_SERVICE_URL uses plain http outside local development. "
                "Session cookies will be forwarded unencrypted.",
                UserWarning,
                stacklevel=2,
            )
        return v.rstrip("/")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def session_lookup_url(self) -> str:
        """Full URL of the identity service's session endpoint."""
        return f"{self.AUTH_SERVICE_URL}{self.AUTH_SESSION_PATH}"

    # Where diverted requests go
    SIGN_IN_PATH: str = "/sign-in"
    HOME_PATH: str = "/"

    ADMIN_ROLE: str = "admin"
    DEFAULT_USER_ROLE: str = "user"

    AVATAR_BASE_URL: str = "https://use.sevencdn.com/avatar"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
