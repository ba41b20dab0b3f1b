"""Application configuration using pydantic-settings."""
import logging
from enum import StrEnum
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Fallback signing secret. Only acceptable for local development and tests.
DEFAULT_JWT_SECRET = "DEFAULT"


class Environment(StrEnum):
    """Deployment environment the service is running in."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT, validation_alias="ENVIRONMENT",
    )

    # Database - effective DSN is database_url + db_name
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/",
        validation_alias="DATABASE_URL",
    )
    db_name: str = Field(default="movie_lobby", validation_alias="DB_NAME")
    db_auto_create: bool = Field(default=True, validation_alias="DB_AUTO_CREATE")

    # HTTP
    port: int = Field(default=3001, validation_alias="PORT")
    base_path: str = Field(default="/movie_lobby", validation_alias="BASE_PATH")
    cors_origins_str: str = Field(default="", validation_alias="CORS_ORIGINS")

    # Auth
    jwt_secret_key: str = Field(
        default=DEFAULT_JWT_SECRET, validation_alias="JWT_SECRET_KEY",
    )
    jwt_expiry_hours: int = Field(default=12, ge=1, validation_alias="JWT_EXPIRY_HOURS")
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, validation_alias="BCRYPT_ROUNDS")

    # Response cache
    cache_ttl_seconds: int = Field(default=20, ge=1, validation_alias="CACHE_TTL_SECONDS")
    cache_max_size: int = Field(default=1024, ge=1, validation_alias="CACHE_MAX_SIZE")
    cache_invalidate_on_write: bool = Field(
        default=False, validation_alias="CACHE_INVALIDATE_ON_WRITE",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @model_validator(mode="after")
    def validate_jwt_secret(self) -> "Settings":
        """
        Refuse to sign tokens with the fallback secret in production.

        Anyone who knows the default secret can mint admin tokens, so it is only
        tolerated outside production (with a warning outside tests).
        """
        if self.jwt_secret_key != DEFAULT_JWT_SECRET:
            return self

        if self.environment == Environment.PRODUCTION:
            raise ValueError(
                "JWT_SECRET_KEY must be set in production. "
                "The default signing secret is only allowed for development and tests.",
            )
        if self.environment == Environment.DEVELOPMENT:
            logger.warning("Using the default JWT signing secret; set JWT_SECRET_KEY")
        return self

    @model_validator(mode="after")
    def normalize_base_path(self) -> "Settings":
        """Ensure base_path starts with a slash and has no trailing slash."""
        path = "/" + self.base_path.strip("/")
        self.base_path = "" if path == "/" else path
        return self

    @property
    def database_dsn(self) -> str:
        """Full database connection string (URL plus database name)."""
        return f"{self.database_url}{self.db_name}"

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
