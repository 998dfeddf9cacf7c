"""
storefront/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, session secret, cookie settings)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, field_validator, ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="storefront",
        description="MongoDB database name"
    )

    # Sessions
    SESSION_COOKIE_NAME: str = Field(
        default="storefront_sid",
        description="Name of the session cookie"
    )
    SESSION_TTL_HOURS: int = Field(
        default=24,
        gt=0,
        description="Session lifetime in hours (fixed window)"
    )

    # Credentials
    BCRYPT_ROUNDS: int = Field(
        default=10,
        ge=4,
        le=31,
        description="bcrypt cost factor for password hashing"
    )

    # Persistence
    MAX_WRITE_RETRIES: int = Field(
        default=3,
        ge=1,
        description="Attempts for a load-mutate-save cycle before reporting a conflict"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins (credentials are sent, so '*' is not usable)"
    )

    # Security
    SECRET_KEY: str = Field(
        default="change-me-in-production",
        description="Secret used to sign session cookies"
    )

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str, info: ValidationInfo) -> str:
        """Ensure secret key is changed in production."""
        if info.data.get("ENVIRONMENT") == "production" and v == "change-me-in-production":
            raise ValueError("SECRET_KEY must be changed in production environment")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def session_ttl_seconds(self) -> int:
        return self.SESSION_TTL_HOURS * 3600


# Global settings instance
settings = Settings()


def validate_settings(config: Settings = settings):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not config.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not config.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if not config.SECRET_KEY:
        errors.append("SECRET_KEY is required")

    # Production-specific validations
    if config.is_production and "*" in config.CORS_ORIGINS:
        errors.append("CORS_ORIGINS must list explicit origins in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
