"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, session secrets, cookie policy)
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
        default="storefront_session",
        description="Name of the cookie carrying the session token"
    )
    SESSION_TTL_MINUTES: int = Field(
        default=60 * 24 * 7,
        description="Session lifetime in minutes"
    )
    SESSION_COOKIE_SECURE: bool = Field(
        default=False,
        description="Send the session cookie over HTTPS only"
    )
    BCRYPT_ROUNDS: int = Field(
        default=10,
        description="bcrypt cost factor for password hashes"
    )

    # Catalog
    LOW_STOCK_THRESHOLD: int = Field(
        default=10,
        description="Stock level at or below which a product counts as low stock"
    )
    DEFAULT_PAGE_SIZE: int = Field(
        default=12,
        description="Default page size for the shop catalog"
    )
    MAX_PAGE_SIZE: int = Field(
        default=100,
        description="Largest page size a client may request"
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
        default="/api/v1",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # Security
    SECRET_KEY: str = Field(
        default="change-me-in-production",
        description="Application secret key"
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

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
settings = Settings()


def validate_settings():
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not settings.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not settings.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if settings.SESSION_TTL_MINUTES <= 0:
        errors.append("SESSION_TTL_MINUTES must be positive")

    if not 4 <= settings.BCRYPT_ROUNDS <= 31:
        errors.append("BCRYPT_ROUNDS must be between 4 and 31")

    # Production-specific validations
    if settings.is_production:
        if not settings.SESSION_COOKIE_SECURE:
            errors.append("SESSION_COOKIE_SECURE must be enabled in production")
        if "*" in settings.CORS_ORIGINS:
            errors.append("CORS_ORIGINS must not contain '*' in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
