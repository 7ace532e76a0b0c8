"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values that show up in sample configs and must never sign real tokens
PLACEHOLDER_SECRETS = {
    "change-me-in-production",
    "your-secret-key-change-in-production",
    "secret",
}

MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./posts.db")

    # JWT
    jwt_secret: str = Field(..., min_length=MIN_SECRET_LENGTH)
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_minutes: int = Field(default=60, gt=0)
    jwt_leeway_seconds: int = Field(default=30, ge=0)

    # Password hashing
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @field_validator("jwt_secret")
    @classmethod
    def reject_placeholder_secret(cls, value: str) -> str:
        """Refuse secrets copied from sample configuration."""
        if value.strip().lower() in PLACEHOLDER_SECRETS:
            raise ValueError("JWT_SECRET must be set to a non-placeholder value")
        if len(set(value)) < 4:
            raise ValueError("JWT_SECRET is too predictable")
        return value

    @field_validator("jwt_algorithm")
    @classmethod
    def require_hmac_algorithm(cls, value: str) -> str:
        if value not in {"HS256", "HS384", "HS512"}:
            raise ValueError("JWT_ALGORITHM must be one of HS256, HS384, HS512")
        return value

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.is_production and self.database_url.startswith("sqlite"):
            raise ValueError("DATABASE_URL should not use SQLite in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Raises pydantic's ValidationError when the signing secret is missing or
    trivial, which aborts application startup.
    """
    return Settings()
