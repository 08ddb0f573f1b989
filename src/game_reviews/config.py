"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Game Reviews API"
    debug: bool = False
    secret_key: str  # Required, no default

    # Database
    database_url: str = "sqlite+aiosqlite:///./game_reviews.db"

    # JWT Authentication
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "GameReviewsAPI"
    jwt_audience: str = "GameReviewsClient"
    jwt_expiration_minutes: int = 60

    # Credentials
    password_scheme: Literal["bcrypt", "sha256"] = "bcrypt"
    username_case_sensitive: bool = True

    # Catalog policies
    game_id_assignment: Literal["client", "server"] = "client"
    game_mutations_require_admin: bool = True
    genre_delete_policy: Literal["reject", "cascade"] = "reject"

    # Bootstrap admin account, created at startup when both are set
    admin_username: str = ""
    admin_password: str = ""

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Validate that secret_key is secure."""
        if not v:
            raise ValueError("SECRET_KEY is required")

        # In production mode, ensure secret key is strong
        debug = info.data.get("debug", False)
        if not debug:
            if len(v) < 32:
                raise ValueError("SECRET_KEY must be at least 32 characters in production mode")
            if v in ("change-me-in-production", "secret", "password", "changeme"):
                raise ValueError("SECRET_KEY must not be a common weak value")

        return v

    @field_validator("jwt_expiration_minutes")
    @classmethod
    def validate_expiration(cls, v: int) -> int:
        """Token lifetime must be positive."""
        if v <= 0:
            raise ValueError("JWT_EXPIRATION_MINUTES must be greater than zero")
        return v

    @property
    def admin_bootstrap_enabled(self) -> bool:
        return bool(self.admin_username.strip() and self.admin_password.strip())

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if self.password_scheme == "sha256":
            warnings.append(
                "PASSWORD_SCHEME is sha256 - new passwords are stored as unsalted digests"
            )

        if not self.game_mutations_require_admin:
            warnings.append(
                "GAME_MUTATIONS_REQUIRE_ADMIN is disabled - anyone can create, edit and delete games"
            )

        if not self.admin_bootstrap_enabled:
            warnings.append(
                "ADMIN_USERNAME/ADMIN_PASSWORD not set - no admin account will be bootstrapped"
            )

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
