# app/core/config.py
"""Configuration settings for the Projects & Notes API.

Uses Pydantic BaseSettings for environment variable management.
"""
from enum import Enum
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentEnum(str, Enum):
    development = "development"
    testing = "testing"
    staging = "staging"
    production = "production"


class LogLevelEnum(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormatEnum(str, Enum):
    simple = "simple"
    json = "json"


class Settings(BaseSettings):
    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Application Settings =====
    app_name: str = Field(default="Projects & Notes API", description="Application name")
    environment: EnvironmentEnum = Field(
        default=EnvironmentEnum.development, description="Environment type"
    )
    debug: bool = Field(default=False, description="Debug mode")
    version: str = Field(default="1.0.0", description="Application version")

    # ===== Database Settings =====
    db_host: str = Field(default="localhost", description="Database host")
    db_port: int = Field(default=5432, description="Database port")
    db_user: str = Field(default="postgres", description="Database user")
    db_password: str = Field(default="root", description="Database password")
    db_name: str = Field(default="project-notes", description="Database name")
    database_url: str | None = Field(
        default=None, description="Full database URL, overrides the DB_* settings"
    )
    test_database_url: str | None = Field(default=None, description="Test database URL")

    # ===== Server Settings =====
    host: str = Field(default="127.0.0.1", description="Host to bind the server")
    port: int = Field(default=3001, description="Port to bind the server")

    # ===== CORS Settings =====
    allowed_origins: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)",
    )

    # ===== Monitoring & Logging =====
    log_level: LogLevelEnum = Field(default=LogLevelEnum.INFO, description="Logging level")
    log_format: LogFormatEnum = Field(default=LogFormatEnum.simple, description="Log format")

    # ===== Pagination =====
    default_page_limit: int = Field(default=10, ge=1, description="Page size when none is given")
    max_page_limit: int = Field(default=50, ge=1, description="Largest page size served")

    # ===== Conditional Requests & Duplicates =====
    enforce_if_match: bool = Field(
        default=True, description="Reject PATCH requests whose If-Match is stale with 412"
    )
    strict_duplicate_updates: bool = Field(
        default=False,
        description="Raise 409 instead of returning the colliding note/user on update",
    )

    # ===== Development Settings =====
    seed_on_startup: bool = Field(default=False, description="Seed sample data when empty")

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    # ===== Computed Properties =====
    @property
    def is_development(self) -> bool:
        return self.environment == EnvironmentEnum.development

    @property
    def is_production(self) -> bool:
        return self.environment == EnvironmentEnum.production

    @property
    def is_testing(self) -> bool:
        return self.environment == EnvironmentEnum.testing

    @property
    def resolved_database_url(self) -> str:
        """DATABASE_URL when given, otherwise a PostgreSQL URL built from DB_*."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{quote_plus(self.db_user)}:{quote_plus(self.db_password)}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # ===== Validation Methods =====
    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        if v and isinstance(v, str):
            lv = v.lower()
            if lv in ["dev", "develop"]:
                return "development"
            if lv in ["prod"]:
                return "production"
            return lv
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("max_page_limit")
    @classmethod
    def validate_max_page_limit(cls, v):
        if v > 100:
            raise ValueError("Maximum page limit cannot exceed 100")
        return v


settings = Settings()


def get_config_summary() -> dict:
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "environment": settings.environment.value,
        "debug": settings.debug,
        "database_host": settings.db_host if not settings.database_url else "custom-url",
        "enforce_if_match": settings.enforce_if_match,
        "strict_duplicate_updates": settings.strict_duplicate_updates,
        "seed_on_startup": settings.seed_on_startup,
    }


__all__ = [
    "settings",
    "Settings",
    "get_config_summary",
    "EnvironmentEnum",
    "LogLevelEnum",
    "LogFormatEnum",
]
