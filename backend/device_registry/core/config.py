"""Core configuration module."""

import json
import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from device_registry import __version__


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        case_sensitive=False,
        extra="ignore",
    )

    # API
    api_title: str = "Device Registry API"
    api_version: str = __version__
    api_prefix: str = ""
    environment: str = os.getenv("ENVIRONMENT", "development")

    # Database
    database_url: str = "sqlite:///./devices.db"
    database_echo: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str | None = None  # "json", "console", or None (auto-detect based on environment)

    # CORS
    cors_origins: list[str] | str = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value):
        """Allow comma-separated strings or JSON lists; tolerate empty."""
        if value is None or value == "":
            return []
        if isinstance(value, str):
            if value.lstrip().startswith("["):
                try:
                    parsed = json.loads(value)
                except ValueError:
                    return []
                return parsed if isinstance(parsed, list) else []
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cors_origins", mode="after")
    @classmethod
    def validate_cors_origins(cls, value: list[str]) -> list[str]:
        """Validate CORS origins.

        In production:
        - Rejects empty CORS origins list
        - Rejects wildcard "*" origins
        - Requires all origins to be valid URLs (http:// or https://)
        """
        is_production = os.getenv("ENVIRONMENT", "development").lower() == "production"

        if is_production and not value:
            raise ValueError(
                "CORS_ORIGINS must be configured for production deployments. "
                "Set CORS_ORIGINS to a comma-separated list of allowed origins."
            )

        for origin in value:
            if origin == "*":
                if is_production:
                    raise ValueError(
                        "Wildcard '*' CORS origin is not allowed in production. "
                        "Specify explicit origins instead."
                    )
                continue

            if not origin.startswith(("http://", "https://")):
                raise ValueError(
                    f"Invalid CORS origin '{origin}': must start with http:// or https://"
                )

            if " " in origin:
                raise ValueError(f"Invalid CORS origin '{origin}': contains spaces")

        return value

    @field_validator("database_url")
    @classmethod
    def guard_default_database(cls, value: str) -> str:
        """Ensure production deployments do not run on the local SQLite file."""
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env == "production" and value.startswith("sqlite"):
            raise ValueError("database_url must point to a server database in production")
        return value

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return None
        value = value.lower()
        if value not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return value


settings = Settings()
