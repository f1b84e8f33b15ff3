"""Centralized configuration management using pydantic-settings.

Configuration is loaded from environment variables with sensible defaults.
All settings can be overridden via environment variables or a .env file.
"""

from decimal import Decimal
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://jwnazw2b41.execute-api.us-east-1.amazonaws.com/Prod"
DEFAULT_STORAGE_SECRET = "dev-storage-secret-change-in-production"


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development. Override via
    environment variables (prefixed with IYW_) or .env file.

    Examples:
        IYW_API_BASE_URL=http://localhost:8000
        IYW_LOG_LEVEL=DEBUG
        IYW_ENVIRONMENT=production
        IYW_STORAGE_SECRET=...
    """

    model_config = SettingsConfigDict(
        env_prefix="IYW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Invierte Ya"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = Field(default=False, description="Enable debug mode")

    # Remote ledger service
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the Invierte Ya ledger API",
    )
    api_timeout: float = Field(default=30.0, gt=0)

    # Session
    token_storage_key: str = Field(
        default="authToken",
        description="Key under which the bearer token is kept in browser storage",
    )
    storage_secret: str = Field(
        default=DEFAULT_STORAGE_SECRET,
        description="Secret used by NiceGUI to sign per-browser storage.",
    )

    # Client-side mirrors of server constraints (pre-validation only)
    min_deposit: Decimal = Field(default=Decimal("10000"), gt=0)
    max_deposit: Decimal = Field(default=Decimal("10000000"), gt=0)
    quick_deposit_amounts: list[Decimal] = Field(
        default_factory=lambda: [
            Decimal("50000"),
            Decimal("100000"),
            Decimal("250000"),
            Decimal("500000"),
            Decimal("1000000"),
        ]
    )
    minimum_password_length: int = Field(default=6, ge=1)

    # Screen timings and previews
    redirect_delay_seconds: float = Field(default=3.0, ge=0)
    success_message_seconds: float = Field(default=5.0, ge=0)
    dashboard_fund_preview: int = Field(default=3, ge=0)
    dashboard_transaction_preview: int = Field(default=5, ge=0)
    dashboard_subscription_preview: int = Field(default=3, ge=0)

    # UI server
    ui_host: str = "127.0.0.1"
    ui_port: int = 3000
    ui_reload: bool = Field(
        default=False, description="Enable auto-reload (development only)"
    )

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format: 'json' for production, 'console' for development",
    )
    log_file: Path | None = Field(default=None, description="Optional log file path")

    @field_validator("debug", mode="before")
    @classmethod
    def set_debug_from_environment(cls, v: bool, info) -> bool:
        """Auto-enable debug in development environment."""
        if info.data.get("environment") == Environment.DEVELOPMENT:
            return True
        return v

    @field_validator("storage_secret", mode="after")
    @classmethod
    def validate_storage_secret_in_production(cls, v: str, info) -> str:
        """Refuse the development storage secret outside development/testing."""
        environment = info.data.get("environment")
        if v == DEFAULT_STORAGE_SECRET and environment in (
            Environment.PRODUCTION,
            Environment.STAGING,
        ):
            raise ValueError(
                f"Default storage secret cannot be used in {environment.value}. "
                "Set IYW_STORAGE_SECRET to a secure random value."
            )
        return v

    @field_validator("max_deposit", mode="after")
    @classmethod
    def validate_deposit_band(cls, v: Decimal, info) -> Decimal:
        """The deposit band must not be empty."""
        minimum = info.data.get("min_deposit")
        if minimum is not None and v < minimum:
            raise ValueError(
                f"max_deposit ({v}) must be greater than or equal to min_deposit ({minimum})"
            )
        return v

    @field_validator("api_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.

    Returns:
        Configured Settings instance.
    """
    return Settings()
