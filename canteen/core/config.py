"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports three modes:
    - DEVELOPMENT: Sessions talk to an in-process order store
    - STAGING / PRODUCTION: Sessions talk to the order API over HTTP

The ENV_MODE variable controls which order service the session layer
gets from the factory in canteen.services.orders.

Usage:
    from canteen.core.config import get_settings

    settings = get_settings()
    if settings.use_real_services:
        # HTTP order service
    else:
        # In-process store
"""

import logging
import sys
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local run, sessions share the process with the store
        PRODUCTION: Live environment, store served by the API process
        STAGING: Pre-production, same wiring as production
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details

        # API Configuration
        api_host: Host to bind the API server
        api_port: Port for the API server

        # Order service (client side)
        order_service_url: Base URL of the order API
        order_service_timeout: Transport timeout in seconds

        # Session persistence
        session_file: JSON file remembering this client's order tokens
        session_key: Key holding the token list inside the file
        session_lock_timeout: Seconds to wait for the session file lock

        # Store
        unique_tokens: Redraw tokens that collide with existing orders
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Canteen Ordering",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=8001,
        description="API server port"
    )
    restaurant_name: str = Field(
        default="Canteen",
        description="Restaurant display name"
    )

    # ==========================================================================
    # ORDER SERVICE (CLIENT)
    # ==========================================================================

    order_service_url: str = Field(
        default="http://localhost:8001",
        description="Base URL of the order API used by remote sessions"
    )
    order_service_timeout: float = Field(
        default=10.0,
        description="HTTP transport timeout in seconds"
    )

    # ==========================================================================
    # SESSION PERSISTENCE
    # ==========================================================================

    session_file: str = Field(
        default="data/my_order_tokens.json",
        description="File remembering the order tokens placed by this client"
    )
    session_key: str = Field(
        default="myOrderTokens",
        description="Key holding the token list inside the session file"
    )
    session_lock_timeout: int = Field(
        default=10,
        description="Seconds to wait for the session file lock"
    )

    # ==========================================================================
    # ORDER STORE
    # ==========================================================================

    unique_tokens: bool = Field(
        default=False,
        description="Redraw order tokens that collide with an existing order"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    @field_validator("order_service_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def use_real_services(self) -> bool:
        """Check if sessions should reach the store over HTTP."""
        return self.env_mode in (EnvironmentMode.PRODUCTION, EnvironmentMode.STAGING)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once per process; call get_settings.cache_clear()
    after changing the environment.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.env_mode)
        EnvironmentMode.DEVELOPMENT
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("filelock").setLevel(logging.WARNING)

    return logging.getLogger("canteen")
