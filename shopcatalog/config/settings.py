"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management using Pydantic Settings.

This module implements the Singleton pattern to ensure a single global
configuration instance throughout the application lifecycle.

Features:
---------
- Environment variable loading with type validation (SHOPCATALOG_ prefix)
- .env file support for local development
- Computed properties for derived paths

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        debug: Enable debug mode for verbose logging
        products_file: Path to the product catalog JSON (backing file)
        page_size: Products per page when listing the catalog
        default_sort: Sort key used when the user does not pick one
        log_level: Logging level name
        log_format: Format string for log records
        log_file: File that receives application logs

    Example:
        >>> settings = Settings()
        >>> print(settings.products_path)
        data/products.json
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        env_prefix="SHOPCATALOG_",
        # Load from .env file if present
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        # Ignore extra environment variables
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Shopping Application",
        description="Display name for the application"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # CATALOG SETTINGS
    # =========================================================================
    products_file: str = Field(
        default="data/products.json",
        description="Path to product catalog JSON"
    )

    page_size: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Products shown per catalog page"
    )

    default_sort: str = Field(
        default="name",
        description="Default sort key: name, price or category"
    )

    # =========================================================================
    # LOGGING SETTINGS
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR"
    )

    log_format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        description="Format string for log records"
    )

    log_file: str = Field(
        default="storage/logs/shopcatalog.log",
        description="File that receives application logs"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("default_sort")
    @classmethod
    def validate_default_sort(cls, value: str) -> str:
        """
        Normalize the default sort key.

        Unknown keys fall back to 'name', matching how the catalog sorts.
        """
        valid_keys = {"name", "price", "category"}
        normalized = value.lower().strip()

        if normalized not in valid_keys:
            logger.warning(
                f"Unknown sort key '{value}', defaulting to 'name'"
            )
            return "name"

        return normalized

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """
        Validate logging level name.

        Raises:
            ValueError: If level is not supported
        """
        supported = {"DEBUG", "INFO", "WARNING", "ERROR"}

        if value.upper() not in supported:
            raise ValueError(
                f"Unsupported log level: {value}. "
                f"Supported: {', '.join(sorted(supported))}"
            )

        return value.upper()

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def products_path(self) -> Path:
        """Get products file as Path object."""
        return Path(self.products_file)

    @property
    def log_path(self) -> Path:
        """Get log file as Path object."""
        return Path(self.log_file)

    @property
    def effective_log_level(self) -> int:
        """Logging level, forced to DEBUG in debug mode."""
        if self.debug:
            return logging.DEBUG
        return getattr(logging, self.log_level)

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    def ensure_directories(self) -> None:
        """
        Create all required directories.

        Creates:
        - Directory holding the products file
        - Directory holding the log file
        """
        self.products_path.parent.mkdir(parents=True, exist_ok=True)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"products_file={self.products_file!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
