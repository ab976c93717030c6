"""
Configuration Management for Report Filters

Uses pydantic-settings for type-safe configuration from environment variables.
All variables share the ``REPORT_FILTERS_`` prefix and may also be placed in
a local ``.env`` file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FilterSettings(BaseSettings):
    """
    Application settings for the filter builder.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPORT_FILTERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (forces DEBUG logging)"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level name (DEBUG, INFO, WARNING, ERROR)"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON lines instead of console output"
    )

    # Labels for the two pseudo-categories in the category picker
    uncategorized_label: str = Field(
        default="Uncategorized",
        min_length=1,
        description="Label shown for transactions without a category"
    )
    transfer_label: str = Field(
        default="Transfers",
        min_length=1,
        description="Label shown for transfer transactions"
    )

    # Front end data source
    directory_file: Optional[str] = Field(
        default=None,
        description="JSON file with accounts, categories and payees for the editor"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the level name."""
        level = v.strip().upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return level

    @field_validator('directory_file')
    @classmethod
    def validate_directory_file(cls, v: Optional[str]) -> Optional[str]:
        """Warn if the directory file doesn't exist (the editor falls back to demo data)."""
        if v and not Path(v).exists():
            import warnings
            warnings.warn(
                f"Directory file not found at {v}. "
                "The filter editor will use its built-in demo data."
            )
        return v

    @property
    def effective_log_level(self) -> str:
        """Log level after applying debug mode."""
        return "DEBUG" if self.debug_mode else self.log_level


@lru_cache()
def get_settings() -> FilterSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return FilterSettings()
