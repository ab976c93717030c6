"""Configuration package."""

from report_filters.config.settings import (
    FilterSettings,
    get_settings,
)

__all__ = [
    "FilterSettings",
    "get_settings",
]
