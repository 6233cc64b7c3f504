"""Configuration package."""

from debt_discipline.config.settings import (
    AppSettings,
    Settings,
    StorageBackend,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "Settings",
    "StorageBackend",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
