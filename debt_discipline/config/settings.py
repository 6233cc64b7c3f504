"""
Configuration Management for Debt Discipline

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage location, the persisted key and display preferences are
validated once at startup instead of being scattered across modules.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Persisted ledger key. Bump the version suffix when the stored shape
# changes incompatibly; the normalizer handles the soft migrations.
DEFAULT_STORAGE_KEY = "debt_discipline_debts_v3"


class StorageBackend(str, Enum):
    """Available byte store backends."""
    FILE = "file"
    MEMORY = "memory"


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DEBT_DISCIPLINE_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: StorageBackend = Field(
        default=StorageBackend.FILE,
        description="Which byte store keeps the ledger"
    )
    data_dir: Path = Field(
        default=Path.home() / ".debt_discipline",
        description="Directory holding one file per storage key"
    )
    storage_key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        min_length=1,
        description="Key the ledger snapshot is stored under"
    )

    @field_validator('storage_key')
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """Keys double as file names, so no path separators."""
        if "/" in v or "\\" in v:
            raise ValueError(f"Storage key must not contain path separators: {v}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum level for local logs"
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON lines (console format otherwise)"
    )
    audit_trail_size: int = Field(
        default=500,
        ge=1,
        le=10000,
        description="How many audit events are kept in memory"
    )

    # Display
    currency: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="ISO currency code used for display only"
    )
    export_filename: str = Field(
        default="debts.json",
        description="File name offered for ledger exports"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
