"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from debt_discipline.config import (
    AppSettings,
    StorageBackend,
    StorageSettings,
    get_settings,
    validate_all_settings,
)
from debt_discipline.config.settings import DEFAULT_STORAGE_KEY


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test away from any real .env file or exported variables."""
    monkeypatch.chdir(tmp_path)
    for name in [
        "DEBT_DISCIPLINE_STORAGE_BACKEND",
        "DEBT_DISCIPLINE_STORAGE_DATA_DIR",
        "DEBT_DISCIPLINE_STORAGE_STORAGE_KEY",
        "LOG_LEVEL",
        "LOG_JSON",
        "CURRENCY",
        "AUDIT_TRAIL_SIZE",
        "EXPORT_FILENAME",
    ]:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()


class TestStorageSettings:
    """Tests for storage configuration."""

    def test_defaults(self):
        """Test the default backend, directory and key."""
        settings = StorageSettings()
        assert settings.backend == StorageBackend.FILE
        assert settings.data_dir == Path.home() / ".debt_discipline"
        assert settings.storage_key == DEFAULT_STORAGE_KEY

    def test_env_overrides(self, monkeypatch, tmp_path):
        """Test prefixed environment variables."""
        monkeypatch.setenv("DEBT_DISCIPLINE_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("DEBT_DISCIPLINE_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("DEBT_DISCIPLINE_STORAGE_STORAGE_KEY", "debts_v4")

        settings = StorageSettings()
        assert settings.backend == StorageBackend.MEMORY
        assert settings.data_dir == tmp_path
        assert settings.storage_key == "debts_v4"

    def test_env_file(self, tmp_path):
        """Test reading values from a .env file in the working directory."""
        (tmp_path / ".env").write_text("DEBT_DISCIPLINE_STORAGE_BACKEND=memory\n")
        assert StorageSettings().backend == StorageBackend.MEMORY

    @pytest.mark.parametrize("key", ["a/b", "a\\b", ""])
    def test_invalid_storage_key(self, key):
        """Test that keys usable as paths are rejected."""
        with pytest.raises(ValidationError):
            StorageSettings(storage_key=key)

    def test_invalid_backend(self):
        """Test that an unknown backend is rejected."""
        with pytest.raises(ValidationError):
            StorageSettings(backend="cloud")


class TestAppSettings:
    """Tests for application configuration."""

    def test_defaults(self):
        """Test default logging and display settings."""
        settings = AppSettings()
        assert settings.log_level == "INFO"
        assert settings.log_json is True
        assert settings.audit_trail_size == 500
        assert settings.currency == "USD"
        assert settings.export_filename == "debts.json"

    def test_normalizes_case(self, monkeypatch):
        """Test that level and currency are upper-cased."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CURRENCY", "eur")
        settings = AppSettings()
        assert settings.log_level == "DEBUG"
        assert settings.currency == "EUR"

    def test_invalid_log_level(self):
        """Test that unknown levels are rejected."""
        with pytest.raises(ValidationError):
            AppSettings(log_level="chatty")

    @pytest.mark.parametrize("currency", ["US", "DOLLARS"])
    def test_invalid_currency(self, currency):
        """Test that currency codes must have three letters."""
        with pytest.raises(ValidationError):
            AppSettings(currency=currency)

    def test_audit_trail_size_bounds(self):
        """Test that the trail size must be positive."""
        with pytest.raises(ValidationError):
            AppSettings(audit_trail_size=0)


class TestSettingsContainer:
    """Tests for the cached root settings."""

    def test_get_settings_is_cached(self):
        """Test that repeated calls return the same object."""
        assert get_settings() is get_settings()

    def test_sub_settings(self, monkeypatch):
        """Test access to both sub-settings."""
        monkeypatch.setenv("LOG_JSON", "false")
        settings = get_settings()
        assert settings.app.log_json is False
        assert settings.storage.backend == StorageBackend.FILE

    def test_validate_all_settings(self):
        """Test the startup check with valid configuration."""
        assert validate_all_settings() == {"storage": True, "app": True}

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        """Test that invalid configuration is reported, not raised."""
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["app"] is False
        assert "app_error" in results


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
