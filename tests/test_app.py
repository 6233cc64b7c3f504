"""Tests for the Streamlit page."""

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from debt_discipline.config import get_settings


APP_PATH = str(Path(__file__).resolve().parent.parent / "app" / "main.py")


@pytest.fixture
def app_env(tmp_path, monkeypatch):
    """Run the page away from any real .env file and with throwaway storage."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DEBT_DISCIPLINE_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("LOG_JSON", "false")
    get_settings.cache_clear()


class TestSettingsCheck:
    """Tests for the startup configuration check."""

    def test_invalid_settings_stop_the_page(self, app_env, monkeypatch):
        """Test that a bad setting is shown and nothing else renders."""
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        at = AppTest.from_file(APP_PATH, default_timeout=30).run()

        assert not at.exception
        assert any("Application settings" in e.value for e in at.error)
        assert len(at.title) == 0

    def test_valid_settings_render_the_tracker(self, app_env):
        """Test that a valid configuration renders the tracker."""
        at = AppTest.from_file(APP_PATH, default_timeout=30).run()

        assert not at.exception
        assert len(at.error) == 0
        assert at.title[0].value == "💸 Debt Tracker"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
