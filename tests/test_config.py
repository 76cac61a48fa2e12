"""
Tests for Settings
"""

import pytest
from pydantic import ValidationError

from config import Settings, get_settings


class TestSettings:

    def test_loads_from_environment(self, mock_env_vars):
        settings = Settings(_env_file=None)

        assert settings.SCHEDULING_API_URL == "https://booking.example.edu"
        assert settings.SCHEDULING_API_TOKEN == "test-token"
        assert settings.booking_zone.key == "Asia/Kolkata"
        assert settings.is_production is False

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("SCHEDULING_API_URL", "http://localhost:5000")
        monkeypatch.delenv("BOOKING_TIMEZONE", raising=False)
        monkeypatch.delenv("API_MAX_RETRIES", raising=False)

        settings = Settings(_env_file=None)

        assert settings.BOOKING_TIMEZONE == "UTC"
        assert settings.API_MAX_RETRIES == 2

    def test_api_url_required(self, monkeypatch):
        monkeypatch.delenv("SCHEDULING_API_URL", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_api_url_scheme(self, monkeypatch):
        monkeypatch.setenv("SCHEDULING_API_URL", "booking.example.edu")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_unknown_timezone(self, mock_env_vars, monkeypatch):
        monkeypatch.setenv("BOOKING_TIMEZONE", "Mars/Olympus_Mons")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self, mock_env_vars):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
