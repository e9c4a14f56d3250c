"""Tests for application configuration management."""

import os
import tempfile
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from networth_forecast.config import (
    Settings,
    get_global_settings,
    get_settings,
    reset_global_settings,
)


class TestSettings:
    """Test cases for Settings class."""

    def test_settings_loads_from_env_file(self):
        """Test that settings can load from a .env file."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".env", delete=False) as f:
            f.write("APP_ENV=production\n")
            f.write("SECRET_KEY=test-secret-key-123\n")
            f.write("LOG_LEVEL=debug\n")
            f.write("DEFAULT_MODEL=conservative\n")
            f.write("MAX_TIMELINE_MONTHS=600\n")
            temp_env_file = f.name

        try:
            with patch.dict(os.environ, {}, clear=True):
                settings = get_settings(temp_env_file)

                assert settings.app_env == "production"
                assert settings.secret_key == "test-secret-key-123"
                assert settings.log_level == "DEBUG"
                assert settings.default_model == "conservative"
                assert settings.max_timeline_months == 600
        finally:
            os.unlink(temp_env_file)

    def test_defaults(self):
        """Test forecast defaults."""
        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            settings = Settings(_env_file=None)
            assert settings.app_env == "development"
            assert settings.default_timeline_months == 12
            assert settings.max_timeline_months == 120
            assert settings.default_model == "realistic"
            assert settings.log_level == "INFO"

    def test_missing_secret_key_raises_exception(self):
        """Test that missing SECRET_KEY raises ValidationError."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "SECRET_KEY" in str(exc_info.value)

    def test_placeholder_secret_key_raises_exception(self):
        """Test that placeholder SECRET_KEY raises ValidationError."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "your-secret-key-here-change-in-production"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "SECRET_KEY must be set to a secure value" in str(exc_info.value)

    def test_app_env_validation(self):
        """Test APP_ENV validation."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "staging"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "APP_ENV must be one of" in str(exc_info.value)

    def test_log_level_validation(self):
        """Test LOG_LEVEL validation."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "LOG_LEVEL": "LOUD"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "LOG_LEVEL must be one of" in str(exc_info.value)

    def test_default_model_validation(self):
        """Test that DEFAULT_MODEL must be a known variant."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "DEFAULT_MODEL": "moonshot"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "DEFAULT_MODEL must be one of" in str(exc_info.value)

    def test_default_months_within_max(self):
        """Test that the default horizon cannot exceed the maximum."""
        with patch.dict(
            os.environ,
            {
                "SECRET_KEY": "valid-secret-key-123",
                "DEFAULT_TIMELINE_MONTHS": "240",
                "MAX_TIMELINE_MONTHS": "120",
            },
            clear=True,
        ):
            with pytest.raises(ValidationError, match="cannot exceed"):
                Settings(_env_file=None)


class TestGlobalSettings:
    """Test the cached settings instance."""

    def test_global_settings_cached_and_reset(self):
        """Test caching and reset of the global instance."""
        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            reset_global_settings()
            first = get_global_settings()
            assert get_global_settings() is first

            reset_global_settings()
            assert get_global_settings() is not first
        reset_global_settings()
