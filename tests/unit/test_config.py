"""
Unit tests for configuration management
"""

import pytest

from photofilter.core.config import (
    Settings,
    get_settings,
    get_log_config,
    get_filter_config,
)
from photofilter.engine.image_processing.configs.processing_config import FilterProcessingConfig


class TestSettings:
    """Test Settings configuration class"""

    def test_default_settings(self):
        """Test that default settings are loaded correctly"""
        settings = Settings()

        assert settings.app_name == "PhotoFilter"
        assert settings.app_version == "1.0.0"
        assert settings.environment in ["development", "staging", "production", "testing"]
        assert settings.max_filter_workers >= 1
        assert settings.filter_timeout > 0

    def test_environment_validation(self):
        """Test environment validation"""
        for env in ["development", "staging", "production", "testing"]:
            settings = Settings(environment=env)
            assert settings.environment == env

        with pytest.raises(ValueError) as exc_info:
            Settings(environment="invalid")
        assert "Environment must be one of" in str(exc_info.value)

    def test_log_level_validation(self):
        """Test log level validation"""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            settings = Settings(log_level=level)
            assert settings.log_level == level

        # Case insensitive
        settings = Settings(log_level="info")
        assert settings.log_level == "INFO"

        with pytest.raises(ValueError) as exc_info:
            Settings(log_level="INVALID")
        assert "Log level must be one of" in str(exc_info.value)

    def test_worker_count_must_be_positive(self):
        with pytest.raises(ValueError):
            Settings(max_filter_workers=0)

    def test_environment_variables(self, monkeypatch):
        """Settings are read from the environment"""
        monkeypatch.setenv("MAX_FILTER_WORKERS", "4")
        monkeypatch.setenv("FILTER_TIMEOUT", "2.5")
        monkeypatch.setenv("LOG_LEVEL", "warning")

        settings = Settings()

        assert settings.max_filter_workers == 4
        assert settings.filter_timeout == 2.5
        assert settings.log_level == "WARNING"

    def test_environment_helpers(self):
        assert Settings(environment="production").is_production
        assert Settings(environment="development").is_development
        assert not Settings(environment="testing").is_production


class TestConfigHelpers:

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_log_config(self):
        settings = Settings(log_level="ERROR", log_max_size_mb=2, log_backup_count=3)
        config = get_log_config(settings)

        assert config["log_level"] == "ERROR"
        assert config["max_file_size"] == 2 * 1024 * 1024
        assert config["backup_count"] == 3
        assert "format_string" in config

    def test_filter_config(self):
        config = get_filter_config(Settings(max_filter_workers=3, filter_timeout=5.0))
        assert config == {"max_workers": 3, "timeout": 5.0}


class TestProcessingConfig:

    def test_defaults_match_editor_requests(self):
        config = FilterProcessingConfig()

        assert config.GAUSSIAN_KERNEL_SIZE == 15
        assert config.MEDIAN_KERNEL_SIZE == 5
        assert config.ROTATION_ANGLE == 90.0
        assert config.FLIP_AXIS == "horizontal"
        assert config.CONTRAST_RANGE == (0.5, 2.0)
        assert config.BRIGHTNESS_RANGE == (-1.0, 1.0)
        assert config.LEGACY_FIXED_MEDIAN_WINDOW is False
