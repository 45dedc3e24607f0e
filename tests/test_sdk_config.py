"""
Tests for SDK configuration module (pydantic-settings).
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from devfleet.api.config import BASE_URLS, get_base_url
from devfleet.config import (
    SDKSettings,
    configure_settings,
    get_settings,
    reset_settings,
)


class TestSDKSettings:
    """Tests for SDKSettings pydantic-settings model."""

    def test_default_values(self):
        """Test default configuration values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = SDKSettings()

        # Endpoints
        assert settings.api_url == "https://api.devfleet.io"
        assert settings.api_version == "v5"
        assert settings.dashboard_url is None
        assert settings.device_urls_base is None

        # Credentials
        assert settings.api_key is None

        # Timeouts
        assert settings.request_timeout == 30.0
        assert settings.container_action_timeout == 50.0

        # Logging
        assert settings.log_level == "INFO"
        assert settings.log_json is False

    def test_environment_variable_override(self):
        """DEVFLEET_* variables override defaults."""
        env = {
            "DEVFLEET_API_URL": "https://api.staging.devfleet.io",
            "DEVFLEET_API_KEY": "env-key",
            "DEVFLEET_REQUEST_TIMEOUT": "60",
            "DEVFLEET_DEVICE_URLS_BASE": "devices.staging.devfleet.io",
            "DEVFLEET_LOG_JSON": "true",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = SDKSettings()

        assert settings.api_url == "https://api.staging.devfleet.io"
        assert settings.api_key == "env-key"
        assert settings.request_timeout == 60.0
        assert settings.device_urls_base == "devices.staging.devfleet.io"
        assert settings.log_json is True

    def test_unrelated_environment_ignored(self):
        with patch.dict(os.environ, {"DEVFLEET_UNKNOWN_OPTION": "x"}, clear=True):
            SDKSettings()

    def test_timeout_bounds(self):
        """Timeouts outside their range are rejected."""
        with pytest.raises(ValidationError):
            SDKSettings(request_timeout=0.5)
        with pytest.raises(ValidationError):
            SDKSettings(request_timeout=301)
        with pytest.raises(ValidationError):
            SDKSettings(container_action_timeout=601)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            SDKSettings(log_level="VERBOSE")

    def test_dashboard_url_inferred(self):
        """Dashboard URL replaces the first 'api' of the API URL."""
        settings = SDKSettings(api_url="https://api.devfleet.io")
        assert settings.resolved_dashboard_url == "https://dashboard.devfleet.io"

    def test_dashboard_url_explicit(self):
        settings = SDKSettings(dashboard_url="https://console.example.com")
        assert settings.resolved_dashboard_url == "https://console.example.com"


class TestSettingsSingleton:
    """Tests for the shared settings instance."""

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_configure_settings_replaces(self):
        first = get_settings()
        configured = configure_settings(api_key="configured-key")
        assert configured is not first
        assert get_settings() is configured
        assert get_settings().api_key == "configured-key"

    def test_reset_settings_rereads_environment(self):
        configure_settings(api_key="configured-key")
        reset_settings()
        with patch.dict(os.environ, {"DEVFLEET_API_KEY": "env-key"}, clear=True):
            assert get_settings().api_key == "env-key"


class TestBaseUrls:
    """Tests for environment URL map."""

    def test_known_modes(self):
        assert get_base_url("prod") == BASE_URLS["prod"]
        assert get_base_url("staging") == "https://api.staging.devfleet.io"
        assert get_base_url("local") == "http://localhost:8000"

    def test_unknown_mode_falls_back_to_prod(self):
        assert get_base_url("unknown") == "https://api.devfleet.io"
