"""
SDK settings.

Values come from keyword overrides, then DEVFLEET_* environment variables,
then defaults. A single process-wide instance is shared through
get_settings().

Example:
    >>> from devfleet.config import configure_settings
    >>> configure_settings(api_url="https://api.staging.devfleet.io")
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from devfleet.api.config import BASE_URLS

DEFAULT_API_VERSION = "v5"


class SDKSettings(BaseSettings):
    """devfleet SDK configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DEVFLEET_",
        extra="ignore",
    )

    # Endpoints
    api_url: str = BASE_URLS["prod"]
    api_version: str = DEFAULT_API_VERSION
    dashboard_url: str | None = None
    device_urls_base: str | None = None

    # Credentials
    api_key: str | None = None

    # Timeouts (seconds)
    request_timeout: float = Field(default=30.0, ge=1.0, le=300.0)
    container_action_timeout: float = Field(default=50.0, ge=1.0, le=600.0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False

    @property
    def resolved_dashboard_url(self) -> str:
        """Dashboard URL, inferred from api_url when not set."""
        if self.dashboard_url:
            return self.dashboard_url
        return self.api_url.replace("api", "dashboard", 1)


_settings: SDKSettings | None = None


def get_settings() -> SDKSettings:
    """Return the shared settings instance, creating it on first use."""
    global _settings
    if _settings is None:
        _settings = SDKSettings()
    return _settings


def configure_settings(**overrides) -> SDKSettings:
    """Replace the shared settings with a new instance built from overrides."""
    global _settings
    _settings = SDKSettings(**overrides)
    return _settings


def reset_settings() -> None:
    """Drop the shared instance so the next get_settings() re-reads the env."""
    global _settings
    _settings = None


__all__ = [
    "SDKSettings",
    "DEFAULT_API_VERSION",
    "get_settings",
    "configure_settings",
    "reset_settings",
]
