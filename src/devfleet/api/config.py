"""
devfleet API configuration.

Provides URL configuration for prod/staging/local environments.
"""

from __future__ import annotations

from typing import Literal

# Base URLs for different environments
BASE_URLS = {
    "prod": "https://api.devfleet.io",
    "staging": "https://api.staging.devfleet.io",
    "local": "http://localhost:8000",
}


def get_base_url(mode: Literal["prod", "staging", "local"] = "prod") -> str:
    """
    Get base URL for the specified environment.

    Args:
        mode: Environment mode - "prod", "staging", or "local"

    Returns:
        Base URL for the API

    Example:
        >>> get_base_url("prod")
        'https://api.devfleet.io'
        >>> get_base_url("staging")
        'https://api.staging.devfleet.io'
    """
    return BASE_URLS.get(mode, BASE_URLS["prod"])


__all__ = ["get_base_url", "BASE_URLS"]
