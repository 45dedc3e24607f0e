"""
devfleet HTTP layer.

    >>> from devfleet.api import AsyncRequest, AsyncPine
    >>> pine = AsyncPine(AsyncRequest(settings), api_version="v5")
    >>> devices = await pine.get("device", options={"$select": "uuid"})
"""

from __future__ import annotations

# Configuration
from devfleet.api.config import BASE_URLS, get_base_url

# Request layer
from devfleet.api.pine import AsyncPine
from devfleet.api.request import AsyncRequest, Response

__all__ = [
    # Config
    "get_base_url",
    "BASE_URLS",
    # Request layer
    "AsyncRequest",
    "AsyncPine",
    "Response",
]
