"""
Config service for the devfleet API.

Provides the platform configuration and the device type catalogue.
"""

from __future__ import annotations

from typing import Any

from devfleet.models.device_type import DeviceTypeManifest
from devfleet.services._sync_wrapper import sync_service
from devfleet.services.base import BaseService


@sync_service
class AsyncConfigService(BaseService):
    """
    Platform configuration.

    Example:
        >>> config = await client.config.get_all()
        >>> config["deviceUrlsBase"]
        'devices.devfleet.io'
    """

    async def get_all(self) -> dict[str, Any]:
        """Get the public platform configuration (GET /config)."""
        response = await self._request.send("GET", "/config")
        return response.body or {}

    async def get_device_types(self) -> list[DeviceTypeManifest]:
        """
        Get all device types the platform supports.

        Returns:
            Device type manifests
        """
        response = await self._request.send("GET", "/device-types/v1")
        return [DeviceTypeManifest.model_validate(item) for item in response.body or []]


ConfigService = AsyncConfigService._sync_class

__all__ = ["AsyncConfigService", "ConfigService"]
