"""
OS service for the devfleet API.

Provides the host OS versions available per device type.
"""

from __future__ import annotations

from devfleet.models.os import OsUpdateVersions, SupportedOsVersions
from devfleet.services._sync_wrapper import sync_service
from devfleet.services.base import BaseService
from devfleet.utils import semver
from devfleet.utils.device_types import is_architecture_compatible_with
from devfleet.utils.os_update import is_hup_supported


@sync_service
class AsyncOsService(BaseService):
    """
    Host OS versions.

    Example:
        >>> versions = await client.os.get_supported_versions("raspberrypi3")
        >>> versions.recommended
        '2.31.0+rev1'
    """

    def __init__(self, context) -> None:
        super().__init__(context)
        self._versions_cache: dict[str, SupportedOsVersions] = {}

    async def get_supported_versions(self, device_type: str) -> SupportedOsVersions:
        """
        Get OS versions available for a device type.

        Args:
            device_type: Device type slug

        Returns:
            Versions sorted newest first, plus recommended/latest/default
        """
        cached = self._versions_cache.get(device_type)
        if cached is not None:
            return cached

        response = await self._request.send("GET", f"/device-types/v1/{device_type}/images")
        body = response.body or {}
        versions = semver.rsort(list(body.get("versions", [])))
        stable = [v for v in versions if not semver.parse(v).is_prerelease]
        recommended = stable[0] if stable else None
        latest = versions[0] if versions else None

        result = SupportedOsVersions(
            versions=versions,
            recommended=recommended,
            latest=latest,
            default=recommended or latest,
        )
        self._versions_cache[device_type] = result
        return result

    async def get_supported_os_update_versions(
        self,
        device_type: str,
        current_version: str,
    ) -> OsUpdateVersions:
        """
        Get OS versions a device can be updated to.

        Args:
            device_type: Device type slug
            current_version: Current OS version of the device

        Returns:
            Versions for which an update action exists
        """
        supported = await self.get_supported_versions(device_type)
        versions = [
            version
            for version in supported.versions
            if is_hup_supported(device_type, current_version, version)
        ]
        recommended = next(
            (v for v in versions if not semver.parse(v).is_prerelease),
            None,
        )
        return OsUpdateVersions(
            versions=versions,
            recommended=recommended,
            current=current_version,
        )

    def is_architecture_compatible_with(self, os_arch: str, app_arch: str) -> bool:
        """Whether a device of os_arch can run an application of app_arch."""
        return is_architecture_compatible_with(os_arch, app_arch)


OsService = AsyncOsService._sync_class

__all__ = ["AsyncOsService", "OsService"]
