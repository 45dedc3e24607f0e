"""
Asynchronous device service.

Devices are addressed by numeric id or by uuid. A uuid may be shortened to
any unique prefix; prefixes matching several devices are rejected.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any
from urllib.parse import urljoin

from devfleet.exceptions import (
    AmbiguousDeviceError,
    DeviceNotFoundError,
    DeviceNotWebAccessibleError,
    DeviceOfflineError,
    InvalidDeviceTypeError,
    InvalidParameterError,
    OsUpdateError,
    ReleaseNotFoundError,
    RequestError,
    SupervisorLockedError,
    SupervisorVersionError,
)
from devfleet.logging import get_logger
from devfleet.models.device import Location, LocalModeSupport, OverallStatus, RegisteredDevice
from devfleet.models.device_type import DeviceTypeManifest
from devfleet.services._sync_wrapper import sync_service
from devfleet.services.application import AsyncApplicationService
from devfleet.services.auth import AsyncAuthService
from devfleet.services.base import BaseService, ServiceContext
from devfleet.services.config import AsyncConfigService
from devfleet.services.dependent import AsyncDependentResource
from devfleet.services.device._config import (
    BAD_REQUEST_STATUS_CODE,
    DEVICE_ORDERBY,
    LOCKED_STATUS_CODE,
    MIN_SUPERVISOR_APPS_API,
    MIN_SUPERVISOR_MC_API,
    NO_DEVICE_FOR_KEY_MESSAGE,
    NOT_FOUND_STATUS_CODE,
    SUCCESSFUL_RELEASE_STATUS,
)
from devfleet.services.device._vars import AsyncDeviceServiceVariables, AsyncDeviceVariables
from devfleet.services.os import AsyncOsService
from devfleet.utils import semver
from devfleet.utils.dates import time_since
from devfleet.utils.device_status import get_status
from devfleet.utils.device_types import get_by_slug, is_device_type_compatible_with
from devfleet.utils.ids import is_id
from devfleet.utils.local_mode import (
    LOCAL_MODE_ENV_VAR,
    LOCAL_MODE_SUPPORT_PROPERTIES,
    check_local_mode_supported,
    get_local_mode_support,
)
from devfleet.utils.options import PineOptions, merge_pine_options
from devfleet.utils.os_update import OsUpdateHelper, get_hup_action_type
from devfleet.utils.os_version import (
    get_device_os_semver_with_variant,
    normalize_device_os_version,
)
from devfleet.utils.register import generate_unique_key, register_device
from devfleet.utils.service_details import (
    generate_current_service_details,
    get_current_service_details_options,
)

logger = get_logger(__name__)

_APPLICATION_ID_EXPAND: PineOptions = {"belongs_to__application": {"$select": "id"}}


def _ensure_supervisor_compatibility(version: str | None, min_version: str) -> None:
    if not semver.valid(version) or semver.lt(version, min_version):
        raise SupervisorVersionError(version, min_version)


def _application_id(device: dict[str, Any]) -> int:
    return device["belongs_to__application"][0]["id"]


@sync_service
class AsyncDeviceService(BaseService):
    """
    Device management.

    Example:
        >>> async with AsyncDevFleetClient(api_key="...") as client:
        ...     device = await client.device.get("7cf02a6")
        ...     await client.device.rename(device["id"], "kitchen-display")
        ...     await client.device.reboot("7cf02a6", force=True)
    """

    OverallStatus = OverallStatus
    LOCAL_MODE_ENV_VAR = LOCAL_MODE_ENV_VAR

    def __init__(self, context: ServiceContext) -> None:
        super().__init__(context)
        self._device_urls_base: str | None = context.settings.device_urls_base
        self._os_update_helper: OsUpdateHelper | None = None

        self._tags = AsyncDeviceVariables(
            self._dependent("device_tag", "tag_key"),
            self._get_application_id,
            application_orderby=None,
        )
        self._config_var = AsyncDeviceVariables(
            self._dependent("device_config_variable", "name"),
            self._get_application_id,
        )
        self._env_var = AsyncDeviceVariables(
            self._dependent("device_environment_variable", "name"),
            self._get_application_id,
        )
        self._service_var = AsyncDeviceServiceVariables(
            self._pine,
            self._fetch_id,
            self._get_application_id,
        )

    def _dependent(self, resource_name: str, key_field: str) -> AsyncDependentResource:
        return AsyncDependentResource(
            self._pine,
            resource_name=resource_name,
            resource_key_field=key_field,
            parent_resource_name="device",
            get_resource_id=self._fetch_id,
        )

    # =========================================================================
    # Sibling services and shared lookups
    # =========================================================================

    @property
    def _application(self) -> AsyncApplicationService:
        return self._context.get_service(AsyncApplicationService)

    @property
    def _config(self) -> AsyncConfigService:
        return self._context.get_service(AsyncConfigService)

    @property
    def _os(self) -> AsyncOsService:
        return self._context.get_service(AsyncOsService)

    @property
    def _auth(self) -> AsyncAuthService:
        return self._context.get_service(AsyncAuthService)

    @property
    def _api_url(self) -> str:
        return self._request.api_url

    @property
    def _container_action_timeout(self) -> float:
        return self._settings.container_action_timeout

    async def _get_id(self, uuid_or_id: str | int) -> int:
        # Ids are trusted as-is; uuids must exist
        if is_id(uuid_or_id):
            return uuid_or_id
        return await self._fetch_id(uuid_or_id)

    async def _fetch_id(self, uuid_or_id: str | int) -> int:
        device = await self.get(uuid_or_id, {"$select": "id"})
        return device["id"]

    async def _get_application_id(self, name_or_slug_or_id: str | int) -> int:
        return await self._application.get_id(name_or_slug_or_id)

    async def _get_with_application(
        self,
        uuid_or_id: str | int,
        select: list[str] | str = "id",
    ) -> dict[str, Any]:
        return await self.get(
            uuid_or_id,
            {"$select": select, "$expand": _APPLICATION_ID_EXPAND},
        )

    async def get_device_urls_base(self) -> str:
        """Domain under which public device URLs live, e.g. "devices.devfleet.io"."""
        if self._device_urls_base is None:
            config = await self._config.get_all()
            self._device_urls_base = config["deviceUrlsBase"]
        return self._device_urls_base

    async def _get_os_update_helper(self) -> OsUpdateHelper:
        if self._os_update_helper is None:
            self._os_update_helper = OsUpdateHelper(
                await self.get_device_urls_base(),
                self._request,
            )
        return self._os_update_helper

    # =========================================================================
    # Dependent resources
    # =========================================================================

    @property
    def tags(self) -> AsyncDeviceVariables:
        """Device tags (device_tag, keyed on tag_key)."""
        return self._tags

    @property
    def config_var(self) -> AsyncDeviceVariables:
        """Device config variables."""
        return self._config_var

    @property
    def env_var(self) -> AsyncDeviceVariables:
        """Device environment variables."""
        return self._env_var

    @property
    def service_var(self) -> AsyncDeviceServiceVariables:
        """Per-service environment variables of a device."""
        return self._service_var

    # =========================================================================
    # Queries
    # =========================================================================

    def get_dashboard_url(self, uuid: str) -> str:
        """
        Dashboard URL of a device.

        >>> client.device.get_dashboard_url("7cf02a6")
        'https://dashboard.devfleet.io/devices/7cf02a6/summary'
        """
        if not isinstance(uuid, str) or not uuid:
            raise ValueError("The uuid option should be a non empty string")
        return urljoin(self._settings.resolved_dashboard_url, f"/devices/{uuid}/summary")

    async def get_all(self, options: PineOptions | None = None) -> list[dict[str, Any]]:
        """
        Get all devices, ordered by name.

        Args:
            options: Extra pine options

        Returns:
            Device records
        """
        devices = await self._pine.get(
            "device",
            options=merge_pine_options({"$orderby": DEVICE_ORDERBY}, options),
        )
        return [normalize_device_os_version(device) for device in devices]

    async def get_all_by_application(
        self,
        name_or_slug_or_id: str | int,
        options: PineOptions | None = None,
    ) -> list[dict[str, Any]]:
        """Get all devices of an application."""
        application_id = await self._get_application_id(name_or_slug_or_id)
        return await self.get_all(
            merge_pine_options({"$filter": {"belongs_to__application": application_id}}, options)
        )

    async def get_all_by_parent_device(
        self,
        parent_uuid_or_id: str | int,
        options: PineOptions | None = None,
    ) -> list[dict[str, Any]]:
        """Get all devices managed by a gateway device."""
        parent_id = await self._fetch_id(parent_uuid_or_id)
        return await self.get_all(
            merge_pine_options({"$filter": {"is_managed_by__device": parent_id}}, options)
        )

    async def get(
        self,
        uuid_or_id: str | int | None,
        options: PineOptions | None = None,
    ) -> dict[str, Any]:
        """
        Get a single device.

        Args:
            uuid_or_id: Device uuid (or unique uuid prefix) or numeric id
            options: Extra pine options

        Returns:
            Device record

        Raises:
            DeviceNotFoundError: If no device matches
            AmbiguousDeviceError: If a uuid prefix matches several devices
        """
        if uuid_or_id is None or uuid_or_id == "":
            raise DeviceNotFoundError(uuid_or_id)

        if is_id(uuid_or_id):
            device = await self._pine.get("device", id=uuid_or_id, options=options)
            if device is None:
                raise DeviceNotFoundError(uuid_or_id)
        else:
            devices = await self._pine.get(
                "device",
                options=merge_pine_options(
                    {"$filter": {"uuid": {"$startswith": uuid_or_id}}},
                    options,
                ),
            )
            if not devices:
                raise DeviceNotFoundError(uuid_or_id)
            if len(devices) > 1:
                raise AmbiguousDeviceError(uuid_or_id)
            device = devices[0]

        return normalize_device_os_version(device)

    async def get_with_service_details(
        self,
        uuid_or_id: str | int,
        options: PineOptions | None = None,
    ) -> dict[str, Any]:
        """
        Get a device with its current services.

        Returns:
            Device record with current_services (per service name, newest
            install first) and current_gateway_downloads
        """
        device = await self.get(
            uuid_or_id,
            merge_pine_options(get_current_service_details_options(expand_release=True), options),
        )
        return generate_current_service_details(device)

    async def get_by_name(
        self,
        name: str,
        options: PineOptions | None = None,
    ) -> list[dict[str, Any]]:
        """Get devices by name. Names are not unique."""
        devices = await self.get_all(
            merge_pine_options({"$filter": {"device_name": name}}, options)
        )
        if not devices:
            raise DeviceNotFoundError(name)
        return devices

    async def get_name(self, uuid_or_id: str | int) -> str:
        device = await self.get(uuid_or_id, {"$select": "device_name"})
        return device["device_name"]

    async def get_application_name(self, uuid_or_id: str | int) -> str:
        device = await self.get(
            uuid_or_id,
            {
                "$select": "id",
                "$expand": {"belongs_to__application": {"$select": "app_name"}},
            },
        )
        return device["belongs_to__application"][0]["app_name"]

    async def get_application_info(self, uuid_or_id: str | int) -> Any:
        """
        Application state reported by the device supervisor.

        Raises:
            SupervisorVersionError: If the supervisor predates the apps API
        """
        device = await self._get_with_application(uuid_or_id, ["id", "supervisor_version"])
        _ensure_supervisor_compatibility(device.get("supervisor_version"), MIN_SUPERVISOR_APPS_API)
        app_id = _application_id(device)
        response = await self._request.send(
            "POST",
            f"/supervisor/v1/apps/{app_id}",
            base_url=self._api_url,
            body={"deviceId": device["id"], "appId": app_id, "method": "GET"},
        )
        return response.body

    async def has(self, uuid_or_id: str | int) -> bool:
        try:
            await self.get(uuid_or_id, {"$select": ["id"]})
        except DeviceNotFoundError:
            return False
        return True

    async def is_online(self, uuid_or_id: str | int) -> bool:
        device = await self.get(uuid_or_id, {"$select": "is_online"})
        return device["is_online"]

    async def get_local_ip_addresses(self, uuid_or_id: str | int) -> list[str]:
        """
        Local network addresses of an online device, VPN address excluded.

        Raises:
            DeviceOfflineError: If the device is offline
        """
        device = await self.get(
            uuid_or_id,
            {"$select": ["is_online", "ip_address", "vpn_address"]},
        )
        if not device.get("is_online"):
            raise DeviceOfflineError(uuid_or_id)
        addresses = (device.get("ip_address") or "").split(" ")
        return [ip for ip in addresses if ip and ip != device.get("vpn_address")]

    def get_status(self, device: dict[str, Any]) -> OverallStatus:
        """Overall status key of a device record, see OverallStatus."""
        return get_status(device).key

    def last_online(self, device: dict[str, Any]) -> str:
        """
        Human readable last connectivity of a device record.

        >>> client.device.last_online({"last_connectivity_event": None})
        'Connecting...'
        """
        last_event = device.get("last_connectivity_event")
        if not last_event:
            return "Connecting..."
        if device.get("is_online"):
            return f"Online (for {time_since(last_event, suffix=False)})"
        return time_since(last_event)

    def get_os_version(self, device: dict[str, Any]) -> str | None:
        """OS version of a device record as semver, variant appended as build tag."""
        return get_device_os_semver_with_variant(device)

    def get_local_mode_support(self, device: dict[str, Any]) -> LocalModeSupport:
        return get_local_mode_support(device)

    async def is_tracking_application_release(self, uuid_or_id: str | int) -> bool:
        """True unless the device is pinned to a release."""
        device = await self.get(uuid_or_id, {"$select": "should_be_running__release"})
        return not device.get("should_be_running__release")

    async def get_target_release_hash(self, uuid_or_id: str | int) -> str | None:
        """Commit of the release the device should run: its pin, else the application's."""
        device = await self.get(
            uuid_or_id,
            {
                "$select": "id",
                "$expand": {
                    "should_be_running__release": {"$select": "commit"},
                    "belongs_to__application": {
                        "$select": "id",
                        "$expand": {"should_be_running__release": {"$select": ["commit"]}},
                    },
                },
            },
        )
        pinned = device.get("should_be_running__release") or []
        if pinned:
            return pinned[0]["commit"]
        application = device["belongs_to__application"][0]
        target = application.get("should_be_running__release") or []
        if target:
            return target[0]["commit"]
        return None

    async def get_supervisor_target_state(self, uuid_or_id: str | int) -> Any:
        device = await self.get(uuid_or_id, {"$select": "uuid"})
        response = await self._request.send(
            "GET",
            f"/device/v2/{device['uuid']}/state",
            base_url=self._api_url,
        )
        return response.body

    async def get_supervisor_state(self, uuid_or_id: str | int) -> Any:
        device = await self.get(uuid_or_id, {"$select": "uuid"})
        response = await self._request.send(
            "POST",
            "/supervisor/v1/device",
            base_url=self._api_url,
            body={"uuid": device["uuid"], "method": "GET"},
        )
        return response.body

    # =========================================================================
    # Mutations
    # =========================================================================

    async def _patch_by_uuid(self, uuid_or_id: str | int, body: dict[str, Any]) -> None:
        device = await self.get(uuid_or_id, {"$select": "uuid"})
        await self._pine.patch("device", body, options={"$filter": {"uuid": device["uuid"]}})

    async def remove(self, uuid_or_id: str | int) -> None:
        device = await self.get(uuid_or_id, {"$select": "uuid"})
        await self._pine.delete("device", options={"$filter": {"uuid": device["uuid"]}})

    async def rename(self, uuid_or_id: str | int, new_name: str) -> None:
        await self._patch_by_uuid(uuid_or_id, {"device_name": new_name})

    async def note(self, uuid_or_id: str | int, note: str) -> None:
        await self._patch_by_uuid(uuid_or_id, {"note": note})

    async def set_custom_location(
        self,
        uuid_or_id: str | int,
        location: Location | dict[str, Any],
    ) -> None:
        """Set a custom location, e.g. {"latitude": 52.37, "longitude": 4.89}."""
        if isinstance(location, dict):
            location = Location.model_validate(location)
        await self._patch_by_uuid(
            uuid_or_id,
            {
                "custom_latitude": str(location.latitude),
                "custom_longitude": str(location.longitude),
            },
        )

    async def unset_custom_location(self, uuid_or_id: str | int) -> None:
        await self.set_custom_location(uuid_or_id, Location(latitude="", longitude=""))

    async def move(self, uuid_or_id: str | int, name_or_slug_or_id: str | int) -> None:
        """
        Move a device to another application.

        Raises:
            InvalidDeviceTypeError: If the device cannot run the application's device type
        """
        device, device_types, application = await asyncio.gather(
            self.get(uuid_or_id, {"$select": ["uuid", "device_type"]}),
            self._config.get_device_types(),
            self._application.get(name_or_slug_or_id, {"$select": ["id", "device_type"]}),
        )
        os_device_type = get_by_slug(device_types, device["device_type"])
        app_device_type = get_by_slug(device_types, application["device_type"])
        if not is_device_type_compatible_with(os_device_type, app_device_type):
            raise InvalidDeviceTypeError(f"Incompatible application: {name_or_slug_or_id}")

        await self._pine.patch(
            "device",
            {"belongs_to__application": application["id"]},
            options={"$filter": {"uuid": device["uuid"]}},
        )

    async def enable_device_url(self, uuid_or_id: str | int) -> None:
        await self._patch_by_uuid(uuid_or_id, {"is_web_accessible": True})

    async def disable_device_url(self, uuid_or_id: str | int) -> None:
        await self._patch_by_uuid(uuid_or_id, {"is_web_accessible": False})

    async def has_device_url(self, uuid_or_id: str | int) -> bool:
        device = await self.get(uuid_or_id, {"$select": "is_web_accessible"})
        return bool(device.get("is_web_accessible"))

    async def get_device_url(self, uuid_or_id: str | int) -> str:
        """
        Public URL of a device, e.g. https://7cf02a6...devices.devfleet.io.

        Raises:
            DeviceNotWebAccessibleError: If the public URL is disabled
        """
        if not await self.has_device_url(uuid_or_id):
            raise DeviceNotWebAccessibleError(uuid_or_id)
        device_urls_base = await self.get_device_urls_base()
        device = await self.get(uuid_or_id, {"$select": "uuid"})
        return f"https://{device['uuid']}.{device_urls_base}"

    async def grant_support_access(self, uuid_or_id: str | int, expiry_timestamp: int | None) -> None:
        """
        Let support staff access the device until expiry_timestamp.

        Args:
            uuid_or_id: Device uuid or id
            expiry_timestamp: Expiry in milliseconds since the epoch

        Raises:
            InvalidParameterError: If the expiry is missing or not in the future
        """
        if expiry_timestamp is None or expiry_timestamp <= time.time() * 1000:
            raise InvalidParameterError("expiry_timestamp", expiry_timestamp)
        device_id = await self._fetch_id(uuid_or_id)
        await self._pine.patch(
            "device",
            {"is_accessible_by_support_until__date": expiry_timestamp},
            id=device_id,
        )

    async def revoke_support_access(self, uuid_or_id: str | int) -> None:
        device_id = await self._fetch_id(uuid_or_id)
        await self._pine.patch(
            "device",
            {"is_accessible_by_support_until__date": None},
            id=device_id,
        )

    async def pin_to_release(
        self,
        uuid_or_id: str | int,
        full_release_hash_or_id: str | int,
    ) -> None:
        """
        Pin a device to a successful release of its application.

        Raises:
            ReleaseNotFoundError: If the application has no such successful release
        """
        if is_id(uuid_or_id) and is_id(full_release_hash_or_id):
            device_id, release_id = uuid_or_id, full_release_hash_or_id
        else:
            release_field = "id" if is_id(full_release_hash_or_id) else "commit"
            device = await self.get(
                uuid_or_id,
                {
                    "$select": "id",
                    "$expand": {
                        "belongs_to__application": {
                            "$select": "id",
                            "$expand": {
                                "owns__release": {
                                    "$top": 1,
                                    "$select": "id",
                                    "$filter": {
                                        release_field: full_release_hash_or_id,
                                        "status": SUCCESSFUL_RELEASE_STATUS,
                                    },
                                    "$orderby": "created_at desc",
                                }
                            },
                        }
                    },
                },
            )
            releases = device["belongs_to__application"][0].get("owns__release") or []
            if not releases:
                raise ReleaseNotFoundError(full_release_hash_or_id)
            device_id, release_id = device["id"], releases[0]["id"]

        await self._pine.patch("device", {"should_be_running__release": release_id}, id=device_id)

    async def track_application_release(self, uuid_or_id: str | int) -> None:
        """Unpin a device so it follows its application's release."""
        device_id = await self._get_id(uuid_or_id)
        await self._pine.patch("device", {"should_be_running__release": None}, id=device_id)

    # =========================================================================
    # Provisioning
    # =========================================================================

    generate_unique_key = staticmethod(generate_unique_key)

    async def register(
        self,
        name_or_slug_or_id: str | int,
        uuid: str,
    ) -> RegisteredDevice:
        """
        Register a new device in an application.

        Args:
            name_or_slug_or_id: Application
            uuid: Uuid of the new device, see generate_unique_key()

        Returns:
            The registered device (id, uuid, api_key)
        """
        user_id, provisioning_key, application = await asyncio.gather(
            self._auth.get_user_id(),
            self._application.generate_provisioning_key(name_or_slug_or_id),
            self._application.get(name_or_slug_or_id, {"$select": ["id", "device_type"]}),
        )
        return await register_device(
            self._request,
            user_id=user_id,
            application_id=application["id"],
            uuid=uuid,
            device_type=application["device_type"],
            provisioning_api_key=provisioning_key,
            api_endpoint=self._api_url,
        )

    async def generate_device_key(self, uuid_or_id: str | int) -> str:
        """
        Generate a device api key.

        Raises:
            DeviceNotFoundError: If the device does not exist
        """
        device_id = await self._get_id(uuid_or_id)
        try:
            response = await self._request.send(
                "POST",
                f"/api-key/device/{device_id}/device-key",
                base_url=self._api_url,
            )
        except RequestError as e:
            if e.status_code == 500 and e.body == NO_DEVICE_FOR_KEY_MESSAGE:
                logger.debug("No device for key: %s", uuid_or_id)
                raise DeviceNotFoundError(uuid_or_id) from e
            raise
        return response.body

    # =========================================================================
    # Supervisor actions
    # =========================================================================

    async def identify(self, uuid_or_id: str | int) -> None:
        """Blink the device's identification LED."""
        device = await self.get(uuid_or_id, {"$select": "uuid"})
        await self._request.send(
            "POST",
            "/supervisor/v1/blink",
            base_url=self._api_url,
            body={"uuid": device["uuid"]},
        )

    async def _application_action(self, uuid_or_id: str | int, action: str) -> str | None:
        device = await self._get_with_application(uuid_or_id, ["id", "supervisor_version"])
        _ensure_supervisor_compatibility(device.get("supervisor_version"), MIN_SUPERVISOR_APPS_API)
        app_id = _application_id(device)
        response = await self._request.send(
            "POST",
            f"/supervisor/v1/apps/{app_id}/{action}",
            base_url=self._api_url,
            body={"deviceId": device["id"], "appId": app_id},
            timeout=self._container_action_timeout,
        )
        return (response.body or {}).get("containerId")

    async def start_application(self, uuid_or_id: str | int) -> str | None:
        """Start the application container. Returns the container id."""
        return await self._application_action(uuid_or_id, "start")

    async def stop_application(self, uuid_or_id: str | int) -> str | None:
        """Stop the application container. Returns the container id."""
        return await self._application_action(uuid_or_id, "stop")

    async def restart_application(self, uuid_or_id: str | int) -> Any:
        device_id = await self._get_id(uuid_or_id)
        try:
            response = await self._request.send(
                "POST",
                f"/device/{device_id}/restart",
                base_url=self._api_url,
                timeout=self._container_action_timeout,
            )
        except RequestError as e:
            if e.status_code == NOT_FOUND_STATUS_CODE:
                logger.debug("Restart target not found: %s", uuid_or_id)
                raise DeviceNotFoundError(uuid_or_id) from e
            raise
        return response.body

    async def _service_action(self, uuid_or_id: str | int, image_id: int, action: str) -> Any:
        device = await self._get_with_application(uuid_or_id, ["id", "supervisor_version"])
        _ensure_supervisor_compatibility(device.get("supervisor_version"), MIN_SUPERVISOR_MC_API)
        app_id = _application_id(device)
        response = await self._request.send(
            "POST",
            f"/supervisor/v2/applications/{app_id}/{action}",
            base_url=self._api_url,
            body={
                "deviceId": device["id"],
                "appId": app_id,
                "data": {"appId": app_id, "imageId": image_id},
            },
            timeout=self._container_action_timeout,
        )
        return response.body

    async def start_service(self, uuid_or_id: str | int, image_id: int) -> Any:
        return await self._service_action(uuid_or_id, image_id, "start-service")

    async def stop_service(self, uuid_or_id: str | int, image_id: int) -> Any:
        return await self._service_action(uuid_or_id, image_id, "stop-service")

    async def restart_service(self, uuid_or_id: str | int, image_id: int) -> Any:
        return await self._service_action(uuid_or_id, image_id, "restart-service")

    async def _send_locked_action(self, url: str, body: dict[str, Any]) -> Any:
        try:
            response = await self._request.send("POST", url, base_url=self._api_url, body=body)
        except RequestError as e:
            if e.status_code == LOCKED_STATUS_CODE:
                logger.debug("Supervisor locked: POST %s", url)
                raise SupervisorLockedError() from e
            raise
        return response.body

    async def reboot(self, uuid_or_id: str | int, force: bool = False) -> Any:
        """
        Reboot a device.

        Args:
            uuid_or_id: Device uuid or id
            force: Override update locks

        Raises:
            SupervisorLockedError: If update locks prevent the reboot
        """
        device_id = await self._get_id(uuid_or_id)
        try:
            return await self._send_locked_action(
                "/supervisor/v1/reboot",
                {"deviceId": device_id, "data": {"force": bool(force)}},
            )
        except RequestError as e:
            if e.status_code == NOT_FOUND_STATUS_CODE:
                logger.debug("Reboot target not found: %s", uuid_or_id)
                raise DeviceNotFoundError(uuid_or_id) from e
            raise

    async def shutdown(self, uuid_or_id: str | int, force: bool = False) -> None:
        device = await self._get_with_application(uuid_or_id)
        await self._send_locked_action(
            "/supervisor/v1/shutdown",
            {
                "deviceId": device["id"],
                "appId": _application_id(device),
                "data": {"force": bool(force)},
            },
        )

    async def purge(self, uuid_or_id: str | int) -> None:
        """Clear the application's persistent data on the device."""
        device = await self._get_with_application(uuid_or_id)
        app_id = _application_id(device)
        await self._send_locked_action(
            "/supervisor/v1/purge",
            {"deviceId": device["id"], "appId": app_id, "data": {"appId": app_id}},
        )

    async def update(self, uuid_or_id: str | int, force: bool = False) -> None:
        """Make the supervisor check for an application update now."""
        device = await self._get_with_application(uuid_or_id)
        await self._request.send(
            "POST",
            "/supervisor/v1/update",
            base_url=self._api_url,
            body={
                "deviceId": device["id"],
                "appId": _application_id(device),
                "data": {"force": bool(force)},
            },
        )

    async def ping(self, uuid_or_id: str | int) -> None:
        device = await self._get_with_application(uuid_or_id)
        await self._request.send(
            "POST",
            "/supervisor/ping",
            base_url=self._api_url,
            body={"method": "GET", "deviceId": device["id"], "appId": _application_id(device)},
        )

    # =========================================================================
    # Local mode and lock override
    # =========================================================================

    async def enable_local_mode(self, uuid_or_id: str | int) -> None:
        """
        Enable local mode.

        Raises:
            LocalModeNotSupportedError: If the device OS, supervisor or variant does not allow it
        """
        device = await self.get(uuid_or_id, {"$select": ["id", *LOCAL_MODE_SUPPORT_PROPERTIES]})
        check_local_mode_supported(device)
        await self._config_var.set(device["id"], LOCAL_MODE_ENV_VAR, "1")

    async def disable_local_mode(self, uuid_or_id: str | int) -> None:
        await self._config_var.set(uuid_or_id, LOCAL_MODE_ENV_VAR, "0")

    async def is_in_local_mode(self, uuid_or_id: str | int) -> bool:
        return await self._config_var.get(uuid_or_id, LOCAL_MODE_ENV_VAR) == "1"

    async def _set_lock_override(self, uuid_or_id: str | int, should_override: bool) -> None:
        device_id = await self._get_id(uuid_or_id)
        await self._request.send(
            "POST",
            f"/device/{device_id}/lock-override",
            base_url=self._api_url,
            body={"value": "1" if should_override else "0"},
        )

    async def enable_lock_override(self, uuid_or_id: str | int) -> None:
        """Let the supervisor ignore update locks on this device."""
        await self._set_lock_override(uuid_or_id, True)

    async def disable_lock_override(self, uuid_or_id: str | int) -> None:
        await self._set_lock_override(uuid_or_id, False)

    async def has_lock_override(self, uuid_or_id: str | int) -> bool:
        device_id = await self._get_id(uuid_or_id)
        response = await self._request.send(
            "GET",
            f"/device/{device_id}/lock-override",
            base_url=self._api_url,
        )
        return response.body == "1"

    # =========================================================================
    # Device types
    # =========================================================================

    async def get_manifest_by_slug(self, slug: str) -> DeviceTypeManifest:
        """
        Device type manifest by slug, name or alias.

        Raises:
            InvalidDeviceTypeError: If no device type matches
        """
        for device_type in await self._config.get_device_types():
            if device_type.matches(slug):
                return device_type
        raise InvalidDeviceTypeError(slug)

    async def get_manifest_by_application(self, name_or_slug_or_id: str | int) -> DeviceTypeManifest:
        application = await self._application.get(name_or_slug_or_id, {"$select": "device_type"})
        return await self.get_manifest_by_slug(application["device_type"])

    async def get_display_name(self, device_type_slug: str) -> str | None:
        """Display name of a device type, None if unknown."""
        try:
            manifest = await self.get_manifest_by_slug(device_type_slug)
        except InvalidDeviceTypeError:
            return None
        return manifest.name

    async def get_device_slug(self, device_type_name: str) -> str | None:
        """Slug of a device type given its display name, None if unknown."""
        try:
            manifest = await self.get_manifest_by_slug(device_type_name)
        except InvalidDeviceTypeError:
            return None
        return manifest.slug

    async def get_supported_device_types(self) -> list[str]:
        """Display names of all device types."""
        return [device_type.name for device_type in await self._config.get_device_types()]

    # =========================================================================
    # Host OS updates
    # =========================================================================

    def check_os_update_target(self, device: dict[str, Any], target_os_version: str) -> None:
        """
        Validate that a device record can be updated to target_os_version.

        The record needs uuid, is_online, os_version, device_type and os_variant.

        Raises:
            DeviceOfflineError: If the device is offline
            OsUpdateError: If a field is missing or no update action applies
        """
        uuid = device.get("uuid")
        if not uuid:
            raise OsUpdateError("The uuid of the device is not available")
        if not device.get("is_online"):
            raise DeviceOfflineError(uuid)
        os_version = device.get("os_version")
        if not os_version:
            raise OsUpdateError(f"The current os version of the device is not available: {uuid}")
        device_type = device.get("device_type")
        if not device_type:
            raise OsUpdateError(f"The device type of the device is not available: {uuid}")
        if "os_variant" not in device:
            raise OsUpdateError(f"The os variant of the device is not available: {uuid}")

        current_os_version = (
            get_device_os_semver_with_variant(
                {"os_version": os_version, "os_variant": device["os_variant"]}
            )
            or os_version
        )
        get_hup_action_type(device_type, current_os_version, target_os_version)

    async def start_os_update(self, uuid: str, target_os_version: str) -> Any:
        """
        Start a host OS update.

        Args:
            uuid: Full device uuid
            target_os_version: One of os.get_supported_versions() for the device type

        Returns:
            Action status returned by the actions service

        Raises:
            InvalidParameterError: If the target version is missing or not supported
        """
        if not target_os_version:
            raise InvalidParameterError("target_os_version", target_os_version)

        device = await self.get(
            uuid,
            {"$select": ["device_type", "is_online", "os_version", "os_variant"]},
        )
        device["uuid"] = uuid
        self.check_os_update_target(device, target_os_version)

        supported = await self._os.get_supported_versions(device["device_type"])
        if not any(semver.compare(v, target_os_version) == 0 for v in supported.versions):
            raise InvalidParameterError("target_os_version", target_os_version)

        helper = await self._get_os_update_helper()
        logger.debug("Starting OS update of %s to %s", uuid, target_os_version)
        return await helper.start_os_update(uuid, target_os_version)

    async def get_os_update_status(self, uuid: str) -> Any:
        """
        Status of the last host OS update of a device.

        Raises:
            DeviceNotFoundError: If the device does not exist
        """
        helper = await self._get_os_update_helper()
        try:
            return await helper.get_os_update_status(uuid)
        except RequestError as e:
            if e.status_code != BAD_REQUEST_STATUS_CODE:
                raise
            # Turn a missing device into DeviceNotFoundError, otherwise keep the original error
            await self.get(uuid, {"$select": "id"})
            raise


__all__ = ["AsyncDeviceService"]
