"""
Device tags, config variables, environment variables and service variables.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from devfleet.api.pine import AsyncPine
from devfleet.exceptions import AmbiguousDeviceError, ServiceNotFoundError
from devfleet.services._sync_wrapper import sync_service
from devfleet.services.dependent import AsyncDependentResource
from devfleet.utils.ids import is_id
from devfleet.utils.options import PineOptions, merge_pine_options

IdResolver = Callable[[Any], Awaitable[int]]

SERVICE_VAR_RESOURCE = "device_service_environment_variable"


def _belongs_to_application(application_id: int, alias: str = "d") -> dict[str, Any]:
    return {"$any": {"$alias": alias, "$expr": {alias: {"belongs_to__application": application_id}}}}


@sync_service
class AsyncDeviceVariables:
    """
    Key/value records of devices: tags, config variables or environment variables.

    Example:
        >>> await client.device.env_var.set("7cf02a6", "EDITOR", "vim")
        >>> await client.device.env_var.get("7cf02a6", "EDITOR")
        'vim'
    """

    def __init__(
        self,
        resource: AsyncDependentResource,
        get_application_id: IdResolver,
        application_orderby: str | None = "name asc",
    ) -> None:
        self._resource = resource
        self._get_application_id = get_application_id
        self._application_orderby = application_orderby

    async def get_all(self, options: PineOptions | None = None) -> list[dict[str, Any]]:
        return await self._resource.get_all(options)

    async def get_all_by_device(
        self,
        uuid_or_id: str | int,
        options: PineOptions | None = None,
    ) -> list[dict[str, Any]]:
        """Records of one device."""
        return await self._resource.get_all_by_parent(uuid_or_id, options)

    async def get_all_by_application(
        self,
        name_or_slug_or_id: str | int,
        options: PineOptions | None = None,
    ) -> list[dict[str, Any]]:
        """Records of all devices of an application."""
        application_id = await self._get_application_id(name_or_slug_or_id)
        defaults: PineOptions = {"$filter": {"device": _belongs_to_application(application_id)}}
        if self._application_orderby:
            defaults["$orderby"] = self._application_orderby
        return await self._resource.get_all(merge_pine_options(defaults, options))

    async def get(self, uuid_or_id: str | int, key: str) -> str | None:
        return await self._resource.get(uuid_or_id, key)

    async def set(self, uuid_or_id: str | int, key: str, value: Any) -> None:
        await self._resource.set(uuid_or_id, key, value)

    async def remove(self, uuid_or_id: str | int, key: str) -> None:
        await self._resource.remove(uuid_or_id, key)

    def __repr__(self) -> str:
        return f"<AsyncDeviceVariables {self._resource.resource_name}>"


@sync_service
class AsyncDeviceServiceVariables:
    """
    Environment variables of one service on one device.

    Records hang off the service_install linking a device to a service, so
    lookups go through that resource rather than the device itself.

    Example:
        >>> await client.device.service_var.set("7cf02a6", 123, "VERBOSE", "true")
    """

    def __init__(
        self,
        pine: AsyncPine,
        get_device_id: IdResolver,
        get_application_id: IdResolver,
    ) -> None:
        self._pine = pine
        self._get_device_id = get_device_id
        self._get_application_id = get_application_id

    @staticmethod
    def _service_install_filter(expr: dict[str, Any]) -> dict[str, Any]:
        return {"service_install": {"$any": {"$alias": "si", "$expr": {"si": expr}}}}

    async def get_all_by_device(
        self,
        uuid_or_id: str | int,
        options: PineOptions | None = None,
    ) -> list[dict[str, Any]]:
        """Service variables of every service on a device."""
        device_id = await self._get_device_id(uuid_or_id)
        return await self._pine.get(
            SERVICE_VAR_RESOURCE,
            options=merge_pine_options(
                {"$filter": self._service_install_filter({"device": device_id})},
                options,
            ),
        )

    async def get_all_by_application(
        self,
        name_or_slug_or_id: str | int,
        options: PineOptions | None = None,
    ) -> list[dict[str, Any]]:
        """Service variables of every device of an application."""
        application_id = await self._get_application_id(name_or_slug_or_id)
        return await self._pine.get(
            SERVICE_VAR_RESOURCE,
            options=merge_pine_options(
                {
                    "$filter": self._service_install_filter(
                        {"device": _belongs_to_application(application_id)}
                    ),
                    "$orderby": "name asc",
                },
                options,
            ),
        )

    async def get(self, uuid_or_id: str | int, service_id: int, key: str) -> str | None:
        """
        Value of a service variable.

        Returns:
            The value, or None if the variable is not set
        """
        device_id = await self._get_device_id(uuid_or_id)
        variables = await self._pine.get(
            SERVICE_VAR_RESOURCE,
            options={
                "$filter": {
                    **self._service_install_filter({"device": device_id, "service": service_id}),
                    "name": key,
                }
            },
        )
        if not variables:
            return None
        return variables[0].get("value")

    async def set(self, uuid_or_id: str | int, service_id: int, key: str, value: Any) -> None:
        """
        Create or update a service variable. The value is stored as a string.

        Raises:
            ServiceNotFoundError: If the service is not installed on the device
            AmbiguousDeviceError: If a uuid prefix matches several installs
        """
        value = str(value)
        if is_id(uuid_or_id):
            device_filter: Any = uuid_or_id
        else:
            device_filter = {"$any": {"$alias": "d", "$expr": {"d": {"uuid": uuid_or_id}}}}

        service_installs = await self._pine.get(
            "service_install",
            options={"$filter": {"device": device_filter, "service": service_id}},
        )
        if not service_installs:
            raise ServiceNotFoundError(service_id)
        if len(service_installs) > 1:
            raise AmbiguousDeviceError(uuid_or_id)

        await self._pine.upsert(
            SERVICE_VAR_RESOURCE,
            id={"service_install": service_installs[0]["id"], "name": key},
            body={"value": value},
            natural_keys=["service_install", "name"],
        )

    async def remove(self, uuid_or_id: str | int, service_id: int, key: str) -> None:
        device_id = await self._get_device_id(uuid_or_id)
        await self._pine.delete(
            SERVICE_VAR_RESOURCE,
            options={
                "$filter": {
                    **self._service_install_filter({"device": device_id, "service": service_id}),
                    "name": key,
                }
            },
        )


DeviceVariables = AsyncDeviceVariables._sync_class
DeviceServiceVariables = AsyncDeviceServiceVariables._sync_class

__all__ = [
    "AsyncDeviceVariables",
    "AsyncDeviceServiceVariables",
    "DeviceVariables",
    "DeviceServiceVariables",
]
