"""
Device service for devfleet SDK.

Queries and mutates devices, proxies supervisor actions, starts host OS
updates and manages per-device tags and variables.
"""

from devfleet.services.device._aio import AsyncDeviceService
from devfleet.services.device._config import (
    LOCKED_STATUS_CODE,
    MIN_SUPERVISOR_APPS_API,
    MIN_SUPERVISOR_MC_API,
)
from devfleet.services.device._vars import (
    AsyncDeviceServiceVariables,
    AsyncDeviceVariables,
    DeviceServiceVariables,
    DeviceVariables,
)

DeviceService = AsyncDeviceService._sync_class

__all__ = [
    "AsyncDeviceService",
    "DeviceService",
    "AsyncDeviceVariables",
    "AsyncDeviceServiceVariables",
    "DeviceVariables",
    "DeviceServiceVariables",
    "LOCKED_STATUS_CODE",
    "MIN_SUPERVISOR_APPS_API",
    "MIN_SUPERVISOR_MC_API",
]
