"""
devfleet SDK models.
"""

from devfleet.models.device import (
    DeviceStatus,
    LocalModeSupport,
    Location,
    OverallStatus,
    RegisteredDevice,
)
from devfleet.models.device_type import DeviceTypeManifest
from devfleet.models.os import OsUpdateVersions, SupportedOsVersions

__all__ = [
    "DeviceStatus",
    "LocalModeSupport",
    "Location",
    "OverallStatus",
    "RegisteredDevice",
    "DeviceTypeManifest",
    "OsUpdateVersions",
    "SupportedOsVersions",
]
