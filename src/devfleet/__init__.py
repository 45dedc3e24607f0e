"""
devfleet SDK.

Python client for the devfleet device fleet management API.

Example:
    >>> from devfleet import DevFleetClient
    >>> with DevFleetClient(api_key="...") as client:
    ...     for device in client.device.get_all_by_application("MyFleet"):
    ...         print(device["device_name"], client.device.get_status(device))

    >>> from devfleet import AsyncDevFleetClient
    >>> async with AsyncDevFleetClient(api_key="...") as client:
    ...     await client.device.reboot("7cf02a6")
"""

from devfleet.client import AsyncDevFleetClient, DevFleetClient
from devfleet.config import SDKSettings, configure_settings, get_settings
from devfleet.exceptions import (
    AmbiguousApplicationError,
    AmbiguousDeviceError,
    ApplicationNotFoundError,
    DevFleetError,
    DeviceNotFoundError,
    DeviceNotWebAccessibleError,
    DeviceOfflineError,
    InvalidDeviceTypeError,
    InvalidParameterError,
    LocalModeNotSupportedError,
    NotLoggedInError,
    OsUpdateError,
    ReleaseNotFoundError,
    RequestError,
    ResourceNotFoundError,
    ServiceNotFoundError,
    SupervisorLockedError,
    SupervisorVersionError,
)
from devfleet.models import OverallStatus

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Clients
    "AsyncDevFleetClient",
    "DevFleetClient",
    # Config
    "SDKSettings",
    "configure_settings",
    "get_settings",
    # Models
    "OverallStatus",
    # Exceptions
    "DevFleetError",
    "RequestError",
    "NotLoggedInError",
    "InvalidParameterError",
    "ResourceNotFoundError",
    "DeviceNotFoundError",
    "ApplicationNotFoundError",
    "ReleaseNotFoundError",
    "ServiceNotFoundError",
    "AmbiguousDeviceError",
    "AmbiguousApplicationError",
    "InvalidDeviceTypeError",
    "SupervisorLockedError",
    "SupervisorVersionError",
    "DeviceOfflineError",
    "DeviceNotWebAccessibleError",
    "LocalModeNotSupportedError",
    "OsUpdateError",
]
