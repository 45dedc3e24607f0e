"""
devfleet SDK exceptions.

All SDK errors derive from DevFleetError so callers can catch one type.
API-semantic failures (missing devices, ambiguous identifiers, locked
supervisors) get their own classes carrying the offending value.
"""

from __future__ import annotations

from typing import Any


class DevFleetError(Exception):
    """Base exception for all devfleet SDK errors."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self._original_cause = cause
        # Keep the chain out of tracebacks shown to SDK users
        self.__suppress_context__ = True

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Transport / Auth
# =============================================================================


class RequestError(DevFleetError):
    """Remote API answered with a non-success status code."""

    def __init__(
        self,
        status_code: int,
        body: Any = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url
        super().__init__(f"Request error: {body}")


class NotLoggedInError(DevFleetError):
    """No valid credentials are configured."""

    def __init__(self) -> None:
        super().__init__("You have to log in")


class InvalidParameterError(DevFleetError):
    """An argument was rejected before any request was sent."""

    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self.value = value
        super().__init__(
            f"Invalid parameter: {value} is not a valid value for parameter '{name}'"
        )


# =============================================================================
# Resource lookup
# =============================================================================


class ResourceNotFoundError(DevFleetError):
    """Base for lookups that matched nothing."""


class DeviceNotFoundError(ResourceNotFoundError):
    """Device uuid/id/name did not match any device."""

    def __init__(self, device: Any) -> None:
        self.device = device
        super().__init__(f"Device not found: {device}")


class ApplicationNotFoundError(ResourceNotFoundError):
    """Application name/slug/id did not match any application."""

    def __init__(self, application: Any) -> None:
        self.application = application
        super().__init__(f"Application not found: {application}")


class ReleaseNotFoundError(ResourceNotFoundError):
    """No successful release matched the commit or id."""

    def __init__(self, release: Any) -> None:
        self.release = release
        super().__init__(f"Release not found: {release}")


class ServiceNotFoundError(ResourceNotFoundError):
    """Service is not installed on the device."""

    def __init__(self, service: Any) -> None:
        self.service = service
        super().__init__(f"Service not found: {service}")


class AmbiguousDeviceError(DevFleetError):
    """A short uuid matched more than one device."""

    def __init__(self, device: Any) -> None:
        self.device = device
        super().__init__(f"Device is ambiguous: {device}")


class AmbiguousApplicationError(DevFleetError):
    """An application name matched more than one application."""

    def __init__(self, application: Any) -> None:
        self.application = application
        super().__init__(f"Application is ambiguous: {application}")


class InvalidDeviceTypeError(DevFleetError):
    """Unknown device type, or incompatible with the requested operation."""

    def __init__(self, device_type: Any) -> None:
        self.device_type = device_type
        super().__init__(f"Invalid device type: {device_type}")


# =============================================================================
# Device state
# =============================================================================


class SupervisorLockedError(DevFleetError):
    """Supervisor refused the action because update locks are held."""

    def __init__(self) -> None:
        super().__init__("Supervisor locked")


class SupervisorVersionError(DevFleetError):
    """Device supervisor is too old for the requested action."""

    def __init__(self, version: str | None, min_version: str) -> None:
        self.version = version
        self.min_version = min_version
        super().__init__(
            f"Incompatible supervisor version: {version} - must be >= {min_version}"
        )


class DeviceOfflineError(DevFleetError):
    """Operation needs the device to be online."""

    def __init__(self, device: Any) -> None:
        self.device = device
        super().__init__(f"The device is offline: {device}")


class DeviceNotWebAccessibleError(DevFleetError):
    """Public device URL is disabled."""

    def __init__(self, device: Any) -> None:
        self.device = device
        super().__init__(f"Device is not web accessible: {device}")


class LocalModeNotSupportedError(DevFleetError):
    """Device OS, supervisor or variant does not allow local mode."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class OsUpdateError(DevFleetError):
    """Requested host OS update cannot be performed."""


__all__ = [
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
