"""
Local mode support checks.

Local mode lets a development device run containers pushed from a
workstation instead of the cloud release. It is toggled through a device
config variable and needs a recent OS and supervisor on a dev image.
"""

from __future__ import annotations

from typing import Any

from devfleet.exceptions import LocalModeNotSupportedError
from devfleet.models.device import LocalModeSupport
from devfleet.utils import semver

LOCAL_MODE_ENV_VAR = "RESIN_SUPERVISOR_LOCAL_MODE"
LOCAL_MODE_MIN_OS_VERSION = "2.0.0"
LOCAL_MODE_MIN_SUPERVISOR_VERSION = "4.0.0"

# Fields to $select before calling get_local_mode_support()
LOCAL_MODE_SUPPORT_PROPERTIES = [
    "os_version",
    "os_variant",
    "supervisor_version",
    "last_connectivity_event",
]


def get_local_mode_support(device: dict[str, Any]) -> LocalModeSupport:
    """Report whether local mode can be enabled on the device, and why not."""
    os_version = device.get("os_version")
    supervisor_version = device.get("supervisor_version")
    if not semver.valid(os_version) or not semver.valid(supervisor_version):
        return LocalModeSupport(
            supported=False,
            message="Device is not yet fully provisioned",
        )

    if not semver.gte(os_version, LOCAL_MODE_MIN_OS_VERSION):
        return LocalModeSupport(
            supported=False,
            message="Device OS version does not support local mode",
        )

    if not semver.gte(supervisor_version, LOCAL_MODE_MIN_SUPERVISOR_VERSION):
        return LocalModeSupport(
            supported=False,
            message="Device supervisor version does not support local mode",
        )

    if device.get("os_variant") != "dev":
        return LocalModeSupport(
            supported=False,
            message="Local mode is only supported on development OS versions",
        )

    return LocalModeSupport(supported=True, message="Supported")


def check_local_mode_supported(device: dict[str, Any]) -> None:
    """Raise LocalModeNotSupportedError unless local mode is supported."""
    support = get_local_mode_support(device)
    if not support.supported:
        raise LocalModeNotSupportedError(support.message)


__all__ = [
    "LOCAL_MODE_ENV_VAR",
    "LOCAL_MODE_SUPPORT_PROPERTIES",
    "get_local_mode_support",
    "check_local_mode_supported",
]
