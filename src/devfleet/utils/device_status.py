"""Overall device status computation."""

from __future__ import annotations

from typing import Any

from devfleet.models.device import DeviceStatus, OverallStatus

_STATUS_NAMES = {
    OverallStatus.CONFIGURING: "Configuring",
    OverallStatus.IDLE: "Online",
    OverallStatus.OFFLINE: "Offline",
    OverallStatus.INACTIVE: "Inactive",
    OverallStatus.POST_PROVISIONING: "Post Provisioning",
    OverallStatus.UPDATING: "Updating",
}


def get_status(device: dict[str, Any]) -> DeviceStatus:
    """
    Summarise a device record into one status.

    The record needs is_online and last_connectivity_event; is_active,
    provisioning_state, provisioning_progress, download_progress and
    status refine the result when present.
    """
    if device.get("is_active") is False:
        key = OverallStatus.INACTIVE
    elif not device.get("is_online"):
        # Never connected yet: still being provisioned
        if device.get("last_connectivity_event") is None:
            key = OverallStatus.CONFIGURING
        else:
            key = OverallStatus.OFFLINE
    elif device.get("provisioning_state") == "Post-Provisioning":
        key = OverallStatus.POST_PROVISIONING
    elif device.get("provisioning_progress") is not None:
        key = OverallStatus.CONFIGURING
    elif device.get("download_progress") is not None and device.get("status") == "Downloading":
        key = OverallStatus.UPDATING
    else:
        key = OverallStatus.IDLE
    return DeviceStatus(key=key, name=_STATUS_NAMES[key])


__all__ = ["get_status"]
