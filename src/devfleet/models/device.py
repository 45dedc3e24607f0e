"""
Device-related models.

Device records themselves are returned as plain dicts: their shape depends
on the $select / $expand options of each query. These models cover the
fixed-shape values the SDK computes or the API returns outside pine.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OverallStatus(str, Enum):
    """Summarised device status."""

    CONFIGURING = "configuring"
    IDLE = "idle"
    OFFLINE = "offline"
    INACTIVE = "inactive"
    POST_PROVISIONING = "post-provisioning"
    UPDATING = "updating"


class DeviceStatus(BaseModel):
    """Status key plus its display name."""

    model_config = ConfigDict(frozen=True)

    key: OverallStatus
    name: str


class Location(BaseModel):
    """Custom device location. Values are sent to the API as strings."""

    latitude: str | float
    longitude: str | float


class LocalModeSupport(BaseModel):
    """Outcome of a local mode capability check."""

    model_config = ConfigDict(frozen=True)

    supported: bool
    message: str


class RegisteredDevice(BaseModel):
    """Device created through the provisioning endpoint."""

    model_config = ConfigDict(extra="allow")

    id: int
    uuid: str
    api_key: str = Field(default="")


__all__ = [
    "OverallStatus",
    "DeviceStatus",
    "Location",
    "LocalModeSupport",
    "RegisteredDevice",
]
