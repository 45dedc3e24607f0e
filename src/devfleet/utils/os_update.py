"""
Host OS update ("hup") actions.

get_hup_action_type() decides which update action can take a device from
its current OS version to a target version, or raises OsUpdateError.
OsUpdateHelper talks to the actions service that runs the update.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from devfleet.exceptions import OsUpdateError
from devfleet.utils import semver

if TYPE_CHECKING:
    from devfleet.api.request import AsyncRequest

ACTIONS_API_VERSION = "v1"
HUP_ACTION_NAME = "resinhup"


@dataclass(frozen=True)
class HupAction:
    """Update path between OS major versions."""

    name: str
    source_major: int
    target_major: int
    min_source_version: str
    min_target_version: str
    device_types: frozenset[str] | None = None


HUP_ACTIONS = (
    HupAction("resinhup11", 1, 1, "1.8.0", "1.8.0"),
    HupAction(
        "resinhup12",
        1,
        2,
        "1.8.0",
        "2.0.0+rev1",
        device_types=frozenset(
            {"raspberry-pi", "raspberry-pi2", "raspberrypi3", "beaglebone-black", "intel-nuc"}
        ),
    ),
    HupAction("balenahup", 2, 2, "2.0.0+rev1", "2.2.0+rev1"),
)


def get_hup_action_type(device_type: str, current_version: str, target_version: str) -> str:
    """
    Name of the action that updates current_version to target_version.

    Raises:
        OsUpdateError: If either version is invalid or no action applies
    """
    current = semver.parse(current_version)
    if current is None:
        raise OsUpdateError(f"Invalid current balenaOS version: {current_version}")
    target = semver.parse(target_version)
    if target is None:
        raise OsUpdateError(f"Invalid target balenaOS version: {target_version}")

    if current.prerelease or target.prerelease:
        raise OsUpdateError("Updates cannot be performed on pre-release balenaOS versions")
    if "dev" in current.build or "dev" in target.build:
        raise OsUpdateError("Updates cannot be performed on development balenaOS variants")

    if semver.lt(target, current):
        raise OsUpdateError("OS downgrades are not allowed")
    if semver.compare(target, current) == 0:
        raise OsUpdateError("The target version is the same as the current version")

    for action in HUP_ACTIONS:
        if (current.major, target.major) != (action.source_major, action.target_major):
            continue
        if action.device_types is not None and device_type not in action.device_types:
            raise OsUpdateError(
                f"This update request cannot be performed on '{device_type}'"
            )
        if semver.lt(current, action.min_source_version):
            raise OsUpdateError(
                f"Current OS version must be >= {action.min_source_version}"
            )
        if semver.lt(target, action.min_target_version):
            raise OsUpdateError(
                f"Target OS version must be >= {action.min_target_version}"
            )
        return action.name

    raise OsUpdateError("This update request cannot be performed")


def is_hup_supported(device_type: str, current_version: str, target_version: str) -> bool:
    try:
        get_hup_action_type(device_type, current_version, target_version)
    except OsUpdateError:
        return False
    return True


class OsUpdateHelper:
    """Client for the OS update actions endpoint."""

    def __init__(self, device_urls_base: str, request: AsyncRequest) -> None:
        self._request = request
        self.actions_base_url = f"https://actions.{device_urls_base}/{ACTIONS_API_VERSION}"

    def action_url(self, uuid: str) -> str:
        return f"/{uuid}/{HUP_ACTION_NAME}"

    async def start_os_update(self, uuid: str, target_os_version: str) -> Any:
        response = await self._request.send(
            "POST",
            self.action_url(uuid),
            base_url=self.actions_base_url,
            body={"parameters": {"target_version": target_os_version}},
        )
        return response.body

    async def get_os_update_status(self, uuid: str) -> Any:
        response = await self._request.send(
            "GET",
            self.action_url(uuid),
            base_url=self.actions_base_url,
        )
        return response.body


__all__ = [
    "HupAction",
    "HUP_ACTIONS",
    "get_hup_action_type",
    "is_hup_supported",
    "OsUpdateHelper",
]
