"""Host OS version normalisation for device records."""

from __future__ import annotations

from typing import Any

from devfleet.utils import semver


def normalize_device_os_version(device: dict[str, Any]) -> dict[str, Any]:
    """Turn an empty os_version reported by unprovisioned devices into None."""
    if device.get("os_version") == "":
        device["os_version"] = None
    return device


def get_device_os_semver_with_variant(device: dict[str, Any]) -> str | None:
    """
    Return the device OS version as semver with the variant as a build tag.

    >>> get_device_os_semver_with_variant({"os_version": "balenaOS 2.29.2+rev1", "os_variant": "prod"})
    '2.29.2+rev1.prod'
    """
    version = semver.parse(device.get("os_version"))
    if version is None:
        return None

    build = list(version.build)
    variant = device.get("os_variant")
    if variant and variant not in build:
        build.append(variant)
    return str(
        semver.Version(
            major=version.major,
            minor=version.minor,
            patch=version.patch,
            prerelease=version.prerelease,
            build=tuple(build),
        )
    )


__all__ = ["normalize_device_os_version", "get_device_os_semver_with_variant"]
