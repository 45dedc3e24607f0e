"""Device type lookup and compatibility rules."""

from __future__ import annotations

from typing import Iterable

from devfleet.models.device_type import DeviceTypeManifest

# Architectures that can also run images built for the listed ones
ARCH_COMPATIBILITY = {
    "aarch64": ["armv7hf", "rpi"],
    "armv7hf": ["rpi"],
}


def get_by_slug(
    device_types: Iterable[DeviceTypeManifest],
    slug: str,
) -> DeviceTypeManifest | None:
    """Find a device type by slug or alias."""
    for device_type in device_types:
        if device_type.slug == slug or slug in device_type.aliases:
            return device_type
    return None


def is_architecture_compatible_with(os_arch: str, app_arch: str) -> bool:
    """True if a device running os_arch can run an application built for app_arch."""
    return os_arch == app_arch or app_arch in ARCH_COMPATIBILITY.get(os_arch, [])


def is_device_type_compatible_with(
    os_device_type: DeviceTypeManifest | None,
    target_app_device_type: DeviceTypeManifest | None,
) -> bool:
    """Whether a device of one type may join an application of another type."""
    if os_device_type is None or target_app_device_type is None:
        return False
    return (
        is_architecture_compatible_with(os_device_type.arch, target_app_device_type.arch)
        and os_device_type.is_dependent == target_app_device_type.is_dependent
    )


__all__ = [
    "ARCH_COMPATIBILITY",
    "get_by_slug",
    "is_architecture_compatible_with",
    "is_device_type_compatible_with",
]
