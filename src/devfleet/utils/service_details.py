"""
Current service details of a device.

get_current_service_details_options() expands a device with its image
installs and gateway downloads; generate_current_service_details() turns
that raw shape into per-service summaries.
"""

from __future__ import annotations

from typing import Any

from devfleet.utils.options import PineOptions

_IMAGE_EXPAND = {
    "image": {
        "$select": ["id"],
        "$expand": {
            "is_a_build_of__service": {"$select": ["id", "service_name"]},
        },
    },
}


def get_current_service_details_options(expand_release: bool = True) -> PineOptions:
    """Pine options needed by generate_current_service_details()."""
    install_expand: dict[str, Any] = dict(_IMAGE_EXPAND)
    if expand_release:
        install_expand["is_provided_by__release"] = {"$select": ["id", "commit"]}

    return {
        "$expand": {
            "image_install": {
                "$select": ["id", "download_progress", "status", "install_date"],
                "$filter": {"status": {"$ne": "deleted"}},
                "$expand": install_expand,
            },
            "gateway_download": {
                "$select": ["id", "download_progress", "status"],
                "$filter": {"status": {"$ne": "deleted"}},
                "$expand": dict(_IMAGE_EXPAND),
            },
        },
    }


def _install_summary(raw: dict[str, Any]) -> dict[str, Any]:
    summary = {
        key: value
        for key, value in raw.items()
        if key not in ("image", "is_provided_by__release")
    }
    image = raw["image"][0]
    service = image["is_a_build_of__service"][0]
    summary["service_name"] = service["service_name"]
    summary["image_id"] = image["id"]
    summary["service_id"] = service["id"]

    if "is_provided_by__release" in raw:
        releases = raw["is_provided_by__release"] or []
        summary["commit"] = releases[0]["commit"] if releases else None
    return summary


def generate_current_service_details(device: dict[str, Any]) -> dict[str, Any]:
    """
    Replace the raw install lists of a device with service summaries.

    Adds current_services ({service_name: [install, ...]}, newest
    install first) and current_gateway_downloads; removes image_install and
    gateway_download.
    """
    installs = [_install_summary(item) for item in device.pop("image_install", None) or []]
    downloads = [
        _install_summary(item) for item in device.pop("gateway_download", None) or []
    ]

    services: dict[str, list[dict[str, Any]]] = {}
    for install in installs:
        services.setdefault(install["service_name"], []).append(install)
    for entries in services.values():
        entries.sort(key=lambda entry: entry.get("install_date") or "", reverse=True)

    device["current_services"] = services
    device["current_gateway_downloads"] = downloads
    return device


__all__ = [
    "get_current_service_details_options",
    "generate_current_service_details",
]
