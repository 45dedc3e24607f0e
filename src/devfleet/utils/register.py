"""Device provisioning."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from devfleet.models.device import RegisteredDevice

if TYPE_CHECKING:
    from devfleet.api.request import AsyncRequest


def generate_unique_key() -> str:
    """Random 32 character hex string, usable as device uuid or api key."""
    return secrets.token_hex(16)


async def register_device(
    request: AsyncRequest,
    *,
    user_id: int,
    application_id: int,
    uuid: str,
    device_type: str,
    provisioning_api_key: str,
    api_endpoint: str,
    device_api_key: str | None = None,
) -> RegisteredDevice:
    """
    Create a device using an application provisioning key.

    The provisioning key replaces the user's credentials for this call.
    """
    api_key = device_api_key or generate_unique_key()
    response = await request.send(
        "POST",
        "/device/register",
        base_url=api_endpoint,
        body={
            "user": user_id,
            "application": application_id,
            "uuid": uuid,
            "device_type": device_type,
            "api_key": api_key,
        },
        headers={"Authorization": f"Bearer {provisioning_api_key}"},
    )
    data = dict(response.body or {})
    data.setdefault("uuid", uuid)
    data.setdefault("api_key", api_key)
    return RegisteredDevice.model_validate(data)


__all__ = ["generate_unique_key", "register_device"]
