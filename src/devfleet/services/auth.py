"""
Auth service for the devfleet API.
"""

from __future__ import annotations

from typing import Any

from devfleet.exceptions import NotLoggedInError, RequestError
from devfleet.services._sync_wrapper import sync_service
from devfleet.services.base import BaseService

UNAUTHORIZED_STATUS_CODE = 401


@sync_service
class AsyncAuthService(BaseService):
    """
    Identity of the configured credentials.

    Example:
        >>> async with AsyncDevFleetClient(api_key="...") as client:
        ...     user_id = await client.auth.get_user_id()
    """

    async def whoami(self) -> dict[str, Any]:
        """
        Get the actor behind the configured api key.

        Returns:
            Actor info ({"id": ..., "username": ..., ...})

        Raises:
            NotLoggedInError: If no api key is set or it is rejected
        """
        if not self._settings.api_key:
            raise NotLoggedInError()
        try:
            response = await self._request.send("GET", "/user/v1/whoami")
        except RequestError as e:
            if e.status_code == UNAUTHORIZED_STATUS_CODE:
                raise NotLoggedInError() from e
            raise
        return response.body

    async def get_user_id(self) -> int:
        """Numeric id of the current user."""
        return (await self.whoami())["id"]

    async def is_logged_in(self) -> bool:
        try:
            await self.whoami()
        except NotLoggedInError:
            return False
        return True


AuthService = AsyncAuthService._sync_class

__all__ = ["AsyncAuthService", "AuthService"]
