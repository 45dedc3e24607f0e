"""
Application service for the devfleet API.
"""

from __future__ import annotations

from typing import Any

from devfleet.exceptions import AmbiguousApplicationError, ApplicationNotFoundError
from devfleet.services._sync_wrapper import sync_service
from devfleet.services.base import BaseService, ServiceContext
from devfleet.services.dependent import AsyncDependentResource
from devfleet.utils.ids import is_id
from devfleet.utils.options import PineOptions, merge_pine_options


@sync_service
class AsyncApplicationService(BaseService):
    """
    Applications (fleets) of the current user.

    Example:
        >>> app = await client.application.get("MyFleet")
        >>> await client.application.env_var.set(app["id"], "EDITOR", "vim")
    """

    def __init__(self, context: ServiceContext) -> None:
        super().__init__(context)
        self._tags = self._dependent("application_tag", "tag_key")
        self._config_var = self._dependent("application_config_variable", "name")
        self._env_var = self._dependent("application_environment_variable", "name")

    def _dependent(self, resource_name: str, key_field: str) -> AsyncDependentResource:
        return AsyncDependentResource(
            self._pine,
            resource_name=resource_name,
            resource_key_field=key_field,
            parent_resource_name="application",
            get_resource_id=self.get_id,
        )

    @property
    def tags(self) -> AsyncDependentResource:
        """Application tags (application_tag, keyed on tag_key)."""
        return self._tags

    @property
    def config_var(self) -> AsyncDependentResource:
        """Application config variables."""
        return self._config_var

    @property
    def env_var(self) -> AsyncDependentResource:
        """Application environment variables."""
        return self._env_var

    async def get_all(self, options: PineOptions | None = None) -> list[dict[str, Any]]:
        """Get all applications, ordered by name."""
        return await self._pine.get(
            "application",
            options=merge_pine_options({"$orderby": "app_name asc"}, options),
        )

    async def get(
        self,
        name_or_slug_or_id: str | int,
        options: PineOptions | None = None,
    ) -> dict[str, Any]:
        """
        Get a single application.

        Args:
            name_or_slug_or_id: Application name, slug or numeric id
            options: Extra pine options

        Returns:
            Application record

        Raises:
            ApplicationNotFoundError: If no application matches
            AmbiguousApplicationError: If a name matches more than one application
        """
        if name_or_slug_or_id is None or name_or_slug_or_id == "":
            raise ApplicationNotFoundError(name_or_slug_or_id)

        if is_id(name_or_slug_or_id):
            application = await self._pine.get(
                "application",
                id=name_or_slug_or_id,
                options=options,
            )
            if application is None:
                raise ApplicationNotFoundError(name_or_slug_or_id)
            return application

        applications = await self._pine.get(
            "application",
            options=merge_pine_options(
                {
                    "$filter": {
                        "$or": {
                            "app_name": name_or_slug_or_id,
                            "slug": name_or_slug_or_id.lower(),
                        }
                    }
                },
                options,
            ),
        )
        if not applications:
            raise ApplicationNotFoundError(name_or_slug_or_id)
        if len(applications) > 1:
            raise AmbiguousApplicationError(name_or_slug_or_id)
        return applications[0]

    async def has(self, name_or_slug_or_id: str | int) -> bool:
        try:
            await self.get(name_or_slug_or_id, {"$select": ["id"]})
        except ApplicationNotFoundError:
            return False
        return True

    async def get_id(self, name_or_slug_or_id: str | int) -> int:
        """Numeric id of an application."""
        application = await self.get(name_or_slug_or_id, {"$select": "id"})
        return application["id"]

    async def generate_provisioning_key(self, name_or_slug_or_id: str | int) -> str:
        """
        Generate a provisioning key, used to register new devices.

        Returns:
            The new key
        """
        application_id = await self.get_id(name_or_slug_or_id)
        response = await self._request.send(
            "POST",
            f"/api-key/application/{application_id}/provisioning",
        )
        return response.body


ApplicationService = AsyncApplicationService._sync_class

__all__ = ["AsyncApplicationService", "ApplicationService"]
