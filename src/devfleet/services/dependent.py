"""
Dependent resources.

Tags, config variables and environment variables are key/value records
that belong to a parent resource (a device or an application). They all
share the same operations, provided by DependentResource.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable

from devfleet.services._sync_wrapper import sync_service
from devfleet.utils.options import PineOptions, merge_pine_options

if TYPE_CHECKING:
    from devfleet.api.pine import AsyncPine

ResourceIdResolver = Callable[[Any], Awaitable[int]]


@sync_service
class AsyncDependentResource:
    """
    Key/value records scoped to a parent resource.

    Example:
        >>> tags = AsyncDependentResource(
        ...     pine,
        ...     resource_name="device_tag",
        ...     resource_key_field="tag_key",
        ...     parent_resource_name="device",
        ...     get_resource_id=device_service.get_id,
        ... )
        >>> await tags.set("7cf02a6", "EDITOR", "vim")
        >>> await tags.get_all_by_parent("7cf02a6")
        [{'id': 1, 'tag_key': 'EDITOR', 'value': 'vim', ...}]
    """

    def __init__(
        self,
        pine: AsyncPine,
        resource_name: str,
        resource_key_field: str,
        parent_resource_name: str,
        get_resource_id: ResourceIdResolver,
    ) -> None:
        """
        Initialize dependent resource helper.

        Args:
            pine: Pine client
            resource_name: Resource holding the records, e.g. "device_tag"
            resource_key_field: Field holding the key, e.g. "tag_key" or "name"
            parent_resource_name: Field linking to the parent, e.g. "device"
            get_resource_id: Coroutine resolving a parent identifier to its id
        """
        self._pine = pine
        self.resource_name = resource_name
        self.resource_key_field = resource_key_field
        self.parent_resource_name = parent_resource_name
        self._get_resource_id = get_resource_id

    def _key_filter(self, parent_id: int, key: str) -> dict[str, Any]:
        return {self.parent_resource_name: parent_id, self.resource_key_field: key}

    async def get_all(self, options: PineOptions | None = None) -> list[dict[str, Any]]:
        """
        Get all records the user can access, ordered by key.

        Args:
            options: Extra pine options

        Returns:
            Records
        """
        return await self._pine.get(
            self.resource_name,
            options=merge_pine_options(
                {"$orderby": f"{self.resource_key_field} asc"},
                options,
            ),
        )

    async def get_all_by_parent(
        self,
        parent: Any,
        options: PineOptions | None = None,
    ) -> list[dict[str, Any]]:
        """
        Get the records of one parent.

        Args:
            parent: Parent identifier (uuid, name, slug or id)
            options: Extra pine options

        Returns:
            Records of the parent, ordered by key
        """
        parent_id = await self._get_resource_id(parent)
        return await self.get_all(
            merge_pine_options(
                {"$filter": {self.parent_resource_name: parent_id}},
                options,
            )
        )

    async def get(self, parent: Any, key: str) -> str | None:
        """
        Get the value of one record.

        Returns:
            The value, or None if the key is not set
        """
        parent_id = await self._get_resource_id(parent)
        records = await self._pine.get(
            self.resource_name,
            options={
                "$select": "value",
                "$filter": self._key_filter(parent_id, key),
            },
        )
        if not records:
            return None
        return records[0].get("value")

    async def set(self, parent: Any, key: str, value: Any) -> None:
        """
        Create or update a record. The value is stored as a string.
        """
        value = str(value)
        parent_id = await self._get_resource_id(parent)
        await self._pine.upsert(
            self.resource_name,
            id=self._key_filter(parent_id, key),
            body={"value": value},
            natural_keys=[self.parent_resource_name, self.resource_key_field],
        )

    async def remove(self, parent: Any, key: str) -> None:
        """Delete a record. Missing keys are not an error."""
        parent_id = await self._get_resource_id(parent)
        await self._pine.delete(
            self.resource_name,
            options={"$filter": self._key_filter(parent_id, key)},
        )

    def __repr__(self) -> str:
        return f"<AsyncDependentResource {self.resource_name}>"


DependentResource = AsyncDependentResource._sync_class

__all__ = ["AsyncDependentResource", "DependentResource", "ResourceIdResolver"]
