"""
Resource query client.

AsyncPine maps resource operations onto the API's OData endpoints:

    GET    /<version>/<resource>(<id>)?<options>
    POST   /<version>/<resource>
    PATCH  /<version>/<resource>(<id>)?$filter=...
    DELETE /<version>/<resource>(<id>)?$filter=...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from devfleet.api.odata import compile_options, escape_resource_key
from devfleet.exceptions import RequestError
from devfleet.logging import get_logger

if TYPE_CHECKING:
    from devfleet.api.request import AsyncRequest
    from devfleet.utils.options import PineOptions

logger = get_logger(__name__)

CONFLICT_STATUS_CODE = 409


class AsyncPine:
    """Async pine client built on AsyncRequest."""

    def __init__(self, request: AsyncRequest, api_version: str) -> None:
        self._request = request
        self.api_version = api_version

    def resource_url(
        self,
        resource: str,
        id: Any = None,
        options: PineOptions | None = None,
    ) -> str:
        url = f"/{self.api_version}/{resource}"
        if id is not None:
            url += f"({escape_resource_key(id)})"
        query = compile_options(options)
        if query:
            url += f"?{query}"
        return url

    async def get(
        self,
        resource: str,
        id: Any = None,
        options: PineOptions | None = None,
    ) -> Any:
        """
        Query a resource.

        Returns:
            List of records, or the single record (None if missing) when id is given
        """
        response = await self._request.send("GET", self.resource_url(resource, id, options))
        body = response.body or {}
        records = body.get("d", []) if isinstance(body, dict) else []
        if id is not None:
            return records[0] if records else None
        return records

    async def post(self, resource: str, body: dict[str, Any]) -> Any:
        response = await self._request.send("POST", self.resource_url(resource), body=body)
        return response.body

    async def patch(
        self,
        resource: str,
        body: dict[str, Any],
        id: Any = None,
        options: PineOptions | None = None,
    ) -> None:
        _require_target("patch", resource, id, options)
        await self._request.send("PATCH", self.resource_url(resource, id, options), body=body)

    async def delete(
        self,
        resource: str,
        id: Any = None,
        options: PineOptions | None = None,
    ) -> None:
        _require_target("delete", resource, id, options)
        await self._request.send("DELETE", self.resource_url(resource, id, options))

    async def upsert(
        self,
        resource: str,
        id: dict[str, Any],
        body: dict[str, Any],
        natural_keys: list[str],
    ) -> Any:
        """
        Create the record, or update it if the natural key already exists.

        Args:
            resource: Resource name
            id: Natural key values, e.g. {"device": 5, "name": "FOO"}
            body: Fields to set
            natural_keys: Names of the key fields in id
        """
        missing = [key for key in natural_keys if key not in id]
        if missing:
            raise ValueError(f"Natural key fields missing from id: {', '.join(missing)}")

        try:
            return await self.post(resource, {**id, **body})
        except RequestError as e:
            if e.status_code != CONFLICT_STATUS_CODE:
                raise
            logger.debug("%s already exists, updating instead", resource)

        await self.patch(
            resource,
            body,
            options={"$filter": {key: id[key] for key in natural_keys}},
        )
        return None


def _require_target(operation: str, resource: str, id: Any, options: PineOptions | None) -> None:
    if id is None and not (options and options.get("$filter")):
        raise ValueError(f"Refusing to {operation} every {resource}: pass an id or a $filter")


__all__ = ["AsyncPine", "CONFLICT_STATUS_CODE"]
