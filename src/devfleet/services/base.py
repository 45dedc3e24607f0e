"""
Base class and shared context for devfleet services.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from devfleet.api.pine import AsyncPine
    from devfleet.api.request import AsyncRequest
    from devfleet.config import SDKSettings

S = TypeVar("S", bound="BaseService")


class ServiceContext:
    """
    Objects shared by all services of one client.

    Services reach their siblings through get_service(), which creates each
    service once per context on first use.
    """

    def __init__(
        self,
        settings: SDKSettings,
        request: AsyncRequest,
        pine: AsyncPine,
    ) -> None:
        self.settings = settings
        self.request = request
        self.pine = pine
        self._services: dict[type, BaseService] = {}

    def get_service(self, service_class: type[S]) -> S:
        service = self._services.get(service_class)
        if service is None:
            service = service_class(self)
            self._services[service_class] = service
        return service  # type: ignore[return-value]


class BaseService:
    """Base for services: exposes the context's settings, request and pine."""

    def __init__(self, context: ServiceContext) -> None:
        self._context = context

    @property
    def _settings(self) -> SDKSettings:
        return self._context.settings

    @property
    def _request(self) -> AsyncRequest:
        return self._context.request

    @property
    def _pine(self) -> AsyncPine:
        return self._context.pine

    def __repr__(self) -> str:
        return f"<{type(self).__name__} api_url={self._settings.api_url!r}>"


__all__ = ["BaseService", "ServiceContext"]
