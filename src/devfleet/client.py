"""
devfleet API client.

Unified client for all devfleet resources (devices, applications, OS
versions, platform config).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from devfleet.api.config import BASE_URLS, get_base_url
from devfleet.api.pine import AsyncPine
from devfleet.api.request import AsyncRequest
from devfleet.config import SDKSettings, get_settings
from devfleet.services.base import ServiceContext

if TYPE_CHECKING:
    import httpx

    from devfleet.services.application import AsyncApplicationService
    from devfleet.services.auth import AsyncAuthService
    from devfleet.services.config import AsyncConfigService
    from devfleet.services.device import AsyncDeviceService
    from devfleet.services.os import AsyncOsService


class AsyncDevFleetClient:
    """
    Asynchronous devfleet client.

    Services are created lazily on first access and share one request
    layer and one pine client.

    Example:
        >>> async with AsyncDevFleetClient(api_key="...") as client:
        ...     devices = await client.device.get_all_by_application("MyFleet")
        ...     await client.device.env_var.set(devices[0]["uuid"], "EDITOR", "vim")

        >>> # Staging environment
        >>> client = AsyncDevFleetClient(api_key="...", mode="staging")

        >>> # From DEVFLEET_API_KEY / DEVFLEET_API_URL
        >>> async with AsyncDevFleetClient() as client:
        ...     await client.auth.whoami()
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        mode: Literal["prod", "staging", "local"] = "prod",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        settings: SDKSettings | None = None,
    ) -> None:
        """
        Initialize devfleet client.

        Args:
            api_key: API key (or set DEVFLEET_API_KEY env var)
            api_url: Custom API URL (overrides mode)
            mode: Environment mode - "prod", "staging", or "local"
            timeout: Request timeout in seconds
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
            settings: Base settings, defaults to the shared get_settings()

        Raises:
            ValueError: If mode is unknown
        """
        if mode not in BASE_URLS:
            raise ValueError(f"Unknown mode: {mode!r}. Expected one of {', '.join(BASE_URLS)}")

        overrides: dict[str, Any] = {}
        if api_key is not None:
            overrides["api_key"] = api_key
        if api_url is not None:
            overrides["api_url"] = api_url
        elif mode != "prod":
            overrides["api_url"] = get_base_url(mode)
        if timeout is not None:
            overrides["request_timeout"] = timeout

        base = settings or get_settings()
        self._settings = base.model_copy(update=overrides) if overrides else base
        self._mode = mode

        self._request = AsyncRequest(self._settings, transport=transport)
        self._pine = AsyncPine(self._request, api_version=self._settings.api_version)
        self._context = ServiceContext(self._settings, self._request, self._pine)

    @property
    def device(self) -> AsyncDeviceService:
        """
        Access device service.

        Returns:
            AsyncDeviceService for device management
        """
        from devfleet.services.device import AsyncDeviceService

        return self._context.get_service(AsyncDeviceService)

    @property
    def application(self) -> AsyncApplicationService:
        """Access application service."""
        from devfleet.services.application import AsyncApplicationService

        return self._context.get_service(AsyncApplicationService)

    @property
    def os(self) -> AsyncOsService:
        """Access OS versions service."""
        from devfleet.services.os import AsyncOsService

        return self._context.get_service(AsyncOsService)

    @property
    def config(self) -> AsyncConfigService:
        """Access platform config service."""
        from devfleet.services.config import AsyncConfigService

        return self._context.get_service(AsyncConfigService)

    @property
    def auth(self) -> AsyncAuthService:
        """Access auth service."""
        from devfleet.services.auth import AsyncAuthService

        return self._context.get_service(AsyncAuthService)

    @property
    def settings(self) -> SDKSettings:
        """Get effective settings."""
        return self._settings

    @property
    def api_url(self) -> str:
        """Get current API URL."""
        return self._settings.api_url

    @property
    def mode(self) -> str:
        """Get current environment mode."""
        return self._mode

    @property
    def pine(self) -> AsyncPine:
        """Low level pine client, for resources without a service."""
        return self._pine

    @property
    def request(self) -> AsyncRequest:
        """Low level request layer."""
        return self._request

    async def __aenter__(self) -> AsyncDevFleetClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Drop the created services and their caches."""
        self._reset_services()

    def _reset_services(self) -> None:
        self._context = ServiceContext(self._settings, self._request, self._pine)

    def __repr__(self) -> str:
        return f"<AsyncDevFleetClient api_url={self.api_url!r} mode={self._mode!r}>"


class DevFleetClient:
    """
    Synchronous devfleet client.

    Same services as AsyncDevFleetClient; every call blocks until done.

    Example:
        >>> with DevFleetClient(api_key="...") as client:
        ...     device = client.device.get("7cf02a6")
        ...     client.device.tags.set(device["id"], "location", "lab")
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        mode: Literal["prod", "staging", "local"] = "prod",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        settings: SDKSettings | None = None,
    ) -> None:
        self._async_client = AsyncDevFleetClient(
            api_key=api_key,
            api_url=api_url,
            mode=mode,
            timeout=timeout,
            transport=transport,
            settings=settings,
        )

    @staticmethod
    def _wrap(service: Any) -> Any:
        return type(service)._sync_class._wrap(service)

    @property
    def device(self):
        """Access device service (sync)."""
        return self._wrap(self._async_client.device)

    @property
    def application(self):
        """Access application service (sync)."""
        return self._wrap(self._async_client.application)

    @property
    def os(self):
        """Access OS versions service (sync)."""
        return self._wrap(self._async_client.os)

    @property
    def config(self):
        """Access platform config service (sync)."""
        return self._wrap(self._async_client.config)

    @property
    def auth(self):
        """Access auth service (sync)."""
        return self._wrap(self._async_client.auth)

    @property
    def settings(self) -> SDKSettings:
        return self._async_client.settings

    @property
    def api_url(self) -> str:
        return self._async_client.api_url

    @property
    def mode(self) -> str:
        return self._async_client.mode

    def __enter__(self) -> DevFleetClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Drop the created services and their caches."""
        self._async_client._reset_services()

    def __repr__(self) -> str:
        return f"<DevFleetClient api_url={self.api_url!r} mode={self.mode!r}>"


__all__ = ["AsyncDevFleetClient", "DevFleetClient"]
