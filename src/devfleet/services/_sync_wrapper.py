"""
Sync wrapper generator for async services.

Automatically generates sync methods from async methods.
Write only async code, sync is generated at class definition time.

Usage:
    @sync_service
    class AsyncDeviceService(BaseService):
        async def get(self, uuid_or_id, options=None) -> dict:
            ...

    DeviceService = AsyncDeviceService._sync_class

Properties returning another @sync_service object (device.tags,
device.env_var, ...) are wrapped too, so the sync tree mirrors the async one.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import functools
import inspect
from typing import Any, Callable


def _run_sync(coro):
    """Run coroutine synchronously."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop and loop.is_running():
        # Already in async context - run in a fresh loop on a worker thread
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()
    return asyncio.run(coro)


def _wrap_result(value: Any) -> Any:
    sync_class = getattr(type(value), "_sync_class", None)
    if sync_class is not None:
        return sync_class._wrap(value)
    return value


def _make_sync_method(async_method: Callable) -> Callable:
    """Convert async method to sync method."""

    @functools.wraps(async_method)
    def sync_method(self, *args, **kwargs):
        return _run_sync(async_method(self._async_service, *args, **kwargs))

    return sync_method


def _make_forwarder(method: Callable) -> Callable:
    """Forward an already-sync method to the async instance."""

    @functools.wraps(method)
    def forwarder(self, *args, **kwargs):
        return method(self._async_service, *args, **kwargs)

    return forwarder


def _make_property_forwarder(prop_name: str) -> property:
    def getter(self):
        return _wrap_result(getattr(self._async_service, prop_name))

    return property(getter)


def create_sync_service(async_class: type) -> type:
    """
    Create sync service class from async service class.

    Args:
        async_class: Async service class with async methods

    Returns:
        New sync service class wrapping async methods

    Example:
        >>> class AsyncConfigService(BaseService):
        ...     async def get_all(self) -> dict:
        ...         response = await self._request.send("GET", "/config")
        ...         return response.body
        ...
        >>> ConfigService = create_sync_service(AsyncConfigService)
        >>> # ConfigService.get_all() is now sync
    """
    # Get class name without "Async" prefix
    sync_name = async_class.__name__
    if sync_name.startswith("Async"):
        sync_name = sync_name[5:]

    class_dict: dict[str, Any] = {}

    for name, attr in inspect.getmembers(async_class):
        if name.startswith("_"):
            continue
        raw = inspect.getattr_static(async_class, name)
        if isinstance(raw, staticmethod):
            class_dict[name] = raw
        elif isinstance(attr, property):
            class_dict[name] = _make_property_forwarder(name)
        elif inspect.iscoroutinefunction(attr):
            class_dict[name] = _make_sync_method(attr)
        elif inspect.isfunction(attr):
            class_dict[name] = _make_forwarder(attr)
        elif not callable(attr) or inspect.isclass(attr):
            # Constants such as OverallStatus or LOCAL_MODE_ENV_VAR
            class_dict[name] = attr

    def sync_init(self, *args, **kwargs):
        self._async_service = async_class(*args, **kwargs)

    def wrap(cls, async_service):
        instance = cls.__new__(cls)
        instance._async_service = async_service
        return instance

    def sync_repr(self):
        return f"<{sync_name} wrapping {self._async_service!r}>"

    class_dict.update(
        {
            "__init__": sync_init,
            "__doc__": async_class.__doc__,
            "__module__": async_class.__module__,
            "__repr__": sync_repr,
            "_wrap": classmethod(wrap),
            "_async_class": async_class,
        }
    )

    return type(sync_name, (), class_dict)


def sync_service(async_class: type) -> type:
    """
    Decorator to auto-generate sync class.

    Adds `_sync_class` attribute to async class.

    Example:
        >>> @sync_service
        ... class AsyncOsService(BaseService):
        ...     async def get_supported_versions(self, device_type: str):
        ...         ...
        ...
        >>> OsService = AsyncOsService._sync_class
    """
    async_class._sync_class = create_sync_service(async_class)
    return async_class


__all__ = ["create_sync_service", "sync_service"]
