"""
devfleet SDK services.

Every service is written async; the sync twin is generated by sync_service.
"""

from devfleet.services.application import ApplicationService, AsyncApplicationService
from devfleet.services.auth import AsyncAuthService, AuthService
from devfleet.services.base import BaseService, ServiceContext
from devfleet.services.config import AsyncConfigService, ConfigService
from devfleet.services.dependent import AsyncDependentResource, DependentResource
from devfleet.services.device import AsyncDeviceService, DeviceService
from devfleet.services.os import AsyncOsService, OsService

__all__ = [
    "BaseService",
    "ServiceContext",
    "AsyncApplicationService",
    "ApplicationService",
    "AsyncAuthService",
    "AuthService",
    "AsyncConfigService",
    "ConfigService",
    "AsyncDependentResource",
    "DependentResource",
    "AsyncDeviceService",
    "DeviceService",
    "AsyncOsService",
    "OsService",
]
