"""
Host OS models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SupportedOsVersions(BaseModel):
    """OS versions available for a device type, newest first."""

    model_config = ConfigDict(frozen=True)

    versions: list[str] = Field(default_factory=list)
    recommended: str | None = None
    latest: str | None = None
    default: str | None = None


class OsUpdateVersions(BaseModel):
    """OS versions a device can be updated to from its current version."""

    model_config = ConfigDict(frozen=True)

    versions: list[str] = Field(default_factory=list)
    recommended: str | None = None
    current: str | None = None


__all__ = ["SupportedOsVersions", "OsUpdateVersions"]
