"""
Device type manifest model.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DeviceTypeManifest(BaseModel):
    """Device type as listed by the device-types endpoint."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    slug: str
    name: str
    arch: str = ""
    aliases: list[str] = Field(default_factory=list)
    is_dependent: bool = Field(default=False, alias="isDependent")
    state: str | None = None

    def matches(self, value: str) -> bool:
        """True if value is this type's name, slug or one of its aliases."""
        return value == self.name or value == self.slug or value in self.aliases


__all__ = ["DeviceTypeManifest"]
