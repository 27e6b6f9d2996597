"""
Package references — a name with an optional pinned version.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from dotinstall.core.models.identity import OSFamily


class PackageRef(BaseModel):
    """A distribution package, optionally pinned to a version."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str | None = None

    def render(self, family: OSFamily) -> str:
        """Spell the reference the way the family's package manager expects.

        apt pins with ``name=version``; dnf with ``name-version``.
        """
        if not self.version:
            return self.name
        if family is OSFamily.RPM:
            return f"{self.name}-{self.version}"
        return f"{self.name}={self.version}"

    @classmethod
    def coerce(cls, value: str | PackageRef) -> PackageRef:
        if isinstance(value, PackageRef):
            return value
        return cls(name=value)

    def __str__(self) -> str:
        return self.name if not self.version else f"{self.name} ({self.version})"
