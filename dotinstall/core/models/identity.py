"""
OS identity — which distribution this run targets.

Resolved once at the start of a run and never mutated.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class OSFamily(StrEnum):
    """Distribution family; decides the package-manager variant."""

    DEBIAN = "debian"
    RPM = "rpm"
    UNKNOWN = "unknown"


class OSIdentity(BaseModel):
    """The detected operating system."""

    model_config = ConfigDict(frozen=True)

    distro: str                       # os-release ID, e.g. "ubuntu"
    family: OSFamily = OSFamily.UNKNOWN
    version: str = "unknown"          # VERSION_ID
    pretty_name: str = ""

    @property
    def supported(self) -> bool:
        return self.family is not OSFamily.UNKNOWN

    @property
    def label(self) -> str:
        return self.pretty_name or f"{self.distro} {self.version}"
