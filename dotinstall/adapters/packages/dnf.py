"""
dnf — Fedora.
"""

from __future__ import annotations

import logging
from typing import Sequence

from dotinstall.adapters.base import PackageManager
from dotinstall.adapters.shell.command import CommandResult
from dotinstall.core.errors import PackageManagerError
from dotinstall.core.models.identity import OSFamily

logger = logging.getLogger(__name__)

# dnf check-update exits 100 when updates are available.
_CHECK_UPDATE_OK = (0, 100)


class DnfPackageManager(PackageManager):
    """``dnf`` / ``rpm`` backed package manager."""

    family = OSFamily.RPM

    @property
    def name(self) -> str:
        return "dnf"

    def _refresh(self) -> CommandResult:
        return self.runner.run(["dnf", "check-update", "-q"], sudo=True, ok_codes=_CHECK_UPDATE_OK)

    def _install_cmd(self, packages: Sequence[str]) -> list[str]:
        return ["dnf", "install", "-y", "-q", *packages]

    def _remove_cmd(self, packages: Sequence[str]) -> list[str]:
        return ["dnf", "remove", "-y", "-q", *packages]

    def is_installed(self, package: str) -> bool:
        # --whatprovides also answers for capabilities such as gpg or pkg-config.
        return self.runner.run(["rpm", "-q", "--whatprovides", package], timeout=10).ok

    def get_version(self, package: str) -> str | None:
        result = self.runner.run(["rpm", "-q", "--qf", "%{VERSION}", package], timeout=10)
        version = result.stdout.strip()
        return version if result.ok and version else None

    def add_repository(self, spec: str, name: str | None = None) -> None:
        """Add a ``.repo`` file by URL."""
        result = self.runner.run(["dnf", "config-manager", "--add-repo", spec], sudo=True)
        if not result.ok:
            raise PackageManagerError("add repository", detail=f"{spec}: {result.describe()}")
        self.reporter.success(f"Repository added: {name or spec}")
        self.invalidate()

    def add_signing_key(
        self, url: str, keyring: str | None = None, dearmor: bool = True,
    ) -> None:
        result = self.runner.run(["rpm", "--import", url], sudo=True)
        if not result.ok:
            raise PackageManagerError("add signing key", detail=f"{url}: {result.describe()}")
        logger.debug("Imported signing key %s", url)
        self.invalidate()

    def enable_copr(self, project: str) -> None:
        result = self.runner.run(["dnf", "copr", "enable", "-y", project], sudo=True)
        if not result.ok:
            raise PackageManagerError("enable COPR repository", detail=f"{project}: {result.describe()}")
        self.reporter.success(f"COPR repository enabled: {project}")
        self.invalidate()

    def is_group_installed(self, group: str) -> bool:
        result = self.runner.run(["dnf", "group", "list", "--installed"], timeout=60)
        return result.ok and group.lower() in result.stdout.lower()

    def install_group(self, group: str) -> None:
        self.refresh()
        self.reporter.info(f"Installing package group: {group}")
        result = self.runner.run(["dnf", "group", "install", "-y", "-q", group], sudo=True)
        if not result.ok:
            raise PackageManagerError("install", [f"@{group}"], result.describe())
        self.reporter.success(f"{group} installed")

    def clean(self) -> None:
        self.runner.run(["dnf", "autoremove", "-y", "-q"], sudo=True)
        self.runner.run(["dnf", "clean", "all"], sudo=True)
