"""
apt — Debian and Ubuntu.
"""

from __future__ import annotations

import logging
from typing import Sequence

from dotinstall.adapters.base import PackageManager, slugify
from dotinstall.adapters.shell.command import CommandResult
from dotinstall.core.errors import PackageManagerError
from dotinstall.core.models.identity import OSFamily

logger = logging.getLogger(__name__)

KEYRING_DIR = "/etc/apt/keyrings"
SOURCES_DIR = "/etc/apt/sources.list.d"

_NONINTERACTIVE = {"DEBIAN_FRONTEND": "noninteractive"}


class AptPackageManager(PackageManager):
    """``apt-get`` / ``dpkg-query`` backed package manager."""

    family = OSFamily.DEBIAN

    @property
    def name(self) -> str:
        return "apt-get"

    def _refresh(self) -> CommandResult:
        return self.runner.run(["apt-get", "update", "-qq"], sudo=True)

    def _install_cmd(self, packages: Sequence[str]) -> list[str]:
        return ["env", "DEBIAN_FRONTEND=noninteractive",
                "apt-get", "install", "-y", "-qq", *packages]

    def _remove_cmd(self, packages: Sequence[str]) -> list[str]:
        return ["apt-get", "remove", "-y", "-qq", *packages]

    def is_installed(self, package: str) -> bool:
        result = self.runner.run(["dpkg-query", "-W", "-f=${Status}", package], timeout=10)
        return result.ok and "install ok installed" in result.stdout

    def get_version(self, package: str) -> str | None:
        result = self.runner.run(["dpkg-query", "-W", "-f=${Version}", package], timeout=10)
        version = result.stdout.strip()
        return version if result.ok and version else None

    def add_repository(self, spec: str, name: str | None = None) -> None:
        """Add a PPA (``ppa:owner/name``) or a sources.list line.

        Args:
            spec: ``ppa:...`` or a full ``deb [...] URL suite component`` line.
            name: File name (without ``.list``) for non-PPA sources.
        """
        if spec.startswith("ppa:"):
            self.runner.check(["apt-get", "install", "-y", "-qq", "software-properties-common"],
                              sudo=True, message="Failed to install add-apt-repository")
            result = self.runner.run(["add-apt-repository", "-y", spec], sudo=True)
        else:
            target = f"{SOURCES_DIR}/{slugify(name or spec)}.list"
            result = self.runner.run(["tee", target], sudo=True, input=spec.rstrip("\n") + "\n")
        if not result.ok:
            raise PackageManagerError("add repository", detail=f"{spec}: {result.describe()}")
        self.reporter.success(f"Repository added: {name or spec}")
        self.invalidate()

    def add_signing_key(
        self, url: str, keyring: str | None = None, dearmor: bool = True,
    ) -> None:
        keyring = keyring or f"{KEYRING_DIR}/{slugify(url.rsplit('/', 1)[-1])}.gpg"
        data = self.fetch(url)
        parent = keyring.rsplit("/", 1)[0] or "/"
        self.runner.check(["install", "-d", "-m", "0755", parent], sudo=True)
        if dearmor:
            cmd = ["gpg", "--batch", "--yes", "--dearmor", "-o", keyring]
        else:
            cmd = ["tee", keyring]
        result = self.runner.run(cmd, sudo=True, input=data)
        if not result.ok:
            raise PackageManagerError("add signing key", detail=f"{url}: {result.describe()}")
        self.runner.run(["chmod", "go+r", keyring], sudo=True)
        logger.debug("Signing key %s written to %s", url, keyring)
        self.invalidate()

    def clean(self) -> None:
        self.runner.run(["apt-get", "autoremove", "-y", "-qq"], sudo=True)
        self.runner.run(["apt-get", "clean"], sudo=True)
