"""
Install context — what a component sees while it runs.

Built once per run by the install use case (or by a test fixture) and
handed to every component's check/install/validate.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dotinstall.adapters.base import PackageManager
from dotinstall.adapters.shell.command import CommandRunner
from dotinstall.adapters.shell.download import Downloader
from dotinstall.core.config.loader import InstallerSettings
from dotinstall.core.models.identity import OSFamily, OSIdentity
from dotinstall.core.observability.reporter import Reporter
from dotinstall.core.services.detection.probe import HostProbe


@dataclass
class InstallContext:
    """Collaborators shared by every component in a run."""

    identity: OSIdentity
    runner: CommandRunner
    packages: PackageManager
    probe: HostProbe
    reporter: Reporter = field(default_factory=Reporter)
    settings: InstallerSettings = field(default_factory=InstallerSettings)
    downloads: Downloader = field(default_factory=Downloader)
    assume_yes: bool = False

    @property
    def is_debian(self) -> bool:
        return self.identity.family is OSFamily.DEBIAN

    @property
    def is_rpm(self) -> bool:
        return self.identity.family is OSFamily.RPM

    @property
    def home(self):
        return self.probe.home
