"""
Status use case — which catalog components are already present.

Read-only: runs the same checks an installation would, installs nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dotinstall.adapters.registry import select_package_manager
from dotinstall.adapters.shell.command import CommandRunner
from dotinstall.core.config.loader import InstallerSettings
from dotinstall.core.context import InstallContext
from dotinstall.core.errors import InstallerError
from dotinstall.core.models.identity import OSIdentity
from dotinstall.core.observability.reporter import Reporter
from dotinstall.core.services.components import CATALOG
from dotinstall.core.services.detection.probe import HostProbe


@dataclass
class ComponentStatus:
    key: str
    description: str
    installed: bool | None  # None: the check itself failed
    error: str | None = None


@dataclass
class StatusReport:
    """Check results for every catalog component."""

    os: OSIdentity
    components: list[ComponentStatus] = field(default_factory=list)

    @property
    def installed(self) -> int:
        return sum(1 for c in self.components if c.installed)

    def to_dict(self) -> dict:
        return {
            "os": self.os.model_dump(mode="json"),
            "installed": self.installed,
            "total": len(self.components),
            "components": [
                {
                    "key": c.key,
                    "description": c.description,
                    "installed": c.installed,
                    "error": c.error,
                }
                for c in self.components
            ],
        }


def component_status(
    identity: OSIdentity,
    runner: CommandRunner,
    probe: HostProbe,
    settings: InstallerSettings | None = None,
) -> StatusReport:
    """Run every component's check against the host.

    Raises:
        UnsupportedOSError: No package manager for this distribution.
    """
    reporter = Reporter(quiet=True)
    ctx = InstallContext(
        identity=identity,
        runner=runner,
        packages=select_package_manager(identity, runner, reporter=reporter),
        probe=probe,
        reporter=reporter,
        settings=settings or InstallerSettings(),
        assume_yes=True,
    )
    report = StatusReport(os=identity)
    for key, component in CATALOG.items():
        try:
            installed: bool | None = bool(component.check(ctx))
            error = None
        except InstallerError as exc:
            installed, error = None, str(exc)
        report.components.append(ComponentStatus(key, component.description, installed, error))
    return report
