"""
Package-manager selection — one variant per run, chosen from the OS family.
"""

from __future__ import annotations

import logging

from dotinstall.adapters.base import Fetcher, PackageManager, PackageSession
from dotinstall.adapters.packages import AptPackageManager, DnfPackageManager
from dotinstall.adapters.shell.command import CommandRunner
from dotinstall.core.errors import UnsupportedOSError
from dotinstall.core.models.identity import OSFamily, OSIdentity
from dotinstall.core.observability.reporter import Reporter
from dotinstall.core.services.detection.os_detect import supported_os_list

logger = logging.getLogger(__name__)

_VARIANTS: dict[OSFamily, type[PackageManager]] = {
    OSFamily.DEBIAN: AptPackageManager,
    OSFamily.RPM: DnfPackageManager,
}


def select_package_manager(
    identity: OSIdentity,
    runner: CommandRunner,
    session: PackageSession | None = None,
    reporter: Reporter | None = None,
    fetch: Fetcher | None = None,
) -> PackageManager:
    """Build the package manager for ``identity``'s family.

    Raises:
        UnsupportedOSError: The family has no package manager.
    """
    variant = _VARIANTS.get(identity.family)
    if variant is None:
        raise UnsupportedOSError(identity.distro, supported_os_list())
    kwargs = {"fetch": fetch} if fetch is not None else {}
    manager = variant(runner, session=session or PackageSession(), reporter=reporter, **kwargs)
    logger.debug("Package manager for %s: %s", identity.distro, manager.name)
    return manager
