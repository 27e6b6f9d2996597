"""
Package-manager base — the contract both distribution families implement.

The installer only talks to system packages through ``PackageManager``.
Exactly one variant is selected per run (apt or dnf, see
``registry.select_package_manager``); there is no runtime dispatch on
package-manager names anywhere else.

Refresh memoization lives on an explicit ``PackageSession`` shared for
the whole run: the metadata refresh runs at most once, unless a
repository or signing key change invalidates it.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from dotinstall.adapters.shell.command import CommandResult, CommandRunner
from dotinstall.adapters.shell.download import fetch_bytes
from dotinstall.core.errors import PackageManagerError, UnsupportedOperationError
from dotinstall.core.models.identity import OSFamily
from dotinstall.core.models.packages import PackageRef
from dotinstall.core.observability.reporter import Reporter

logger = logging.getLogger(__name__)

PackageSpec = str | PackageRef
Fetcher = Callable[[str], bytes]


@dataclass
class PackageSession:
    """Per-run package metadata state."""

    refreshed: bool = False
    refresh_count: int = 0

    def mark_refreshed(self) -> None:
        self.refreshed = True
        self.refresh_count += 1

    def invalidate(self) -> None:
        self.refreshed = False


def slugify(text: str) -> str:
    """File-name friendly form of a repository or key identifier."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "repo"


class PackageManager(ABC):
    """Abstract system package manager.

    Args:
        runner: Command runner (all commands go through it).
        session: Refresh state for this run.
        reporter: Status output.
        fetch: Downloader for signing keys.
    """

    family: OSFamily = OSFamily.UNKNOWN

    def __init__(
        self,
        runner: CommandRunner,
        session: PackageSession | None = None,
        reporter: Reporter | None = None,
        fetch: Fetcher = fetch_bytes,
    ):
        self.runner = runner
        self.session = session or PackageSession()
        self.reporter = reporter or Reporter(quiet=True)
        self.fetch = fetch

    @property
    @abstractmethod
    def name(self) -> str:
        """The package manager binary (``apt-get``, ``dnf``)."""

    # ── Commands the variants supply ─────────────────────────────

    @abstractmethod
    def _refresh(self) -> CommandResult:
        """Run the metadata refresh."""

    @abstractmethod
    def _install_cmd(self, packages: Sequence[str]) -> list[str]:
        ...

    @abstractmethod
    def _remove_cmd(self, packages: Sequence[str]) -> list[str]:
        ...

    @abstractmethod
    def is_installed(self, package: str) -> bool:
        """Whether ``package`` is installed.  No side effects."""

    @abstractmethod
    def add_repository(self, spec: str, name: str | None = None) -> None:
        """Register a package repository and invalidate the refresh."""

    @abstractmethod
    def add_signing_key(
        self, url: str, keyring: str | None = None, dearmor: bool = True,
    ) -> None:
        """Trust a repository signing key and invalidate the refresh."""

    @abstractmethod
    def clean(self) -> None:
        """Drop unused packages and cached downloads."""

    @abstractmethod
    def get_version(self, package: str) -> str | None:
        """Installed version of ``package``, or None."""

    # ── Shared behavior ──────────────────────────────────────────

    def refresh(self, force: bool = False) -> bool:
        """Refresh package metadata once per session.

        Returns:
            True if a refresh ran, False if it was already done.

        Raises:
            PackageManagerError: ``operation="refresh"``; never recoverable.
        """
        if self.session.refreshed and not force:
            logger.debug("%s metadata already refreshed this run", self.name)
            return False
        self.reporter.info("Updating package cache...")
        result = self._refresh()
        if not result.ok:
            raise PackageManagerError("refresh", detail=result.describe())
        self.session.mark_refreshed()
        self.reporter.success("Package cache updated")
        return True

    def invalidate(self) -> None:
        """Force the next ``refresh()`` to hit the network again."""
        logger.debug("%s metadata invalidated", self.name)
        self.session.invalidate()

    def render(self, packages: Iterable[PackageSpec]) -> list[str]:
        return [PackageRef.coerce(p).render(self.family) for p in packages]

    def install(self, packages: Iterable[PackageSpec]) -> None:
        """Install ``packages`` in one batch (refreshing first)."""
        names = self.render(packages)
        if not names:
            return
        self.refresh()
        self.reporter.info(f"Installing packages: {' '.join(names)}")
        result = self.runner.run(self._install_cmd(names), sudo=True)
        if not result.ok:
            raise PackageManagerError("install", names, result.describe())
        self.reporter.success("Packages installed successfully")

    def remove(self, packages: Iterable[PackageSpec]) -> None:
        names = self.render(packages)
        if not names:
            return
        self.reporter.info(f"Removing packages: {' '.join(names)}")
        result = self.runner.run(self._remove_cmd(names), sudo=True)
        if not result.ok:
            raise PackageManagerError("remove", names, result.describe())
        self.reporter.success("Packages removed successfully")

    def install_if_missing(self, package: PackageSpec) -> bool:
        """Install ``package`` unless present.

        Returns:
            True if an install ran, False if it was already installed.
        """
        ref = PackageRef.coerce(package)
        if self.is_installed(ref.name):
            self.reporter.info(f"{ref.name} is already installed")
            return False
        self.install([ref])
        return True

    def install_packages(self, packages: Iterable[PackageSpec]) -> list[str]:
        """Install whichever of ``packages`` are missing, in one batch.

        Returns:
            Names that were installed.
        """
        refs = [PackageRef.coerce(p) for p in packages]
        missing = [r for r in refs if not self.is_installed(r.name)]
        if not missing:
            logger.debug("All %d packages already installed", len(refs))
            return []
        self.install(missing)
        return [r.name for r in missing]

    # ── Family-specific, unsupported by default ──────────────────

    def install_group(self, group: str) -> None:
        raise UnsupportedOperationError(f"Package groups are not supported by {self.name}")

    def is_group_installed(self, group: str) -> bool:
        raise UnsupportedOperationError(f"Package groups are not supported by {self.name}")

    def install_group_if_missing(self, group: str) -> bool:
        if self.is_group_installed(group):
            self.reporter.info(f"{group} is already installed")
            return False
        self.install_group(group)
        return True

    def enable_copr(self, project: str) -> None:
        raise UnsupportedOperationError(f"COPR repositories are not supported by {self.name}")

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "family": str(self.family),
            "refreshed": self.session.refreshed,
            "refresh_count": self.session.refresh_count,
        }
