"""
Pre-flight checks — run before anything is installed.

Order is fixed: OS support, not-root, sudo, internet, disk space.
Each check raises an ``EnvironmentCheckError`` subclass.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
import time
import urllib.error
import urllib.request
from pathlib import Path
from typing import Mapping, Sequence

from dotinstall.adapters.shell.command import CommandRunner
from dotinstall.core.errors import (
    InsufficientDiskError,
    NoNetworkError,
    RootUserError,
    SudoUnavailableError,
    UnsupportedOSError,
)
from dotinstall.core.models.identity import OSIdentity
from dotinstall.core.observability.reporter import Reporter
from dotinstall.core.services.detection.os_detect import is_supported, supported_os_list

logger = logging.getLogger(__name__)

DEFAULT_PROBE_URLS: tuple[str, ...] = ("https://github.com", "https://google.com")


def is_ci(environ: Mapping[str, str] | None = None, stdin=None) -> bool:
    """True in CI (``CI``/``GITHUB_ACTIONS`` set) or without a terminal."""
    environ = os.environ if environ is None else environ
    if environ.get("CI") or environ.get("GITHUB_ACTIONS"):
        return True
    stdin = sys.stdin if stdin is None else stdin
    try:
        return not stdin.isatty()
    except (AttributeError, ValueError):
        return True


def probe_url(url: str, timeout: int = 5) -> bool:
    """HEAD ``url``; True if the server answered at all, error statuses included."""
    start = time.monotonic()
    try:
        req = urllib.request.Request(
            url, method="HEAD", headers={"User-Agent": "dotinstall/0.1"},
        )
        with urllib.request.urlopen(req, timeout=timeout):
            pass
    except urllib.error.HTTPError as exc:
        logger.debug("Probe %s answered %d", url, exc.code)
        exc.close()
        return True
    except (urllib.error.URLError, OSError, ValueError) as exc:
        logger.debug("Probe %s failed after %dms: %s", url, (time.monotonic() - start) * 1000, exc)
        return False
    return True


def available_disk_mb(path: str | Path = "/") -> int:
    """Free disk space in MB on the filesystem holding ``path``."""
    try:
        return shutil.disk_usage(str(path)).free // (1024 * 1024)
    except OSError:
        return 0


class Preflight:
    """The pre-flight sequence for one run.

    Each step is a method so tests can observe or replace a single
    probe without touching the others.
    """

    def __init__(
        self,
        runner: CommandRunner,
        reporter: Reporter,
        *,
        probe_urls: Sequence[str] = DEFAULT_PROBE_URLS,
        disk_path: str | Path = "/",
        interactive: bool = True,
    ):
        self.runner = runner
        self.reporter = reporter
        self.probe_urls = tuple(probe_urls)
        self.disk_path = disk_path
        self.interactive = interactive

    def check_host(self, min_disk_mb: int) -> None:
        """Everything after the OS check, in order."""
        self.check_not_root()
        self.check_sudo()
        self.check_internet()
        self.check_disk(min_disk_mb)

    def check_os(self, identity: OSIdentity) -> None:
        if not is_supported(identity.family):
            raise UnsupportedOSError(identity.distro, supported_os_list())
        self.reporter.success(f"Detected OS: {identity.label}")

    def check_not_root(self) -> None:
        if self.euid() == 0:
            raise RootUserError()

    def euid(self) -> int:
        return os.geteuid()

    def check_sudo(self) -> None:
        """Make sure sudo works, prompting for the password if needed."""
        if self.runner.run(["sudo", "-n", "true"], timeout=10).ok:
            self.reporter.success("sudo access confirmed")
            return
        if not self.interactive:
            raise SudoUnavailableError(
                "sudo requires a password and no terminal is available. "
                "Run 'sudo -v' first or configure passwordless sudo."
            )
        self.reporter.info("This installer requires sudo access. Please enter your password:")
        # sudo -v must talk to the terminal, so it bypasses the capturing runner.
        if self.validate_sudo_interactively() != 0:
            raise SudoUnavailableError("Failed to obtain sudo access")
        self.reporter.success("sudo access confirmed")

    def validate_sudo_interactively(self) -> int:
        try:
            return subprocess.call(["sudo", "-v"])
        except OSError as exc:
            raise SudoUnavailableError(f"sudo is not available: {exc}") from exc

    def check_internet(self) -> None:
        for url in self.probe_urls:
            if probe_url(url):
                self.reporter.success("Internet connection available")
                return
        raise NoNetworkError()

    def check_disk(self, required_mb: int) -> None:
        available = self.available_mb()
        if available < required_mb:
            raise InsufficientDiskError(required_mb, available)
        self.reporter.success(f"Sufficient disk space available ({available}MB)")

    def available_mb(self) -> int:
        return available_disk_mb(self.disk_path)
